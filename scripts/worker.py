# HORECA/backend/scripts/worker.py - background task runner

#!/usr/bin/env python3
"""
Background worker for the HoReCa Salary API
Handles: Excel exports of cafes, cleanup of old reports
"""

import sys
import asyncio
import logging
from datetime import datetime, timedelta
from typing import Dict, Any, Optional
import json
import redis
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from horeca.config import (
    REDIS_URL, TASKS_QUEUE, TASK_RESULT_TTL, REDIS_RETRY_BASE_DELAY,
    REPORTS_DIR, REPORTS_RETENTION_DAYS, LOG_LEVEL,
)
from horeca.database import SessionLocal
from horeca.models import models
from horeca.services.cafe_service import CafeService
from horeca.services.events import task_result_key
from horeca.services.export_service import create_cafes_workbook, user_names_by_id
from horeca.services.retry import fetch_with_retry

logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger(__name__)

class HorecaWorker:
    """Pops tasks from the Redis queue and runs their handler"""

    def __init__(self, redis_client=None):
        self.redis_client = redis_client or redis.Redis.from_url(REDIS_URL)
        self.running = True
        self.task_handlers = {
            'export_cafes': self.handle_export_cafes,
            'cleanup_temp': self.handle_cleanup_temp,
        }

    async def run(self):
        """Main loop"""
        logger.info("🚀 HoReCa worker started")

        while self.running:
            try:
                task_data = self.redis_client.blpop(TASKS_QUEUE, timeout=5)

                if task_data:
                    _, task_json = task_data
                    task = json.loads(task_json)
                    await self.process_task(task)

                await self.periodic_cleanup()

            except redis.RedisError as e:
                logger.error(f"Redis error in main loop: {e}")
                await asyncio.sleep(5)

        logger.info("🛑 HoReCa worker stopped")

    async def process_task(self, task: Dict[str, Any]):
        """Run a single task and store its outcome"""
        task_id = task.get('id')
        task_type = task.get('type')
        task_data = task.get('data', {})
        owner_id = task_data.get('user_id')

        logger.info(f"📦 Processing task {task_id}: {task_type}")

        handler = self.task_handlers.get(task_type)
        if not handler:
            logger.warning(f"Unknown task type: {task_type}")
            await self.mark_task_failed(task_id, "Unknown task type", owner_id)
            return

        try:
            result = await handler(task_data)
        except Exception as e:
            logger.error(f"❌ Task {task_id} failed: {e}")
            await self.mark_task_failed(task_id, str(e), owner_id)
            return
        await self.mark_task_completed(task_id, result, owner_id)

    # ========== Handlers ==========

    async def handle_export_cafes(self, data: Dict) -> Dict:
        """Write the cafes workbook visible to a user under REPORTS_DIR"""
        db = SessionLocal()
        try:
            user = db.query(models.User).filter(models.User.id == data['user_id']).first()
            if not user:
                raise LookupError(f"User {data['user_id']} not found")
            cafes = CafeService(db, user).list_cafes()
            output = create_cafes_workbook(cafes, user_names_by_id(db))
        finally:
            db.close()

        REPORTS_DIR.mkdir(parents=True, exist_ok=True)
        report_path = REPORTS_DIR / f"cafes_{data['user_id']}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.xlsx"
        report_path.write_bytes(output)

        logger.info(f"📊 Export written: {report_path} ({len(cafes)} cafes)")
        return {"path": str(report_path), "cafes": len(cafes)}

    async def handle_cleanup_temp(self, data: Dict) -> Dict:
        """Delete reports older than `days_old` days"""
        days_old = data.get('days_old', REPORTS_RETENTION_DAYS)
        cutoff = datetime.now() - timedelta(days=days_old)

        cleaned = 0
        if REPORTS_DIR.exists():
            for file in REPORTS_DIR.glob('*.xlsx'):
                if file.stat().st_mtime < cutoff.timestamp():
                    file.unlink()
                    cleaned += 1

        logger.info(f"🧹 Cleanup: {cleaned} files removed")
        return {"cleaned": cleaned}

    # ========== Utilities ==========

    def _store_result(self, task_id: str, outcome: Dict):
        """Save the outcome for GET /cafes/export/jobs/{id}, retrying transient Redis errors"""
        fetch_with_retry(
            lambda: self.redis_client.setex(task_result_key(task_id), TASK_RESULT_TTL, json.dumps(outcome)),
            max_retries=3,
            base_delay=REDIS_RETRY_BASE_DELAY
        )

    async def mark_task_completed(self, task_id: str, result: Dict, owner_id: Optional[str] = None):
        self._store_result(task_id, {"status": "completed", "result": result, "user_id": owner_id})

    async def mark_task_failed(self, task_id: str, error: str, owner_id: Optional[str] = None):
        self._store_result(task_id, {"status": "failed", "error": error, "user_id": owner_id})

    async def periodic_cleanup(self):
        """Hourly cleanup of old reports"""
        last_cleanup = self.redis_client.get('horeca:last_cleanup')

        if not last_cleanup or (datetime.now().timestamp() - float(last_cleanup)) > 3600:
            await self.handle_cleanup_temp({"days_old": REPORTS_RETENTION_DAYS})
            self.redis_client.set('horeca:last_cleanup', datetime.now().timestamp())

async def main():
    """Entry point"""
    worker = HorecaWorker()

    try:
        await worker.run()
    except KeyboardInterrupt:
        logger.info("Stop requested by user")
        worker.running = False

if __name__ == "__main__":
    asyncio.run(main())
