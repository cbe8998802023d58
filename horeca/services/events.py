# HORECA/backend/horeca/services/events.py : data-change events and task queue on Redis

import json
import logging
import uuid
from datetime import datetime
from typing import Any, Dict, Optional

import redis

from horeca.config import REDIS_URL, REDIS_ENABLED, EVENTS_CHANNEL, TASKS_QUEUE

logger = logging.getLogger(__name__)

_redis_client = None

class QueueUnavailable(Exception):
    """Raised when a task is queued while Redis is disabled"""

def task_result_key(task_id: str) -> str:
    return f"horeca:task:result:{task_id}"

def get_redis():
    """Shared Redis client, None when Redis is disabled"""
    global _redis_client
    if not REDIS_ENABLED:
        return None
    if _redis_client is None:
        _redis_client = redis.Redis.from_url(REDIS_URL)
    return _redis_client

def publish_event(event_type: str, payload: Optional[Dict[str, Any]] = None) -> bool:
    """
    Tell other clients that data changed. Failures are logged and swallowed:
    the mutation that triggered the event already succeeded.
    """
    event = {
        "type": event_type,
        "payload": payload or {},
        "timestamp": datetime.utcnow().isoformat(),
    }
    logger.info(f"📣 Event {event_type}: {event['payload']}")

    client = get_redis()
    if client is None:
        return False
    try:
        client.publish(EVENTS_CHANNEL, json.dumps(event))
        return True
    except redis.RedisError as e:
        logger.error(f"❌ Could not publish event {event_type}: {e}")
        return False

def enqueue_task(task_type: str, data: Dict[str, Any]) -> str:
    """Push a task for scripts/worker.py and return its id"""
    client = get_redis()
    if client is None:
        raise QueueUnavailable("Background tasks need REDIS_ENABLED=true")

    task_id = str(uuid.uuid4())
    client.lpush(TASKS_QUEUE, json.dumps({"id": task_id, "type": task_type, "data": data}))
    logger.info(f"📦 Task {task_type} queued: {task_id}")
    return task_id

def get_task_result(task_id: str) -> Optional[Dict[str, Any]]:
    client = get_redis()
    if client is None:
        raise QueueUnavailable("Background tasks need REDIS_ENABLED=true")

    raw = client.get(task_result_key(task_id))
    if raw is None:
        return None
    return json.loads(raw)
