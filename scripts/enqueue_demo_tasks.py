# HORECA/backend/scripts/enqueue_demo_tasks.py : push sample tasks for the worker

import sys
import json
import uuid
from pathlib import Path

import redis

sys.path.append(str(Path(__file__).parent.parent))

from horeca.config import REDIS_URL, TASKS_QUEUE

r = redis.Redis.from_url(REDIS_URL)

# Task 1: cleanup
task1 = {
    "id": str(uuid.uuid4()),
    "type": "cleanup_temp",
    "data": {"days_old": 7}
}
r.lpush(TASKS_QUEUE, json.dumps(task1))
print(f"✅ Cleanup task sent: {task1['id']}")

# Task 2: export, pass a user id as first argument
if len(sys.argv) > 1:
    task2 = {
        "id": str(uuid.uuid4()),
        "type": "export_cafes",
        "data": {"user_id": sys.argv[1]}
    }
    r.lpush(TASKS_QUEUE, json.dumps(task2))
    print(f"✅ Export task sent: {task2['id']}")

print("\n👀 Watch the worker terminal for the results!")
