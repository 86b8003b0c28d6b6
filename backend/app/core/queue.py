from rq import Queue

from app.core.config import settings
from app.core.redis import redis_client

sync_queue = Queue(settings.SYNC_QUEUE_NAME, connection=redis_client)
