import logging

from rq import SimpleWorker

from app.core.logging import configure_logging
from app.core.queue import sync_queue
from app.core.redis import redis_client

logger = logging.getLogger("worker")

if __name__ == '__main__':
    configure_logging()

    # Bulk schedule repairs only; per-edit syncs run inline in the API
    worker = SimpleWorker([sync_queue], connection=redis_client)
    logger.info("Listening on queue: %s", sync_queue.name)
    worker.work()
