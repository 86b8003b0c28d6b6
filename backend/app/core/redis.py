from contextlib import nullcontext

from redis import Redis

from app.core.config import settings

redis_client = Redis.from_url(settings.REDIS_URL)


def reconcile_lock(name: str):
    """Advisory lock around a reconcile pass; a no-op unless RECONCILE_LOCK_ENABLED."""
    if not settings.RECONCILE_LOCK_ENABLED:
        return nullcontext()
    return redis_client.lock(name, timeout=settings.RECONCILE_LOCK_TIMEOUT)
