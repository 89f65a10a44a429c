# storefront/services/lock_service.py
import uuid
from contextlib import contextmanager

import redis
from redis.exceptions import RedisError

from storefront.domain.errors import Conflict
from storefront.utils.retry import redis_retry
from storefront.utils.settings import REDIS_URL, CHECKOUT_LOCK_TTL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# compare-and-delete in one atomic script: only the holder of the token may
# release the key, and nothing can run between the GET and the DEL
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""


class LockService:
    """
    Per-user checkout mutex on Redis.
    -acquire: SET key token NX EX ttl
    -release: Lua compare-and-delete
    The TTL frees the key if the holder dies mid-checkout.
    """

    def __init__(self, url: str | None = None, client: redis.Redis | None = None):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @staticmethod
    def _key(user_id: str) -> str:
        return f"checkout:{user_id}:lock"

    @redis_retry()
    def acquire_checkout_lock(self, user_id: str, token: str, ttl: int = CHECKOUT_LOCK_TTL_SECONDS) -> bool:
        key = self._key(user_id)
        logger.info(f"Acquire lock {key}")
        return bool(self.redis.set(name=key, value=token, nx=True, ex=ttl))

    @redis_retry()
    def release_checkout_lock(self, user_id: str, token: str) -> bool:
        key = self._key(user_id)
        logger.info(f"Release lock {key}")
        res = self.redis.eval(_RELEASE_LUA, 1, key, token)
        return bool(res)

    @contextmanager
    def checkout_lock(self, user_id: str):
        token = uuid.uuid4().hex

        if not self.acquire_checkout_lock(user_id, token):
            logger.warning(f"Checkout already in progress for user {user_id}")
            raise Conflict("Checkout already in progress")

        try:
            yield
        finally:
            try:
                self.release_checkout_lock(user_id, token)
            except RedisError as e:
                # the key still expires through its TTL
                logger.warning(f"Failed to release checkout lock for user {user_id}: {e}")
