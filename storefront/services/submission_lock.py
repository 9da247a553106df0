import redis

from storefront.utils.settings import REDIS_URL, IDEMPOTENCY_TTL_SECONDS, IDEMPOTENCY_RESULT_TTL_SECONDS
from storefront.utils.retry import redis_retry
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

#values under a key: the owner token while the order is being placed, "order:<id>" once it exists
_RESULT_PREFIX = "order:"

#compare-and-delete in one step, lua runs atomically in redis
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""

#compare-and-set, only the owner may record the result
_COMPLETE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    redis.call('SET', KEYS[1], ARGV[2], 'EX', ARGV[3])
    return 1
else
    return 0
end
"""


class SubmissionLock:
    """
    Server-side guard against the same checkout being submitted twice.

    The client sends an Idempotency-Key header. The first request with a key
    takes it, and when its order is committed the key is pointed at the order id.
    A repeated key then gets the existing order back instead of a new one.
    """

    def __init__(
        self,
        url: str | None = None,
        ttl: int = IDEMPOTENCY_TTL_SECONDS,
        result_ttl: int = IDEMPOTENCY_RESULT_TTL_SECONDS,
    ):
        self.redis = redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )
        self.ttl = ttl
        self.result_ttl = result_ttl

    @staticmethod
    def _key(idempotency_key: str) -> str:
        return f"order:submit:{idempotency_key}"

    @redis_retry()
    def acquire(self, idempotency_key: str, owner: str) -> bool:
        key = self._key(idempotency_key)
        logger.info(f"Acquire submission lock {key}")
        #SET order:submit:<key> <owner> NX EX 600
        return bool(self.redis.set(name=key, value=owner, nx=True, ex=self.ttl))

    @redis_retry()
    def complete(self, idempotency_key: str, owner: str, order_id: int) -> bool:
        key = self._key(idempotency_key)
        logger.info(f"Submission {key} placed order {order_id}")
        return bool(self.redis.eval(
            _COMPLETE_LUA, 1, key, owner, f"{_RESULT_PREFIX}{order_id}", self.result_ttl
        ))

    @redis_retry()
    def lookup(self, idempotency_key: str) -> int | None:
        """Order id already placed under this key, None while still in flight."""
        value = self.redis.get(self._key(idempotency_key))
        if value and value.startswith(_RESULT_PREFIX):
            return int(value[len(_RESULT_PREFIX):])
        return None

    @redis_retry()
    def release(self, idempotency_key: str, owner: str) -> bool:
        key = self._key(idempotency_key)
        logger.info(f"Release submission lock {key}")
        return bool(self.redis.eval(_RELEASE_LUA, 1, key, owner))
