# storefront/services/cart_store.py
import redis
from redis.exceptions import RedisError

from storefront.domain.cart import Cart
from storefront.utils.retry import redis_retry
from storefront.utils.settings import REDIS_URL, CART_TTL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartStore:
    """
    Durable cart cache in Redis, one JSON document per session.
    A missing, corrupt or unreadable entry loads as an empty cart.
    """

    def __init__(self, client=None, url: str | None = None, ttl: int = CART_TTL_SECONDS):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )
        self.ttl = ttl

    @staticmethod
    def key(session_id: str) -> str:
        return f"cart:{session_id}"

    @redis_retry()
    def _get(self, key: str):
        return self.redis.get(key)

    @redis_retry()
    def _set(self, key: str, value: str):
        # every write pushes the expiry forward
        return self.redis.set(name=key, value=value, ex=self.ttl)

    @redis_retry()
    def _delete(self, key: str):
        return self.redis.delete(key)

    def load(self, session_id: str) -> Cart:
        key = self.key(session_id)
        try:
            raw = self._get(key)
        except RedisError as e:
            logger.warning(f"Cart cache {key} unreadable, starting empty: {e}")
            return Cart()

        if raw is None:
            return Cart()

        try:
            return Cart.from_json(raw)
        except ValueError as e:
            logger.warning(f"Cart cache {key} corrupt, starting empty: {e}")
            return Cart()

    def save(self, session_id: str, cart: Cart) -> None:
        key = self.key(session_id)
        if cart.is_empty():
            self._delete(key)
            return
        self._set(key, cart.to_json())
