"""Redis adapter – atomic token-bucket store."""
from ratekeeper.adapters.redis.scripts import TOKEN_BUCKET_LUA
from ratekeeper.adapters.redis.store import RedisAtomicStore

__all__ = ["TOKEN_BUCKET_LUA", "RedisAtomicStore"]
