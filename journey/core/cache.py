import json
from typing import Optional

import redis.asyncio as redis


class RedisCache:
    """
    JSON documents kept in redis under colon-joined keys.

    Client errors are left to the caller: a cache outage matters to some
    callers and not to others.
    """

    def __init__(self, redis_client: redis.Redis):
        self.redis = redis_client

    @staticmethod
    def build_key(*parts) -> str:
        return ":".join(str(part) for part in parts)

    async def get(self, key: str) -> Optional[dict]:
        raw = await self.redis.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    async def set(self, key: str, value: dict, expire: int, nx: bool = False) -> bool:
        """
        Store ``value`` for ``expire`` seconds and report whether it was written.
        With ``nx`` an entry that is already there wins.
        """
        written = await self.redis.set(key, json.dumps(value), ex=expire, nx=nx)
        return bool(written)

    async def delete(self, key: str) -> None:
        await self.redis.delete(key)
