"""Redis client factory — used for rate limiting only.

NOT used for balances or standings (those are derived from PostgreSQL).
The client is created in the app lifespan and stored on ``app.state.redis``.
"""

import redis.asyncio as aioredis

from config.settings import Settings


def create_redis(settings: Settings) -> aioredis.Redis:
    """Build a pooled Redis client. Connections open lazily on first command."""
    return aioredis.from_url(
        settings.REDIS_URL,
        decode_responses=True,
    )


async def close_redis(client: aioredis.Redis | None) -> None:
    if client is not None:
        await client.aclose()
