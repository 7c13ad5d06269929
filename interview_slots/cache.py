import logging

import redis

from interview_slots.config import SeedConfig

logger = logging.getLogger(__name__)

# key the booking read path caches free slots under
FREE_SLOTS_CACHE_KEY = "available_slots"


def get_redis_client(config: SeedConfig):
    if not config.redis_host:
        return None, "NO_REDIS_HOST"
    r = redis.Redis(
        host=config.redis_host,
        port=config.redis_port,
        ssl=True,
        socket_connect_timeout=1,
        socket_timeout=1,
        decode_responses=True,
    )
    try:
        r.ping()
    except redis.RedisError as e:
        r.close()
        return None, f"REDIS_BYPASS:{type(e).__name__}"
    return r, None


def invalidate_free_slots(config: SeedConfig, client=None) -> str:
    """
    Drop the cached free-slot list after a reseed.

    Redis problems are logged and reported in the returned status; the seed
    itself has already been written by then.
    """
    owned = client is None
    if owned:
        client, err = get_redis_client(config)
        if client is None:
            if err != "NO_REDIS_HOST":
                logger.warning("Cache not invalidated: %s", err)
            return err

    try:
        client.delete(FREE_SLOTS_CACHE_KEY)
    except redis.RedisError as e:
        logger.warning("Redis delete error: %r", e)
        return f"REDIS_BYPASS:{type(e).__name__}"
    finally:
        if owned:
            client.close()
    logger.info("Invalidated cached key %s", FREE_SLOTS_CACHE_KEY)
    return "INVALIDATED"
