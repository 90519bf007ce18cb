"""Dependency injection container for services.

Holds the Redis client and the services built on it. Services are created
once at application startup and reused across requests; all per-query
state lives inside each service call.
"""

from typing import Optional

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from cognet.config import Settings, get_settings
from cognet.errors import StoreUnavailableError
from cognet.observ import get_logger
from cognet.services import CognateSearchService
from cognet.storage import DataImporter, RedisCognateStore, create_redis

logger = get_logger(__name__)


class ServiceContainer:
    """Container for singleton service instances."""

    _redis: Optional[aioredis.Redis] = None
    _search_service: Optional[CognateSearchService] = None
    _importer: Optional[DataImporter] = None

    @classmethod
    async def initialize(cls, settings: Optional[Settings] = None) -> None:
        """Connect to Redis and build services at application startup."""
        settings = settings or get_settings()

        redis = create_redis(settings.redis_url, settings.redis_socket_timeout)
        try:
            await redis.ping()
        except RedisError as e:
            await redis.aclose()
            raise StoreUnavailableError("connect", str(e)) from e

        cls.configure(redis, settings)
        logger.info(
            "services_initialized",
            redis_host=settings.redis_host,
            redis_port=settings.redis_port
        )

    @classmethod
    def configure(cls, redis: aioredis.Redis, settings: Optional[Settings] = None) -> None:
        """Build services over an existing client."""
        settings = settings or get_settings()
        cls._redis = redis
        cls._search_service = CognateSearchService(
            store=RedisCognateStore(redis),
            suggestion_limit=settings.suggestion_limit,
            min_prefix_length=settings.min_prefix_length
        )
        cls._importer = DataImporter(redis, batch_size=settings.import_batch_size)

    @classmethod
    def get_search_service(cls) -> CognateSearchService:
        """Get singleton search service instance."""
        if cls._search_service is None:
            raise RuntimeError(
                "CognateSearchService not initialized. "
                "Ensure ServiceContainer.initialize() is called at startup."
            )
        return cls._search_service

    @classmethod
    def get_importer(cls) -> DataImporter:
        """Get singleton importer instance."""
        if cls._importer is None:
            raise RuntimeError(
                "DataImporter not initialized. "
                "Ensure ServiceContainer.initialize() is called at startup."
            )
        return cls._importer

    @classmethod
    async def cleanup(cls) -> None:
        """Close the Redis client at application shutdown."""
        if cls._redis is not None:
            await cls._redis.aclose()
            logger.info("redis_connection_closed")
        cls._redis = None
        cls._search_service = None
        cls._importer = None


# FastAPI dependency functions
def get_search_service() -> CognateSearchService:
    """Provide search service instance for dependency injection."""
    return ServiceContainer.get_search_service()


def get_importer() -> DataImporter:
    """Provide importer instance for dependency injection."""
    return ServiceContainer.get_importer()
