"""Redis-backed record store for cognate pairs and language metadata.

Key Format:
    concept:<id>     list of CognatePair JSON, in import order
    language:<code>  LanguageInfo JSON
    prefix:<p>       set of `word|language|concept_id`
    word:<word>      set of `concept_id|language`
"""

from typing import Iterable

import redis.asyncio as aioredis
from redis.exceptions import RedisError
from pydantic import ValidationError as PydanticValidationError

from cognet.core.contracts import ICognateStore
from cognet.core.types import CognatePair, LanguageInfo
from cognet.errors import CorruptRecordError, LanguageNotFoundError, StoreUnavailableError
from cognet.observ import get_logger

logger = get_logger(__name__)


def concept_key(concept_id: str) -> str:
    return f"concept:{concept_id}"


def language_key(code: str) -> str:
    return f"language:{code}"


def prefix_key(prefix: str) -> str:
    return f"prefix:{prefix}"


def word_key(word: str) -> str:
    return f"word:{word}"


def decode_pair(key: str, raw: str) -> CognatePair:
    try:
        return CognatePair.model_validate_json(raw)
    except PydanticValidationError as e:
        raise CorruptRecordError(key, str(e)) from e


def decode_language(key: str, raw: str) -> LanguageInfo:
    try:
        return LanguageInfo.model_validate_json(raw)
    except PydanticValidationError as e:
        raise CorruptRecordError(key, str(e)) from e


class RedisCognateStore(ICognateStore):
    """Read access to imported cognate data.

    Transport failures surface as StoreUnavailableError and are not
    retried here.
    """

    def __init__(self, redis: aioredis.Redis):
        self._redis = redis

    async def get_cognate_pairs(self, concept_id: str) -> list[CognatePair]:
        key = concept_key(concept_id)
        try:
            records = await self._redis.lrange(key, 0, -1)
        except RedisError as e:
            raise StoreUnavailableError("get_cognate_pairs", str(e)) from e

        logger.debug("cognate_pairs_fetched", concept_id=concept_id, count=len(records))
        return [decode_pair(key, raw) for raw in records]

    async def get_language_info(self, code: str) -> LanguageInfo:
        key = language_key(code)
        try:
            raw = await self._redis.get(key)
        except RedisError as e:
            raise StoreUnavailableError("get_language_info", str(e)) from e

        if raw is None:
            raise LanguageNotFoundError(code)
        return decode_language(key, raw)

    async def get_language_infos(self, codes: Iterable[str]) -> dict[str, LanguageInfo]:
        codes = list(codes)
        if not codes:
            return {}

        keys = [language_key(code) for code in codes]
        try:
            values = await self._redis.mget(keys)
        except RedisError as e:
            raise StoreUnavailableError("get_language_infos", str(e)) from e

        return {
            code: decode_language(key, raw)
            for code, key, raw in zip(codes, keys, values)
            if raw is not None
        }

    async def get_prefix_matches(self, prefix: str) -> list[str]:
        try:
            members = await self._redis.smembers(prefix_key(prefix))
        except RedisError as e:
            raise StoreUnavailableError("get_prefix_matches", str(e)) from e

        # Sets are unordered; sort for stable suggestion output.
        return sorted(members)


def create_redis(url: str, socket_timeout: float = 5.0) -> aioredis.Redis:
    """Create a client that decodes responses to str."""
    return aioredis.from_url(
        url,
        encoding="utf-8",
        decode_responses=True,
        socket_timeout=socket_timeout
    )
