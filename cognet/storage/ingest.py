"""Bulk import of cognate pairs and language metadata into Redis.

Cognate files are tab-separated with a header line:

    concept_id  lang1  word1  lang2  word2  [translit1]  [translit2]

Language files are JSON: an array of language objects, or an object
mapping code to language object.
"""

from datetime import datetime, timezone
from typing import Iterable, Optional

import orjson
import redis.asyncio as aioredis
from pydantic import ValidationError as PydanticValidationError
from redis.exceptions import RedisError

from cognet.core.types import CognatePair, ImportStats, LanguageInfo
from cognet.errors import ImportFormatError, ImportInProgressError, StoreUnavailableError
from cognet.observ import get_logger, timer
from cognet.storage.store import concept_key, language_key, prefix_key, word_key

logger = get_logger(__name__)

MIN_PREFIX_LENGTH = 2
METADATA_KEY = "import:metadata"


def generate_prefixes(word: str, min_length: int = MIN_PREFIX_LENGTH) -> list[str]:
    """Lowercased prefixes of `word`, shortest first, by character."""
    word = word.lower()
    return [word[:i] for i in range(min_length, len(word) + 1)]


def parse_tsv_line(line: str) -> Optional[CognatePair]:
    """Parse one data line; None for lines with fewer than five fields."""
    fields = line.strip().split("\t")
    if len(fields) < 5:
        return None

    return CognatePair(
        concept_id=fields[0],
        lang1=fields[1],
        word1=fields[2],
        lang2=fields[3],
        word2=fields[4],
        translit1=fields[5] or None if len(fields) > 5 else None,
        translit2=fields[6] or None if len(fields) > 6 else None,
    )


def parse_languages(payload: bytes | str) -> list[LanguageInfo]:
    """Decode a languages file into validated records."""
    try:
        data = orjson.loads(payload)
    except orjson.JSONDecodeError as e:
        raise ImportFormatError("languages", f"invalid JSON: {e}") from e

    if isinstance(data, dict):
        records = []
        for code, record in data.items():
            if not isinstance(record, dict):
                raise ImportFormatError("languages", f"record {code}: expected an object")
            records.append({"code": code, **record})
    elif isinstance(data, list):
        records = data
    else:
        raise ImportFormatError("languages", "expected a JSON array or object")

    languages = []
    for index, record in enumerate(records):
        try:
            languages.append(LanguageInfo.model_validate(record))
        except PydanticValidationError as e:
            raise ImportFormatError("languages", f"record {index}: {e}") from e
    return languages


class DataImporter:
    """Writes imported records with pipelined Redis commands.

    Status is tracked per importer instance: "ready" or "importing".
    """

    def __init__(self, redis: aioredis.Redis, batch_size: int = 1000):
        self._redis = redis
        self._batch_size = batch_size
        self._status = "ready"

    @property
    def status(self) -> str:
        return self._status

    async def import_tsv(self, lines: Iterable[str]) -> ImportStats:
        """Import a cognate file, skipping its header line.

        Raises:
            ImportFormatError: The file is empty
            ImportInProgressError: Another import is running
            StoreUnavailableError: Redis rejected a batch
        """
        self._begin()
        try:
            with timer(logger, "cognate_import"):
                return await self._import_tsv(iter(lines))
        finally:
            self._status = "ready"

    async def _import_tsv(self, lines) -> ImportStats:
        if next(lines, None) is None:
            raise ImportFormatError("cognates", "missing header line", line_number=1)

        stats = ImportStats()
        pending = 0

        async with self._redis.pipeline(transaction=False) as pipe:
            for line_number, line in enumerate(lines, start=2):
                if not line.strip():
                    continue

                pair = parse_tsv_line(line)
                if pair is None:
                    logger.debug("cognate_line_skipped", line_number=line_number)
                    stats.skipped_records += 1
                    continue

                self._queue_pair(pipe, pair)
                stats.total_records += 1
                pending += 1

                if pending >= self._batch_size:
                    await self._flush(pipe, stats)
                    pending = 0

            if pending:
                await self._flush(pipe, stats)

        await self._write_metadata(stats)
        logger.info(
            "cognate_import_finished",
            total_records=stats.total_records,
            skipped_records=stats.skipped_records,
            batches=stats.batches
        )
        return stats

    def _queue_pair(self, pipe, pair: CognatePair) -> None:
        pipe.rpush(concept_key(pair.concept_id), pair.to_record())

        for word, language in ((pair.word1, pair.lang1), (pair.word2, pair.lang2)):
            member = f"{word}|{language}|{pair.concept_id}"
            for prefix in generate_prefixes(word):
                pipe.sadd(prefix_key(prefix), member)
            pipe.sadd(word_key(word), f"{pair.concept_id}|{language}")

    async def _flush(self, pipe, stats: ImportStats) -> None:
        try:
            await pipe.execute()
        except RedisError as e:
            raise StoreUnavailableError("import_batch", str(e)) from e
        stats.batches += 1

    async def _write_metadata(self, stats: ImportStats) -> None:
        metadata = {
            "total_records": stats.total_records,
            "skipped_records": stats.skipped_records,
            "status": "completed",
            "timestamp": int(datetime.now(timezone.utc).timestamp()),
        }
        try:
            await self._redis.set(METADATA_KEY, orjson.dumps(metadata).decode())
        except RedisError as e:
            raise StoreUnavailableError("import_metadata", str(e)) from e

    async def import_languages(self, payload: bytes | str) -> int:
        """Store language records; returns how many were written."""
        languages = parse_languages(payload)

        self._begin()
        try:
            async with self._redis.pipeline(transaction=False) as pipe:
                for language in languages:
                    pipe.set(language_key(language.code), language.model_dump_json())
                try:
                    await pipe.execute()
                except RedisError as e:
                    raise StoreUnavailableError("import_languages", str(e)) from e
        finally:
            self._status = "ready"

        logger.info("languages_imported", count=len(languages))
        return len(languages)

    async def clear(self) -> None:
        """Remove every key from the database."""
        try:
            await self._redis.flushdb()
        except RedisError as e:
            raise StoreUnavailableError("clear_database", str(e)) from e
        logger.warning("database_cleared")

    def _begin(self) -> None:
        if self._status == "importing":
            raise ImportInProgressError()
        self._status = "importing"
