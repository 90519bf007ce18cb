"""Shared fixtures: in-memory record store and Redis doubles."""

from typing import Iterable, Optional

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from cognet.core.types import CognatePair, LanguageInfo
from cognet.errors import CorruptRecordError, LanguageNotFoundError, StoreUnavailableError


def pair(concept_id, lang1, word1, lang2, word2, translit1=None, translit2=None) -> CognatePair:
    return CognatePair(
        concept_id=concept_id,
        lang1=lang1,
        word1=word1,
        lang2=lang2,
        word2=word2,
        translit1=translit1,
        translit2=translit2,
    )


LANGUAGES = {
    "eng": LanguageInfo(code="eng", name="English", coordinates=[51.5, -0.1],
                        flag="https://flags.example/gb.svg", country="United Kingdom"),
    "deu": LanguageInfo(code="deu", name="German", coordinates=[52.5, 13.4],
                        flag="https://flags.example/de.svg", country="Germany"),
    "nld": LanguageInfo(code="nld", name="Dutch", coordinates=[52.4, 4.9],
                        flag="https://flags.example/nl.svg", country="Netherlands"),
    "rus": LanguageInfo(code="rus", name="Russian", coordinates=[55.8, 37.6],
                        flag="https://flags.example/ru.svg", country="Russia"),
    "ukr": LanguageInfo(code="ukr", name="Ukrainian", coordinates=[50.5, 30.5],
                        flag="https://flags.example/ua.svg", country="Ukraine"),
}


class FakeCognateStore:
    """In-memory ICognateStore with failure injection."""

    def __init__(
        self,
        pairs: Optional[dict[str, list[CognatePair]]] = None,
        languages: Optional[dict[str, LanguageInfo]] = None,
        prefixes: Optional[dict[str, list[str]]] = None
    ):
        self.pairs = pairs or {}
        self.languages = dict(LANGUAGES) if languages is None else languages
        self.prefixes = prefixes or {}
        self.corrupt_concepts: set[str] = set()
        self.corrupt_languages: set[str] = set()
        self.unavailable = False
        self.language_batches: list[list[str]] = []

    def _check(self, operation: str) -> None:
        if self.unavailable:
            raise StoreUnavailableError(operation, "connection refused")

    async def get_cognate_pairs(self, concept_id: str) -> list[CognatePair]:
        self._check("get_cognate_pairs")
        if concept_id in self.corrupt_concepts:
            raise CorruptRecordError(f"concept:{concept_id}", "invalid JSON")
        return list(self.pairs.get(concept_id, []))

    async def get_language_info(self, code: str) -> LanguageInfo:
        self._check("get_language_info")
        if code in self.corrupt_languages:
            raise CorruptRecordError(f"language:{code}", "invalid JSON")
        if code not in self.languages:
            raise LanguageNotFoundError(code)
        return self.languages[code]

    async def get_language_infos(self, codes: Iterable[str]) -> dict[str, LanguageInfo]:
        self._check("get_language_infos")
        codes = list(codes)
        self.language_batches.append(codes)
        for code in codes:
            if code in self.corrupt_languages:
                raise CorruptRecordError(f"language:{code}", "invalid JSON")
        return {code: self.languages[code] for code in codes if code in self.languages}

    async def get_prefix_matches(self, prefix: str) -> list[str]:
        self._check("get_prefix_matches")
        return sorted(self.prefixes.get(prefix, []))


class FakePipeline:
    """Queues commands until execute(), like a non-transactional pipeline."""

    def __init__(self, redis: "FakeRedis"):
        self._redis = redis
        self._commands = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_value, traceback):
        await self.reset()

    async def reset(self):
        self._redis.pipeline_resets += 1
        self._commands = []

    def rpush(self, key, *values):
        self._commands.append(("rpush", key, values))
        return self

    def sadd(self, key, *members):
        self._commands.append(("sadd", key, members))
        return self

    def set(self, key, value):
        self._commands.append(("set", key, value))
        return self

    async def execute(self):
        self._redis.check()
        results = []
        for command, key, arg in self._commands:
            if command == "rpush":
                self._redis.lists.setdefault(key, []).extend(arg)
                results.append(len(self._redis.lists[key]))
            elif command == "sadd":
                members = self._redis.sets.setdefault(key, set())
                before = len(members)
                members.update(arg)
                results.append(len(members) - before)
            else:
                self._redis.strings[key] = arg
                results.append(True)
        self._redis.executed_batches += 1
        self._commands = []
        return results


class FakeRedis:
    """Minimal async Redis double covering the commands the app issues."""

    def __init__(self):
        self.lists: dict[str, list[str]] = {}
        self.sets: dict[str, set[str]] = {}
        self.strings: dict[str, str] = {}
        self.executed_batches = 0
        self.pipeline_resets = 0
        self.fail = False
        self.closed = False

    def check(self) -> None:
        if self.fail:
            raise RedisConnectionError("Connection refused")

    def pipeline(self, transaction=True):
        return FakePipeline(self)

    async def ping(self):
        self.check()
        return True

    async def lrange(self, key, start, end):
        self.check()
        values = self.lists.get(key, [])
        return list(values[start:] if end == -1 else values[start:end + 1])

    async def get(self, key):
        self.check()
        return self.strings.get(key)

    async def mget(self, keys):
        self.check()
        return [self.strings.get(key) for key in keys]

    async def set(self, key, value):
        self.check()
        self.strings[key] = value
        return True

    async def smembers(self, key):
        self.check()
        return set(self.sets.get(key, set()))

    async def flushdb(self):
        self.check()
        self.lists.clear()
        self.sets.clear()
        self.strings.clear()
        return True

    async def aclose(self):
        self.closed = True


@pytest.fixture
def store():
    return FakeCognateStore()


@pytest.fixture
def fake_redis():
    return FakeRedis()
