"""Core type definitions for the cognate chain system.

Provides immutable domain models with strict typing.
All stored records are Pydantic models for validation and serialization.
"""

from typing import NamedTuple, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class CognatePair(BaseModel):
    """One documented cognate relationship between two words of a concept."""
    model_config = ConfigDict(frozen=True)

    concept_id: str
    lang1: str
    word1: str
    lang2: str
    word2: str
    translit1: Optional[str] = None
    translit2: Optional[str] = None

    def to_record(self) -> str:
        """Serialize for storage, omitting empty transliterations."""
        return self.model_dump_json(exclude_none=True)


class LanguageInfo(BaseModel):
    """Descriptive reference record for a language code."""
    model_config = ConfigDict(frozen=True)

    code: str = Field(min_length=1)
    name: str
    coordinates: list[float] = Field(default_factory=list)  # [lat, lng]
    flag: str = ""
    country: str = ""

    @field_validator("coordinates", mode="before")
    @classmethod
    def _null_coordinates(cls, value):
        return [] if value is None else value


class NodeId(NamedTuple):
    """Graph node identity. Tuple ordering is the traversal tie-break."""
    language: str
    word: str


class ChainWord(BaseModel):
    """A chain member rendered for the map."""
    model_config = ConfigDict(frozen=True)

    word: str
    transliteration: str = ""
    language: LanguageInfo


CognateChain = list[ChainWord]


class ChainQueryResult(BaseModel):
    """Chains discovered for one concept."""

    concept_id: str
    chains: list[CognateChain] = Field(default_factory=list)


class WordSuggestion(BaseModel):
    """Prefix search hit."""
    model_config = ConfigDict(frozen=True)

    word: str
    language: str
    concept_id: str
    language_info: Optional[LanguageInfo] = None


class ImportStats(BaseModel):
    """Outcome of a bulk cognate import."""

    total_records: int = 0
    skipped_records: int = 0
    batches: int = 0
