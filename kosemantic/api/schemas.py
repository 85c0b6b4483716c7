"""
Request and response models for the scoring API.
Field names follow the camelCase contract consumed by the game layer.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class SimilarityRequest(BaseModel):
    word1: str
    word2: str

    @field_validator('word1', 'word2')
    @classmethod
    def word_must_not_be_empty(cls, v):
        if not v.strip():
            raise ValueError('word cannot be empty')
        return v


class SimilarityResponse(BaseModel):
    similarity: int = Field(ge=0, le=100)
    method: str
    label: str


class RankResponse(BaseModel):
    rank: Optional[int]
    message: str


class StatisticsResponse(_CamelModel):
    best: int
    rank10: int
    rank100: int
    rank1000: int
    total_words: int = Field(alias="totalWords")
    message: str


class NeighborItem(BaseModel):
    word: str
    score: int
    rank: int


class NeighborsResponse(BaseModel):
    target: str
    neighbors: List[NeighborItem]


class WordValidationResponse(BaseModel):
    word: str
    valid: bool
    reason: Optional[str] = None


class StatusResponse(_CamelModel):
    vectors_loaded: int = Field(alias="vectorsLoaded")
    using_real_vectors: bool = Field(alias="usingRealVectors")
    vector_provenance: str = Field(alias="vectorProvenance")
    dictionary_words: int = Field(alias="dictionaryWords")
    vector_comparisons: int = Field(alias="vectorComparisons")
    fallback_comparisons: int = Field(alias="fallbackComparisons")


class ReloadRequest(BaseModel):
    source: Optional[str] = None
    target_words: Optional[List[str]] = None


class ReloadResponse(_CamelModel):
    count: int
    vectors_loaded: int = Field(alias="vectorsLoaded")


class HealthResponse(BaseModel):
    status: str
    version: str
    db_health: bool
    vectors_loaded: int
