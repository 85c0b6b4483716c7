"""
HTTP surface for the scoring core.
Thin FastAPI layer: validation, scoring, ranking, statistics and status.
"""

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from ..core import db
from ..core.config import VERSION, build_engine, debug_enabled
from ..core.engine import ScoringEngine
from ..core.errors import InvalidWordError, TargetNotResolvableError, VectorSourceError
from ..vector.similarity import describe_score
from .schemas import (
    HealthResponse,
    NeighborItem,
    NeighborsResponse,
    RankResponse,
    ReloadRequest,
    ReloadResponse,
    SimilarityRequest,
    SimilarityResponse,
    StatisticsResponse,
    StatusResponse,
    WordValidationResponse,
)

_engine = None


def get_engine() -> ScoringEngine:
    """Process-wide engine, built on first use."""
    global _engine
    if _engine is None:
        _engine = build_engine()
    return _engine


app = FastAPI(
    title="Korean Word Similarity API",
    version=VERSION,
    description="Semantic similarity scoring for the Korean word-guessing game",
    docs_url="/docs" if debug_enabled() else None,
    redoc_url="/redoc" if debug_enabled() else None
)

# Game frontend runs on a separate origin during development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _invalid_word(e: InvalidWordError) -> HTTPException:
    return HTTPException(status_code=400, detail={"word": e.word, "reason": e.reason.value})


@app.get("/health", response_model=HealthResponse)
def health_check_endpoint(engine: ScoringEngine = Depends(get_engine)):
    """Check system health."""
    db_health = engine.store.available and db.health_check(engine.store.db_path)
    return HealthResponse(
        status="healthy" if db_health else "degraded",
        version=VERSION,
        db_health=db_health,
        vectors_loaded=engine.store.vector_count()
    )


@app.post("/similarity", response_model=SimilarityResponse)
def similarity_endpoint(req: SimilarityRequest, engine: ScoringEngine = Depends(get_engine)):
    try:
        result = engine.score(req.word1, req.word2)
    except InvalidWordError as e:
        raise _invalid_word(e)
    return SimilarityResponse(
        similarity=result.similarity,
        method=result.method,
        label=describe_score(result.similarity)
    )


@app.get("/rank/{target}/{probe}", response_model=RankResponse)
def rank_endpoint(target: str, probe: str, engine: ScoringEngine = Depends(get_engine)):
    try:
        rank = engine.rank(target, probe)
    except InvalidWordError as e:
        raise _invalid_word(e)
    if rank is None:
        message = f'"{probe}"의 순위를 계산할 수 없습니다.'
    else:
        message = f'"{probe}"는 정답과의 유사도 순위 {rank}번째 입니다.'
    return RankResponse(rank=rank, message=message)


@app.get("/statistics/{target}", response_model=StatisticsResponse, response_model_by_alias=True)
def statistics_endpoint(target: str, engine: ScoringEngine = Depends(get_engine)):
    try:
        stats = engine.statistics(target)
    except InvalidWordError as e:
        raise _invalid_word(e)
    except TargetNotResolvableError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return StatisticsResponse(
        best=stats.best,
        rank10=stats.rank10,
        rank100=stats.rank100,
        rank1000=stats.rank1000,
        total_words=stats.total_words,
        message=stats.message
    )


@app.get("/neighbors/{target}", response_model=NeighborsResponse)
def neighbors_endpoint(target: str, k: int = 10, engine: ScoringEngine = Depends(get_engine)):
    try:
        ranked = engine.neighbors(target, k=max(1, min(k, 1000)))
    except InvalidWordError as e:
        raise _invalid_word(e)
    except TargetNotResolvableError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return NeighborsResponse(
        target=target,
        neighbors=[NeighborItem(word=n.word, score=n.score, rank=n.rank) for n in ranked]
    )


@app.get("/words/{word}/valid", response_model=WordValidationResponse)
def validate_word_endpoint(word: str, engine: ScoringEngine = Depends(get_engine)):
    result = engine.check_word(word)
    return WordValidationResponse(
        word=result.word,
        valid=result.valid,
        reason=result.reason.value if result.reason else None
    )


@app.get("/status", response_model=StatusResponse, response_model_by_alias=True)
def status_endpoint(engine: ScoringEngine = Depends(get_engine)):
    status = engine.system_status()
    return StatusResponse(
        vectors_loaded=status.vectors_loaded,
        using_real_vectors=status.using_real_vectors,
        vector_provenance=status.vector_provenance,
        dictionary_words=status.dictionary_words,
        vector_comparisons=status.vector_comparisons,
        fallback_comparisons=status.fallback_comparisons
    )


@app.post("/admin/reload", response_model=ReloadResponse, response_model_by_alias=True)
def reload_endpoint(req: ReloadRequest, engine: ScoringEngine = Depends(get_engine)):
    if not debug_enabled():
        raise HTTPException(status_code=403, detail="Admin endpoints require debug mode")
    try:
        count = engine.reload(req.source, req.target_words)
    except VectorSourceError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ReloadResponse(count=count, vectors_loaded=engine.store.vector_count())
