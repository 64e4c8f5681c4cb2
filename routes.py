"""API Routes - All endpoints"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine
from database import check_database_health
from models import InspectionSummary, Vocabulary
from utils import (
    HealthResponse, HealthErrorResponse, SearchResponse, SearchResultSchema,
    NotFoundResponse, ErrorResponse
)
from Appmanagement import search_word, WordNotFoundError
from log import log_error, log_warning

MISSING_WORD = "Missing required query parameter: word"

# Create router
router = APIRouter()


def get_engine(request: Request) -> Engine:
    """Pooled engine created at startup"""
    return request.app.state.engine


def get_summary(request: Request) -> InspectionSummary:
    """Schema snapshot taken at startup"""
    return request.app.state.summary


def get_vocabulary(request: Request) -> Vocabulary:
    return request.app.state.vocabulary


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={500: {"model": HealthErrorResponse}},
)
def health(engine: Engine = Depends(get_engine)):
    """
    Check that a pooled connection can be acquired and used
    """
    try:
        check_database_health(engine)
    except Exception as e:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=HealthErrorResponse(error=str(e)).model_dump()
        )
    return HealthResponse(ok=True)


@router.get(
    "/search",
    response_model=SearchResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": NotFoundResponse},
        500: {"model": ErrorResponse},
    },
)
def search(
    word: Optional[str] = Query(None, description="Word to look up, matched case-insensitively"),
    engine: Engine = Depends(get_engine),
    summary: InspectionSummary = Depends(get_summary),
    vocabulary: Vocabulary = Depends(get_vocabulary),
):
    """
    Look up definitions and examples for a word

    - **word**: the word to look up; surrounding whitespace is ignored

    Tables found at startup are searched first. Only if none of them
    match is every database rescanned for a word-like column.
    """
    word = (word or "").strip()
    if not word:
        log_warning("ValidationError: search called without a word")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorResponse(error=MISSING_WORD).model_dump()
        )

    try:
        results = search_word(engine, summary, word, vocabulary)
        # Serialisation errors fall through to the generic 500 below
        content = SearchResponse(
            word=word,
            count=len(results),
            results=[SearchResultSchema.from_result(result) for result in results]
        ).model_dump(mode="json")
    except WordNotFoundError:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=NotFoundResponse(word=word).model_dump()
        )
    except Exception as e:
        # Driver messages stay in the logs
        log_error("SearchError", str(e), details={"word": word})
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(error="Internal server error").model_dump()
        )

    return JSONResponse(content=content)
