"""Pydantic models for the API schemas"""

from typing import Any, Dict, List
from pydantic import BaseModel, Field
from models import SearchResult


class HealthResponse(BaseModel):
    """Schema for the liveness probe"""
    ok: bool


class HealthErrorResponse(BaseModel):
    ok: bool = False
    error: str


class SearchResultSchema(BaseModel):
    """Schema for one matching row"""
    source: str = Field(..., description="Table the row came from, as database.table")
    word: str
    definitions: List[str] = []
    examples: List[str] = []
    row: Dict[str, Any] = Field(default_factory=dict, description="Raw row as stored")

    class Config:
        json_schema_extra = {
            "example": {
                "source": "lexicon.words",
                "word": "apple",
                "definitions": ["a fruit"],
                "examples": ["She ate an apple."],
                "row": {"id": 1, "word": "apple", "definition": "a fruit", "example": "She ate an apple."}
            }
        }

    @classmethod
    def from_result(cls, result: SearchResult) -> "SearchResultSchema":
        return cls(
            source=result.source,
            word=result.word,
            definitions=result.definitions,
            examples=result.examples,
            row=result.raw_row,
        )


class SearchResponse(BaseModel):
    """Schema for a successful search"""
    word: str
    count: int
    results: List[SearchResultSchema]


class NotFoundResponse(BaseModel):
    word: str
    results: List[SearchResultSchema] = []
    message: str = "Not found"


class ErrorResponse(BaseModel):
    """Schema for error responses"""
    error: str

    class Config:
        json_schema_extra = {
            "example": {
                "error": "Missing required query parameter: word"
            }
        }
