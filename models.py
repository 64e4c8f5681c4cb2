"""Domain models - vocabularies, inspected tables and search results"""

from typing import Any, Dict, FrozenSet, List, Tuple
from pydantic import BaseModel, Field, model_validator
from Dbconfig import WORD_COLUMNS, DEFINITION_COLUMNS, EXAMPLE_COLUMNS


class Vocabulary(BaseModel):
    """
    Ordered column-name synonyms used to recognise lexical tables.
    Position in each list is the match priority.
    """
    word_columns: Tuple[str, ...] = tuple(WORD_COLUMNS)
    definition_columns: Tuple[str, ...] = tuple(DEFINITION_COLUMNS)
    example_columns: Tuple[str, ...] = tuple(EXAMPLE_COLUMNS)

    class Config:
        frozen = True

    @model_validator(mode="after")
    def check_word_columns(self):
        if not self.word_columns:
            raise ValueError("Vocabulary needs at least one word column")
        return self

    def match(self, columns) -> Tuple[str, List[str], List[str]]:
        """
        Match lower-cased column names against the vocabulary.
        Returns (word column or "", definition columns, example columns)
        """
        present = set(columns)
        word_col = next((c for c in self.word_columns if c in present), "")
        def_cols = [c for c in self.definition_columns if c in present]
        ex_cols = [c for c in self.example_columns if c in present]
        return word_col, def_cols, ex_cols


DEFAULT_VOCABULARY = Vocabulary()


class CandidateTable(BaseModel):
    """A table that looks like it stores dictionary entries"""
    database: str
    table: str
    word_column: str
    definition_columns: Tuple[str, ...] = ()
    example_columns: Tuple[str, ...] = ()
    all_columns: FrozenSet[str] = frozenset()

    class Config:
        frozen = True

    @model_validator(mode="after")
    def check_columns(self):
        if self.word_column not in self.all_columns:
            raise ValueError(f"Word column {self.word_column} is not a column of {self.source}")
        extra = (set(self.definition_columns) | set(self.example_columns)) - self.all_columns
        if extra:
            raise ValueError(f"Unknown columns for {self.source}: {sorted(extra)}")
        return self

    @property
    def source(self) -> str:
        return f"{self.database}.{self.table}"


class InspectionSummary(BaseModel):
    """Snapshot of the startup schema scan; never refreshed while running"""
    databases: Tuple[str, ...] = ()
    candidates: Tuple[CandidateTable, ...] = ()

    class Config:
        frozen = True


class SearchResult(BaseModel):
    source: str
    word: str
    definitions: List[str] = Field(default_factory=list)
    examples: List[str] = Field(default_factory=list)
    raw_row: Dict[str, Any] = Field(default_factory=dict)
