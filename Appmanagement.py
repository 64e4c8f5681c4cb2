"""Application management - Word lookup over the inspected schema"""

from typing import Dict, Iterable, List
from sqlalchemy import bindparam, column, func, literal_column, select, table
from sqlalchemy.engine import Connection, Engine
from inspector import list_databases, scan_tables
from models import CandidateTable, InspectionSummary, SearchResult, Vocabulary
from log import log_info, log_warning, log_exception
from Dbconfig import CANDIDATE_ROW_LIMIT, FALLBACK_ROW_LIMIT


class WordNotFoundError(Exception):
    """Exception raised when no table holds the requested word"""
    pass


def build_lookup_query(cand: CandidateTable, limit: int):
    """SELECT * FROM db.table WHERE LOWER(word_column) = LOWER(:word) LIMIT n"""
    source = table(cand.table, column(cand.word_column), schema=cand.database)
    return (
        select(literal_column("*"))
        .select_from(source)
        .where(func.lower(source.c[cand.word_column]) == func.lower(bindparam("word")))
        .limit(limit)
    )


def json_safe(value):
    """Binary column values (BLOB, VARBINARY) are decoded as lenient UTF-8"""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", errors="replace")
    return value


def _present(row: Dict, columns: Iterable[str]) -> List[str]:
    return [str(row[c]) for c in columns if row.get(c)]


def row_to_result(cand: CandidateTable, row: Dict) -> SearchResult:
    """Map a raw row onto a result, dropping empty definitions and examples"""
    row = {key: json_safe(value) for key, value in row.items()}
    lowered = {key.lower(): value for key, value in row.items()}
    word = lowered.get(cand.word_column)
    return SearchResult(
        source=cand.source,
        word="" if word is None else str(word),
        definitions=_present(lowered, cand.definition_columns),
        examples=_present(lowered, cand.example_columns),
        raw_row=row,
    )


def query_tables(conn: Connection, candidates: Iterable[CandidateTable],
                 word: str, limit: int) -> List[SearchResult]:
    """
    Run the equality lookup against each table in turn
    A table whose query fails is logged and skipped
    """
    results = []
    for cand in candidates:
        try:
            rows = conn.execute(build_lookup_query(cand, limit), {"word": word}).mappings().all()
        except Exception as e:
            log_warning(f"Query error on {cand.source}: {e}")
            conn.rollback()
            continue
        results.extend(row_to_result(cand, dict(row)) for row in rows)
    return results


def search_candidates(conn: Connection, summary: InspectionSummary, word: str) -> List[SearchResult]:
    """Fast path: only the tables found at startup"""
    return query_tables(conn, summary.candidates, word, CANDIDATE_ROW_LIMIT)


@log_exception
def search_fallback(conn: Connection, word: str, vocabulary: Vocabulary) -> List[SearchResult]:
    """
    Slow path: rescan every non-system database, ignoring the startup
    snapshot and DB_NAME, and query any table with a word column
    """
    databases = list_databases(conn)
    tables = scan_tables(conn, databases, vocabulary, strict=False)
    log_info(f"Fallback lookup for '{word}' over {len(tables)} tables")
    return query_tables(conn, tables, word, FALLBACK_ROW_LIMIT)


def search_word(engine: Engine, summary: InspectionSummary, word: str,
                vocabulary: Vocabulary) -> List[SearchResult]:
    """
    Look a word up, case-insensitively

    Results keep discovery order: candidate tables first, and the fallback
    scan only when the candidates gave nothing. Raises WordNotFoundError
    when both phases come back empty.
    """
    word = word.strip()
    with engine.connect() as conn:
        results = search_candidates(conn, summary, word)
        if not results:
            results = search_fallback(conn, word, vocabulary)

    if not results:
        raise WordNotFoundError(f"No entry found for '{word}'")

    log_info(f"Search completed: '{word}' - {len(results)} results found")
    return results
