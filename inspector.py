"""Schema discovery - find tables that look like dictionaries"""

from typing import List, Optional
from sqlalchemy import inspect
from sqlalchemy.engine import Connection, Engine
from log import log_info, log_warning, log_debug, log_error
from models import CandidateTable, InspectionSummary, Vocabulary
from Dbconfig import SYSTEM_SCHEMAS


def list_databases(conn: Connection, target_database: Optional[str] = None) -> List[str]:
    """
    List user databases in catalog order, excluding system schemas.
    A configured target database replaces the catalog listing.
    """
    names = [target_database] if target_database else inspect(conn).get_schema_names()
    return [name for name in names if name not in SYSTEM_SCHEMAS]


def scan_tables(conn: Connection, databases: List[str], vocabulary: Vocabulary,
                strict: bool = True) -> List[CandidateTable]:
    """
    Walk every table and view of the given databases and keep those matching
    the vocabulary. Base tables come first, then views, each in catalog order

    strict: the table needs a word column and a definition or example column
    loose (strict=False): a word column is enough
    """
    inspector = inspect(conn)
    matches = []

    for db in databases:
        try:
            tables = inspector.get_table_names(schema=db) + inspector.get_view_names(schema=db)
        except Exception as e:
            log_warning(f"Listing tables of {db} failed: {e}")
            continue

        log_debug(f"Database {db}: {len(tables)} tables: {', '.join(tables)}")

        for table in tables:
            try:
                columns = [col["name"].lower() for col in inspector.get_columns(table, schema=db)]
            except Exception as e:
                log_warning(f"Describing {db}.{table} failed: {e}")
                continue

            log_debug(f"- {table}: columns = {', '.join(columns)}")

            word_col, def_cols, ex_cols = vocabulary.match(columns)
            if not word_col:
                continue
            if strict and not (def_cols or ex_cols):
                continue

            matches.append(CandidateTable(
                database=db,
                table=table,
                word_column=word_col,
                definition_columns=tuple(def_cols),
                example_columns=tuple(ex_cols),
                all_columns=frozenset(columns),
            ))

    return matches


def log_summary(summary: InspectionSummary) -> None:
    log_info("==== Lexical candidate tables summary ====")
    if not summary.candidates:
        log_info("No obvious candidate tables found. /api/search will attempt a fallback lookup.")
    for cand in summary.candidates:
        log_info(
            f"* {cand.source} | word: {cand.word_column} | "
            f"defs: {', '.join(cand.definition_columns)} | "
            f"examples: {', '.join(cand.example_columns)}"
        )


def inspect_schema(engine: Engine, vocabulary: Vocabulary,
                   target_database: Optional[str] = None) -> InspectionSummary:
    """
    Build the startup snapshot of candidate tables

    Fails open: if the database cannot be reached or listed, the error is
    logged and an empty summary is returned so the service still starts.
    """
    try:
        with engine.connect() as conn:
            log_info("Connected. Inspecting schema...")
            if target_database:
                log_info(f"Using specific database from DB_NAME = {target_database}")

            databases = list_databases(conn, target_database)
            log_info(f"Databases to inspect: {', '.join(databases) or '(none)'}")
            candidates = scan_tables(conn, databases, vocabulary, strict=True)
    except Exception as e:
        log_error("InspectionError", f"Failed to connect or inspect schema: {e}")
        return InspectionSummary()

    summary = InspectionSummary(databases=tuple(databases), candidates=tuple(candidates))
    log_summary(summary)
    return summary
