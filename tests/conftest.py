"""
Pytest fixtures for the lookup service tests.

SQLite stands in for MySQL: every engine is a single shared in-memory
connection with extra in-memory databases ATTACHed, so schema reflection
sees several "databases" the way it would on a server.
"""

import sys
from pathlib import Path

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.pool import StaticPool

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from models import Vocabulary  # noqa: E402


LEXICON_TABLES = [
    "CREATE TABLE lexicon.words (id INTEGER PRIMARY KEY, Word TEXT, definition TEXT, example TEXT)",
    "CREATE TABLE lexicon.glossary (term TEXT, meaning TEXT, gloss TEXT, usage TEXT)",
    "CREATE TABLE lexicon.people (id INTEGER PRIMARY KEY, name TEXT, age INTEGER)",
    "CREATE TABLE lexicon.orders (id INTEGER PRIMARY KEY, total REAL)",
]

LEXICON_ROWS = [
    "INSERT INTO lexicon.words (Word, definition, example) VALUES ('apple', 'a fruit', 'She ate an apple.')",
    "INSERT INTO lexicon.words (Word, definition, example) VALUES ('Apple', 'a tech company', NULL)",
    "INSERT INTO lexicon.words (Word, definition, example) VALUES ('pear', '', 'A ripe pear.')",
    "INSERT INTO lexicon.glossary (term, meaning, gloss, usage) VALUES ('apple', 'pome', 'malus', NULL)",
    "INSERT INTO lexicon.people (name, age) VALUES ('alice', 30)",
    "INSERT INTO lexicon.orders (total) VALUES (9.5)",
]


def build_engine(*attached):
    """In-memory SQLite engine with the named databases attached"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def attach_databases(dbapi_connection, connection_record):
        for name in attached:
            dbapi_connection.execute(f"ATTACH DATABASE ':memory:' AS {name}")

    return engine


def run_sql(engine, statements):
    with engine.begin() as conn:
        for statement in statements:
            conn.exec_driver_sql(statement)


@pytest.fixture
def vocabulary():
    return Vocabulary()


@pytest.fixture
def empty_engine():
    """Engine with nothing lexical anywhere"""
    engine = build_engine("shop")
    run_sql(engine, [
        "CREATE TABLE shop.orders (id INTEGER PRIMARY KEY, total REAL)",
        "INSERT INTO shop.orders (total) VALUES (12.0)",
    ])
    yield engine
    engine.dispose()


@pytest.fixture
def lexicon_engine():
    """Engine with a 'lexicon' database holding strict, loose and unrelated tables"""
    engine = build_engine("lexicon")
    run_sql(engine, LEXICON_TABLES + LEXICON_ROWS)
    yield engine
    engine.dispose()


@pytest.fixture
def simple_engine():
    """A single words(word, definition) table holding ('apple', 'a fruit')"""
    engine = build_engine("dictionary")
    run_sql(engine, [
        "CREATE TABLE dictionary.words (word TEXT, definition TEXT)",
        "INSERT INTO dictionary.words (word, definition) VALUES ('apple', 'a fruit')",
    ])
    yield engine
    engine.dispose()


@pytest.fixture
def unreachable_engine(tmp_path):
    """Engine whose database file can never be opened"""
    engine = create_engine(f"sqlite:///{tmp_path / 'missing' / 'nested' / 'lexicon.db'}")
    yield engine
    engine.dispose()


@pytest.fixture
def engine_factory():
    """Build throwaway engines from (attached databases, statements)"""
    engines = []

    def factory(attached, statements):
        engine = build_engine(*attached)
        run_sql(engine, statements)
        engines.append(engine)
        return engine

    yield factory
    for engine in engines:
        engine.dispose()
