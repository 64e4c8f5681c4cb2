"""Database configuration - Lexical vocabularies and constants"""

# Schemas that never hold user data
SYSTEM_SCHEMAS = ["information_schema", "mysql", "performance_schema", "sys"]

# Column-name vocabularies, in priority order
WORD_COLUMNS = ["word", "term", "lemma", "headword", "entry", "name"]
DEFINITION_COLUMNS = ["definition", "meaning", "gloss", "description", "explanation"]
EXAMPLE_COLUMNS = ["example", "usage", "sentence", "samples"]

# Row caps per table
CANDIDATE_ROW_LIMIT = 50
FALLBACK_ROW_LIMIT = 25

# Connection pool
DEFAULT_POOL_SIZE = 5
DEFAULT_DB_PORT = 3306

HEALTH_QUERY = "SELECT 1"
