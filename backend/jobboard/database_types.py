"""
Column types shared across models.
"""
from sqlalchemy import JSON
from sqlalchemy.dialects.postgresql import JSONB

# JSONB on PostgreSQL, JSON-encoded TEXT everywhere else (SQLite in tests).
# In-place mutation is not tracked: assign a new value or call flag_modified().
JSONBlob = JSON().with_variant(JSONB(), "postgresql")
