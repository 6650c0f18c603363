# Account Registry Database Schema
# This file defines the schema for the shared accounts.db database

ACCOUNTS_SCHEMA = """
-- accounts.db - Local credential store
CREATE TABLE IF NOT EXISTS accounts (
    id INTEGER PRIMARY KEY,
    username TEXT UNIQUE NOT NULL,             -- Case-sensitive login name
    credential TEXT NOT NULL,                  -- bcrypt hash, never plaintext
    registered_at TEXT NOT NULL,               -- ISO-8601 UTC
    last_login_at TEXT,                        -- ISO-8601 UTC, NULL until first login
    failed_attempts INTEGER NOT NULL DEFAULT 0 CHECK (failed_attempts >= 0),
    is_active INTEGER NOT NULL DEFAULT 1
);

CREATE INDEX IF NOT EXISTS idx_accounts_registered_at ON accounts(registered_at DESC);
CREATE INDEX IF NOT EXISTS idx_accounts_last_login_at ON accounts(last_login_at);
CREATE INDEX IF NOT EXISTS idx_accounts_active ON accounts(is_active);
"""

# Migration format: (version, description, sql)
REGISTRY_MIGRATIONS = [
    (
        1,
        "Initial account registry schema",
        ACCOUNTS_SCHEMA,
    ),
]

SCHEMA_VERSION = REGISTRY_MIGRATIONS[-1][0]
