"""Database schema definitions for recipe ingredient databases."""

import sqlite3

DDL = """
CREATE TABLE IF NOT EXISTS ingredient(
    id                 INTEGER PRIMARY KEY,
    name               TEXT UNIQUE NOT NULL,
    plural_name        TEXT,
    base_ingredient_id INTEGER,
    FOREIGN KEY(base_ingredient_id) REFERENCES ingredient(id) ON DELETE SET NULL
);

CREATE TABLE IF NOT EXISTS recipe(
    id          INTEGER PRIMARY KEY,
    title       TEXT NOT NULL,
    ingredients TEXT
);

CREATE TABLE IF NOT EXISTS recipe_ingredient(
    id                    INTEGER PRIMARY KEY,
    recipe_id             INTEGER NOT NULL,
    ingredient_id         INTEGER,
    original_text         TEXT NOT NULL,
    quantity_amount       REAL,
    quantity_unit         TEXT,
    preparation           TEXT,
    sequence_order        INTEGER NOT NULL,
    match_confidence      REAL,
    match_method          TEXT,
    match_notes           TEXT,
    needs_review          INTEGER NOT NULL DEFAULT 0,
    optional_confidence   REAL,
    substitute_confidence REAL,
    FOREIGN KEY(recipe_id)     REFERENCES recipe(id)     ON DELETE CASCADE,
    FOREIGN KEY(ingredient_id) REFERENCES ingredient(id) ON DELETE SET NULL
);

CREATE TABLE IF NOT EXISTS recipe_ingredient_alternative(
    id                        INTEGER PRIMARY KEY,
    recipe_ingredient_id      INTEGER NOT NULL,
    alternative_ingredient_id INTEGER NOT NULL,
    is_equivalent             INTEGER NOT NULL,
    preference_order          INTEGER NOT NULL,
    FOREIGN KEY(recipe_ingredient_id)      REFERENCES recipe_ingredient(id) ON DELETE CASCADE,
    FOREIGN KEY(alternative_ingredient_id) REFERENCES ingredient(id)        ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS or_pattern_decision(
    id                     INTEGER PRIMARY KEY,
    recipe_id              INTEGER,
    recipe_title           TEXT,
    original_text          TEXT,
    option1_name           TEXT NOT NULL,
    option1_ingredient_id  INTEGER,
    option1_found          INTEGER NOT NULL,
    option2_name           TEXT NOT NULL,
    option2_ingredient_id  INTEGER,
    option2_found          INTEGER NOT NULL,
    detected_as_equivalent INTEGER NOT NULL,
    primary_choice         TEXT,
    parser_confidence      REAL,
    decision_reason        TEXT,
    created_at             TEXT DEFAULT CURRENT_TIMESTAMP
);

"""


def create_schema(conn: sqlite3.Connection) -> None:
    """Create the database schema for recipe ingredients.

    Args:
        conn: SQLite database connection
    """
    conn.executescript(DDL)
    conn.execute("PRAGMA foreign_keys = ON")
