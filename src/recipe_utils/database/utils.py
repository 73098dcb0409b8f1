"""Database utility functions for recipe ingredient databases."""

import contextlib
import dataclasses
import logging
import pathlib
import sqlite3
from typing import Dict, Generator, List, Optional, Sequence, Tuple, Union

import pandas as pd

from recipe_utils.ingredients.models import (
    AlternativeRelation,
    CatalogEntry,
    OrPatternDecision,
    PersistRecord,
)

logger = logging.getLogger(__name__)

RECIPE_INGREDIENT_COLUMNS = [
    "recipe_id",
    "ingredient_id",
    "original_text",
    "quantity_amount",
    "quantity_unit",
    "preparation",
    "sequence_order",
    "match_confidence",
    "match_method",
    "match_notes",
    "needs_review",
    "optional_confidence",
    "substitute_confidence",
]


def get_connection(db_path: Union[str, pathlib.Path]) -> sqlite3.Connection:
    """Get a SQLite database connection with foreign keys enabled.

    Args:
        db_path: Path to the SQLite database file

    Returns:
        SQLite connection with foreign keys enabled
    """
    conn = sqlite3.connect(db_path)
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextlib.contextmanager
def transaction(conn: sqlite3.Connection) -> Generator[sqlite3.Cursor, None, None]:
    """Context manager for database transactions.

    Args:
        conn: SQLite database connection

    Yields:
        Database cursor for executing queries

    Example:
        with transaction(conn) as cur:
            cur.execute("INSERT INTO ingredient(name) VALUES (?)", ("sugar",))
    """
    cur = conn.cursor()
    try:
        yield cur
        conn.commit()
    except Exception:
        conn.rollback()
        raise


def upsert_ingredient(
    cur: sqlite3.Cursor,
    name: str,
    plural_name: Optional[str] = None,
    base_ingredient_id: Optional[int] = None,
) -> int:
    """Insert ingredient if it doesn't exist, return its ID.

    Args:
        cur: Database cursor
        name: Ingredient name
        plural_name: Plural spelling, if it differs from the name
        base_ingredient_id: ID of the generic parent ingredient, if any

    Returns:
        Integer ID of the ingredient
    """
    cur.execute(
        "INSERT INTO ingredient(name, plural_name, base_ingredient_id) "
        "VALUES (?, ?, ?) ON CONFLICT(name) DO NOTHING",
        (name, plural_name, base_ingredient_id),
    )
    cur.execute("SELECT id FROM ingredient WHERE name = ?", (name,))
    return cur.fetchone()[0]


def fetch_catalog(conn: sqlite3.Connection) -> List[CatalogEntry]:
    """Read the whole ingredient catalog in a single query.

    Args:
        conn: SQLite database connection

    Returns:
        Catalog entries ordered by ID
    """
    cursor = conn.execute(
        "SELECT id, name, plural_name, base_ingredient_id FROM ingredient ORDER BY id"
    )
    return [CatalogEntry(*row) for row in cursor.fetchall()]


def load_catalog_csv(conn: sqlite3.Connection, csv_file: str) -> int:
    """Import catalog entries from a CSV file.

    The file needs a ``name`` column and may have ``plural_name`` and
    ``base_name`` columns; ``base_name`` refers to another row's ``name``.
    Rows are inserted parent-first along ``base_name`` chains, so a parent
    defined in the file keeps its own plural and base ingredient.

    Args:
        conn: SQLite database connection
        csv_file: Path to the CSV file

    Returns:
        Number of rows read from the file
    """
    df = pd.read_csv(csv_file)
    if "name" not in df.columns:
        raise ValueError(f"{csv_file} has no 'name' column")
    for column in ("plural_name", "base_name"):
        if column not in df.columns:
            df[column] = None

    df["name"] = df["name"].astype(str).str.strip()
    names = set(df["name"])
    parents = {
        row["name"]: str(row["base_name"]).strip()
        for _, row in df.iterrows()
        if pd.notna(row["base_name"])
    }

    def depth(name, seen=()):
        parent = parents.get(name)
        if parent is None or parent not in names or name in seen:
            return 0
        return 1 + depth(parent, seen + (name,))

    # Parents defined in the file go in before any of their descendants
    df["depth"] = [depth(name) for name in df["name"]]
    df = df.sort_values("depth", kind="stable")

    with transaction(conn) as cur:
        for _, row in df.iterrows():
            base_id = None
            if pd.notna(row["base_name"]):
                base_id = upsert_ingredient(cur, str(row["base_name"]).strip())
            upsert_ingredient(
                cur,
                row["name"],
                str(row["plural_name"]).strip() if pd.notna(row["plural_name"]) else None,
                base_id,
            )

    logger.info(f"Imported {len(df)} catalog rows from {csv_file}")
    return len(df)


def insert_recipe_ingredients(
    cur: sqlite3.Cursor, records: Sequence[PersistRecord]
) -> List[int]:
    """Insert recipe ingredient rows.

    Args:
        cur: Database cursor
        records: Records to insert

    Returns:
        Row IDs of the inserted rows, in record order
    """
    placeholders = ", ".join("?" for _ in RECIPE_INGREDIENT_COLUMNS)
    query = (
        f"INSERT INTO recipe_ingredient({', '.join(RECIPE_INGREDIENT_COLUMNS)}) "
        f"VALUES ({placeholders})"
    )
    row_ids = []
    for record in records:
        row = record.to_row()
        cur.execute(query, tuple(row[column] for column in RECIPE_INGREDIENT_COLUMNS))
        row_ids.append(cur.lastrowid)
    return row_ids


def insert_alternatives(
    cur: sqlite3.Cursor,
    relations: Sequence[AlternativeRelation],
    row_ids: Sequence[int],
) -> None:
    """Insert alternative ingredient links.

    Args:
        cur: Database cursor
        relations: Alternatives produced for a recipe batch
        row_ids: recipe_ingredient row IDs, indexed like the batch records
    """
    cur.executemany(
        "INSERT INTO recipe_ingredient_alternative"
        "(recipe_ingredient_id, alternative_ingredient_id, is_equivalent, preference_order) "
        "VALUES (?, ?, ?, ?)",
        [
            (
                row_ids[relation.recipe_ingredient_index],
                relation.alternative_ingredient_id,
                relation.is_equivalent,
                relation.preference_order,
            )
            for relation in relations
        ],
    )


def insert_or_pattern_decision(
    cur: sqlite3.Cursor, decision: OrPatternDecision
) -> None:
    """Insert a single OR-pattern decision row."""
    row = dataclasses.asdict(decision)
    columns = list(row)
    cur.execute(
        f"INSERT INTO or_pattern_decision({', '.join(columns)}) "
        f"VALUES ({', '.join('?' for _ in columns)})",
        tuple(row[column] for column in columns),
    )


def fetch_recipes(conn: sqlite3.Connection) -> List[Tuple[int, str, Optional[str]]]:
    """Return (id, title, ingredients JSON) for every stored recipe."""
    cursor = conn.execute("SELECT id, title, ingredients FROM recipe ORDER BY id")
    return cursor.fetchall()


def get_match_method_summary(conn: sqlite3.Connection) -> Dict[str, int]:
    """Count stored recipe ingredients by match method.

    Args:
        conn: SQLite database connection

    Returns:
        Mapping of match method to number of rows
    """
    df = pd.read_sql_query(
        "SELECT match_method FROM recipe_ingredient WHERE match_method IS NOT NULL",
        conn,
    )
    counts = df["match_method"].value_counts()
    return {method: int(count) for method, count in counts.items()}
