"""Database utilities for recipe ingredient databases."""

from .schema import DDL, create_schema
from .stores import SqliteCatalogSource, SqliteDecisionSink
from .utils import (
    fetch_catalog,
    fetch_recipes,
    get_connection,
    get_match_method_summary,
    insert_alternatives,
    insert_or_pattern_decision,
    insert_recipe_ingredients,
    load_catalog_csv,
    transaction,
    upsert_ingredient,
)

__all__ = [
    "DDL",
    "create_schema",
    "get_connection",
    "transaction",
    "upsert_ingredient",
    "fetch_catalog",
    "fetch_recipes",
    "load_catalog_csv",
    "insert_recipe_ingredients",
    "insert_alternatives",
    "insert_or_pattern_decision",
    "get_match_method_summary",
    "SqliteCatalogSource",
    "SqliteDecisionSink",
]
