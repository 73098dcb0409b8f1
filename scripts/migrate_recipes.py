#!/usr/bin/env python3
"""
Parse and match the ingredient lists of recipes stored in the database.

Writes one recipe_ingredient row per ingredient line, links "X or Y"
alternatives, and records every OR-pattern decision.

Usage:
    python migrate_recipes.py --db-path data/recipes.db
    python migrate_recipes.py --catalog-csv data/ingredients.csv --rules my_rules.json
"""

import argparse
import asyncio
import logging

from recipe_utils.database import (
    SqliteDecisionSink,
    create_schema,
    get_connection,
    load_catalog_csv,
)
from recipe_utils.ingredients import (
    DecisionTracker,
    IngredientMatcher,
    MatchingRules,
)
from recipe_utils.recipes import migrate_existing_recipes


def main():
    """Main function to migrate stored recipes to structured ingredients."""
    parser = argparse.ArgumentParser(
        description="Parse stored recipe ingredients and match them to the catalog"
    )
    parser.add_argument(
        "--db-path",
        type=str,
        default="data/recipes.db",
        help="Path to the database file",
    )
    parser.add_argument(
        "--catalog-csv",
        type=str,
        default=None,
        help="CSV of catalog entries (name, plural_name, base_name) to import first",
    )
    parser.add_argument(
        "--rules",
        type=str,
        default=None,
        help="JSON rule table to use instead of the bundled one",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    conn = get_connection(args.db_path)
    try:
        create_schema(conn)
        if args.catalog_csv:
            load_catalog_csv(conn, args.catalog_csv)
    finally:
        conn.close()

    matcher = None
    if args.rules:
        rules = MatchingRules.from_json(args.rules)
        print(f"Using rule table version {rules.version}")
        matcher = IngredientMatcher(
            rules=rules, tracker=DecisionTracker(SqliteDecisionSink(args.db_path))
        )

    asyncio.run(migrate_existing_recipes(args.db_path, matcher=matcher))


if __name__ == "__main__":
    main()
