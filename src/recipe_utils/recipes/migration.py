"""Bulk re-processing of recipes already stored in the database."""

import json
import logging
import pathlib
import sqlite3
from typing import Dict, List, Optional, Union

from tqdm import tqdm

from recipe_utils.database import (
    SqliteCatalogSource,
    SqliteDecisionSink,
    fetch_recipes,
    get_connection,
    get_match_method_summary,
    insert_alternatives,
    insert_recipe_ingredients,
    transaction,
)
from recipe_utils.ingredients.catalog import load_catalog
from recipe_utils.ingredients.matching import IngredientMatcher
from recipe_utils.ingredients.tracking import DecisionTracker
from recipe_utils.recipes.processing import process_recipe_ingredients

logger = logging.getLogger(__name__)


def _load_ingredient_lines(ingredients_json: Optional[str]) -> Optional[List[str]]:
    """Decode a recipe's stored ingredient list, or None if unusable."""
    if not ingredients_json:
        return None
    try:
        lines = json.loads(ingredients_json)
    except json.JSONDecodeError as e:
        logger.warning(f"Could not decode ingredient list: {e}")
        return None
    if not isinstance(lines, list):
        return None
    return [str(line) for line in lines]


async def migrate_existing_recipes(
    db_path: Union[str, pathlib.Path],
    matcher: Optional[IngredientMatcher] = None,
) -> Dict[str, int]:
    """Parse and match the ingredient lists of every stored recipe.

    The catalog is loaded once and shared by all recipes. Each recipe's rows
    and alternatives are written in their own transaction, so a failure on
    one recipe does not undo the others.

    Args:
        db_path: Path to the SQLite database.
        matcher: Matcher to use. Defaults to one that records OR-pattern
            decisions in the same database.

    Returns:
        Number of stored recipe ingredients per match method.

    Raises:
        CatalogUnavailableError: If the catalog cannot be read.
    """
    catalog = await load_catalog(SqliteCatalogSource(db_path))
    matcher = matcher or IngredientMatcher(
        tracker=DecisionTracker(SqliteDecisionSink(db_path))
    )

    conn = get_connection(db_path)
    try:
        recipes = fetch_recipes(conn)
        migrated = 0
        needs_review = 0

        for recipe_id, title, ingredients_json in tqdm(recipes, desc="Migrating recipes"):
            lines = _load_ingredient_lines(ingredients_json)
            if lines is None:
                continue

            batch = await process_recipe_ingredients(
                recipe_id, lines, catalog, recipe_title=title, matcher=matcher
            )

            try:
                with transaction(conn) as cur:
                    row_ids = insert_recipe_ingredients(cur, batch.records)
                    insert_alternatives(cur, batch.alternatives, row_ids)
            except sqlite3.Error as e:
                logger.error(f"Failed to insert ingredients for {title}: {e}")
                continue

            migrated += 1
            needs_review += batch.review_count
            logger.info(
                f"Migrated {len(batch.records)} ingredients for {title} "
                f"({len(batch.alternatives)} alternatives)"
            )

        summary = get_match_method_summary(conn)
    finally:
        conn.close()

    print(f"Migrated {migrated}/{len(recipes)} recipes")
    if needs_review:
        print(f"{needs_review} ingredients need review")
    print("Match methods:")
    for method, count in sorted(summary.items()):
        print(f"  {method}: {count}")

    return summary
