"""Recipe-level ingredient processing."""

from .migration import migrate_existing_recipes
from .processing import RecipeIngredientBatch, process_recipe_ingredients
from .review import (
    calculate_extraction_confidence,
    group_by_confidence,
    ingredients_needing_review,
    records_to_dataframe,
)

__all__ = [
    "RecipeIngredientBatch",
    "process_recipe_ingredients",
    "migrate_existing_recipes",
    "calculate_extraction_confidence",
    "group_by_confidence",
    "ingredients_needing_review",
    "records_to_dataframe",
]
