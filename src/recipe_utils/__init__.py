"""Recipe Utils - Ingredient line parsing and catalog matching for recipes."""

__version__ = "0.1.0"

from . import database, ingredients, recipes

__all__ = ["database", "ingredients", "recipes"]
