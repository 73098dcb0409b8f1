"""Ingredient parsing and catalog matching utilities."""

from .alternatives import OrPatternResolution, resolve_or_pattern, split_or_pattern
from .catalog import (
    CatalogSnapshot,
    CatalogSource,
    CatalogUnavailableError,
    StaticCatalogSource,
    load_catalog,
)
from .matching import (
    IngredientMatcher,
    find_partial_matches,
    match_catalog_name,
    strip_descriptors,
)
from .models import (
    AlternativeReference,
    AlternativeRelation,
    CatalogEntry,
    ConfidenceScores,
    MatchMethod,
    MatchResult,
    OrPatternDecision,
    ParsedIngredient,
    PersistRecord,
    RawIngredientLine,
    RecipeContext,
)
from .parsing import (
    clean_ingredient_name,
    extract_preparation,
    parse_ingredient_string,
    parse_quantity,
    parse_unit,
)
from .rules import MatchingRules, load_default_rules
from .tracking import (
    DecisionSink,
    DecisionTracker,
    InMemoryDecisionSink,
    LoggingDecisionSink,
)

__all__ = [
    "parse_quantity",
    "parse_unit",
    "extract_preparation",
    "clean_ingredient_name",
    "parse_ingredient_string",
    "MatchingRules",
    "load_default_rules",
    "CatalogSnapshot",
    "CatalogSource",
    "CatalogUnavailableError",
    "StaticCatalogSource",
    "load_catalog",
    "split_or_pattern",
    "resolve_or_pattern",
    "OrPatternResolution",
    "IngredientMatcher",
    "match_catalog_name",
    "strip_descriptors",
    "find_partial_matches",
    "DecisionSink",
    "DecisionTracker",
    "InMemoryDecisionSink",
    "LoggingDecisionSink",
    "AlternativeReference",
    "AlternativeRelation",
    "CatalogEntry",
    "ConfidenceScores",
    "MatchMethod",
    "MatchResult",
    "OrPatternDecision",
    "ParsedIngredient",
    "PersistRecord",
    "RawIngredientLine",
    "RecipeContext",
]
