"""Resolution of parsed ingredient names against the ingredient catalog."""

import logging
import re
from typing import List, Optional, Tuple

from recipe_utils.ingredients.alternatives import resolve_or_pattern, split_or_pattern
from recipe_utils.ingredients.catalog import CatalogSnapshot
from recipe_utils.ingredients.models import (
    CatalogEntry,
    MatchMethod,
    MatchResult,
    ParsedIngredient,
    RecipeContext,
)
from recipe_utils.ingredients.parsing import parse_ingredient_string
from recipe_utils.ingredients.rules import MatchingRules, load_default_rules
from recipe_utils.ingredients.tracking import DecisionTracker, LoggingDecisionSink

logger = logging.getLogger(__name__)


def strip_descriptors(name: str, rules: MatchingRules) -> Tuple[str, List[str]]:
    """Remove descriptor adjectives ("fresh", "large", ...) from a name.

    Only descriptors followed by another word are removed, so a name that is
    nothing but a descriptor keeps it.

    Returns:
        The simplified name and the descriptors that were removed.
    """
    removed = []
    simplified = name
    for descriptor in rules.descriptors:
        pattern = r"\b" + re.escape(descriptor) + r"\s+"
        simplified, count = re.subn(pattern, "", simplified)
        if count:
            removed.append(descriptor)
    return " ".join(simplified.split()), removed


def _overlaps(catalog_name: Optional[str], term: str) -> bool:
    catalog_name = (catalog_name or "").lower()
    return bool(catalog_name) and (catalog_name in term or term in catalog_name)


def find_partial_matches(term: str, catalog: CatalogSnapshot) -> List[CatalogEntry]:
    """Entries whose name or plural contains ``term`` or is contained in it."""
    if not term:
        return []
    return [
        entry
        for entry in catalog
        if _overlaps(entry.name, term) or _overlaps(entry.plural_name, term)
    ]


def match_catalog_name(
    ingredient_name: str,
    catalog: CatalogSnapshot,
    rules: Optional[MatchingRules] = None,
) -> MatchResult:
    """Match an ingredient name using the staged cascade.

    Stages, first success wins:

    1. Exact name or plural match (1.0, exact).
    2. Exact match after removing descriptors (0.8, fuzzy, review).
    3. Substring match in either direction. A single candidate gives 0.6
       (partial, review); several candidates resolve to a generic parent
       among them (0.7, fuzzy) or stay unresolved (0.3, none, review).
    4. A generic entry named after the last word, e.g. "flour" for
       "whole wheat flour" (0.5, partial, review).

    Args:
        ingredient_name: Name left over after quantity, unit and preparation
            removal.
        catalog: Catalog snapshot to resolve against.
        rules: Vocabulary to use. Defaults to the bundled rule table.

    Returns:
        A MatchResult. An unmatched name yields ingredient_id None with
        confidence 0; this function does not raise for missing matches.
    """
    rules = rules or load_default_rules()
    search_term = ingredient_name.strip().lower()

    exact_match = catalog.find_by_name(search_term)
    if exact_match:
        logger.debug(f"Exact match: '{ingredient_name}' -> {exact_match.id}")
        return MatchResult(
            ingredient_id=exact_match.id,
            match_confidence=1.0,
            match_method=MatchMethod.EXACT,
            match_notes=None,
            needs_review=False,
        )

    simplified, removed = strip_descriptors(search_term, rules)
    if removed:
        simplified_match = catalog.find_by_name(simplified)
        if simplified_match:
            return MatchResult(
                ingredient_id=simplified_match.id,
                match_confidence=0.8,
                match_method=MatchMethod.FUZZY,
                match_notes=(
                    f'Matched "{ingredient_name}" to "{simplified_match.name}" '
                    f"after removing descriptors: {', '.join(removed)}"
                ),
                needs_review=True,
            )

    partial_matches = find_partial_matches(simplified, catalog)
    if len(partial_matches) == 1:
        return MatchResult(
            ingredient_id=partial_matches[0].id,
            match_confidence=0.6,
            match_method=MatchMethod.PARTIAL,
            match_notes=(
                f'Partial match: "{ingredient_name}" -> "{partial_matches[0].name}"'
            ),
            needs_review=True,
        )
    if partial_matches:
        generic_parent = next((m for m in partial_matches if m.is_generic), None)
        if generic_parent:
            return MatchResult(
                ingredient_id=generic_parent.id,
                match_confidence=0.7,
                match_method=MatchMethod.FUZZY,
                match_notes=(
                    f'Matched to generic "{generic_parent.name}" '
                    "(multiple specific types available)"
                ),
                needs_review=False,
            )

        match_names = ", ".join(m.name for m in partial_matches[:3])
        return MatchResult(
            ingredient_id=None,
            match_confidence=0.3,
            match_method=MatchMethod.NONE,
            match_notes=f"Multiple possible matches: {match_names}",
            needs_review=True,
        )

    # A specific type of a generic ingredient, e.g. "whole wheat flour" -> "flour"
    words = simplified.split()
    generic_match = catalog.find_generic(words[-1]) if words else None
    if generic_match:
        return MatchResult(
            ingredient_id=generic_match.id,
            match_confidence=0.5,
            match_method=MatchMethod.PARTIAL,
            match_notes=(
                f'No exact match for "{ingredient_name}". Using generic '
                f'"{generic_match.name}". Consider adding "{ingredient_name}" '
                "to the catalog."
            ),
            needs_review=True,
        )

    return MatchResult(
        ingredient_id=None,
        match_confidence=0.0,
        match_method=MatchMethod.NONE,
        match_notes=f'No match found for "{ingredient_name}"',
        needs_review=True,
    )


class IngredientMatcher:
    """Parses ingredient lines and links them to catalog entries.

    OR patterns ("red or green cabbage") go through the alternative resolver
    and every such decision is handed to the decision tracker; all other
    names go through the staged catalog cascade.

    Attributes:
        rules: Vocabulary used for parsing and matching.
        tracker: Receives every OR-pattern decision on a best-effort basis.
    """

    def __init__(
        self,
        rules: Optional[MatchingRules] = None,
        tracker: Optional[DecisionTracker] = None,
    ):
        """Initialize the matcher.

        Args:
            rules: Vocabulary to use. Defaults to the bundled rule table.
            tracker: Decision tracker. Defaults to one that logs decisions at
                debug level.
        """
        self.rules = rules or load_default_rules()
        self.tracker = tracker or DecisionTracker(LoggingDecisionSink())

    def parse(self, text: str) -> ParsedIngredient:
        return parse_ingredient_string(text, self.rules)

    def match_name(self, ingredient_name: str, catalog: CatalogSnapshot) -> MatchResult:
        return match_catalog_name(ingredient_name, catalog, self.rules)

    async def match(
        self,
        parsed: ParsedIngredient,
        catalog: CatalogSnapshot,
        context: Optional[RecipeContext] = None,
    ) -> MatchResult:
        """Match a parsed ingredient to the catalog.

        Args:
            parsed: Output of the extraction stage.
            catalog: Catalog snapshot to resolve against.
            context: Recipe the line belongs to, recorded with OR decisions.

        Returns:
            The MatchResult for the line.
        """
        if not parsed.ingredient_name:
            return MatchResult(
                ingredient_id=None,
                match_confidence=0.0,
                match_method=MatchMethod.NONE,
                match_notes="No ingredient name extracted from text",
                needs_review=True,
            )

        options = split_or_pattern(parsed.ingredient_name)
        if options:
            resolution = resolve_or_pattern(
                options[0],
                options[1],
                catalog,
                rules=self.rules,
                original_text=parsed.original_text,
                context=context,
            )
            await self.tracker.track(resolution.decision)
            return resolution.match

        return self.match_name(parsed.ingredient_name, catalog)
