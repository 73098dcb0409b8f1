"""Batch processing of one recipe's ingredient lines."""

import dataclasses
import logging
from typing import List, Optional, Sequence, Union

from recipe_utils.ingredients.catalog import CatalogSnapshot, CatalogSource, load_catalog
from recipe_utils.ingredients.matching import IngredientMatcher
from recipe_utils.ingredients.models import (
    AlternativeRelation,
    IngredientId,
    MatchMethod,
    MatchResult,
    ParsedIngredient,
    PersistRecord,
    RawIngredientLine,
    RecipeContext,
)

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class RecipeIngredientBatch:
    """Everything produced for one recipe, ready for persistence.

    Attributes:
        records: One record per input line, in input order.
        alternatives: Alternative ingredients, indexed into ``records``.
    """

    records: List[PersistRecord]
    alternatives: List[AlternativeRelation]

    @property
    def review_count(self) -> int:
        return sum(1 for record in self.records if record.match.needs_review)


def _failed_match() -> MatchResult:
    return MatchResult(
        ingredient_id=None,
        match_confidence=0.0,
        match_method=MatchMethod.ERROR,
        match_notes="Failed to match ingredient",
        needs_review=True,
    )


async def process_recipe_ingredients(
    recipe_id: IngredientId,
    ingredient_lines: Sequence[str],
    catalog: Union[CatalogSnapshot, CatalogSource],
    recipe_title: Optional[str] = None,
    matcher: Optional[IngredientMatcher] = None,
) -> RecipeIngredientBatch:
    """Parse and match every ingredient line of a recipe.

    Lines are processed strictly in order. A failure on one line produces a
    degraded record (method "error", needs review) instead of aborting the
    batch.

    Args:
        recipe_id: ID of the recipe the lines belong to.
        ingredient_lines: Raw ingredient lines, in recipe order.
        catalog: A catalog snapshot to reuse, or a source to fetch one from.
            A source is fetched exactly once, before any line is processed.
        recipe_title: Recipe title, recorded with OR-pattern decisions.
        matcher: Matcher to use. Defaults to one with the bundled rules.

    Returns:
        A RecipeIngredientBatch where ``records[i].sequence_order == i + 1``.

    Raises:
        CatalogUnavailableError: If ``catalog`` is a source and fetching it
            fails. No records are produced in that case.
    """
    if not isinstance(catalog, CatalogSnapshot):
        catalog = await load_catalog(catalog)
    matcher = matcher or IngredientMatcher()
    context = RecipeContext(recipe_id=recipe_id, recipe_title=recipe_title)

    records = []
    alternatives = []

    for index, text in enumerate(ingredient_lines):
        line = RawIngredientLine(recipe_id=recipe_id, position=index + 1, text=text)
        parsed = None
        try:
            parsed = matcher.parse(text)
            match = await matcher.match(parsed, catalog, context)
        except Exception:
            logger.exception(f"Error matching ingredient {line.position}: {text!r}")
            parsed = parsed or ParsedIngredient(original_text=text)
            match = _failed_match()

        if match.alternative:
            alternatives.append(
                AlternativeRelation(
                    recipe_ingredient_index=index,
                    alternative_ingredient_id=match.alternative.ingredient_id,
                    is_equivalent=match.alternative.is_equivalent,
                )
            )

        records.append(PersistRecord(line=line, parsed=parsed, match=match))

    batch = RecipeIngredientBatch(records=records, alternatives=alternatives)
    logger.info(
        f"Processed {len(records)} ingredients for recipe {recipe_id} "
        f"({batch.review_count} need review, {len(alternatives)} alternatives)"
    )
    return batch
