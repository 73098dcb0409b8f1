"""Detection and resolution of "X or Y" ingredient alternatives."""

import dataclasses
import logging
import re
from typing import List, Optional, Tuple

from recipe_utils.ingredients.catalog import CatalogSnapshot
from recipe_utils.ingredients.models import (
    AlternativeReference,
    CatalogEntry,
    MatchMethod,
    MatchResult,
    OrPatternDecision,
    RecipeContext,
)
from recipe_utils.ingredients.rules import MatchingRules, load_default_rules

logger = logging.getLogger(__name__)

OR_PATTERN = re.compile(r"^(.+?)\s+or\s+(.+)$", re.IGNORECASE)


@dataclasses.dataclass(frozen=True)
class OrPatternResolution:
    match: MatchResult
    decision: OrPatternDecision


def split_or_pattern(ingredient_name: str) -> Optional[Tuple[str, str]]:
    """Split an "X or Y" ingredient name into its two options.

    When the first option is a single word and the second has several, the
    second is assumed to carry the shared noun, so "purple or green cabbage"
    becomes ("purple cabbage", "green cabbage"). Phrasings where the shared
    noun comes first are not rewritten.

    Returns:
        The two options, or None if the name is not an OR pattern.
    """
    match = OR_PATTERN.match(ingredient_name.strip())
    if not match:
        return None

    option1 = match.group(1).strip()
    option2 = match.group(2).strip()

    option1_words = option1.split()
    option2_words = option2.split()
    if len(option1_words) == 1 and len(option2_words) > 1:
        option1 = " ".join(option1_words + option2_words[1:])

    return option1, option2


def _color_pattern(colors: List[str]) -> Optional[re.Pattern]:
    if not colors:
        return None
    return re.compile(
        r"\b(?:" + "|".join(re.escape(c) for c in colors) + r")\b", re.IGNORECASE
    )


def _strip_colors(text: str, pattern: re.Pattern) -> str:
    return " ".join(pattern.sub(" ", text.lower()).split())


def _is_common(entry: Optional[CatalogEntry], rules: MatchingRules) -> bool:
    if entry is None:
        return False
    name = entry.name.lower()
    return any(term.lower() in name for term in rules.common_ingredients)


def resolve_or_pattern(
    option1: str,
    option2: str,
    catalog: CatalogSnapshot,
    rules: Optional[MatchingRules] = None,
    original_text: str = "",
    context: Optional[RecipeContext] = None,
) -> OrPatternResolution:
    """Resolve a two-option ingredient against the catalog.

    The pair is classified before it is matched:

    1. Both options carry a color and are otherwise identical: equivalent
       color variants (confidence 0.95).
    2. Exactly one resolved option is a commonly used ingredient: it becomes
       the primary and the other the secondary (confidence 0.85).
    3. Any other pair with at least one resolved option: equivalent, no
       clear primary (confidence 0.7).

    Options are looked up by exact name or plural only. Color variants that
    do not both resolve fall back to the color-free base name.

    Args:
        option1: First option, after shared-word redistribution.
        option2: Second option.
        catalog: Catalog snapshot to resolve against.
        rules: Vocabulary to use. Defaults to the bundled rule table.
        original_text: The verbatim ingredient line, for the decision log.
        context: Recipe the line belongs to, for the decision log.

    Returns:
        An OrPatternResolution holding the MatchResult and the decision that
        should be sent to the decision tracker.
    """
    rules = rules or load_default_rules()
    context = context or RecipeContext()
    colors = _color_pattern(rules.colors)

    is_equivalent = False
    decision_reason = ""
    confidence = 0.0

    if colors and colors.search(option1) and colors.search(option2):
        base1 = _strip_colors(option1, colors)
        base2 = _strip_colors(option2, colors)
        if base1 and base1 == base2:
            is_equivalent = True
            decision_reason = "Color variants of same ingredient"
            confidence = 0.95

    match1 = catalog.find_by_name(option1)
    match2 = catalog.find_by_name(option2)

    base_match = None
    if is_equivalent and not (match1 and match2):
        base_match = catalog.find_by_name(_strip_colors(option1, colors))

    is_primary1 = _is_common(match1, rules)
    is_primary2 = _is_common(match2, rules)

    primary = None
    if not is_equivalent and (match1 or match2):
        if is_primary1 and not is_primary2:
            primary = match1
            decision_reason = f"{match1.name} is more commonly used"
            confidence = 0.85
        elif is_primary2 and not is_primary1:
            primary = match2
            decision_reason = f"{match2.name} is more commonly used"
            confidence = 0.85
        else:
            is_equivalent = True
            decision_reason = "No clear primary, treating as equivalent options"
            confidence = 0.7
    elif not is_equivalent:
        decision_reason = "Neither option found in catalog"

    chosen = primary or match1 or match2 or base_match

    if (match1 and match2) or (is_equivalent and base_match):
        alternative = None
        if match1 and match2:
            other = match2 if chosen is match1 else match1
            if other.id != chosen.id:
                alternative = AlternativeReference(
                    ingredient_id=other.id, name=other.name, is_equivalent=is_equivalent
                )

        label = "Equivalent options" if is_equivalent else f"Primary: {chosen.name}"
        notes = f'OR pattern: "{option1}" or "{option2}". {decision_reason}. {label}'
        if alternative:
            notes += f". Alternative: {alternative.name}"
        result = MatchResult(
            ingredient_id=chosen.id,
            match_confidence=confidence,
            match_method=MatchMethod.FUZZY,
            match_notes=notes,
            needs_review=False,
            alternative=alternative,
        )
    elif match1 or match2:
        found = match1 or match2
        missing = option2 if match1 else option1
        notes = f'OR pattern: Only found "{found.name}", missing "{missing}"'
        if is_equivalent:
            notes += " (color variant)"
        result = MatchResult(
            ingredient_id=found.id,
            match_confidence=0.7,
            match_method=MatchMethod.PARTIAL,
            match_notes=notes,
            needs_review=True,
        )
    else:
        notes = f'OR pattern: Neither "{option1}" nor "{option2}" found in catalog'
        if base_match:
            notes += f', using base "{base_match.name}"'
        result = MatchResult(
            ingredient_id=base_match.id if base_match else None,
            match_confidence=0.6 if base_match else 0.0,
            match_method=MatchMethod.FUZZY if base_match else MatchMethod.NONE,
            match_notes=notes,
            needs_review=True,
        )

    logger.debug(f"OR pattern '{option1}' / '{option2}': {decision_reason}")

    decision = OrPatternDecision(
        original_text=original_text,
        option1_name=option1,
        option1_ingredient_id=match1.id if match1 else None,
        option1_found=match1 is not None,
        option2_name=option2,
        option2_ingredient_id=match2.id if match2 else None,
        option2_found=match2 is not None,
        detected_as_equivalent=is_equivalent,
        primary_choice=chosen.name if chosen else "none",
        parser_confidence=confidence,
        decision_reason=decision_reason,
        recipe_id=context.recipe_id,
        recipe_title=context.recipe_title,
    )
    return OrPatternResolution(match=result, decision=decision)
