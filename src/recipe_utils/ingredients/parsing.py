"""Ingredient line parsing: quantity, unit and preparation extraction."""

import re
from typing import List, Optional, Tuple

from recipe_utils.ingredients.models import ConfidenceScores, ParsedIngredient
from recipe_utils.ingredients.number_utils import (
    UNICODE_FRACTIONS,
    _is_fraction,
    _parse_fraction,
)
from recipe_utils.ingredients.rules import MatchingRules, load_default_rules

# --- Constants ---

_UNICODE_FRACTION_RE = re.compile(
    r"^(?:(\d+)\s*)?([" + "".join(UNICODE_FRACTIONS) + r"])"
)
_ASCII_FRACTION_RE = re.compile(r"^(?:(\d+)(?:\s+|-))?(\d+/\d+)")
_DASH_RANGE_RE = re.compile(r"^(\d+)\s*-\s*(\d+)")
_WORD_RANGE_RE = re.compile(r"^(\d+)\s+to\s+(\d+)\b", re.IGNORECASE)
_NUMBER_RE = re.compile(r"^(\d+(?:\.\d*)?)")
# Upper bounds of ranges the parsers don't consume ("1/2-1", "1.5-2")
_NUMERIC_RUN_RE = re.compile(r"^[\d\s./" + "".join(UNICODE_FRACTIONS) + r"-]+")

# (pattern, amount, confidence)
WORDED_QUANTITIES = [
    (re.compile(r"^a\s+few\b", re.IGNORECASE), 3.0, 0.6),
    (re.compile(r"^a\s+couple(?:\s+of)?\b", re.IGNORECASE), 2.0, 0.8),
    (re.compile(r"^one\s+", re.IGNORECASE), 1.0, 0.9),
    (re.compile(r"^two\s+", re.IGNORECASE), 2.0, 0.9),
    (re.compile(r"^three\s+", re.IGNORECASE), 3.0, 0.9),
]

# A unit must be followed by whitespace, light punctuation or the end of text
_UNIT_END = r"(?=[\s,;:]|$)"

# --- Functions ---


def parse_quantity(text: str) -> Tuple[Optional[float], float, str]:
    """Parse a leading quantity from ingredient text.

    Patterns are tried in priority order: fractions (including mixed numbers
    and unicode fraction characters), integer ranges, plain numbers and
    finally worded quantities such as "a few" or "two".

    Args:
        text: Ingredient text with any parenthetical notes already removed.

    Returns:
        A tuple containing:
            - amount: Parsed quantity, or None if no quantity was recognized
            - confidence: How certain the parse is, between 0 and 1
            - rest: The text with the quantity removed

    Examples:
        >>> parse_quantity("1 1/2 cups flour")
        (1.5, 0.95, 'cups flour')
        >>> parse_quantity("2-3 cups baby spinach")
        (2.5, 0.8, 'cups baby spinach')
        >>> parse_quantity("salt")
        (None, 0.0, 'salt')
    """
    text = text.strip()
    try:
        for parser in [
            _parse_fraction_amount,
            _parse_number_range,
            _parse_simple_number,
            _parse_worded_quantity,
        ]:
            amount, confidence, consumed = parser(text)
            if amount is not None:
                rest = text[consumed:]
                if parser is not _parse_worded_quantity:
                    rest = _NUMERIC_RUN_RE.sub("", rest)
                return amount, confidence, rest.strip()
    except (ValueError, ZeroDivisionError):
        # Malformed numbers are treated as "no quantity"
        pass

    return None, 0.0, text


def _parse_fraction_amount(text: str) -> Tuple[Optional[float], float, int]:
    """Parse fractions like '½', '1/2', '1½', '1 1/2' or '1-1/2'."""
    match = _UNICODE_FRACTION_RE.match(text) or _ASCII_FRACTION_RE.match(text)
    if not match or not _is_fraction(match.group(2)):
        return None, 0.0, 0

    amount = _parse_fraction(match.group(2))
    if match.group(1):
        amount += int(match.group(1))
    return float(amount), 0.95, match.end()


def _parse_number_range(text: str) -> Tuple[Optional[float], float, int]:
    """Parse integer ranges like '2-3' or '2 to 3' as their midpoint."""
    match = _DASH_RANGE_RE.match(text) or _WORD_RANGE_RE.match(text)
    if not match:
        return None, 0.0, 0
    amount = (int(match.group(1)) + int(match.group(2))) / 2
    return amount, 0.8, match.end()


def _parse_simple_number(text: str) -> Tuple[Optional[float], float, int]:
    """Parse simple numbers like '2.5' or '3'."""
    match = _NUMBER_RE.match(text)
    if not match:
        return None, 0.0, 0
    return float(match.group(1)), 1.0, match.end()


def _parse_worded_quantity(text: str) -> Tuple[Optional[float], float, int]:
    """Parse quantities written as words ('a few', 'a couple of', 'one')."""
    for pattern, amount, confidence in WORDED_QUANTITIES:
        match = pattern.match(text)
        if match:
            return amount, confidence, match.end()
    return None, 0.0, 0


def parse_unit(
    text: str, rules: Optional[MatchingRules] = None
) -> Tuple[Optional[str], float, str]:
    """Parse a unit from the start of an ingredient string.

    The longest full unit spelling wins ("fluid ounces" over "ounces"). When
    no full spelling matches, the abbreviation table is consulted at a lower
    confidence.

    Args:
        text: Ingredient text with the quantity already removed.
        rules: Vocabulary to use. Defaults to the bundled rule table.

    Returns:
        A tuple containing:
            - unit: Canonical unit name, or None if no unit found
            - confidence: 1.0 for a full spelling, 0.9 for an abbreviation
            - rest: The text with the unit removed

    Examples:
        >>> parse_unit("cups flour")
        ('cup', 1.0, 'flour')
        >>> parse_unit("tbsp. sugar")
        ('tablespoon', 0.9, 'sugar')
    """
    rules = rules or load_default_rules()
    lowered = text.lower()

    best_spelling = None
    for spelling in rules.unit_lookup:
        if re.match(re.escape(spelling) + _UNIT_END, lowered):
            if best_spelling is None or len(spelling) > len(best_spelling):
                best_spelling = spelling

    if best_spelling:
        unit = rules.unit_lookup[best_spelling]
        return unit, 1.0, text[len(best_spelling) :].strip()

    # Single-letter abbreviations ("g", "l") rely on _UNIT_END so "garlic" and
    # "lemons" are left alone
    for abbreviation in sorted(rules.unit_abbreviations, key=len, reverse=True):
        match = re.match(re.escape(abbreviation.lower()) + r"\.?" + _UNIT_END, lowered)
        if match:
            unit = rules.unit_abbreviations[abbreviation]
            return unit, 0.9, text[match.end() :].strip()

    # No unit found - return None for unit and the original text
    return None, 0.0, text


def extract_preparation(
    text: str, rules: Optional[MatchingRules] = None
) -> Tuple[List[str], str]:
    """Remove preparation terms ("diced", "room temperature", ...) from text.

    Terms may appear anywhere in the text. Longer terms are matched first so
    that "finely chopped" is not reduced to "chopped".

    Args:
        text: Ingredient text with quantity and unit already removed.
        rules: Vocabulary to use. Defaults to the bundled rule table.

    Returns:
        A tuple containing:
            - preparation: Matched terms, in the order they appear in the text
            - cleaned: The remaining text, tidied of stray commas and "of"

    Examples:
        >>> extract_preparation("large onion, thinly sliced")
        (['thinly sliced'], 'large onion')
    """
    rules = rules or load_default_rules()
    found = []
    cleaned = text

    for term in sorted(rules.preparations, key=len, reverse=True):
        pattern = re.compile(r"\b" + re.escape(term) + r"\b", re.IGNORECASE)
        first = pattern.search(cleaned)
        if first:
            found.append((first.start(), term))
            # Blank out rather than delete so later positions stay comparable
            cleaned = pattern.sub(lambda m: " " * len(m.group()), cleaned)

    found.sort(key=lambda item: item[0])
    return [term for _, term in found], _tidy_name(cleaned)


def _tidy_name(text: str) -> str:
    """Collapse whitespace and punctuation left behind by term removal."""
    text = re.sub(r"\s+", " ", text)
    text = re.sub(r"\s+,", ",", text)
    text = re.sub(r",(?:\s*,)+", ",", text)
    text = text.strip(" ,")
    text = re.sub(r"^of\s+", "", text, flags=re.IGNORECASE)
    text = re.sub(r"(?:,\s*|\s+)and$", "", text, flags=re.IGNORECASE)
    return text.strip(" ,")


def clean_ingredient_name(name: str) -> str:
    """Clean up ingredient text by removing parenthetical notes.

    Args:
        name: Raw ingredient text that may contain parenthetical notes
              and extra formatting.

    Returns:
        Text with notes removed and whitespace normalized.

    Examples:
        >>> clean_ingredient_name("1 (14.5 oz) can diced tomatoes")
        '1 can diced tomatoes'
        >>> clean_ingredient_name("  rum,  dark  ")
        'rum, dark'
    """
    name = re.sub(r"\s*\([^)]*\)", " ", name)
    name = re.sub(r"\s+", " ", name)
    name = name.strip().strip(",")

    return name.strip()


def parse_ingredient_string(
    text: str, rules: Optional[MatchingRules] = None
) -> ParsedIngredient:
    """Decompose a raw ingredient line into structured fields.

    Args:
        text: The ingredient line exactly as written in the recipe.
        rules: Vocabulary to use. Defaults to the bundled rule table.

    Returns:
        A ParsedIngredient. ``original_text`` is always the verbatim input;
        fields that could not be recognized are None with confidence 0.

    Examples:
        >>> parsed = parse_ingredient_string("3 tablespoons sugar")
        >>> parsed.quantity_amount, parsed.quantity_unit, parsed.ingredient_name
        (3.0, 'tablespoon', 'sugar')
    """
    rules = rules or load_default_rules()

    working = clean_ingredient_name(text)
    amount, quantity_confidence, working = parse_quantity(working)
    unit, unit_confidence, working = parse_unit(working, rules)
    preparation, ingredient_name = extract_preparation(working, rules)

    return ParsedIngredient(
        original_text=text,
        quantity_amount=amount,
        quantity_unit=unit,
        preparation=", ".join(preparation) if preparation else None,
        ingredient_name=ingredient_name or None,
        confidence_scores=ConfidenceScores(
            quantity=quantity_confidence,
            unit=unit_confidence,
            # Base confidence; the catalog match carries the real certainty
            ingredient=0.5 if ingredient_name else 0.0,
        ),
    )
