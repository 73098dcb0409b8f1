"""Helpers for presenting match results to a reviewer."""

from typing import Dict, List, Sequence

import pandas as pd

from recipe_utils.ingredients.models import PersistRecord

HIGH_CONFIDENCE = 0.8
MEDIUM_CONFIDENCE = 0.5
REVIEW_THRESHOLD = 0.6


def calculate_extraction_confidence(records: Sequence[PersistRecord]) -> int:
    """Percentage of records matched with high confidence.

    Args:
        records: Records of one recipe.

    Returns:
        Rounded percentage (0-100) of records with match confidence of at
        least 0.8. An empty recipe scores 0.
    """
    if not records:
        return 0
    high = sum(1 for r in records if r.match.match_confidence >= HIGH_CONFIDENCE)
    return round(high / len(records) * 100)


def ingredients_needing_review(
    records: Sequence[PersistRecord],
) -> List[PersistRecord]:
    """Records flagged for review or matched with low confidence."""
    return [
        r
        for r in records
        if r.match.needs_review or r.match.match_confidence < REVIEW_THRESHOLD
    ]


def group_by_confidence(
    records: Sequence[PersistRecord],
) -> Dict[str, List[PersistRecord]]:
    """Split records into high, medium and low confidence groups."""
    groups = {"high": [], "medium": [], "low": []}
    for record in records:
        confidence = record.match.match_confidence
        if confidence >= HIGH_CONFIDENCE:
            groups["high"].append(record)
        elif confidence >= MEDIUM_CONFIDENCE:
            groups["medium"].append(record)
        else:
            groups["low"].append(record)
    return groups


def records_to_dataframe(records: Sequence[PersistRecord]) -> pd.DataFrame:
    """Tabulate records using their recipe_ingredient column layout."""
    return pd.DataFrame([record.to_row() for record in records])
