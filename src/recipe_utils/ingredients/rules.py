"""Vocabulary tables that drive ingredient parsing and catalog matching."""

import dataclasses
import functools
import json
import os
from typing import Dict, List

DEFAULT_RULES_FILE = os.path.join(
    os.path.dirname(__file__), "data", "matching_rules.json"
)


@dataclasses.dataclass
class MatchingRules:
    """A versioned set of parsing and matching vocabularies.

    Attributes:
        version: Identifier of the rule table, for tracing which rules produced
            a match.
        units: Unit vocabularies keyed by category ("volume", "weight",
            "count", "other"); each maps a canonical unit name to the spellings
            that should be recognized as that unit.
        unit_abbreviations: Abbreviation to canonical unit name.
        preparations: Preparation terms removed from the ingredient name.
        descriptors: Adjectives stripped before retrying an exact match.
        colors: Color words used to detect color-variant OR patterns.
        common_ingredients: Terms marking an OR option as the usual choice.
    """

    version: str
    units: Dict[str, Dict[str, List[str]]] = dataclasses.field(default_factory=dict)
    unit_abbreviations: Dict[str, str] = dataclasses.field(default_factory=dict)
    preparations: List[str] = dataclasses.field(default_factory=list)
    descriptors: List[str] = dataclasses.field(default_factory=list)
    colors: List[str] = dataclasses.field(default_factory=list)
    common_ingredients: List[str] = dataclasses.field(default_factory=list)

    def __post_init__(self):
        self.unit_lookup = {
            spelling.lower(): canonical
            for category in self.units.values()
            for canonical, spellings in category.items()
            for spelling in spellings
            if spelling
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MatchingRules":
        if not data.get("version"):
            raise ValueError("Rule table is missing a 'version'")
        return cls(
            version=str(data["version"]),
            units=data.get("units", {}),
            unit_abbreviations=data.get("unit_abbreviations", {}),
            preparations=list(data.get("preparations", [])),
            descriptors=list(data.get("descriptors", [])),
            colors=list(data.get("colors", [])),
            common_ingredients=list(data.get("common_ingredients", [])),
        )

    @classmethod
    def from_json(cls, rules_file: str) -> "MatchingRules":
        """Load a rule table from a JSON file.

        Args:
            rules_file: Path to a JSON document with the same keys as the
                bundled ``matching_rules.json``.

        Raises:
            ValueError: If the table has no version.
        """
        with open(rules_file, "r", encoding="utf-8") as f:
            return cls.from_dict(json.load(f))


@functools.lru_cache(maxsize=1)
def load_default_rules() -> MatchingRules:
    """Return the rule table bundled with the package."""
    return MatchingRules.from_json(DEFAULT_RULES_FILE)
