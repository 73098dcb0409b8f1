import dataclasses
import enum
from typing import Any, Dict, Optional, Union

IngredientId = Union[int, str]


class MatchMethod(str, enum.Enum):
    """Stage or strategy that produced a catalog match."""

    EXACT = "exact"
    FUZZY = "fuzzy"
    PARTIAL = "partial"
    MANUAL = "manual"
    NONE = "none"
    ERROR = "error"


@dataclasses.dataclass(frozen=True)
class RawIngredientLine:
    recipe_id: IngredientId
    position: int  # 1-based
    text: str


@dataclasses.dataclass(frozen=True)
class ConfidenceScores:
    quantity: float = 0.0
    unit: float = 0.0
    ingredient: float = 0.0


@dataclasses.dataclass(frozen=True)
class ParsedIngredient:
    original_text: str
    quantity_amount: Optional[float] = None
    quantity_unit: Optional[str] = None
    preparation: Optional[str] = None
    ingredient_name: Optional[str] = None
    confidence_scores: ConfidenceScores = ConfidenceScores()


@dataclasses.dataclass(frozen=True)
class CatalogEntry:
    id: IngredientId
    name: str
    plural_name: Optional[str] = None
    base_ingredient_id: Optional[IngredientId] = None

    @property
    def is_generic(self) -> bool:
        return self.base_ingredient_id is None


@dataclasses.dataclass(frozen=True)
class AlternativeReference:
    """The secondary (or equally valid) option of an "X or Y" line."""

    ingredient_id: IngredientId
    name: str
    is_equivalent: bool


@dataclasses.dataclass(frozen=True)
class MatchResult:
    ingredient_id: Optional[IngredientId]
    match_confidence: float
    match_method: MatchMethod
    match_notes: Optional[str]
    needs_review: bool
    alternative: Optional[AlternativeReference] = None


@dataclasses.dataclass(frozen=True)
class AlternativeRelation:
    recipe_ingredient_index: int
    alternative_ingredient_id: IngredientId
    is_equivalent: bool

    @property
    def preference_order(self) -> int:
        # 1 = interchangeable option, 2 = secondary choice
        return 1 if self.is_equivalent else 2


@dataclasses.dataclass(frozen=True)
class PersistRecord:
    """One recipe ingredient row, ready to hand to a persistence layer."""

    line: RawIngredientLine
    parsed: ParsedIngredient
    match: MatchResult
    optional_confidence: float = 0.5
    substitute_confidence: float = 0.5

    @property
    def sequence_order(self) -> int:
        return self.line.position

    @property
    def recipe_id(self) -> IngredientId:
        return self.line.recipe_id

    def to_row(self) -> Dict[str, Any]:
        """Flatten the record into recipe_ingredient column values."""
        return {
            "recipe_id": self.line.recipe_id,
            "ingredient_id": self.match.ingredient_id,
            "original_text": self.line.text,
            "quantity_amount": self.parsed.quantity_amount,
            "quantity_unit": self.parsed.quantity_unit,
            "preparation": self.parsed.preparation,
            "sequence_order": self.sequence_order,
            "match_confidence": self.match.match_confidence,
            "match_method": self.match.match_method.value,
            "match_notes": self.match.match_notes,
            "needs_review": self.match.needs_review,
            "optional_confidence": self.optional_confidence,
            "substitute_confidence": self.substitute_confidence,
        }


@dataclasses.dataclass(frozen=True)
class OrPatternDecision:
    original_text: str
    option1_name: str
    option1_ingredient_id: Optional[IngredientId]
    option1_found: bool
    option2_name: str
    option2_ingredient_id: Optional[IngredientId]
    option2_found: bool
    detected_as_equivalent: bool
    primary_choice: str
    parser_confidence: float
    decision_reason: str
    recipe_id: Optional[IngredientId] = None
    recipe_title: Optional[str] = None


@dataclasses.dataclass(frozen=True)
class RecipeContext:
    recipe_id: Optional[IngredientId] = None
    recipe_title: Optional[str] = None
