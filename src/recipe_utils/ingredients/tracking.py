"""Best-effort recording of OR-pattern decisions for later rule tuning."""

import dataclasses
import logging
from abc import ABC, abstractmethod
from typing import List

from recipe_utils.ingredients.models import OrPatternDecision

logger = logging.getLogger(__name__)


class DecisionSink(ABC):
    """Abstract base class for destinations of OR-pattern decisions."""

    @abstractmethod
    async def write(self, decision: OrPatternDecision) -> None:
        """Persist or forward a single decision."""
        pass


class InMemoryDecisionSink(DecisionSink):
    """Keeps decisions in a list; handy for tests and offline analysis."""

    def __init__(self):
        self.decisions: List[OrPatternDecision] = []

    async def write(self, decision: OrPatternDecision) -> None:
        self.decisions.append(decision)


class LoggingDecisionSink(DecisionSink):
    """Emits each decision as a debug log record."""

    async def write(self, decision: OrPatternDecision) -> None:
        logger.debug(f"OR pattern decision: {dataclasses.asdict(decision)}")


class DecisionTracker:
    """Forwards decisions to a sink without ever failing the caller.

    Attributes:
        sink: Where decisions are delivered.
    """

    def __init__(self, sink: DecisionSink):
        self.sink = sink

    async def track(self, decision: OrPatternDecision) -> bool:
        """Deliver a decision to the sink.

        Returns:
            True if the sink accepted the decision, False if it raised. Sink
            errors are logged and never propagated.
        """
        try:
            await self.sink.write(decision)
            return True
        except Exception as e:
            logger.warning(
                f"Failed to track OR pattern for '{decision.original_text}': {e}"
            )
            return False
