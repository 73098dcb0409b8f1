"""SQLite-backed catalog source and decision sink."""

import asyncio
import pathlib
from typing import List, Union

from recipe_utils.database.utils import (
    fetch_catalog,
    get_connection,
    insert_or_pattern_decision,
    transaction,
)
from recipe_utils.ingredients.catalog import CatalogSource
from recipe_utils.ingredients.models import CatalogEntry, OrPatternDecision
from recipe_utils.ingredients.tracking import DecisionSink


class SqliteCatalogSource(CatalogSource):
    """Reads the ingredient catalog from the ``ingredient`` table.

    Attributes:
        db_path: Path to the SQLite database
    """

    def __init__(self, db_path: Union[str, pathlib.Path]):
        self.db_path = db_path

    def _fetch(self) -> List[CatalogEntry]:
        conn = get_connection(self.db_path)
        try:
            return fetch_catalog(conn)
        finally:
            conn.close()

    async def fetch_entries(self) -> List[CatalogEntry]:
        return await asyncio.to_thread(self._fetch)


class SqliteDecisionSink(DecisionSink):
    """Appends OR-pattern decisions to the ``or_pattern_decision`` table.

    Attributes:
        db_path: Path to the SQLite database
    """

    def __init__(self, db_path: Union[str, pathlib.Path]):
        self.db_path = db_path

    def _insert(self, decision: OrPatternDecision) -> None:
        conn = get_connection(self.db_path)
        try:
            with transaction(conn) as cur:
                insert_or_pattern_decision(cur, decision)
        finally:
            conn.close()

    async def write(self, decision: OrPatternDecision) -> None:
        await asyncio.to_thread(self._insert, decision)
