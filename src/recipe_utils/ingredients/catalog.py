"""Read-only views over the ingredient catalog."""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, Iterator, List, Optional

from recipe_utils.ingredients.models import CatalogEntry

logger = logging.getLogger(__name__)


class CatalogUnavailableError(RuntimeError):
    """Raised when the ingredient catalog cannot be fetched."""


class CatalogSnapshot:
    """An immutable, indexed copy of the ingredient catalog.

    The snapshot is owned by the caller: build it once with ``load_catalog``
    and pass it to as many recipe batches as desired. Refreshing means
    loading a new snapshot.

    Lookups are case-insensitive. When several entries share a name or plural
    spelling, the first entry in catalog order wins.
    """

    def __init__(self, entries: Iterable[CatalogEntry]):
        self._entries = tuple(entries)
        self._by_name: Dict[str, CatalogEntry] = {}
        for entry in self._entries:
            for spelling in (entry.name, entry.plural_name):
                if spelling:
                    self._by_name.setdefault(spelling.lower(), entry)

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def find_by_name(self, name: str) -> Optional[CatalogEntry]:
        """Return the entry whose name or plural equals ``name``, if any."""
        if not name:
            return None
        return self._by_name.get(name.strip().lower())

    def find_generic(self, name: str) -> Optional[CatalogEntry]:
        """Return a generic (parentless) entry whose name or plural is ``name``."""
        name = name.strip().lower()
        for entry in self._entries:
            if not entry.is_generic:
                continue
            if (entry.name or "").lower() == name or (
                entry.plural_name or ""
            ).lower() == name:
                return entry
        return None


class CatalogSource(ABC):
    """Abstract base class for places the catalog can be fetched from."""

    @abstractmethod
    async def fetch_entries(self) -> List[CatalogEntry]:
        """Fetch every catalog row (id, name, plural, base ingredient)."""
        pass


class StaticCatalogSource(CatalogSource):
    """Serves a fixed list of entries, e.g. a caller-chosen subset in tests."""

    def __init__(self, entries: Iterable[CatalogEntry]):
        self._entries = list(entries)

    async def fetch_entries(self) -> List[CatalogEntry]:
        return list(self._entries)


async def load_catalog(source: CatalogSource) -> CatalogSnapshot:
    """Fetch the catalog once and freeze it into a snapshot.

    Args:
        source: Where to read the catalog from.

    Returns:
        A CatalogSnapshot of every entry the source returned.

    Raises:
        CatalogUnavailableError: If the source fails for any reason.
    """
    try:
        entries = await source.fetch_entries()
    except Exception as e:
        raise CatalogUnavailableError(f"Failed to load ingredient catalog: {e}") from e

    logger.info(f"Loaded {len(entries)} catalog entries")
    return CatalogSnapshot(entries)
