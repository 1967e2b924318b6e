"""Name table lookup.

The backend hands out one flat list of strings per language; a name's
index in that list is its persistent id (``firstNameId``/``lastNameId``).
``NameSearcher`` searches one table; ``NameTableCache`` loads and
memoizes tables per language for one backend.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional, Sequence

from roster.protocols import BackendError, BackendProtocol

logger = logging.getLogger(__name__)

DEFAULT_MAX_RESULTS = 10


class NameMatch(NamedTuple):
    name: str
    id: int


@dataclass
class NameSearchResult:
    results: List[NameMatch] = field(default_factory=list)
    has_more: bool = False


class NameSearcher:
    """Case-insensitive substring search over a name table."""

    def __init__(self, names: Sequence[str]):
        self._names = names

    def __len__(self) -> int:
        return len(self._names)

    def search(
        self, query: Optional[str], max_results: int = DEFAULT_MAX_RESULTS
    ) -> NameSearchResult:
        """First ``max_results`` matches in table order.

        Scanning stops as soon as one match beyond ``max_results`` is seen;
        ``has_more`` reports whether that happened.
        """
        if not query or not query.strip():
            return NameSearchResult()

        needle = query.lower()
        matches: List[NameMatch] = []
        for index, name in enumerate(self._names):
            if name and needle in name.lower():
                matches.append(NameMatch(name, index))
                if len(matches) > max_results:
                    return NameSearchResult(matches[:max_results], has_more=True)
        return NameSearchResult(matches, has_more=False)

    def resolve(self, name_id: int) -> Optional[str]:
        if 0 <= name_id < len(self._names):
            return self._names[name_id]
        return None


class NameTableCache:
    """Per-language name tables fetched from a backend, loaded at most once each.

    Failed loads are logged, kept in ``last_error`` and return an empty
    table; nothing is cached for them, so the next ``get`` retries.
    """

    def __init__(self, backend: BackendProtocol):
        self._backend = backend
        self._tables: Dict[str, List[str]] = {}
        self._lock = asyncio.Lock()
        self.last_error: Optional[str] = None

    async def get(self, language: str, force: bool = False) -> List[str]:
        async with self._lock:
            if not force and language in self._tables:
                return self._tables[language]
            try:
                table = await self._backend.get_translation_table(language)
            except BackendError as e:
                logger.error("Failed to load name table for %s: %s", language, e, exc_info=True)
                self.last_error = str(e)
                return []
            self.last_error = None
            self._tables[language] = list(table)
            logger.debug("Loaded %d names for %s", len(table), language)
            return self._tables[language]

    async def searcher(self, language: str) -> NameSearcher:
        return NameSearcher(await self.get(language))

    def is_loaded(self, language: str) -> bool:
        return language in self._tables

    def invalidate(self, language: Optional[str] = None) -> None:
        """Forget one language's table, or all of them."""
        if language is None:
            self._tables.clear()
        else:
            self._tables.pop(language, None)
