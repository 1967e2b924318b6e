"""One category's editable record collection.

``ProfessionSession`` ties the pipeline together:

- ``load`` pulls the category from the backend and resolves records
- ``view`` filters then sorts (through a ``SortedView``)
- ``update_field`` applies an edit locally right away and persists it
  through the ``EditCoalescer`` under the key ``"<id>-<field>"``
- name and trait edits are persisted immediately

Local edits are optimistic. A failed persist is logged, kept in
``last_error`` and passed to ``on_error``; the local value stays.
Editing an id that is not loaded does nothing and returns ``None``.
"""

import functools
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from roster import logging_config
from roster.backend.payload import build_text_payload, build_trait_payload, build_update_payload
from roster.calendar import GameDate, calculate_age
from roster.config import DEFAULT_LANGUAGE, DEFAULT_SAVE_DELAY, RosterConfig
from roster.editing.acceleration import birth_year_for_age
from roster.editing.coalescer import EditCoalescer
from roster.game_data import genres
from roster.names import NameSearcher, NameTableCache
from roster.person import updater, white_tags
from roster.person import utils as person_utils
from roster.person.filters import FilterConfig, apply_all
from roster.person.sorter import SortContext, SortedView, SortField, SortOrder
from roster.protocols import BackendError, BackendProtocol
from roster.types import Person, PersonId

logger = logging.getLogger(__name__)

ErrorCallback = Callable[[str], None]


class ProfessionSession:
    """Editable view over all persons of one category (``Actor``, ``Executive``...)."""

    def __init__(
        self,
        backend: BackendProtocol,
        category: str,
        names: Optional[NameTableCache] = None,
        language: str = DEFAULT_LANGUAGE,
        save_delay: float = DEFAULT_SAVE_DELAY,
        on_error: Optional[ErrorCallback] = None,
    ):
        self.backend = backend
        self.category = category
        self.names = names if names is not None else NameTableCache(backend)
        self.language = language
        self.on_error = on_error
        self.coalescer = EditCoalescer(delay=save_delay, on_error=self._on_persist_error)
        self.persons: List[Person] = []
        self.name_table: List[str] = []
        self.current_date: Optional[str] = None
        self.last_error: Optional[str] = None
        self._view = SortedView()

    @classmethod
    def from_config(
        cls,
        backend: BackendProtocol,
        category: str,
        config: RosterConfig,
        on_error: Optional[ErrorCallback] = None,
    ) -> "ProfessionSession":
        return cls(
            backend,
            category,
            language=config.language,
            save_delay=config.save_delay,
            on_error=on_error,
        )

    # === Errors ===

    def _report(self, message: str, error: BaseException) -> None:
        logger.error("%s: %s", message, error)
        self.last_error = f"{message}: {error}"
        if self.on_error is not None:
            self.on_error(self.last_error)

    def _on_persist_error(self, key: str, error: BaseException) -> None:
        logging_config.log_persist(self.category, key, ok=False, error=str(error))
        self._report(f"Failed to save {key}", error)

    # === Loading ===

    async def load(self) -> List[Person]:
        """Fetch the category and the current date. On failure the old records stay."""
        self.last_error = None
        try:
            raw = await self.backend.list_by_category(self.category)
        except BackendError as e:
            self._report(f"Failed to load {self.category.lower()}s", e)
            return self.persons
        self.persons = [Person.from_dict(item) for item in raw]
        self._view.invalidate()

        try:
            self.current_date = await self.backend.get_current_date()
        except BackendError as e:
            self._report("Failed to get current date", e)

        logging_config.log_load(self.category, len(self.persons), self.current_date)
        logger.info("Loaded %d %s records", len(self.persons), self.category)
        return self.persons

    async def load_names(self, force: bool = False) -> List[str]:
        self.name_table = await self.names.get(self.language, force=force)
        if self.names.last_error:
            self.last_error = f"Failed to load names: {self.names.last_error}"
            if self.on_error is not None:
                self.on_error(self.last_error)
        return self.name_table

    async def set_language(self, language: str) -> List[str]:
        self.language = language
        return await self.load_names()

    @property
    def name_searcher(self) -> NameSearcher:
        return NameSearcher(self.name_table)

    # === Reading ===

    def find(self, person_id: PersonId) -> Optional[Person]:
        for person in self.persons:
            if person.id == person_id:
                return person
        return None

    def display_name(self, person: Person) -> str:
        return person_utils.display_name(person, self.name_table or None)

    def view(
        self,
        filter_config: Optional[FilterConfig] = None,
        sort_field: SortField = SortField.SKILL,
        sort_order: SortOrder = SortOrder.DESC,
        refresh: bool = False,
    ) -> List[Person]:
        """Filtered, sorted records. Value edits keep their row until ``refresh``."""
        filtered = apply_all(self.persons, filter_config or FilterConfig(), self.name_table or None)
        context = SortContext(current_date=self.current_date)
        return self._view.update(filtered, sort_field, sort_order, context, refresh=refresh)

    def available_studios(self) -> List[str]:
        return person_utils.available_studios(self.persons)

    # === Local edits ===

    def _replace(self, person_id: PersonId, edit: Callable[[Person], Person]) -> Optional[Person]:
        for index, person in enumerate(self.persons):
            if person.id != person_id:
                continue
            updated = edit(person)
            if updated is not person:
                persons = list(self.persons)
                persons[index] = updated
                self.persons = persons
            return updated
        logger.debug("Ignoring edit for unknown person %s", person_id)
        return None

    async def _send(self, person_id: PersonId, payload: Dict[str, Any], what: str) -> bool:
        key = f"{person_id}-{next(iter(payload))}"
        try:
            await self.backend.update_one(self.category, str(person_id), payload)
        except BackendError as e:
            logging_config.log_persist(self.category, key, ok=False, error=str(e))
            self._report(f"Failed to {what}", e)
            return False
        logging_config.log_persist(self.category, key, ok=True)
        return True

    async def _persist(self, key: str, person_id: PersonId, payload: Dict[str, Any]) -> None:
        await self.backend.update_one(self.category, str(person_id), payload)
        logging_config.log_persist(self.category, key, ok=True)

    def update_field(
        self, person_id: PersonId, field: str, value: Optional[float]
    ) -> Optional[Person]:
        """Edit a numeric field now; persist it after the coalescing delay.

        Must be called from inside a running event loop.

        Raises:
            UnsupportedFieldError: ``field`` is not editable.
        """
        payload = build_update_payload(field, value)
        before = self.find(person_id)
        if before is None:
            logger.debug("Ignoring %s edit for unknown person %s", field, person_id)
            return None
        after = self._replace(person_id, lambda p: updater.update_field(p, field, value))
        if after is before:
            return after

        logging_config.log_edit(self.category, person_id, field, value)
        key = f"{person_id}-{field}"
        self.coalescer.schedule(key, functools.partial(self._persist, key, person_id, payload))
        return after

    def toggle_genre(self, person_id: PersonId, genre: str) -> Optional[Person]:
        """Add ``genre`` at the established threshold, or remove it if present."""
        person = self.find(person_id)
        if person is None:
            return None
        present = white_tags.has_tag(person.white_tags, genre)
        value = None if present else genres.ESTABLISHED_THRESHOLD
        return self.update_field(person_id, f"{white_tags.TAG_FIELD_PREFIX}{genre}", value)

    def set_age(self, person_id: PersonId, new_age: int) -> Optional[Person]:
        """Change the age by rewriting the birth year."""
        person = self.find(person_id)
        if person is None:
            return None
        birth = GameDate.from_dmy(person.birth_date)
        age = calculate_age(person.birth_date, self.current_date)
        if birth is None or age is None:
            return person
        new_year = birth_year_for_age(birth.year, age, new_age)
        return self.update_field(person_id, "birthYear", new_year)

    async def update_text_field(
        self, person_id: PersonId, field: str, value: Optional[str]
    ) -> Optional[Person]:
        payload = build_text_payload(field, value)
        updated = self._replace(person_id, lambda p: updater.update_text_field(p, field, value))
        if updated is None:
            return None
        logging_config.log_edit(self.category, person_id, field, value)
        await self._send(person_id, payload, f"update {field}")
        return updated

    async def add_trait(self, person_id: PersonId, trait: str) -> Optional[Person]:
        updated = self._replace(person_id, lambda p: updater.add_trait(p, trait))
        if updated is None:
            return None
        logging_config.log_edit(self.category, person_id, "addTrait", trait)
        await self._send(person_id, build_trait_payload(trait, add=True), "add trait")
        return updated

    async def remove_trait(self, person_id: PersonId, trait: str) -> Optional[Person]:
        updated = self._replace(person_id, lambda p: updater.remove_trait(p, trait))
        if updated is None:
            return None
        logging_config.log_edit(self.category, person_id, "removeTrait", trait)
        await self._send(person_id, build_trait_payload(trait, add=False), "remove trait")
        return updated

    async def update_portrait(self, person_id: PersonId, portrait_id: int) -> Optional[Person]:
        payload = build_update_payload("portraitBaseId", portrait_id)
        updated = self._replace(
            person_id, lambda p: updater.update_field(p, "portraitBaseId", portrait_id)
        )
        if updated is None:
            return None
        logging_config.log_edit(self.category, person_id, "portraitBaseId", portrait_id)
        await self._send(person_id, payload, "update portrait")
        return updated

    async def batch_update(self, studio_id: str, field: str, value: float) -> int:
        """Set ``field`` on everyone at ``studio_id`` and reload. Returns the count."""
        try:
            count = await self.backend.update_many(self.category, studio_id, field, value)
        except BackendError as e:
            self._report(f"Failed to batch update {field}", e)
            return 0
        logging_config.log_edit_event(
            "batch",
            f"studio={studio_id}, field={field}, value={value}, count={count}",
            category=self.category,
        )
        await self.load()
        return count

    # === Teardown ===

    @property
    def pending_keys(self) -> Sequence[str]:
        return self.coalescer.pending_keys

    async def drain(self) -> None:
        """Wait for persists that have already started."""
        await self.coalescer.drain()

    def close(self) -> int:
        """Drop pending (not yet fired) edits. Returns how many were dropped."""
        return self.coalescer.flush_all()
