"""Person record pipeline: codecs, filter, sort and mutation."""

from roster.person.filters import FilterConfig, GenderFilter, ShadyFilter, apply_all
from roster.person.sorter import SortContext, SortedView, SortField, SortOrder, sort
from roster.person.status_flags import StatusFlag
from roster.person.updater import add_trait, remove_trait, update_field, update_text_field

__all__ = [
    "FilterConfig",
    "GenderFilter",
    "ShadyFilter",
    "SortContext",
    "SortField",
    "SortOrder",
    "SortedView",
    "StatusFlag",
    "add_trait",
    "apply_all",
    "remove_trait",
    "sort",
    "update_field",
    "update_text_field",
]
