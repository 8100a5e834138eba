from __future__ import annotations

"""Public surface for mapsub.core.

Models, the error hierarchy and the per-run report live here so that the
processing and io layers share a single import location:

    from mapsub.core import MappingEntry, MappingTable, DuplicateSearchKey
"""

from mapsub.core.errors import (
    DuplicateReplaceValue,
    DuplicateSearchKey,
    EmptySearchKey,
    InvalidSearchKeys,
    MappingFormatError,
    MapsubError,
    PlaceholderExhausted,
    ValidationError,
)
from mapsub.core.models import MappingEntry, MappingTable
from mapsub.core.report import SubstitutionReport

__all__ = [
    "MappingEntry",
    "MappingTable",
    "SubstitutionReport",
    "MapsubError",
    "ValidationError",
    "EmptySearchKey",
    "DuplicateSearchKey",
    "InvalidSearchKeys",
    "DuplicateReplaceValue",
    "MappingFormatError",
    "PlaceholderExhausted",
]
