from __future__ import annotations

"""mapsub – collision-safe multi-pattern literal substitution.

Typical use::

    import mapsub

    table = mapsub.validate([("example.com", "example-int.com"),
                             ("api.example.com", "next-api.example-int.com")])
    mapsub.apply(table, "api.example.com")      # 'next-api.example-int.com'
    list(mapsub.find_contexts("us", "us-west-1 brutus"))
"""

from mapsub.core import (
    DuplicateReplaceValue,
    DuplicateSearchKey,
    EmptySearchKey,
    InvalidSearchKeys,
    MappingEntry,
    MappingFormatError,
    MappingTable,
    MapsubError,
    PlaceholderExhausted,
    SubstitutionReport,
    ValidationError,
)
from mapsub.io.mapping_reader import MappingReader
from mapsub.processing.context_finder import ContextFinder, find_contexts
from mapsub.processing.engine import SubstitutionEngine, apply
from mapsub.processing.validator import MappingValidator, validate

__version__ = '0.3.0'

__all__ = [
    'validate',
    'apply',
    'find_contexts',
    'MappingEntry',
    'MappingTable',
    'SubstitutionReport',
    'MappingValidator',
    'SubstitutionEngine',
    'ContextFinder',
    'MappingReader',
    'MapsubError',
    'ValidationError',
    'EmptySearchKey',
    'DuplicateSearchKey',
    'InvalidSearchKeys',
    'DuplicateReplaceValue',
    'MappingFormatError',
    'PlaceholderExhausted',
]
