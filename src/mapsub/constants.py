from __future__ import annotations

"""Project-wide constants used across modules.

This module isolates public constants to reduce cross-module coupling.
"""

# Characters that make up a "word" for context discovery: letters, digits,
# underscore and hyphen (configuration identifiers, hostnames).
WORD_CHARS: str = r'[\w-]'

# Code-point pools for placeholder tokens. Private-use areas never carry
# meaning in ordinary text, so they are scanned first.
PLACEHOLDER_POOLS: tuple[tuple[int, int], ...] = (
    (0xE000, 0xF8FF),
    (0xF0000, 0xFFFFD),
    (0x100000, 0x10FFFD),
)

# Placeholder digits use a small alphabet; tokens grow logarithmically.
PLACEHOLDER_RADIX: int = 16

# Serialized mapping tables.
MAPPING_FORMATS: tuple[str, ...] = ('lines', 'tsv', 'csv', 'json')
DEFAULT_MAPPING_FORMAT: str = 'lines'
DEFAULT_LINE_DELIMITER: str = '='
COMMENT_PREFIX: str = '#'
