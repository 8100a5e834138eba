from __future__ import annotations
from pathlib import Path
from typing import List, Protocol, runtime_checkable

from mapsub.core.models import MappingEntry


@runtime_checkable
class MappingReaderProtocol(Protocol):
    """Decode a serialized mapping table into entries (no validation)."""

    def read_text(self, text: str, *, source: str = '<string>') -> List[MappingEntry]:
        ...

    def read_path(self, path: Path) -> List[MappingEntry]:
        ...
