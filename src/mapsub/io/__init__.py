"""
mapsub.io – decoding of serialized mapping tables.
"""
from .mapping_reader import MappingReader, guess_format

__all__ = ["MappingReader", "guess_format"]
