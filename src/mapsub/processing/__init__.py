"""Public API surface for mapsub.processing."""
from .context_finder import ContextFinder, ContextMatches, find_contexts
from .engine import SubstitutionEngine, apply, build_plan
from .placeholders import PlaceholderFactory
from .validator import MappingValidator, validate

__all__ = [
    "ContextFinder",
    "ContextMatches",
    "MappingValidator",
    "PlaceholderFactory",
    "SubstitutionEngine",
    "apply",
    "build_plan",
    "find_contexts",
    "validate",
]
