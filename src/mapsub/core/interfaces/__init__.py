from .io import MappingReaderProtocol
from .logging import LoggerFactoryProtocol, LoggerLikeProtocol
from .text import ContextFinderProtocol, MappingValidatorProtocol, SubstitutionEngineProtocol

__all__ = [
    'ContextFinderProtocol',
    'LoggerFactoryProtocol',
    'LoggerLikeProtocol',
    'MappingReaderProtocol',
    'MappingValidatorProtocol',
    'SubstitutionEngineProtocol',
]
