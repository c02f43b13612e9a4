"""
ifdefpp - //@ifdef conditional-compilation preprocessor

Keeps or drops lines guarded by //@ifdef and //@ifndef blocks according to a
mapping of definitions.
"""

__version__ = "1.0.0"

from .preprocessor import Preprocessor, preprocess
from .definitions import definition_isTruthy, define_parse, definitions_load
from .errors import (
    PreprocessorError,
    MaxDepthExceeded,
    UnbalancedDirectives,
    UnmatchedEndif,
    DefinitionsError,
)
from .log import LOG, state_connectToLogger

__all__ = [
    "Preprocessor",
    "preprocess",
    "definition_isTruthy",
    "define_parse",
    "definitions_load",
    "PreprocessorError",
    "MaxDepthExceeded",
    "UnbalancedDirectives",
    "UnmatchedEndif",
    "DefinitionsError",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
