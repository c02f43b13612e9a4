"""
ifdefpp - //@ifdef conditional-compilation preprocessor

Keeps or drops lines guarded by //@ifdef and //@ifndef blocks according to a
mapping of definitions.
"""

__version__ = "1.0.0"

from .lib import (
    Preprocessor,
    preprocess,
    PreprocessorError,
    MaxDepthExceeded,
    UnbalancedDirectives,
    UnmatchedEndif,
    DefinitionsError,
    LOG,
    state_connectToLogger,
)

__all__ = [
    "Preprocessor",
    "preprocess",
    "PreprocessorError",
    "MaxDepthExceeded",
    "UnbalancedDirectives",
    "UnmatchedEndif",
    "DefinitionsError",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
