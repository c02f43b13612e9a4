"""
Models package for ifdefpp

Contains data structures used by the preprocessor and the command line pipeline.
"""

from .state import ProgramState, pipeline
from .directives import DirectiveKind, DirectiveMatch
from .stack import BitStack, ListStack, ConditionalStack, MAX_DEPTH

__all__ = [
    "ProgramState",
    "pipeline",
    "DirectiveKind",
    "DirectiveMatch",
    "BitStack",
    "ListStack",
    "ConditionalStack",
    "MAX_DEPTH",
]
