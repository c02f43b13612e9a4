"""
Exception taxonomy for the preprocessor

Every failure aborts the whole preprocess() call. No partial output is ever
returned alongside an error.
"""

from typing import Optional


class PreprocessorError(Exception):
    """
    Base class for malformed directive nesting in source text

    Attributes:
        line_number: 1-based source line of the offending directive, or None
                     when the error is not tied to a single line
    """

    def __init__(self, message: str, line_number: Optional[int] = None) -> None:
        self.line_number = line_number
        if line_number is not None:
            message = f"{message} at line {line_number}"
        super().__init__(f"preprocessor: {message}")


class MaxDepthExceeded(PreprocessorError):
    """Raised when more than MAX_DEPTH ifdef/ifndef blocks are open at once"""
    pass


class UnbalancedDirectives(PreprocessorError):
    """
    Raised when input ends with ifdef/ifndef blocks still open

    Attributes:
        depth: Number of blocks left open at end of input
    """

    def __init__(self, message: str, line_number: Optional[int] = None, depth: int = 0) -> None:
        self.depth = depth
        super().__init__(message, line_number)


class UnmatchedEndif(PreprocessorError):
    """Raised when an endif is found with no open block (strict mode)"""
    pass


class DefinitionsError(ValueError):
    """Raised when a NAME[=VALUE] definition or a definitions file is invalid"""
    pass
