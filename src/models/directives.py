"""
Directive models

Defines the recognised directive kinds and the structure describing one
directive line found in source text.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Optional


class DirectiveKind(Enum):
    """
    Kinds of conditional directives

    Values are the keywords as written after the '@' marker.
    """
    IFDEF = "ifdef"      # //@ifdef NAME
    IFNDEF = "ifndef"    # //@ifndef NAME
    ENDIF = "endif"      # //@endif

    @property
    def opens(self) -> bool:
        """True for directives that push a new conditional level"""
        return self is not DirectiveKind.ENDIF


@dataclass(frozen=True)
class DirectiveMatch:
    """
    A directive line located in source text

    Returned by Preprocessor.directive_find() for each line that matches the
    directive grammar.

    Attributes:
        kind: Directive kind
        variable: Variable name for ifdef/ifndef, None for endif
        start: Character offset of the start of the directive line
        end: Character offset just past the directive line and its
             line terminator (where copying resumes)
        line_number: 1-based line number of the directive

    Example:
        For source "a\\n//@ifdef X\\nb\\n":
        DirectiveMatch(kind=DirectiveKind.IFDEF, variable="X",
                       start=2, end=13, line_number=2)
    """
    kind: DirectiveKind
    variable: Optional[str]
    start: int
    end: int
    line_number: int
