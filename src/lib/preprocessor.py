"""
Conditional-compilation preprocessor for //@ifdef markup

Removes lines guarded by unsatisfied //@ifdef and //@ifndef blocks and keeps
everything else verbatim, including original line endings.

Directive grammar (one directive per physical line, case-sensitive):

    ifdef-stmt  = blank, "//", blank, "@ifdef", blank, variable, blank
    ifndef-stmt = blank, "//", blank, "@ifndef", blank, variable, blank
    endif-stmt  = blank, "//", blank, "@endif", blank
    blank       = *( " " | "\\t" )
    variable    = 1*( letter | digit | "-" | "_" )

A line with anything else on it (trailing code, a second word after endif,
ifdef without a name) is ordinary content.

The scan is a single left-to-right pass. Content between two directives is
copied as one slice whenever the conditional stack is fully satisfied, so the
cost is linear in the input size. The stack is a BitStack, which limits
nesting to 32 levels.

Example:
    >>> preprocess("a\\n//@ifdef X\\nb\\n//@endif\\nc\\n", {"X": False})
    'a\\nc\\n'
"""

import re
from typing import Any, Callable, Iterator, List, Mapping

from ..models.directives import DirectiveKind, DirectiveMatch
from ..models.stack import BitStack, ConditionalStack, MAX_DEPTH
from .definitions import definition_lookup
from .errors import MaxDepthExceeded, UnbalancedDirectives, UnmatchedEndif
from .log import LOG


DIRECTIVE_PATTERN = re.compile(
    r'^[\t ]*//[\t ]*@'
    r'(?:(?P<command>ifdef|ifndef)[\t ]*(?P<variable>[A-Za-z0-9_-]+)|(?P<endif>endif))'
    r'[\t ]*\r?$',
    re.MULTILINE,
)


class Preprocessor:
    """
    Single-pass directive scanner and filter

    Handles:
    - //@ifdef NAME, //@ifndef NAME, //@endif directives
    - Nesting up to MAX_DEPTH levels
    - Line number tracking for error reporting
    """

    def __init__(
        self,
        source: str,
        defined: Mapping[str, Any],
        strict_endif: bool = True,
        stack_factory: Callable[[], ConditionalStack] = BitStack,
    ) -> None:
        """
        Initialize preprocessor with source text and definitions

        Args:
            source: Text to preprocess
            defined: Mapping of variable names to values (see definitions.py
                     for how values are read as true/false)
            strict_endif: Raise UnmatchedEndif for an endif with no open
                          block. When False such an endif is dropped and
                          otherwise ignored.
            stack_factory: Builds the conditional stack (BitStack or ListStack)

        Attributes:
            position: Offset just past the last processed directive line
            line_number: Line number at line_position
            line_position: Offset up to which newlines have been counted
            openers: Line numbers of the currently open ifdef/ifndef lines
        """
        self.source = source
        self.defined = defined
        self.strict_endif = strict_endif
        self.stack: ConditionalStack = stack_factory()
        self.position = 0
        self.line_number = 1
        self.line_position = 0
        self.openers: List[int] = []

    def lineNumber_at(self, offset: int) -> int:
        """
        Line number of a character offset

        Offsets must be requested in non-decreasing order; newlines are
        counted incrementally so the whole scan stays linear.
        """
        self.line_number += self.source.count('\n', self.line_position, offset)
        self.line_position = offset
        return self.line_number

    def directive_find(self) -> Iterator[DirectiveMatch]:
        """
        Yield every directive line in source order

        Returns:
            Iterator of DirectiveMatch. `end` includes the line terminator
            ("\\n", or "\\r\\n" when the directive line ends in CRLF).
        """
        for match in DIRECTIVE_PATTERN.finditer(self.source):
            end = match.end()
            if end < len(self.source) and self.source[end] == '\n':
                end += 1

            if match.group('endif'):
                kind = DirectiveKind.ENDIF
            else:
                kind = DirectiveKind(match.group('command'))

            yield DirectiveMatch(
                kind=kind,
                variable=match.group('variable'),
                start=match.start(),
                end=end,
                line_number=self.lineNumber_at(match.start()),
            )

    def directive_apply(self, directive: DirectiveMatch) -> None:
        """
        Update the conditional stack for one directive

        Raises:
            MaxDepthExceeded: If an ifdef/ifndef would open level MAX_DEPTH + 1
            UnmatchedEndif: If an endif has no open block and strict_endif is set
        """
        if directive.kind.opens:
            value = definition_lookup(self.defined, directive.variable)
            included = value if directive.kind is DirectiveKind.IFDEF else not value
            if not self.stack.push(included):
                raise MaxDepthExceeded(
                    f"exceeded maximum depth of {MAX_DEPTH}", directive.line_number
                )
            self.openers.append(directive.line_number)
            LOG(
                f"line {directive.line_number}: @{directive.kind.value} {directive.variable} "
                f"-> {'included' if included else 'excluded'} (depth {self.stack.depth})",
                level=3,
            )
            return

        if not self.stack.pop():
            if self.strict_endif:
                raise UnmatchedEndif("endif without matching ifdef/ifndef", directive.line_number)
            LOG(f"line {directive.line_number}: ignoring unmatched @endif", level=2)
            return
        self.openers.pop()
        LOG(f"line {directive.line_number}: @endif (depth {self.stack.depth})", level=3)

    def run(self) -> str:
        """
        Preprocess the source

        Returns:
            Source with directive lines and excluded blocks removed

        Raises:
            MaxDepthExceeded: More than MAX_DEPTH nested blocks
            UnbalancedDirectives: Blocks still open at end of input
            UnmatchedEndif: endif with no open block (strict_endif only)
        """
        output: List[str] = []
        directive_count = 0

        for directive in self.directive_find():
            if self.stack.satisfied():
                output.append(self.source[self.position:directive.start])
            self.position = directive.end
            self.directive_apply(directive)
            directive_count += 1

        if self.stack.depth:
            raise UnbalancedDirectives(
                f"stack not empty at EOF: {self.stack.depth} unclosed block(s), "
                f"innermost opened",
                self.openers[-1],
                depth=self.stack.depth,
            )

        output.append(self.source[self.position:])
        LOG(f"Processed {directive_count} directives", level=2)
        return ''.join(output)


def preprocess(source: str, defined: Mapping[str, Any], *, strict_endif: bool = True) -> str:
    """
    Preprocess source text against a definitions mapping

    Args:
        source: Text containing //@ifdef, //@ifndef and //@endif lines
        defined: Mapping of variable names to values; unknown names are false
        strict_endif: Treat an endif with no open block as an error

    Returns:
        The source with directive lines removed and only the content whose
        enclosing blocks are all satisfied kept

    Raises:
        PreprocessorError: One of MaxDepthExceeded, UnbalancedDirectives or
                           UnmatchedEndif; no partial output is produced

    Example:
        >>> preprocess("//@ifndef X\\nno x\\n//@endif\\n", {})
        'no x\\n'
    """
    return Preprocessor(source, defined, strict_endif=strict_endif).run()
