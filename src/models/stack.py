"""
Conditional inclusion stacks

One boolean per open ifdef/ifndef block: True when the block's condition is
satisfied (its content is included), False when it is excluded.

Two representations with identical observable behaviour:

- BitStack packs the stack into a single integer. Bit i is set iff level i
  is excluded, so the whole stack is satisfied exactly when the integer is 0.
  This is what the preprocessor uses.
- ListStack keeps an explicit list of booleans. It is the direct rendering of
  the line-by-line reference algorithm and is used to cross-check BitStack.

Both refuse to grow beyond MAX_DEPTH levels, which is the width the packed
representation is defined for.
"""

from typing import List, Protocol


MAX_DEPTH: int = 32


class ConditionalStack(Protocol):
    """Interface shared by the stack representations"""

    depth: int

    def push(self, included: bool) -> bool: ...

    def pop(self) -> bool: ...

    def satisfied(self) -> bool: ...


class BitStack:
    """
    Fixed-width bit vector stack

    Attributes:
        bits: Excluded-level mask (bit i set iff level i is excluded)
        depth: Number of open levels
        max_depth: Maximum number of open levels (bit width)

    Example:
        >>> stack = BitStack()
        >>> stack.push(True); stack.push(False)
        True
        True
        >>> stack.bits, stack.satisfied()
        (2, False)
        >>> stack.pop(); stack.satisfied()
        True
        True
    """

    def __init__(self, max_depth: int = MAX_DEPTH) -> None:
        self.bits = 0
        self.depth = 0
        self.max_depth = max_depth

    def push(self, included: bool) -> bool:
        """
        Open a new level

        Returns:
            False if the stack is already max_depth levels deep (nothing is
            pushed), True otherwise
        """
        if self.depth >= self.max_depth:
            return False
        if not included:
            self.bits |= 1 << self.depth
        self.depth += 1
        return True

    def pop(self) -> bool:
        """
        Close the innermost level

        Returns:
            False if there was no open level, True otherwise
        """
        if self.depth == 0:
            return False
        self.depth -= 1
        # Clear bit `depth` and everything above it
        self.bits &= (1 << self.depth) - 1
        return True

    def satisfied(self) -> bool:
        """True iff every open level is included"""
        return self.bits == 0


class ListStack:
    """Explicit list-of-booleans stack, same contract as BitStack"""

    def __init__(self, max_depth: int = MAX_DEPTH) -> None:
        self.levels: List[bool] = []
        self.max_depth = max_depth

    @property
    def depth(self) -> int:
        return len(self.levels)

    def push(self, included: bool) -> bool:
        if len(self.levels) >= self.max_depth:
            return False
        self.levels.append(included)
        return True

    def pop(self) -> bool:
        if not self.levels:
            return False
        self.levels.pop()
        return True

    def satisfied(self) -> bool:
        return all(self.levels)
