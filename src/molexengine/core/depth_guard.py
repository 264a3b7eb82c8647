"""Depth limiting for recursion protection.

Provides reusable depth tracking to prevent stack overflow from:
- Deeply parenthesized plural rules during recursive descent parsing
- Long operator chains that build deep expression trees

Thread-safe: uses explicit state, no thread-local storage.
Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from molexengine.constants import MAX_DEPTH
from molexengine.diagnostics import DepthLimitExceededError
from molexengine.diagnostics.templates import ErrorTemplate

__all__ = ["DepthGuard", "depth_clamp"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DepthGuard:
    """Context manager for tracking and limiting recursion depth.

    Usage in parsing:
        guard = DepthGuard(max_depth=50)
        with guard.descend(token.position, token.text):
            node = self._parse_conditional()

    Mutability Note:
        Intentionally mutable (not frozen=True) to enable stateful depth
        tracking. ``descend()`` increments, ``__exit__`` decrements.

    Thread Safety:
        Uses explicit instance state, fully reentrant.
        Each parse maintains its own DepthGuard instance.

    Attributes:
        max_depth: Maximum allowed depth (default: MAX_DEPTH)
        current_depth: Current recursion depth
    """

    max_depth: int = MAX_DEPTH
    current_depth: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        """Clamp max_depth against Python recursion limit."""
        self.max_depth = depth_clamp(self.max_depth)

    def descend(self, position: int = 0, token: str = "") -> DepthGuard:
        """Enter one more level, raising if the limit is already reached.

        Validates the limit BEFORE incrementing so a failed descent leaves
        the counter untouched (``__exit__`` is never called for it).

        Args:
            position: Rule text position reported on failure
            token: Token text reported on failure

        Returns:
            self, for use as a context manager

        Raises:
            DepthLimitExceededError: If depth limit reached
        """
        self.check(position, token)
        self.current_depth += 1
        return self

    def __enter__(self) -> DepthGuard:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit guarded section, decrement depth."""
        self.current_depth -= 1

    def check(self, position: int = 0, token: str = "") -> None:
        """Explicitly check depth and raise if exceeded.

        Args:
            position: Rule text position reported on failure
            token: Token text reported on failure

        Raises:
            DepthLimitExceededError: If depth limit exceeded
        """
        if self.current_depth >= self.max_depth:
            raise DepthLimitExceededError(
                ErrorTemplate.nesting_depth_exceeded(self.max_depth, position, token),
                position=position,
                token=token,
                max_depth=self.max_depth,
            )


def depth_clamp(requested_depth: int, reserve_frames: int = 50) -> int:
    """Clamp requested depth against Python recursion limit.

    Each level of plural rule nesting costs a few interpreter frames in the
    recursive descent parser, so the usable depth is a fraction of the
    recursion limit. Logs warning if clamping occurs.

    Args:
        requested_depth: Desired maximum depth
        reserve_frames: Stack frames to reserve for call overhead (default: 50)

    Returns:
        Safe depth value, clamped if necessary

    Example:
        >>> import sys
        >>> sys.getrecursionlimit()
        1000
        >>> depth_clamp(100)  # OK, within limit
        100
        >>> depth_clamp(500)  # (1000 - 50) // 9 == 105
        105
    """
    max_safe_depth = (sys.getrecursionlimit() - reserve_frames) // _FRAMES_PER_LEVEL
    if requested_depth > max_safe_depth:
        logger.warning(
            "Requested depth %d exceeds Python recursion limit (%d). "
            "Clamping to %d to prevent RecursionError. "
            "Consider increasing sys.setrecursionlimit() if needed.",
            requested_depth,
            sys.getrecursionlimit(),
            max_safe_depth,
        )
        return max_safe_depth
    return requested_depth


# Interpreter frames consumed per guarded level: one conditional, up to six
# binary precedence levels, unary and primary parse functions.
_FRAMES_PER_LEVEL = 9
