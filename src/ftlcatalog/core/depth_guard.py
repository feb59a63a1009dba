"""Depth limiting for recursive expression traversal.

Guards the variable collector against stack overflow from deeply nested
placeables and function calls in hand-written or generated resources.

Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from ftlcatalog.constants import MAX_DEPTH
from ftlcatalog.diagnostics import Diagnostic, DiagnosticCode, FTLCatalogError

__all__ = ["DepthGuard", "DepthLimitExceededError", "depth_clamp"]

logger = logging.getLogger(__name__)


class DepthLimitExceededError(FTLCatalogError):
    """Raised when an expression nests deeper than the configured limit."""

    def __init__(self, max_depth: int) -> None:
        self.max_depth = max_depth
        super().__init__(
            Diagnostic(
                code=DiagnosticCode.DEPTH_EXCEEDED,
                message=f"Maximum expression depth ({max_depth}) exceeded",
                hint="Reduce placeable or function call nesting",
            )
        )


@dataclass(slots=True)
class DepthGuard:
    """Context manager tracking recursion depth.

    Usage:
        guard = DepthGuard()
        with guard:
            result = collect(nested_expr, guard)

    Mutable on purpose: current_depth changes on every enter and exit.

    Attributes:
        max_depth: Maximum allowed depth (default: MAX_DEPTH)
        current_depth: Current recursion depth
    """

    max_depth: int = MAX_DEPTH
    current_depth: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.max_depth = depth_clamp(self.max_depth)

    def __enter__(self) -> DepthGuard:
        # Check before incrementing: __exit__ does not run when __enter__ raises.
        if self.current_depth >= self.max_depth:
            raise DepthLimitExceededError(self.max_depth)
        self.current_depth += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.current_depth -= 1


def depth_clamp(requested_depth: int, reserve_frames: int = 50) -> int:
    """Clamp a requested depth against the interpreter recursion limit.

    Args:
        requested_depth: Desired maximum depth
        reserve_frames: Stack frames kept free for call overhead

    Returns:
        requested_depth, or the largest safe depth if it is lower
    """
    max_safe_depth = sys.getrecursionlimit() - reserve_frames
    if requested_depth > max_safe_depth:
        logger.warning(
            "Requested depth %d exceeds Python recursion limit (%d). Clamping to %d.",
            requested_depth,
            sys.getrecursionlimit(),
            max_safe_depth,
        )
        return max_safe_depth
    return requested_depth
