"""Core infrastructure shared across FTLCatalog packages.

Python 3.13+.
"""

from .depth_guard import DepthGuard, DepthLimitExceededError, depth_clamp

__all__ = [
    "DepthGuard",
    "DepthLimitExceededError",
    "depth_clamp",
]
