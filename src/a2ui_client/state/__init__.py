"""Client-side surface state."""

from .store import Surface, SurfaceStateStore

__all__ = ["Surface", "SurfaceStateStore"]
