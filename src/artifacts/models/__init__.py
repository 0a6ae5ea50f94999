"""Model namespace for depflat-core artifact schemas."""

from artifacts.models.dependencies import DependencyRecord

__all__ = ["DependencyRecord"]
