"""Artifact models exposed at the contract boundary."""

from artifacts.models.dependencies import DependencyRecord

__all__ = ["DependencyRecord"]
