"""Artifact generators for depflat-core."""

from artifacts.generators.dependencies import DependenciesGenerator

__all__ = ["DependenciesGenerator"]
