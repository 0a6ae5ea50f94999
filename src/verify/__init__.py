"""Determinism checks for generated dependency listings."""
