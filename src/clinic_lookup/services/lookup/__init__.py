"""Clinic distance lookup services."""

from .service import build_lookup, persist_outputs, select_regions

__all__ = ["build_lookup", "persist_outputs", "select_regions"]
