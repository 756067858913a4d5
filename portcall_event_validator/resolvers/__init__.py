"""Discriminated union resolution."""

from .variant_resolver import VariantResolver

__all__ = ["VariantResolver"]
