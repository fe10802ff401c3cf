"""Identifier resolution."""

from .global_resolver import GlobalResolver, IdentifierResolver, PatternResolver, default_resolvers

__all__ = ["GlobalResolver", "IdentifierResolver", "PatternResolver", "default_resolvers"]
