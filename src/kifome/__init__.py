"""Kifome: shopping-list consolidation for generated recipes and weekly meal plans."""

__version__ = "0.1.0"
