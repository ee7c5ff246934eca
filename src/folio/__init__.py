"""Folio - a static blog and notes engine."""

__version__ = "0.1.0"
