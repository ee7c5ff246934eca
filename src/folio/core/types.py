"""Core type definitions."""

from typing import NewType

# Slug-shaped URL path for routing (e.g., "/", "/notes/lti-notes/")
# Distinct from filesystem Path to catch type mismatches
URLPath = NewType("URLPath", str)
