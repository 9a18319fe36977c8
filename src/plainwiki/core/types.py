"""Core type definitions."""

from typing import NewType

# Page title that has passed route validation ([a-zA-Z0-9]+).
# Distinct from plain str so raw URL segments are not mistaken for safe titles
PageTitle = NewType("PageTitle", str)
