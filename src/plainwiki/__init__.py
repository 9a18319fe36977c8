"""plainwiki - a minimal wiki of plain-text pages."""

__version__ = "0.1.0"
