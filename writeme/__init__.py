"""Infer README metadata from a project's config files and git history."""

__version__ = "0.1.0"
