"""Dox: documentation build-and-deploy pipeline."""

__version__ = "0.1.0"
