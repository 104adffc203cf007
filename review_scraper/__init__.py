"""Scrapes restaurant reviews with a browser and writes them to JSON."""

__version__ = "0.1.0"
