"""
Storage component for the review scraper.

Reads the input list of restaurants and writes the JSON results file.
"""
from .file_storage import (
    FileStorage,
    FilePathError,
    SerializationError,
)
from .input_loader import load_entities

__all__ = [
    "FileStorage",
    "FilePathError",
    "SerializationError",
    "load_entities",
]
