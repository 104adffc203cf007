"""
JSON file storage for scrape results.

`FileStorage` writes the results array (one record per committed entity) to
an explicit output path. Relative paths resolve against
the configured base directory, which defaults to the working directory.
"""
import json
import os
from typing import Iterable, List, Optional, Union, TYPE_CHECKING

from review_scraper.core.exceptions import StorageError
from review_scraper.core.logger import get_logger
from review_scraper.models.records import EntityReviews

if TYPE_CHECKING:
    from review_scraper.core.config import ConfigurationManager

logger = get_logger(__name__)


class FilePathError(StorageError):
    """Raised for unusable file paths, such as an empty output path."""
    def __init__(self, message: str):
        super().__init__(message=message)


class SerializationError(StorageError):
    """Raised when data cannot be encoded to JSON."""
    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        full_message = f"Serialization error: {message}"
        if original_exception:
            full_message += f" (Original exception: {str(original_exception)})"
        super().__init__(message=full_message)
        self.original_exception = original_exception


class FileStorage:
    """Saves JSON documents on the local file system."""

    def __init__(self, config: Optional['ConfigurationManager'] = None):
        configured_base_path = config.get('components.file_storage.base_path') if config else None
        self.base_path = os.path.abspath(configured_base_path or os.getcwd())
        logger.debug(f"FileStorage resolving relative paths against: {self.base_path}")

    def resolve(self, path: str) -> str:
        if not path or not str(path).strip():
            raise FilePathError("Output path cannot be empty.")
        path = os.path.expanduser(str(path).strip())
        return path if os.path.isabs(path) else os.path.join(self.base_path, path)

    def save_json(self, data: Union[dict, list], path: str) -> str:
        """
        Writes `data` as indented UTF-8 JSON, replacing any existing file.

        Returns:
            str: The absolute path written.

        Raises:
            FilePathError: If `path` is empty.
            SerializationError: If `data` is not JSON serializable.
            StorageError: For other I/O errors.
        """
        full_path = self.resolve(path)
        try:
            payload = json.dumps(data, indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Failed to serialize data for '{full_path}'", original_exception=e)

        try:
            parent = os.path.dirname(full_path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(full_path, "w", encoding="utf-8") as f:
                f.write(payload)
        except OSError as e:
            logger.error(f"Failed to save JSON to '{full_path}': {e}", exc_info=True)
            raise StorageError(message=f"Failed to save JSON to file '{full_path}': {e}")
        logger.info(f"Data successfully saved to {full_path}")
        return full_path

    def save_results(self, records: Iterable[EntityReviews], path: str) -> str:
        """Writes the output array `[{Name, Ranking, Url, Address, Reviews}, ...]`."""
        output: List[dict] = [record.to_output() for record in records]
        logger.info(f"Saving reviews of {len(output)} restaurants.")
        return self.save_json(output, path)
