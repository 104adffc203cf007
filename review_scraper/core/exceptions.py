"""
Custom exception classes for the review scraper.

Errors fall into three groups that drive control flow:

- Soft failures (an expected element is absent) never surface as exceptions
  outside the renderer; see `PageDriver.find`.
- Hard failures (`RendererError`, `ExtractorError`, ...) propagate from the
  entity pipeline up to the `RetryCoordinator`.
- `RetryExhaustedError` is fatal and ends the process after a checkpoint.
"""
from typing import Optional


class ReviewScraperError(Exception):
    """
    Base class for all custom exceptions in the review scraper.

    Attributes:
        message (str): A human-readable description of the error.
    """
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.__class__.__name__}: {self.message}"


# --- Configuration / input ---
class ConfigurationError(ReviewScraperError):
    """Raised when configuration values are missing or invalid."""


class InputFileError(ReviewScraperError):
    """
    Raised when the entity input file cannot be read or lacks the expected columns.

    Attributes:
        path (str): Path of the offending input file.
    """
    def __init__(self, path: str, message: str):
        super().__init__(f"Input file '{path}': {message}")
        self.path = path


# --- Component errors ---
class ComponentError(ReviewScraperError):
    """
    A general base class for errors originating from within a specific component
    (Renderer, Extractor, Storage).

    Attributes:
        component_name (str): Name of the component where the error originated.
    """
    def __init__(self, component_name: str, message: str):
        full_message = f"Error in component '{component_name}': {message}"
        super().__init__(full_message)
        self.component_name = component_name


class RendererError(ComponentError):
    """Raised when the browser session fails (navigation, clicks, script evaluation)."""
    def __init__(self, message: str):
        super().__init__(component_name="Renderer", message=message)


class SelectorTimeoutError(RendererError):
    """
    Raised by `PageDriver.wait_for_selector` when a selector does not reach the
    requested state before the timeout.

    Attributes:
        selector (str): The CSS selector that was waited on.
        timeout_ms (int): The timeout that expired, in milliseconds.
    """
    def __init__(self, selector: str, timeout_ms: int):
        super().__init__(f"Timed out after {timeout_ms}ms waiting for selector '{selector}'")
        self.selector = selector
        self.timeout_ms = timeout_ms


class ExtractorError(ComponentError):
    """Raised when a review fragment or entity page lacks an expected element or cannot be decoded."""
    def __init__(self, message: str):
        super().__init__(component_name="Extractor", message=message)


class StorageError(ComponentError):
    """Raised for errors writing or reading result files."""
    def __init__(self, message: str):
        super().__init__(component_name="Storage", message=message)


# --- Run state ---
class StateError(ReviewScraperError):
    """Raised when a `WorkState` invariant would be violated (e.g. committing an entity twice)."""


class RetryExhaustedError(ReviewScraperError):
    """
    Raised by the `RetryCoordinator` once every attempt has failed. The partial
    results have already been checkpointed when this is raised.

    Attributes:
        attempts (int): Number of attempts made.
        last_error (Optional[Exception]): The failure of the final attempt.
    """
    def __init__(self, attempts: int, last_error: Optional[Exception] = None):
        message = f"Scrape run failed after {attempts} attempts"
        if last_error is not None:
            message += f" (last error: {last_error})"
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error
