"""Typed view of the scraper's tunables, read once from the configuration."""
from dataclasses import dataclass
from typing import Optional, Tuple, TYPE_CHECKING

from review_scraper.core.exceptions import ConfigurationError

if TYPE_CHECKING:
    from review_scraper.core.config import ConfigurationManager


@dataclass(frozen=True)
class ScraperSettings:
    """Timeouts and pacing in milliseconds, retry budget in attempts."""
    consent_timeout_ms: int = 300
    consent_settle_ms: int = 500
    language_filter_timeout_ms: int = 1000
    language_settle_ms: int = 1000
    loader_hidden_timeout_ms: int = 30000
    next_button_timeout_ms: int = 30000
    expand_jitter_ms: Tuple[int, int] = (500, 1500)
    advance_jitter_ms: Tuple[int, int] = (500, 2000)
    jitter_seed: Optional[int] = 42
    max_pages: Optional[int] = None
    max_attempts: int = 5
    backoff_base: float = 3

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ConfigurationError(f"retry.max_attempts must be >= 1, got {self.max_attempts}")
        if self.backoff_base < 1:
            raise ConfigurationError(f"retry.backoff_base must be >= 1, got {self.backoff_base}")
        if self.max_pages is not None and self.max_pages < 1:
            raise ConfigurationError(f"components.scraper.max_pages must be >= 1, got {self.max_pages}")
        for name in ("expand_jitter_ms", "advance_jitter_ms"):
            low, high = getattr(self, name)
            if low < 0 or high < low:
                raise ConfigurationError(f"Invalid jitter range for {name}: ({low}, {high})")

    @classmethod
    def from_config(cls, config: 'ConfigurationManager') -> "ScraperSettings":
        """
        Builds settings from `components.scraper.*` and `retry.*`; missing keys keep their defaults.

        Raises:
            ConfigurationError: If a value is not a number or is out of range.
        """
        defaults = cls()

        def _int(key: str, default: Optional[int]) -> Optional[int]:
            value = config.get(key, default)
            if value is None:
                return None
            try:
                return int(value)
            except (TypeError, ValueError):
                raise ConfigurationError(f"Configuration value '{key}' must be an integer, got {value!r}")

        timeouts = "components.scraper.timeouts"
        jitter = "components.scraper.jitter"
        try:
            backoff_base = float(config.get("retry.backoff_base", defaults.backoff_base))
        except (TypeError, ValueError):
            raise ConfigurationError("Configuration value 'retry.backoff_base' must be a number")

        return cls(
            consent_timeout_ms=_int(f"{timeouts}.consent_ms", defaults.consent_timeout_ms),
            consent_settle_ms=_int(f"{timeouts}.consent_settle_ms", defaults.consent_settle_ms),
            language_filter_timeout_ms=_int(f"{timeouts}.language_filter_ms", defaults.language_filter_timeout_ms),
            language_settle_ms=_int(f"{timeouts}.language_settle_ms", defaults.language_settle_ms),
            loader_hidden_timeout_ms=_int(f"{timeouts}.loader_hidden_ms", defaults.loader_hidden_timeout_ms),
            next_button_timeout_ms=_int(f"{timeouts}.next_button_ms", defaults.next_button_timeout_ms),
            expand_jitter_ms=(
                _int(f"{jitter}.expand_min_ms", defaults.expand_jitter_ms[0]),
                _int(f"{jitter}.expand_max_ms", defaults.expand_jitter_ms[1]),
            ),
            advance_jitter_ms=(
                _int(f"{jitter}.advance_min_ms", defaults.advance_jitter_ms[0]),
                _int(f"{jitter}.advance_max_ms", defaults.advance_jitter_ms[1]),
            ),
            jitter_seed=_int(f"{jitter}.seed", defaults.jitter_seed),
            max_pages=_int("components.scraper.max_pages", defaults.max_pages),
            max_attempts=_int("retry.max_attempts", defaults.max_attempts),
            backoff_base=backoff_base,
        )
