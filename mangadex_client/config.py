from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path
from urllib.parse import urlparse

API_URL = "https://api.mangadex.org"
API_DEV_URL = "https://api.mangadex.dev"

CONCURRENCY_MODES = ("exclusive", "shared")


class ConfigurationError(ValueError):
    pass


def parse_base_url(url: str) -> str:
    candidate = (url or "").strip()
    parsed = urlparse(candidate)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigurationError(f"Invalid base URL: {url!r}")
    return candidate.rstrip("/")


@dataclass(frozen=True)
class AppSettings:
    base_url: str = API_URL
    timeout_seconds: float | None = None
    concurrency_mode: str = "exclusive"
    log_level: str = "WARNING"

    @staticmethod
    def from_env() -> "AppSettings":
        _load_dotenv_if_present()

        use_dev = os.getenv("MANGADEX_USE_DEV", "").strip().lower() in ("1", "true", "yes")
        default_url = API_DEV_URL if use_dev else API_URL
        base_url = os.getenv("MANGADEX_BASE_URL", "").strip() or default_url

        raw_timeout = os.getenv("MANGADEX_TIMEOUT_SECONDS", "").strip()
        try:
            timeout_seconds = float(raw_timeout) if raw_timeout else None
        except ValueError as error:
            raise ConfigurationError("MANGADEX_TIMEOUT_SECONDS must be a number") from error

        concurrency_mode = os.getenv("MANGADEX_CONCURRENCY_MODE", "exclusive").strip().lower()
        log_level = os.getenv("MANGADEX_LOG_LEVEL", "WARNING").strip().upper()

        settings = AppSettings(
            base_url=base_url,
            timeout_seconds=timeout_seconds,
            concurrency_mode=concurrency_mode,
            log_level=log_level,
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        parse_base_url(self.base_url)

        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ConfigurationError("MANGADEX_TIMEOUT_SECONDS must be greater than 0")

        if self.concurrency_mode not in CONCURRENCY_MODES:
            raise ConfigurationError(
                "MANGADEX_CONCURRENCY_MODE must be one of: " + ", ".join(CONCURRENCY_MODES)
            )

        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ConfigurationError(f"Unknown MANGADEX_LOG_LEVEL: {self.log_level}")


def _load_dotenv_if_present(file_name: str = ".env") -> None:
    for candidate in _candidate_env_files(file_name):
        _load_env_file(candidate)


def _candidate_env_files(file_name: str) -> list[Path]:
    candidates: list[Path] = []

    explicit = os.getenv("MANGADEX_ENV_FILE", "").strip()
    if explicit:
        candidates.append(Path(explicit).expanduser())

    candidates.append(Path.cwd() / file_name)
    candidates.append(Path(__file__).resolve().parent.parent / file_name)

    unique_candidates: list[Path] = []
    seen: set[str] = set()
    for path in candidates:
        normalized = str(path.resolve()) if path.exists() else str(path)
        if normalized in seen:
            continue
        seen.add(normalized)
        unique_candidates.append(path)
    return unique_candidates


def _load_env_file(path: Path) -> None:
    if not path.exists():
        return

    try:
        with path.open("r", encoding="utf-8") as env_file:
            for raw_line in env_file:
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue

                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip().strip('"').strip("'")

                if key and key.startswith("MANGADEX_") and key not in os.environ:
                    os.environ[key] = value
    except OSError:
        return
