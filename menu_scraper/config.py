"""Runtime configuration.

Values are read once at startup from the environment (a ``.env`` file in the
working directory is loaded first). CLI flags override them.
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).parent.parent

FETCH_MODES = ("browser", "http")

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _get_bool(env: Mapping[str, str], key: str, default: bool) -> bool:
    value = env.get(key)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in _TRUE_VALUES


def _get_int(env: Mapping[str, str], key: str, default: int, minimum: int = 0) -> int:
    value = env.get(key)
    if value is None or not value.strip():
        return default
    try:
        parsed = int(value)
    except ValueError as exc:
        raise ValueError(f"{key} must be an integer, got {value!r}") from exc
    if parsed < minimum:
        raise ValueError(f"{key} must be >= {minimum}, got {parsed}")
    return parsed


def _get_path(env: Mapping[str, str], key: str, default: Path | None) -> Path | None:
    value = env.get(key)
    if value is None or not value.strip():
        return default
    return Path(value).expanduser()


@dataclass(frozen=True)
class Config:
    """Settings handed to the navigation layer (never to the extractors)."""

    restaurant_urls: tuple[str, ...] = ()
    max_retries: int = 3
    debug: bool = False
    concurrency: int = 4
    fetch_mode: str = "browser"
    navigation_timeout_ms: int = 60_000
    menu_timeout_ms: int = 30_000
    settle_ms: int = 3_000
    output_dir: Path = field(default_factory=lambda: PROJECT_ROOT / "output")
    db_path: Path | None = None
    patterns_file: Path | None = None

    def __post_init__(self) -> None:
        if self.fetch_mode not in FETCH_MODES:
            raise ValueError(f"fetch_mode must be one of {FETCH_MODES}, got {self.fetch_mode!r}")
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")
        if self.concurrency < 1:
            raise ValueError(f"concurrency must be >= 1, got {self.concurrency}")

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None, *, dotenv: bool = True) -> Config:
        """Build the config from environment variables."""
        if env is None:
            if dotenv:
                load_dotenv()
            env = os.environ

        urls = tuple(u.strip() for u in env.get("MENU_SCRAPER_URL", "").split(",") if u.strip())
        output_dir = _get_path(env, "MENU_SCRAPER_OUTPUT_DIR", None) or PROJECT_ROOT / "output"

        return cls(
            restaurant_urls=urls,
            max_retries=_get_int(env, "MENU_SCRAPER_MAX_RETRIES", 3),
            debug=_get_bool(env, "MENU_SCRAPER_DEBUG", False),
            concurrency=_get_int(env, "MENU_SCRAPER_CONCURRENCY", 4, minimum=1),
            fetch_mode=(env.get("MENU_SCRAPER_FETCH_MODE") or "browser").strip().lower(),
            navigation_timeout_ms=_get_int(env, "MENU_SCRAPER_NAVIGATION_TIMEOUT_MS", 60_000, minimum=1),
            menu_timeout_ms=_get_int(env, "MENU_SCRAPER_MENU_TIMEOUT_MS", 30_000, minimum=1),
            settle_ms=_get_int(env, "MENU_SCRAPER_SETTLE_MS", 3_000),
            output_dir=output_dir,
            db_path=_get_path(env, "MENU_SCRAPER_DB_PATH", None),
            patterns_file=_get_path(env, "MENU_SCRAPER_PATTERNS_FILE", None),
        )

    def with_overrides(self, **overrides: Any) -> Config:
        """Return a copy with the given non-None values replaced."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def to_dict(self) -> dict:
        data = asdict(self)
        for key in ("output_dir", "db_path", "patterns_file"):
            if data[key] is not None:
                data[key] = str(data[key])
        data["restaurant_urls"] = list(self.restaurant_urls)
        return data
