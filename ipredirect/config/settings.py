from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

try:
    from dotenv import load_dotenv

    load_dotenv()
except Exception:
    pass


def _env(*names: str, default: str | None = None) -> str | None:
    for name in names:
        value = os.getenv(name)
        if value is not None and value != "":
            return value
    return default


def _env_int(*names: str, default: int) -> int:
    value = _env(*names, default=None)
    return int(value) if value is not None else default


@dataclass(frozen=True)
class Settings:
    """
    Runtime settings for the redirect engine. Values can be overridden via env vars.
    """

    # Rules document read by the CLI
    rules_file: Path = Path(
        _env("IPREDIRECT_RULES_FILE", default="config/redirect_rules.json") or "config/redirect_rules.json"
    )

    # Language id meaning "visitor is not on a localized page yet"
    no_current_language: int = _env_int("IPREDIRECT_NO_CURRENT_LANGUAGE", default=-2)

    # Logging
    log_level: str = (_env("IPREDIRECT_LOG_LEVEL", default="INFO") or "INFO").upper()


settings = Settings()
