from __future__ import annotations

from typing import Any, Dict, Optional


class IpRedirectError(Exception):
    """Base redirect engine error."""

    def __init__(self, message: str, *, data: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.data = data or {}


class ConfigurationError(IpRedirectError):
    """Raised when the raw redirect configuration cannot be loaded."""

    def __init__(
        self,
        message: str,
        *,
        section: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, data=data)
        self.section = section
