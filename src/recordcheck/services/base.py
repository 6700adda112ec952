"""BaseService — shared construction for recordcheck services."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from recordcheck.config.settings import RecordcheckSettings


class BaseService:
    """Base for service-layer classes.

    Every service receives the resolved settings at construction and
    gets a structlog logger bound to its class name.
    """

    def __init__(self, settings: RecordcheckSettings) -> None:
        self._settings = settings
        self._log = structlog.get_logger(f"recordcheck.services.{type(self).__name__}")

    @property
    def settings(self) -> RecordcheckSettings:
        return self._settings
