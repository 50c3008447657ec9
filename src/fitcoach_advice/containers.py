"""Dependency container wiring for the application."""

import time
from dataclasses import dataclass

from fitcoach_advice.config import Settings
from fitcoach_advice.services.advice import AdviceService

_PROCESS_STARTED_AT = time.monotonic()


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    advice_service: AdviceService
    started_at: float

    def uptime_seconds(self) -> float:
        """Seconds since the process imported the application."""
        return time.monotonic() - self.started_at


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    advice_service = AdviceService(debug=resolved_settings.advice_debug)
    return AppContainer(
        settings=resolved_settings,
        advice_service=advice_service,
        started_at=_PROCESS_STARTED_AT,
    )
