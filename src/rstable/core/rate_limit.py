"""
Request spacing for polite API clients.

Nominatim's usage policy allows at most one request per second, so the geocoding
job waits until a full interval has passed since its previous request.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field


@dataclass
class RequestSpacer:
    """Keep consecutive calls at least `interval_seconds` apart (0 disables spacing)."""

    interval_seconds: float
    _last_monotonic: float | None = field(default=None, init=False, repr=False)

    @classmethod
    def per_minute(cls, max_per_minute: float) -> "RequestSpacer":
        if max_per_minute <= 0:
            raise ValueError("max_per_minute must be > 0")
        return cls(interval_seconds=60.0 / float(max_per_minute))

    def wait(self) -> None:
        """Block until the next request may go out, then mark it as sent."""
        now = time.monotonic()
        if self._last_monotonic is not None and self.interval_seconds > 0:
            remaining = self.interval_seconds - (now - self._last_monotonic)
            if remaining > 0:
                time.sleep(remaining)
                now = time.monotonic()
        self._last_monotonic = now
