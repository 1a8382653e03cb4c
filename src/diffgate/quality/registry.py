"""Registry of quality drivers."""

from __future__ import annotations

import copy

from diffgate.core.errors import DriverError
from diffgate.quality.drivers import QualityDriver


class DriverRegistry:
    """Registry of quality drivers, keyed by name."""

    def __init__(self) -> None:
        self._drivers: dict[str, QualityDriver] = {}

    def register(self, driver: QualityDriver) -> None:
        """Register a driver."""
        self._drivers[driver.name] = driver

    def create(self, name: str) -> QualityDriver:
        """Fresh copy of a driver, safe to configure with add_driver_args.

        Raises:
            DriverError: No driver with that name.
        """
        driver = self._drivers.get(name)
        if driver is None:
            raise DriverError.unknown(name, self.names())
        return copy.deepcopy(driver)

    def names(self) -> list[str]:
        """Registered driver names, sorted."""
        return sorted(self._drivers)


# Global registry
registry = DriverRegistry()
