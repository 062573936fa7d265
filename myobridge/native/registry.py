# myobridge/native/registry.py
from __future__ import annotations

from typing import Dict, Type

from .base import NativeLibrary
from .errors import NativeError
from .libmyo import LibMyo


class NativeDriverRegistry:
    """
    Maps driver keys -> concrete NativeLibrary classes.

    Keys are case-insensitive. Construction kwargs come from configuration.
    """

    def __init__(self, drivers: Dict[str, Type[NativeLibrary]]):
        self._drivers: Dict[str, Type[NativeLibrary]] = {k.lower(): v for k, v in drivers.items()}

    @classmethod
    def default(cls) -> "NativeDriverRegistry":
        return cls(drivers={"libmyo": LibMyo})

    def keys(self) -> list[str]:
        return sorted(self._drivers)

    def has(self, driver: str) -> bool:
        return driver.lower() in self._drivers

    def get_class(self, driver: str) -> Type[NativeLibrary]:
        key = driver.lower()
        if key not in self._drivers:
            raise NativeError(f"Native driver '{driver}' not registered")
        return self._drivers[key]

    def create(self, driver: str, **params) -> NativeLibrary:
        """Instantiate (but do not open) a native library by driver key."""
        native_cls = self.get_class(driver)
        return native_cls(**params)
