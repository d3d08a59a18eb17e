"""Named estimator presets."""

import logging
import threading
from typing import Iterable, Optional

from token_estimate.estimator import BUILTIN_PRESETS, EstimatorConfig

logger = logging.getLogger(__name__)


class UnknownPresetError(KeyError):
    """Raised when a preset name is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"unknown preset: {self.name}"


class PresetRegistry:
    """Thread-safe mapping of preset name -> EstimatorConfig.

    Seeded with the built-in presets unless ``presets`` is given.
    """

    def __init__(self, presets: Optional[Iterable[EstimatorConfig]] = None) -> None:
        self._lock = threading.Lock()
        self._presets: dict[str, EstimatorConfig] = {}
        for config in BUILTIN_PRESETS if presets is None else presets:
            self.register(config)

    def register(self, config: EstimatorConfig) -> None:
        """Add a preset, overwriting any preset with the same name.

        Presets without a name are ignored.
        """
        if not config.name:
            logger.debug("Ignoring preset without a name")
            return
        with self._lock:
            if config.name in self._presets:
                logger.debug("Overwriting preset %s", config.name)
            self._presets[config.name] = config

    def get(self, name: str) -> EstimatorConfig:
        with self._lock:
            try:
                return self._presets[name]
            except KeyError:
                raise UnknownPresetError(name) from None

    def names(self) -> list[str]:
        """Registered preset names, sorted."""
        with self._lock:
            return sorted(self._presets)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._presets

    def __len__(self) -> int:
        with self._lock:
            return len(self._presets)

