"""Animation step that applies A2F curve weights to named ARKit curves."""

import logging
from typing import List, MutableMapping, Optional

from .a2f_playback import CURVE_NAMES
from .lipsync import A2FWeightProvider

logger = logging.getLogger(__name__)


class ApplyCustomCurvesNode:
    """Caches curve weights before each update and writes them onto a pose's curves."""

    def __init__(self) -> None:
        self._curve_source: Optional[A2FWeightProvider] = None
        self._cached_weights: List[float] = []

    @property
    def cached_weights(self) -> List[float]:
        """Weights fetched at the most recent pre-update."""
        return list(self._cached_weights)

    def pre_update(self, curve_source: Optional[A2FWeightProvider]) -> None:
        """Fetch fresh weights; the first provider given is kept for later updates."""
        if self._curve_source is None:
            if curve_source is None:
                logger.error(
                    "Could not find the A2F curveweight provider on the character. "
                    "Did you forget to add the audio playback component?"
                )
            else:
                self._curve_source = curve_source
        if self._curve_source is not None:
            self._cached_weights = list(self._curve_source.get_a2f_curve_weights_pre_update())

    def evaluate(self, curves: MutableMapping[str, float]) -> MutableMapping[str, float]:
        """Set the cached weights on the ARKit-named curves and return the mapping."""
        for name, weight in zip(CURVE_NAMES, self._cached_weights):
            curves[name] = weight
        return curves