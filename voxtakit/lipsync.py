"""Lip-sync data holders, one per voice line, and the A2F curve provider interface."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, List, Optional, Sequence
from uuid import UUID, uuid4


class LipSyncType(Enum):
    """Lip-sync kinds that can be chosen per character."""

    NONE = "None"
    CUSTOM = "Custom"
    OVR_LIP_SYNC = "OVRLipSync"
    AUDIO2FACE = "Audio2Face"


class LipSyncBaseData(ABC):
    """Lip-sync data for a single voice line, identified by a fresh UUID."""

    def __init__(self, lipsync_type: LipSyncType = LipSyncType.NONE) -> None:
        self._guid = uuid4()
        self._lipsync_type = lipsync_type

    @property
    def guid(self) -> UUID:
        """Unique id generated when this instance was created."""
        return self._guid

    @property
    def lipsync_type(self) -> LipSyncType:
        """The kind of lip-sync this data is for."""
        return self._lipsync_type

    @abstractmethod
    def release_data(self) -> None:
        """Drop the data tied to the voice line; playback is no longer possible."""


class LipSyncDataCustom(LipSyncBaseData):
    """Placeholder data for custom lip-sync; holds nothing of its own."""

    def __init__(self) -> None:
        super().__init__(LipSyncType.CUSTOM)

    def release_data(self) -> None:
        """Nothing is held, so nothing is released."""


class LipSyncDataA2F(LipSyncBaseData):
    """Audio2Face curve weights per frame, together with their frame rate."""

    def __init__(self) -> None:
        super().__init__(LipSyncType.AUDIO2FACE)
        self._frames_per_second = 0
        self._curve_weights: List[List[float]] = []

    def release_data(self) -> None:
        """The curves are kept; there is nothing extra to release."""

    def set_a2f_curve_weights(
        self, source_curves: Sequence[Sequence[float]], frames_per_second: int
    ) -> None:
        """Store a copy of the per-frame curve weights and their frame rate."""
        self._curve_weights = [list(frame) for frame in source_curves]
        self._frames_per_second = frames_per_second

    @property
    def frames_per_second(self) -> int:
        """The frame rate the curves were generated at."""
        return self._frames_per_second

    @property
    def a2f_curve_weights(self) -> List[List[float]]:
        """The stored curve weights, one list per frame."""
        return self._curve_weights


class LipSyncDataOVR(LipSyncBaseData):
    """OVR lip-sync frame sequence for a single voice line."""

    def __init__(self) -> None:
        super().__init__(LipSyncType.OVR_LIP_SYNC)
        self._frame_sequence: Optional[Any] = None

    def release_data(self) -> None:
        """Forget the frame sequence."""
        self._frame_sequence = None

    def set_frame_sequence(self, frame_sequence: Any) -> None:
        """Take ownership of the given frame sequence."""
        self._frame_sequence = frame_sequence

    @property
    def frame_sequence(self) -> Optional[Any]:
        """The stored frame sequence, or None once released or before one is set."""
        return self._frame_sequence


class A2FWeightProvider:
    """Something that can supply the A2F curve weights for the next update tick."""

    def get_a2f_curve_weights_pre_update(self) -> List[float]:
        """Return the curve weights for the upcoming tick; none by default."""
        return []