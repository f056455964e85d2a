"""Plays Audio2Face curve data in sync with an audio component's playback."""

import logging
import math
from itertools import count
from typing import Callable, Dict, List, Optional, Tuple

from .lipsync import LipSyncDataA2F

logger = logging.getLogger(__name__)

# ARKit blend shape names, in the order the A2F curve weights are produced.
CURVE_NAMES: Tuple[str, ...] = (
    "EyeBlinkLeft",
    "EyeLookDownLeft",
    "EyeLookInLeft",
    "EyeLookOutLeft",
    "EyeLookUpLeft",
    "EyeSquintLeft",
    "EyeWideLeft",
    "EyeBlinkRight",
    "EyeLookDownRight",
    "EyeLookInRight",
    "EyeLookOutRight",
    "EyeLookUpRight",
    "EyeSquintRight",
    "EyeWideRight",
    "JawForward",
    "JawLeft",
    "JawRight",
    "JawOpen",
    "MouthClose",
    "MouthFunnel",
    "MouthPucker",
    "MouthLeft",
    "MouthRight",
    "MouthSmileLeft",
    "MouthSmileRight",
    "MouthFrownLeft",
    "MouthFrownRight",
    "MouthDimpleLeft",
    "MouthDimpleRight",
    "MouthStretchLeft",
    "MouthStretchRight",
    "MouthRollLower",
    "MouthRollUpper",
    "MouthShrugLower",
    "MouthShrugUpper",
    "MouthPressLeft",
    "MouthPressRight",
    "MouthLowerDownLeft",
    "MouthLowerDownRight",
    "MouthUpperUpLeft",
    "MouthUpperUpRight",
    "BrowDownLeft",
    "BrowDownRight",
    "BrowInnerUp",
    "BrowOuterUpLeft",
    "BrowOuterUpRight",
    "CheekPuff",
    "CheekSquintLeft",
    "CheekSquintRight",
    "NoseSneerLeft",
    "NoseSneerRight",
    "TongueOut",
)

PercentCallback = Callable[[float, float], None]
FinishedCallback = Callable[[], None]

_PERCENT = "percent"
_FINISHED = "finished"


class AudioComponent:
    """A minimal audio source that reports playback progress to listeners."""

    def __init__(self) -> None:
        self._handles = count(1)
        self._listeners: Dict[int, Tuple[str, Callable]] = {}
        self.play_count = 0

    def play(self) -> None:
        """Start playback."""
        self.play_count += 1

    def add_playback_percent_listener(self, callback: PercentCallback) -> int:
        """Register a (duration, percent) callback and return its handle."""
        handle = next(self._handles)
        self._listeners[handle] = (_PERCENT, callback)
        return handle

    def add_finished_listener(self, callback: FinishedCallback) -> int:
        """Register a playback-finished callback and return its handle."""
        handle = next(self._handles)
        self._listeners[handle] = (_FINISHED, callback)
        return handle

    def remove_listener(self, handle: Optional[int]) -> bool:
        """Unregister a listener; return whether it was registered."""
        return self._listeners.pop(handle, None) is not None

    @property
    def listener_count(self) -> int:
        """Number of currently registered listeners."""
        return len(self._listeners)

    def _callbacks(self, kind: str) -> List[Callable]:
        return [cb for cb_kind, cb in self._listeners.values() if cb_kind == kind]

    def notify_playback_percent(self, duration: float, percent: float) -> None:
        """Report progress through a sound of the given duration (seconds)."""
        for callback in self._callbacks(_PERCENT):
            callback(duration, percent)

    def notify_finished(self) -> None:
        """Report that playback has finished."""
        for callback in self._callbacks(_FINISHED):
            callback()


class Audio2FacePlaybackHandler:
    """Keeps A2F curve weights in step with one character's audio playback."""

    CURVE_NAMES = CURVE_NAMES

    def __init__(self) -> None:
        self._audio_component: Optional[AudioComponent] = None
        self._lipsync_data: Optional[LipSyncDataA2F] = None
        self._percent_handle: Optional[int] = None
        self._finished_handle: Optional[int] = None
        self._current_curves: List[float] = []
        self._forced_neutral = True

    def initialize(self, audio_component: AudioComponent) -> None:
        """Register the audio component that playback is synced with."""
        self._audio_component = audio_component

    def get_a2f_curve_weights(self) -> List[float]:
        """Curve weights for the upcoming frame; empty when in the neutral pose."""
        if self._forced_neutral:
            return []
        return list(self._current_curves)

    def play(self, lipsync_data: LipSyncDataA2F) -> None:
        """Start the audio along with the given A2F data."""
        if self._audio_component is None:
            raise RuntimeError("no audio component; call initialize() first")
        self._lipsync_data = lipsync_data
        self._forced_neutral = False
        logger.info("Starting playback of audio, along with A2F lip syncing.")
        self._percent_handle = self._audio_component.add_playback_percent_listener(
            self.on_audio_playback_percent
        )
        self._finished_handle = self._audio_component.add_finished_listener(
            self.on_audio_playback_finished
        )
        self._audio_component.play()

    def stop(self) -> None:
        """Stop following the audio and return to the neutral pose."""
        if self._audio_component is None:
            return
        self._audio_component.remove_listener(self._percent_handle)
        self._audio_component.remove_listener(self._finished_handle)
        self._percent_handle = None
        self._finished_handle = None
        self._audio_component = None
        self._init_neutral_pose()

    def on_audio_playback_percent(self, duration: float, percent: float) -> None:
        """Update the current curves for the given position, interpolating frames."""
        data = self._lipsync_data
        if data is None:
            self._init_neutral_pose()
            return
        frames = data.a2f_curve_weights
        current_frame = duration * data.frames_per_second * percent
        total_frames = len(frames)
        closest_frame = math.floor(current_frame + 0.5)
        if closest_frame >= total_frames:
            self._init_neutral_pose()
            logger.error("The closest frame was outside of bounds, this should be impossible.")
            return
        if math.isclose(current_frame, closest_frame, rel_tol=0.0, abs_tol=1e-8):
            self._current_curves = list(frames[closest_frame])
            return
        ceiling_frame = math.ceil(current_frame)
        floor_frame = math.floor(current_frame)
        if ceiling_frame < total_frames:
            blend = current_frame - floor_frame
            self._current_curves = [
                low * (1.0 - blend) + high * blend
                for low, high in zip(frames[floor_frame], frames[ceiling_frame])
            ]
        else:
            logger.warning("Requesting more frames than rendered by A2F, clamping on last frame.")
            self._current_curves = list(frames[total_frames - 1])

    def on_audio_playback_finished(self) -> None:
        """Return to the neutral pose once the audio has finished."""
        self._init_neutral_pose()

    def _init_neutral_pose(self) -> None:
        logger.info("Defaulting A2F lipsync pose back to neutral.")
        self._forced_neutral = True