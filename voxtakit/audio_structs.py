"""Audio containers shared by the runtime codecs: encoded bytes, decoded PCM and metadata."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

import numpy as np


class RuntimeAudioFormat(Enum):
    """Audio formats (extensions) the importer knows about."""

    AUTO = "Auto"
    MP3 = "Mp3"
    WAV = "Wav"
    FLAC = "Flac"
    OGG_VORBIS = "OggVorbis"
    BINK = "Bink"
    CUSTOM = "Custom"
    INVALID = "Invalid"


class RawAudioFormat(Enum):
    """Uncompressed PCM sample formats."""

    INT8 = "Int8"
    UINT8 = "UInt8"
    INT16 = "Int16"
    UINT16 = "UInt16"
    INT32 = "Int32"
    UINT32 = "UInt32"
    FLOAT32 = "Float32"


@dataclass
class EditableSubtitleCue:
    """A line of subtitle text and when to show it, in seconds from the start of the line."""

    text: str = ""
    time: float = 0.0


def _validity(size: int) -> str:
    return "Valid" if size > 0 else "Invalid"


@dataclass
class EncodedAudio:
    """Encoded (compressed) audio bytes together with their format."""

    audio_data: bytes = b""
    audio_format: RuntimeAudioFormat = RuntimeAudioFormat.INVALID

    def __post_init__(self) -> None:
        self.audio_data = bytes(self.audio_data)

    def __str__(self) -> str:
        return (
            f"Validity of audio data in memory: {_validity(len(self.audio_data))}, "
            f"audio data size: {len(self.audio_data)}, "
            f"audio format: {self.audio_format.value}"
        )


@dataclass
class SoundWaveBasicInfo:
    """Channel count, sample rate, duration and source format of a sound wave."""

    num_channels: int = 0
    sample_rate: int = 0
    duration: float = 0.0
    audio_format: RuntimeAudioFormat = RuntimeAudioFormat.INVALID

    def is_valid(self) -> bool:
        """True if there is at least one channel and a positive duration."""
        return self.num_channels > 0 and self.duration > 0

    def __str__(self) -> str:
        return (
            f"Number of channels: {self.num_channels}, sample rate: {self.sample_rate}, "
            f"duration: {self.duration:f}"
        )


def _empty_pcm() -> np.ndarray:
    return np.zeros(0, dtype=np.float32)


@dataclass
class PCMInfo:
    """Interleaved 32-bit float PCM samples and the number of frames they hold."""

    pcm_data: np.ndarray = field(default_factory=_empty_pcm)
    num_frames: int = 0

    def __post_init__(self) -> None:
        self.pcm_data = np.asarray(self.pcm_data, dtype=np.float32).ravel()

    def is_valid(self) -> bool:
        """True if there are samples and a positive frame count."""
        return self.num_frames > 0 and self.pcm_data.size > 0

    def __str__(self) -> str:
        return (
            f"Validity of PCM data in memory: {_validity(self.pcm_data.size)}, "
            f"number of PCM frames: {self.num_frames}, "
            f"PCM data size: {self.pcm_data.size}"
        )


@dataclass
class DecodedAudio:
    """Decoded audio: basic sound wave info plus its PCM buffer."""

    sound_wave_basic_info: SoundWaveBasicInfo = field(default_factory=SoundWaveBasicInfo)
    pcm_info: PCMInfo = field(default_factory=PCMInfo)

    def is_valid(self) -> bool:
        """True if both the basic info and the PCM buffer are valid."""
        return self.sound_wave_basic_info.is_valid() and self.pcm_info.is_valid()

    def __str__(self) -> str:
        return (
            f"SoundWave Basic Info:\n{self.sound_wave_basic_info}"
            f"\n\nPCM Info:\n{self.pcm_info}"
        )


@dataclass
class AudioInputDeviceInfo:
    """Description of a platform audio input device."""

    device_name: str = ""
    device_id: str = ""
    input_channels: int = 0
    preferred_sample_rate: int = 0
    supports_hardware_aec: bool = True


@dataclass
class AudioHeaderInfo:
    """Metadata read from the header of encoded audio."""

    duration: float = 0.0
    num_channels: int = 0
    sample_rate: int = 0
    pcm_data_size: int = 0
    audio_format: RuntimeAudioFormat = RuntimeAudioFormat.INVALID

    def __str__(self) -> str:
        return (
            f"Duration: {self.duration:f}, number of channels: {self.num_channels}, "
            f"sample rate: {self.sample_rate}, PCM data size: {self.pcm_data_size}, "
            f"audio format: {self.audio_format.value}"
        )


class RuntimeCodec(ABC):
    """Base of every codec that encodes and decodes one audio format.

    Methods that cannot complete their work raise ``ValueError``.
    """

    @abstractmethod
    def check_audio_format(self, audio_data: bytes) -> bool:
        """True if the given bytes look like audio in this codec's format."""

    @abstractmethod
    def get_header_info(self, encoded_data: EncodedAudio) -> AudioHeaderInfo:
        """Read header information from encoded audio."""

    @abstractmethod
    def encode(self, decoded_data: DecodedAudio, quality: int) -> EncodedAudio:
        """Encode PCM data into this codec's compressed format."""

    @abstractmethod
    def decode(self, encoded_data: EncodedAudio) -> DecodedAudio:
        """Decode compressed audio into PCM data."""

    @abstractmethod
    def audio_format(self) -> RuntimeAudioFormat:
        """The format handled by this codec."""

    @abstractmethod
    def is_extension_supported(self, extension: str) -> bool:
        """True if files with this extension are handled by this codec."""