"""Conversions on uncompressed PCM data: sample format, sample rate and channel count."""

import logging
from typing import Dict, Tuple, Union

import numpy as np

from .audio_structs import RawAudioFormat

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]

_DTYPES: Dict[RawAudioFormat, np.dtype] = {
    RawAudioFormat.INT8: np.dtype("<i1"),
    RawAudioFormat.UINT8: np.dtype("<u1"),
    RawAudioFormat.INT16: np.dtype("<i2"),
    RawAudioFormat.UINT16: np.dtype("<u2"),
    RawAudioFormat.INT32: np.dtype("<i4"),
    RawAudioFormat.UINT32: np.dtype("<u4"),
    RawAudioFormat.FLOAT32: np.dtype("<f4"),
}


def raw_min_max(raw_format: RawAudioFormat) -> Tuple[int, int]:
    """Return the (minimum, maximum) sample value of a raw format.

    Integer formats span their full numeric range; 32-bit float spans -1 to 1.
    """
    try:
        dtype = _DTYPES[raw_format]
    except KeyError:
        raise ValueError(f"Unsupported RAW format: {raw_format!r}") from None
    if raw_format is RawAudioFormat.FLOAT32:
        return -1, 1
    info = np.iinfo(dtype)
    return int(info.min), int(info.max)


def transcode_raw_data(
    data: BytesLike, from_format: RawAudioFormat, to_format: RawAudioFormat
) -> bytes:
    """Convert little-endian raw samples from one format to another.

    Each sample is mapped linearly from the source range onto the target range,
    clamped, and truncated toward zero for integer targets. Trailing bytes that
    do not make up a whole sample are ignored.
    """
    from_dtype = _DTYPES.get(from_format)
    to_dtype = _DTYPES.get(to_format)
    if from_dtype is None or to_dtype is None:
        raise ValueError(f"Unsupported RAW format: {from_format!r} -> {to_format!r}")
    from_min, from_max = raw_min_max(from_format)
    to_min, to_max = raw_min_max(to_format)

    raw = bytes(data)
    num_samples = len(raw) // from_dtype.itemsize
    samples = np.frombuffer(raw[: num_samples * from_dtype.itemsize], dtype=from_dtype)

    values = samples.astype(np.float64)
    fraction = np.clip((values - from_min) / (from_max - from_min), 0.0, 1.0)
    mapped = np.clip(to_min + fraction * (to_max - to_min), to_min, to_max)

    if to_format is RawAudioFormat.FLOAT32:
        converted = mapped.astype(to_dtype)
    else:
        converted = np.trunc(mapped).astype(to_dtype)

    logger.info(
        "Transcoding RAW data of size '%d' (min: %d, max: %d) to size '%d' (min: %d, max: %d)",
        from_dtype.itemsize,
        from_min,
        from_max,
        to_dtype.itemsize,
        to_min,
        to_max,
    )
    return converted.tobytes()


def _as_float_samples(data) -> np.ndarray:
    return np.asarray(data, dtype=np.float32).ravel()


def resample_raw_data(
    data, num_channels: int, source_sample_rate: int, destination_sample_rate: int
) -> np.ndarray:
    """Resample interleaved float PCM to another sample rate.

    Each channel is interpolated linearly; the result has
    ``round(frames * destination / source)`` frames.
    """
    if num_channels <= 0:
        raise ValueError(
            f"Unable to resample audio data because the number of channels is invalid ({num_channels})"
        )
    if source_sample_rate <= 0:
        raise ValueError(
            "Unable to resample audio data because the source sample rate is invalid "
            f"({source_sample_rate})"
        )
    if destination_sample_rate <= 0:
        raise ValueError(
            "Unable to resample audio data because the destination sample rate is invalid "
            f"({destination_sample_rate})"
        )

    samples = _as_float_samples(data)
    if source_sample_rate == destination_sample_rate:
        return samples.copy()

    num_frames = samples.size // num_channels
    frames = samples[: num_frames * num_channels].reshape(num_frames, num_channels)
    out_frames = int(round(num_frames * destination_sample_rate / source_sample_rate))
    if num_frames == 0 or out_frames == 0:
        return np.zeros(0, dtype=np.float32)

    source_positions = np.arange(num_frames, dtype=np.float64)
    target_positions = np.arange(out_frames, dtype=np.float64) * (
        source_sample_rate / destination_sample_rate
    )
    resampled = np.column_stack(
        [np.interp(target_positions, source_positions, frames[:, ch]) for ch in range(num_channels)]
    )
    return resampled.astype(np.float32).ravel()


def mix_channels_raw_data(
    data, sample_rate: int, source_num_channels: int, destination_num_channels: int
) -> np.ndarray:
    """Remix interleaved float PCM to another number of channels.

    When reducing, output channel ``i`` is the mean of the source channels whose
    index modulo the destination count is ``i`` (so a mono downmix averages all
    channels). When increasing, output channel ``i`` copies source channel
    ``i % source_num_channels`` (so mono is duplicated to every channel).
    """
    if sample_rate <= 0:
        raise ValueError(
            f"Unable to mix audio data because the sample rate is invalid ({sample_rate})"
        )
    if source_num_channels <= 0:
        raise ValueError(
            "Unable to mix audio data because the source number of channels is invalid "
            f"({source_num_channels})"
        )
    if destination_num_channels <= 0:
        raise ValueError(
            "Unable to mix audio data because the destination number of channels is invalid "
            f"({destination_num_channels})"
        )

    samples = _as_float_samples(data)
    if source_num_channels == destination_num_channels:
        return samples.copy()

    num_frames = samples.size // source_num_channels
    frames = samples[: num_frames * source_num_channels].reshape(
        num_frames, source_num_channels
    ).astype(np.float64)

    if destination_num_channels > source_num_channels:
        mapping = np.arange(destination_num_channels) % source_num_channels
        mixed = frames[:, mapping]
    else:
        groups = np.arange(source_num_channels) % destination_num_channels
        mixed = np.column_stack(
            [frames[:, groups == out].mean(axis=1) for out in range(destination_num_channels)]
        )
    return mixed.astype(np.float32).ravel()