# voxtakit

Building blocks for a client of a Voxta chat server that drives a speaking
character: chat data models, typed server responses, lip-sync data holders,
Audio2Face curve playback and a few raw PCM helpers.

## Modules

- `voxtakit.states` has the `VoxtaClientState` and `MessageChunkState` enumerations.
- `voxtakit.characters` has frozen dataclasses for characters: `BaseCharData`
  (`id`, `name`), `AiCharData` (adds `creator_notes`, `allowed_explicit_content`,
  `is_favorite`) and `UserCharData`.
- `voxtakit.chat` has:
  - `ServiceType` and the frozen `ServiceData` (`service_type`, `name`, `id`).
  - `ChatMessage`. `append_more_content(text, audio_url)` appends text and
    records the audio url only when it is not empty.
  - `ChatSession`, which holds the characters, chat and session ids, services and
    message history. It has `character_ids()`, `active_services` and
    `ChatSession.create(...)`.
- `voxtakit.responses` has read-only response dataclasses. Each class carries
  `response_type` (a `ServerResponseType`):
  - `ServerResponseWelcome`, `ServerResponseCharacterList`,
    `ServerResponseCharacterLoaded`, `ServerResponseChatStarted`,
    `ServerResponseChatUpdate`, `ServerResponseError` and
    `ServerResponseSpeechTranscription` (with `TranscriptionState`).
  - The reply messages `ServerResponseChatMessageStart`, `...Chunk`, `...End`
    and `...Cancelled`. These also carry `message_type` (a `ChatMessageType`).
- `voxtakit.lipsync` has `LipSyncType` and the abstract `LipSyncBaseData`. Each
  instance gets a fresh `guid`. The concrete classes are `LipSyncDataCustom`,
  `LipSyncDataA2F` (per-frame curve weights plus `frames_per_second`) and
  `LipSyncDataOVR` (an opaque frame sequence). The module also has the
  `A2FWeightProvider` interface.
- `voxtakit.a2f_playback` has:
  - `CURVE_NAMES`, the 52 ARKit blendshape names.
  - `AudioComponent`, a small event source. `notify_playback_percent(duration,
    percent)` and `notify_finished()` call the listeners registered on it.
  - `Audio2FacePlaybackHandler`, which follows that component's progress. It
    interpolates linearly between A2F frames and clamps on the last frame. From
    `get_a2f_curve_weights()` it returns an empty list while in the neutral pose.
- `voxtakit.curves` has `ApplyCustomCurvesNode`. `pre_update(provider)` caches
  weights from an `A2FWeightProvider`. `evaluate(curves)` writes them into a
  mapping under the ARKit names.
- `voxtakit.a2f_rest` has `Audio2FaceRESTHandler`, which uses `requests` to talk
  to a headless Audio2Face REST API (default `http://localhost:8011`).
  - `try_initialize()` checks the status, loads the USD file from `content_dir`
    and sets the player root path.
  - `get_blendshapes(wav, path, name, callback)` sets the track and exports the
    blendshapes as JSON. The callback receives the file path and a success flag.
    The call raises `RuntimeError` unless the handler is idle; check `is_busy()`
    first.
  - Work runs in the calling thread, or on an `executor` when one is given.
- `voxtakit.audio_structs` has the audio containers `EncodedAudio`,
  `SoundWaveBasicInfo`, `PCMInfo` (float32 numpy samples), `DecodedAudio`,
  `AudioHeaderInfo`, `AudioInputDeviceInfo` and `EditableSubtitleCue`. It also
  has the format enums `RuntimeAudioFormat` and `RawAudioFormat`, and the
  abstract `RuntimeCodec` base class.
- `voxtakit.raw_codec` has:
  - `raw_min_max(format)`.
  - `transcode_raw_data(data, from_format, to_format)`, which maps values
    linearly between the ranges of the raw formats, on little-endian bytes.
  - `resample_raw_data(...)`, which does linear interpolation per channel.
  - `mix_channels_raw_data(...)`, which averages channels when reducing and
    copies them when increasing.
  - Invalid rates or channel counts raise `ValueError`.

## Example

```python
from voxtakit.chat import ChatMessage

message = ChatMessage("message-1", "character-1")
message.append_more_content("Hello ", "/audio/chunk-1.wav")
message.append_more_content("there!", "")
print(message.text)        # "Hello there!"
print(message.audio_urls)  # ["/audio/chunk-1.wav"]
```

```python
import numpy as np
from voxtakit.audio_structs import RawAudioFormat
from voxtakit.raw_codec import transcode_raw_data

pcm16 = np.array([0, 16384, -32768], dtype="<i2").tobytes()
floats = np.frombuffer(
    transcode_raw_data(pcm16, RawAudioFormat.INT16, RawAudioFormat.FLOAT32),
    dtype="<f4",
)
```

## What it does not do

This is a library of parts, not a complete client. It does not do the following:

- It does not connect to a chat server or parse server messages into the
  response objects.
- It does not capture microphone audio or stream it over a websocket.
- It does not play sound. `AudioComponent` only relays the progress events you
  feed it.
- It does not contain a concrete `RuntimeCodec`, so no WAV, MP3 or other format
  is decoded or encoded.

## Running the tests

```
pip install -e ".[test]"
pytest
```