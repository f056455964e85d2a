import pytest

from voxtakit.a2f_playback import CURVE_NAMES, Audio2FacePlaybackHandler, AudioComponent
from voxtakit.lipsync import LipSyncDataA2F


def _data(frames, fps=1):
    data = LipSyncDataA2F()
    data.set_a2f_curve_weights(frames, fps)
    return data


def _playing(frames, fps=1):
    component = AudioComponent()
    handler = Audio2FacePlaybackHandler()
    handler.initialize(component)
    handler.play(_data(frames, fps))
    return handler, component


def test_weights_map_onto_arkit_curve_names():
    frame = [index / 52 for index in range(52)]
    handler, component = _playing([frame])
    component.notify_playback_percent(1.0, 0.0)
    weights = handler.get_a2f_curve_weights()
    assert len(weights) == len(CURVE_NAMES) == 52
    named = dict(zip(CURVE_NAMES, weights))
    assert len(named) == 52
    assert named["EyeBlinkLeft"] == frame[0]
    assert named["TongueOut"] == frame[51]


def test_neutral_before_play():
    handler = Audio2FacePlaybackHandler()
    assert handler.get_a2f_curve_weights() == []


def test_play_without_component_raises():
    handler = Audio2FacePlaybackHandler()
    with pytest.raises(RuntimeError):
        handler.play(_data([[0.1]]))


def test_play_starts_component_and_registers_listeners():
    handler, component = _playing([[0.1, 0.2]])
    assert component.play_count == 1
    assert component.listener_count == 2


def test_exact_frame_is_copied():
    frames = [[0.1, 0.2], [0.3, 0.4], [0.5, 0.6]]
    handler, component = _playing(frames)
    component.notify_playback_percent(2.0, 0.5)
    assert handler.get_a2f_curve_weights() == frames[1]


def test_interpolation_between_frames():
    handler, component = _playing([[0.0, 0.0], [2.0, 4.0]])
    component.notify_playback_percent(1.0, 0.5)
    assert handler.get_a2f_curve_weights() == pytest.approx([1.0, 2.0])


def test_interpolated_values_lie_between_frames():
    frames = [[0.2, 0.9], [0.8, 0.1]]
    handler, component = _playing(frames)
    for percent in (0.1, 0.3, 0.7, 0.9):
        component.notify_playback_percent(1.0, percent)
        for value, low, high in zip(handler.get_a2f_curve_weights(), *frames):
            assert min(low, high) <= value <= max(low, high)


def test_clamps_on_last_frame():
    frames = [[0.1], [0.7]]
    handler, component = _playing(frames)
    component.notify_playback_percent(1.0, 1.4)
    assert handler.get_a2f_curve_weights() == frames[-1]


def test_out_of_bounds_goes_neutral():
    handler, component = _playing([[0.1], [0.7]])
    component.notify_playback_percent(1.0, 0.0)
    assert handler.get_a2f_curve_weights() == [0.1]
    component.notify_playback_percent(1.0, 2.0)
    assert handler.get_a2f_curve_weights() == []


def test_finished_returns_to_neutral():
    handler, component = _playing([[0.3]])
    component.notify_playback_percent(1.0, 0.0)
    assert handler.get_a2f_curve_weights() == [0.3]
    component.notify_finished()
    assert handler.get_a2f_curve_weights() == []


def test_stop_removes_listeners_and_goes_neutral():
    handler, component = _playing([[0.3]])
    component.notify_playback_percent(1.0, 0.0)
    handler.stop()
    assert component.listener_count == 0
    assert handler.get_a2f_curve_weights() == []


def test_stop_without_component_keeps_neutral():
    handler = Audio2FacePlaybackHandler()
    handler.stop()
    assert handler.get_a2f_curve_weights() == []


def test_remove_unknown_listener():
    component = AudioComponent()
    assert component.remove_listener(12345) is False
    handle = component.add_finished_listener(lambda: None)
    assert component.remove_listener(handle) is True


def test_percent_without_data_goes_neutral():
    handler = Audio2FacePlaybackHandler()
    handler.on_audio_playback_percent(1.0, 0.5)
    assert handler.get_a2f_curve_weights() == []


def test_returned_weights_are_a_copy():
    frames = [[0.4, 0.5]]
    handler, component = _playing(frames)
    component.notify_playback_percent(1.0, 0.0)
    weights = handler.get_a2f_curve_weights()
    weights.append(9.0)
    assert handler.get_a2f_curve_weights() == frames[0]