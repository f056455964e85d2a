import json
from concurrent.futures import ThreadPoolExecutor

import pytest
import requests
import responses

from voxtakit.a2f_rest import A2FState, Audio2FaceRESTHandler

BASE = "http://localhost:8011"
CONTENT_DIR = "C:\\plugin\\Content"


@pytest.fixture
def mock_http():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


def _register_init(rsps, status_body='"OK"', load_error=False):
    rsps.add(responses.GET, f"{BASE}/status", body=status_body)
    if load_error:
        rsps.add(
            responses.POST, f"{BASE}/A2F/USD/Load", body=requests.ConnectionError("down")
        )
    else:
        rsps.add(responses.POST, f"{BASE}/A2F/USD/Load", json={"status": "OK"})
    rsps.add(responses.POST, f"{BASE}/A2F/Player/SetRootPath", json={"status": "OK"})


def _initialized_handler(rsps):
    _register_init(rsps)
    handler = Audio2FaceRESTHandler(CONTENT_DIR)
    handler.try_initialize()
    return handler


def _body(call):
    return json.loads(call.request.body)


def test_initialize_success_becomes_idle(mock_http):
    handler = _initialized_handler(mock_http)
    assert handler.state is A2FState.IDLE
    assert handler.is_busy() is False
    assert handler.is_initializing() is False
    assert [c.request.url for c in mock_http.calls] == [
        f"{BASE}/status",
        f"{BASE}/A2F/USD/Load",
        f"{BASE}/A2F/Player/SetRootPath",
    ]


def test_initialize_request_bodies(mock_http):
    handler = _initialized_handler(mock_http)
    assert handler.state is A2FState.IDLE
    load_body = _body(mock_http.calls[1])
    assert load_body == {"file_name": CONTENT_DIR + "\\claire_solved_arkit.usd"}
    root_body = _body(mock_http.calls[2])
    assert root_body["a2f_player"] == "/World/audio2face/Player"
    assert root_body["dir_path"] == CONTENT_DIR + "\\A2FCache"


def test_requests_carry_json_headers(mock_http):
    handler = _initialized_handler(mock_http)
    assert handler.is_busy() is False
    headers = mock_http.calls[1].request.headers
    assert headers["Content-Type"] == "application/json"
    assert headers["accept"] == "application/json"


def test_status_unreachable_leaves_not_connected(mock_http):
    mock_http.add(responses.GET, f"{BASE}/status", body=requests.ConnectionError("down"))
    handler = Audio2FaceRESTHandler(CONTENT_DIR)
    handler.try_initialize()
    assert handler.state is A2FState.NOT_CONNECTED
    assert handler.is_busy() is True
    assert len(mock_http.calls) == 1


def test_load_failure_aborts_before_root_path(mock_http):
    _register_init(mock_http, load_error=True)
    handler = Audio2FaceRESTHandler(CONTENT_DIR)
    handler.try_initialize()
    assert handler.state is A2FState.NOT_CONNECTED
    assert len(mock_http.calls) == 2


def test_second_initialize_is_ignored(mock_http):
    handler = _initialized_handler(mock_http)
    handler.try_initialize()
    assert len(mock_http.calls) == 3
    assert handler.state is A2FState.IDLE


def test_get_blendshapes_before_initialize_raises(mock_http):
    handler = Audio2FaceRESTHandler(CONTENT_DIR)
    with pytest.raises(RuntimeError):
        handler.get_blendshapes("a.wav", "out", "shapes", lambda path, ok: None)
    assert len(mock_http.calls) == 0
    assert handler.state is A2FState.NOT_CONNECTED


def test_get_blendshapes_success(mock_http):
    handler = _initialized_handler(mock_http)
    mock_http.add(responses.POST, f"{BASE}/A2F/Player/SetTrack", json={"status": "OK"})
    mock_http.add(
        responses.POST, f"{BASE}/A2F/Exporter/ExportBlendshapes", json={"status": "OK"}
    )
    results = []
    handler.get_blendshapes(
        "voice.wav", "/cache/shapes", "anim", lambda p, ok: results.append((p, ok))
    )
    assert results == [("/cache/shapes/anim", True)]
    assert handler.state is A2FState.IDLE

    track_body = _body(mock_http.calls[4])
    assert track_body == {
        "a2f_player": "/World/audio2face/Player",
        "file_name": "voice.wav",
        "time_range": [0, -1],
    }
    export_body = _body(mock_http.calls[5])
    assert export_body["solver_node"] == "/World/audio2face/BlendshapeSolve"
    assert export_body["export_directory"] == "/cache/shapes"
    assert export_body["file_name"] == "anim"
    assert export_body["format"] == "json"
    assert export_body["batch"] == "false"
    assert export_body["fps"] == "30"


def test_set_track_failure_reports_failure_and_stays_busy(mock_http):
    handler = _initialized_handler(mock_http)
    mock_http.add(responses.POST, f"{BASE}/A2F/Player/SetTrack", json={"status": "ERROR"})
    results = []
    handler.get_blendshapes("voice.wav", "/cache", "anim", lambda p, ok: results.append((p, ok)))
    assert results == [("", False)]
    assert handler.is_busy() is True
    urls = [c.request.url for c in mock_http.calls]
    assert f"{BASE}/A2F/Exporter/ExportBlendshapes" not in urls


def test_set_track_non_json_is_failure(mock_http):
    handler = _initialized_handler(mock_http)
    mock_http.add(responses.POST, f"{BASE}/A2F/Player/SetTrack", body="not json")
    results = []
    handler.get_blendshapes("voice.wav", "/cache", "anim", lambda p, ok: results.append((p, ok)))
    assert results == [("", False)]


def test_export_failure_reports_failure(mock_http):
    handler = _initialized_handler(mock_http)
    mock_http.add(responses.POST, f"{BASE}/A2F/Player/SetTrack", json={"status": "OK"})
    mock_http.add(
        responses.POST,
        f"{BASE}/A2F/Exporter/ExportBlendshapes",
        body=requests.ConnectionError("down"),
    )
    results = []
    handler.get_blendshapes("voice.wav", "/cache", "anim", lambda p, ok: results.append((p, ok)))
    assert results == [("", False)]
    assert handler.state is A2FState.BUSY


def test_busy_handler_rejects_second_request(mock_http):
    handler = _initialized_handler(mock_http)
    mock_http.add(responses.POST, f"{BASE}/A2F/Player/SetTrack", json={"status": "ERROR"})
    handler.get_blendshapes("voice.wav", "/cache", "anim", lambda p, ok: None)
    with pytest.raises(RuntimeError):
        handler.get_blendshapes("voice.wav", "/cache", "anim", lambda p, ok: None)


def test_initialize_on_executor(mock_http):
    _register_init(mock_http)
    with ThreadPoolExecutor(max_workers=1) as executor:
        handler = Audio2FaceRESTHandler(CONTENT_DIR, executor=executor)
        handler.try_initialize()
    assert handler.state is A2FState.IDLE
    assert len(mock_http.calls) == 3