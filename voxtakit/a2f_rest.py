"""Client for the Audio2Face headless REST API used to generate blendshape curves."""

import json
import logging
from concurrent.futures import Executor
from enum import Enum, auto
from typing import Any, Callable, Mapping, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8011"
PLAYER_PRIM = "/World/audio2face/Player"
SOLVER_NODE = "/World/audio2face/BlendshapeSolve"
USD_FILE_NAME = "claire_solved_arkit.usd"
CACHE_DIR_NAME = "A2FCache"

BlendshapesCallback = Callable[[str, bool], None]


class A2FState(Enum):
    """Where the handler is in its connect / generate cycle."""

    NOT_CONNECTED = auto()
    INITIALIZING = auto()
    IDLE = auto()
    BUSY = auto()


def _join_path(directory: str, file_name: str) -> str:
    if not directory:
        return file_name
    return directory.rstrip("/\\") + "/" + file_name


def _status_is_ok(response: Optional[requests.Response]) -> bool:
    """True if the response body is a JSON object whose 'status' field is 'OK'."""
    if response is None:
        return False
    try:
        body = json.loads(response.text)
    except ValueError:
        return False
    return isinstance(body, dict) and body.get("status") == "OK"


class Audio2FaceRESTHandler:
    """Drives a headless Audio2Face instance over its REST API.

    Work is run on ``executor`` when one is given, otherwise in the calling thread.
    """

    def __init__(
        self,
        content_dir: str,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        executor: Optional[Executor] = None,
    ) -> None:
        self._content_dir = content_dir
        self._base_url = base_url.rstrip("/")
        self._session = session if session is not None else requests.Session()
        self._timeout = timeout
        self._executor = executor
        self._state = A2FState.NOT_CONNECTED

    @property
    def state(self) -> A2FState:
        """The current state of the handler."""
        return self._state

    def try_initialize(self) -> None:
        """Check that A2F runs, load the ARKit USD file and point the player at our cache."""
        if self._state is not A2FState.NOT_CONNECTED:
            return
        self._state = A2FState.INITIALIZING
        self._dispatch(self._initialize)

    def get_blendshapes(
        self,
        wav_file_name: str,
        shapes_file_path: str,
        shapes_file_name: str,
        callback: BlendshapesCallback,
    ) -> None:
        """Export the blendshape curves of a wav file to a JSON file.

        ``callback`` receives the path of the written shapes file and whether A2F
        reported success; on failure the path is empty.
        """
        if self._state is not A2FState.IDLE:
            raise RuntimeError(
                "Audio2Face is not ready; check is_busy() before requesting blendshapes"
            )
        self._state = A2FState.BUSY
        self._dispatch(
            lambda: self._generate(wav_file_name, shapes_file_path, shapes_file_name, callback)
        )

    def is_initializing(self) -> bool:
        """True while the handler is still connecting to A2F."""
        return self._state is A2FState.INITIALIZING

    def is_busy(self) -> bool:
        """True unless A2F is connected and free to take a request."""
        return self._state is not A2FState.IDLE

    def _dispatch(self, work: Callable[[], None]) -> None:
        if self._executor is None:
            work()
        else:
            self._executor.submit(work)

    def _initialize(self) -> None:
        status = self._get_status()
        if status is None:
            logger.warning(
                "Audio2Face status request was not completed successfully, "
                "assuming A2F is not wanted, aborting initialization."
            )
            self._state = A2FState.NOT_CONNECTED
            return
        logger.info("%s", status.text)

        loaded = self._load_usd_file()
        if loaded is None:
            logger.error("Audio2Face USD load request failed, aborting initialization.")
            self._state = A2FState.NOT_CONNECTED
            return
        logger.info("%s", loaded.text)

        root = self._set_player_root_path()
        if root is None:
            logger.error(
                "Audio2Face SetRootPath request failed, A2F will not find our audio files, "
                "aborting initialization."
            )
            self._state = A2FState.NOT_CONNECTED
            return
        logger.info("%s", root.text)
        self._state = A2FState.IDLE

    def _generate(
        self,
        wav_file_name: str,
        shapes_file_path: str,
        shapes_file_name: str,
        callback: BlendshapesCallback,
    ) -> None:
        self._set_player_root_path()

        track = self._set_player_track(wav_file_name)
        if track is not None:
            logger.info("%s", track.text)
        if not _status_is_ok(track):
            logger.warning("SetPlayerTrack failed, aborting blendshape generation")
            callback("", False)
            return
        logger.info("SetPlayerTrack success")

        exported = self._generate_blend_shapes(shapes_file_path, shapes_file_name)
        if exported is not None:
            logger.info("%s", exported.text)
        if not _status_is_ok(exported):
            logger.warning("GenerateBlendShapes failed, aborting blendshape generation")
            callback("", False)
            return
        logger.info("GenerateBlendShapes success")
        self._state = A2FState.IDLE
        callback(_join_path(shapes_file_path, shapes_file_name), True)

    def _request(
        self, method: str, path: str, payload: Optional[Mapping[str, Any]] = None
    ) -> Optional[requests.Response]:
        """Send a JSON request; None if it could not be completed."""
        headers = {"Content-Type": "application/json", "accept": "application/json"}
        data = json.dumps(payload) if payload is not None else None
        try:
            return self._session.request(
                method,
                self._base_url + path,
                headers=headers,
                data=data,
                timeout=self._timeout,
            )
        except requests.RequestException as error:
            logger.warning("Audio2Face request %s %s failed: %s", method, path, error)
            return None

    def _get_status(self) -> Optional[requests.Response]:
        return self._request("GET", "/status")

    def _load_usd_file(self) -> Optional[requests.Response]:
        return self._request(
            "POST",
            "/A2F/USD/Load",
            {"file_name": f"{self._content_dir}\\{USD_FILE_NAME}"},
        )

    def _set_player_root_path(self) -> Optional[requests.Response]:
        return self._request(
            "POST",
            "/A2F/Player/SetRootPath",
            {
                "a2f_player": PLAYER_PRIM,
                "dir_path": f"{self._content_dir}\\{CACHE_DIR_NAME}",
            },
        )

    def _set_player_track(self, file_name: str) -> Optional[requests.Response]:
        return self._request(
            "POST",
            "/A2F/Player/SetTrack",
            {"a2f_player": PLAYER_PRIM, "file_name": file_name, "time_range": [0, -1]},
        )

    def _generate_blend_shapes(
        self, file_path: str, file_name: str
    ) -> Optional[requests.Response]:
        return self._request(
            "POST",
            "/A2F/Exporter/ExportBlendshapes",
            {
                "solver_node": SOLVER_NODE,
                "export_directory": file_path,
                "file_name": file_name,
                "format": "json",
                "batch": "false",
                "fps": "30",
            },
        )