"""State enumerations shared between the client and its audio components."""

from enum import Enum, auto


class MessageChunkState(Enum):
    """Lifecycle states of a single message chunk's audio container."""

    IDLE = auto()
    IDLE_DOWNLOADED = auto()
    IDLE_PROCESSED = auto()
    BUSY = auto()
    READY_FOR_PLAYBACK = auto()
    CLEANED_UP = auto()


class VoxtaClientState(Enum):
    """States the client can report to external systems."""

    DISCONNECTED = auto()
    ATTEMPTING_TO_CONNECT = auto()
    AUTHENTICATED = auto()
    IDLE = auto()
    STARTING_CHAT = auto()
    GENERATING_REPLY = auto()
    AUDIO_PLAYBACK = auto()
    WAITING_FOR_USER_RESPONSE = auto()
    TERMINATED = auto()