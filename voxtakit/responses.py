"""Deserialized, read-only responses received from the server."""

from dataclasses import dataclass
from enum import Enum, auto
from types import MappingProxyType
from typing import ClassVar, Mapping, Sequence, Tuple

from .characters import AiCharData, UserCharData
from .chat import ServiceData, ServiceType


class ServerResponseType(Enum):
    """Kinds of responses the server can send."""

    WELCOME = "Welcome"
    CHARACTER_LIST = "CharacterList"
    CHARACTER_LOADED = "CharacterLoaded"
    CHAT_STARTED = "ChatStarted"
    CHAT_MESSAGE = "ChatMessage"
    CHAT_UPDATE = "ChatUpdate"
    SPEECH_TRANSCRIPTION = "SpeechTranscription"
    ERROR = "Error"


class ChatMessageType(Enum):
    """States of a message being generated by the server."""

    MESSAGE_START = auto()
    MESSAGE_CHUNK = auto()
    MESSAGE_END = auto()
    MESSAGE_CANCELLED = auto()


class TranscriptionState(Enum):
    """States of transcribed speech."""

    PARTIAL = auto()
    END = auto()
    CANCELLED = auto()


@dataclass(frozen=True)
class ServerResponseBase:
    """Common base of every server response; subclasses fix the response type."""

    response_type: ClassVar[ServerResponseType]


@dataclass(frozen=True)
class ServerResponseWelcome(ServerResponseBase):
    """The 'welcome' response, carrying the user's character."""

    response_type: ClassVar[ServerResponseType] = ServerResponseType.WELCOME

    user_data: UserCharData


@dataclass(frozen=True)
class ServerResponseCharacterList(ServerResponseBase):
    """The 'charactersListLoaded' response."""

    response_type: ClassVar[ServerResponseType] = ServerResponseType.CHARACTER_LIST

    characters: Tuple[AiCharData, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "characters", tuple(self.characters))


@dataclass(frozen=True)
class ServerResponseCharacterLoaded(ServerResponseBase):
    """The 'characterLoaded' response."""

    response_type: ClassVar[ServerResponseType] = ServerResponseType.CHARACTER_LOADED

    character_id: str
    enable_thinking_speech: bool


@dataclass(frozen=True)
class ServerResponseChatMessageBase(ServerResponseBase):
    """Shared fields of all 'reply...' responses."""

    response_type: ClassVar[ServerResponseType] = ServerResponseType.CHAT_MESSAGE
    message_type: ClassVar[ChatMessageType]

    message_id: str
    session_id: str


@dataclass(frozen=True)
class ServerResponseChatMessageStart(ServerResponseChatMessageBase):
    """The 'replyStart' response."""

    message_type: ClassVar[ChatMessageType] = ChatMessageType.MESSAGE_START

    sender_id: str


@dataclass(frozen=True)
class ServerResponseChatMessageChunk(ServerResponseChatMessageBase):
    """The 'replyChunk' response."""

    message_type: ClassVar[ChatMessageType] = ChatMessageType.MESSAGE_CHUNK

    sender_id: str
    start_index: int
    end_index: int
    message_text: str
    audio_url_path: str


@dataclass(frozen=True)
class ServerResponseChatMessageEnd(ServerResponseChatMessageBase):
    """The 'replyEnd' response."""

    message_type: ClassVar[ChatMessageType] = ChatMessageType.MESSAGE_END

    sender_id: str


@dataclass(frozen=True)
class ServerResponseChatMessageCancelled(ServerResponseChatMessageBase):
    """The 'replyCancelled' response."""

    message_type: ClassVar[ChatMessageType] = ChatMessageType.MESSAGE_CANCELLED


@dataclass(frozen=True)
class ServerResponseChatStarted(ServerResponseBase):
    """The 'chatStarted' response."""

    response_type: ClassVar[ServerResponseType] = ServerResponseType.CHAT_STARTED

    user_id: str
    character_ids: Tuple[str, ...]
    services: Mapping[ServiceType, ServiceData]
    chat_id: str
    session_id: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "character_ids", tuple(self.character_ids))
        object.__setattr__(self, "services", MappingProxyType(dict(self.services)))


@dataclass(frozen=True)
class ServerResponseChatUpdate(ServerResponseBase):
    """The 'update' response."""

    response_type: ClassVar[ServerResponseType] = ServerResponseType.CHAT_UPDATE

    message_id: str
    sender_id: str
    text: str
    session_id: str


@dataclass(frozen=True)
class ServerResponseError(ServerResponseBase):
    """The 'error' response."""

    response_type: ClassVar[ServerResponseType] = ServerResponseType.ERROR

    message: str
    details: str


@dataclass(frozen=True)
class ServerResponseSpeechTranscription(ServerResponseBase):
    """A speech transcription update."""

    response_type: ClassVar[ServerResponseType] = ServerResponseType.SPEECH_TRANSCRIPTION

    transcribed_speech: str
    transcription_state: TranscriptionState


def _as_tuple(items: Sequence) -> tuple:
    return tuple(items)