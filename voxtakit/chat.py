"""Chat messages, sessions and the server services enabled for them."""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List, Mapping, Sequence, Tuple

from .characters import AiCharData


class ServiceType(Enum):
    """Server services the client knows how to use."""

    TEXT_GEN = auto()
    SPEECH_TO_TEXT = auto()
    TEXT_TO_SPEECH = auto()


@dataclass(frozen=True)
class ServiceData:
    """A single server service: its kind, a fixed display name and the server id."""

    service_type: ServiceType
    name: str
    id: str


@dataclass
class ChatMessage:
    """One chat message, filled in chunk by chunk as the server streams it."""

    message_id: str = ""
    char_id: str = ""
    text: str = ""
    audio_urls: List[str] = field(default_factory=list)

    def append_more_content(self, text_content: str, audio_url: str) -> None:
        """Append a text chunk and, if present, the audio url that goes with it."""
        self.text += text_content
        if audio_url:
            self.audio_urls.append(audio_url)


@dataclass
class ChatSession:
    """The single source of truth about an ongoing chat."""

    characters: Tuple[AiCharData, ...] = ()
    chat_id: str = ""
    session_id: str = ""
    services: Mapping[ServiceType, ServiceData] = field(default_factory=dict)
    chat_messages: List[ChatMessage] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.characters = tuple(self.characters)
        self.services = dict(self.services)

    def character_ids(self) -> List[str]:
        """Ids of the participating characters, in the order they were given."""
        return [character.id for character in self.characters]

    @classmethod
    def create(
        cls,
        characters: Sequence[AiCharData],
        chat_id: str,
        session_id: str,
        services: Mapping[ServiceType, ServiceData],
    ) -> "ChatSession":
        """Build a session from server data, starting with an empty history."""
        return cls(tuple(characters), chat_id, session_id, dict(services))

    @property
    def active_services(self) -> Dict[ServiceType, ServiceData]:
        """The services that were enabled when the chat started."""
        return dict(self.services)