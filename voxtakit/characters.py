"""Read-only character records as reported by the server."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BaseCharData:
    """Fields shared by every character: the server-assigned id and the name."""

    id: str = ""
    name: str = ""


@dataclass(frozen=True)
class AiCharData(BaseCharData):
    """An AI character known to the server."""

    creator_notes: str = ""
    allowed_explicit_content: bool = False
    is_favorite: bool = False


@dataclass(frozen=True)
class UserCharData(BaseCharData):
    """The character representing the user (player)."""