"""Pydantic models for the subset of the Telegram Bot API in use."""

from pydantic import BaseModel, ConfigDict, Field


class TelegramModel(BaseModel):
    """Base for API objects; unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class User(TelegramModel):
    id: int
    is_bot: bool = False
    username: str | None = None


class Chat(TelegramModel):
    id: int
    type: str = Field(..., description="private, group, supergroup or channel")

    @property
    def is_private(self) -> bool:
        return self.type == "private"


class Message(TelegramModel):
    message_id: int
    chat: Chat
    from_user: User | None = Field(default=None, alias="from")
    text: str | None = None


class Update(TelegramModel):
    update_id: int
    message: Message | None = None


class ChatMember(TelegramModel):
    status: str = Field(
        ..., description="creator, administrator, member, restricted, left or kicked"
    )
    user: User | None = None

    @property
    def is_admin(self) -> bool:
        return self.status in {"creator", "administrator"}


class ApiResponse(TelegramModel):
    ok: bool
    result: object = None
    description: str | None = None


__all__ = [
    "ApiResponse",
    "Chat",
    "ChatMember",
    "Message",
    "Update",
    "User",
]
