"""Chat bot webhook API.

A messaging transport bridge posts incoming commands and button presses
here and renders the structured reply back into the chat.
"""

from typing import List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from securepass.app.api.dependencies import BotDep
from securepass.app.services.bot import BOT_COMMANDS, BotReply

router = APIRouter(prefix="/v1/bot", tags=["bot"])

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class BotMessageRequest(BaseModel):
    chat_id: int = Field(..., ge=INT64_MIN, le=INT64_MAX)
    text: str = Field(..., max_length=4096)


class BotCallbackRequest(BaseModel):
    user_id: int = Field(..., ge=INT64_MIN, le=INT64_MAX)
    data: str = Field(..., max_length=64)


class InlineButtonModel(BaseModel):
    label: str
    callback_data: str


class BotReplyResponse(BaseModel):
    text: Optional[str] = None
    keyboard: List[List[InlineButtonModel]] = []
    notice: Optional[str] = None

    @classmethod
    def from_reply(cls, reply: BotReply) -> "BotReplyResponse":
        return cls.model_validate(reply.to_dict())


class BotCommandModel(BaseModel):
    command: str
    description: str


@router.post("/messages", response_model=BotReplyResponse)
async def handle_message(data: BotMessageRequest, bot: BotDep) -> BotReplyResponse:
    """Handle a chat message (``/start``, ``/help``, ``/pass ...``)."""
    return BotReplyResponse.from_reply(bot.handle_message(data.chat_id, data.text))


@router.post("/callbacks", response_model=BotReplyResponse)
async def handle_callback(data: BotCallbackRequest, bot: BotDep) -> BotReplyResponse:
    """Handle an inline keyboard button press."""
    return BotReplyResponse.from_reply(bot.handle_callback(data.user_id, data.data))


@router.get("/commands", response_model=List[BotCommandModel])
async def list_commands() -> List[BotCommandModel]:
    """Command menu for the messaging platform."""
    return [BotCommandModel(command=c, description=d) for c, d in BOT_COMMANDS]
