"""Service dependencies for FastAPI dependency injection.

The issuer and bot are created once in the application lifespan and
stored on ``app.state``; these dependencies hand them to route handlers.

Usage:
    from securepass.app.api.dependencies import IssuerDep

    @router.post("/items")
    async def create_item(issuer: IssuerDep):
        ...
"""

from typing import Annotated

from fastapi import Depends, Request

from securepass.app.services.bot import PasswordBot
from securepass.app.services.issuer import PasswordIssuer


def get_issuer(request: Request) -> PasswordIssuer:
    return request.app.state.issuer


def get_bot(request: Request) -> PasswordBot:
    return request.app.state.bot


IssuerDep = Annotated[PasswordIssuer, Depends(get_issuer)]
BotDep = Annotated[PasswordBot, Depends(get_bot)]

__all__ = ["IssuerDep", "BotDep", "get_issuer", "get_bot"]
