"""Password generation API."""

from typing import List, Optional

from fastapi import APIRouter, Request, status
from pydantic import BaseModel, Field

from securepass.app.api.dependencies import IssuerDep
from securepass.app.middleware.rate_limit import get_client_key
from securepass.app.middleware.request_id import get_request_id
from securepass.app.services.password import (
    GenerationConfig,
    SecretMetadata,
    describe,
    estimate_strength,
)

router = APIRouter(prefix="/v1/passwords", tags=["passwords"])


class PasswordRequest(BaseModel):
    """Password generation options. Omitted length uses the configured default."""

    length: Optional[int] = Field(default=None, ge=0, le=4096)
    lowercase: bool = True
    uppercase: bool = True
    digits: bool = True
    symbols: bool = True
    exclude_ambiguous: bool = False

    def to_config(self, default_length: int) -> GenerationConfig:
        return GenerationConfig(
            length=self.length if self.length is not None else default_length,
            lowercase=self.lowercase,
            uppercase=self.uppercase,
            digits=self.digits,
            symbols=self.symbols,
            exclude_ambiguous=self.exclude_ambiguous,
        )


class PasswordMetadata(BaseModel):
    length: int
    pool_size: int
    entropy_bits: float
    strength: str
    enabled_classes: List[str]
    summary: str

    @classmethod
    def from_metadata(cls, metadata: SecretMetadata) -> "PasswordMetadata":
        return cls(**metadata.to_dict(), summary=metadata.summary())


class PasswordResponse(BaseModel):
    password: str
    metadata: PasswordMetadata


@router.post("", response_model=PasswordResponse, status_code=status.HTTP_201_CREATED)
async def create_password(
    data: PasswordRequest,
    request: Request,
    issuer: IssuerDep,
) -> PasswordResponse:
    """Generate a password for the calling client.

    Rate limited per bearer token, or per client IP when no token is sent.
    """
    secret = issuer.issue(
        get_client_key(request),
        data.to_config(issuer.default_length),
        request_id=get_request_id(request),
    )
    return PasswordResponse(
        password=secret.value,
        metadata=PasswordMetadata.from_metadata(secret.metadata),
    )


@router.post("/strength", response_model=PasswordMetadata)
async def estimate_password_strength(
    data: PasswordRequest,
    issuer: IssuerDep,
) -> PasswordMetadata:
    """Estimate the strength of a configuration without generating anything."""
    config = data.to_config(issuer.default_length)
    return PasswordMetadata.from_metadata(describe(config, estimate_strength(config)))
