"""Pydantic models for request signing."""
import base64

import httpx
from pydantic import BaseModel, Field
from typing import Dict, Optional

from api.exceptions import RequestBodyError
from config.constants import AUTHORIZATION_HEADER, TONCE_HEADER


class SigningRequest(BaseModel):
    """An outgoing request as seen by the signer: tonce plus exact body."""

    tonce: Optional[str] = None
    body: Optional[str] = None

    class Config:
        frozen = True

    @classmethod
    def from_httpx(cls, request: httpx.Request) -> "SigningRequest":
        """
        Build from an outgoing httpx request.

        Args:
            request: Request whose body has already been read

        Raises:
            RequestBodyError: body is not valid UTF-8
        """
        try:
            body = request.content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise RequestBodyError(f"Request body is not UTF-8: {e}") from e

        return cls(tonce=request.headers.get(TONCE_HEADER), body=body)


class JsonRpcEnvelope(BaseModel):
    """Identity fields pulled from a JSON-RPC body. Empty when nothing matched."""

    id: str = ""
    method: str = ""
    params: str = ""  # raw interior of the params array

    class Config:
        frozen = True


class Credential(BaseModel):
    """Access key paired with the hex HMAC digest of one request."""

    access_key: str
    digest: str = Field(..., min_length=1)

    class Config:
        frozen = True

    def basic_auth(self) -> str:
        """
        Basic-Auth header value with the digest as the password.

        Returns:
            "Basic " + base64("access_key:digest")
        """
        token = f"{self.access_key}:{self.digest}".encode("utf-8")
        return "Basic " + base64.b64encode(token).decode("ascii")

    def to_headers(self) -> Dict[str, str]:
        """Headers to merge into the outgoing request."""
        return {AUTHORIZATION_HEADER: self.basic_auth()}
