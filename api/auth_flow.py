"""httpx authentication hook that signs BTCChina JSON-RPC requests."""
import logging
from typing import Generator

import httpx

from api.authentication import RequestSigner
from api.models import SigningRequest
from config.constants import TONCE_HEADER

logger = logging.getLogger(__name__)


class JsonRpcAuth(httpx.Auth):
    """
    Attach a BTCChina credential to each outgoing request.

    The caller sets the Json-Rpc-Tonce header and the final body; this hook
    signs exactly those bytes and adds the Authorization header.

    Usage:
        auth = JsonRpcAuth(RequestSigner(access_key, secret_key))
        httpx.post(url, content=body, headers={"Json-Rpc-Tonce": tonce}, auth=auth)
    """

    requires_request_body = True

    def __init__(self, signer: RequestSigner):
        self.signer = signer

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        if TONCE_HEADER not in request.headers:
            logger.warning(f"⚠️ {TONCE_HEADER} header missing on {request.method} {request.url}")

        credential = self.signer.compute_signature(SigningRequest.from_httpx(request))
        request.headers.update(credential.to_headers())

        yield request
