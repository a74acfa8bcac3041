"""Authentication utilities for the BTCChina JSON-RPC trade API."""
import hmac
import logging
from typing import Optional, Union

from api.exceptions import ConfigurationError, KeyInitializationError
from api.models import Credential, JsonRpcEnvelope, SigningRequest
from config.constants import (
    CANONICAL_FALSE,
    CANONICAL_TRUE,
    ENVELOPE_PATTERN,
    FALSE_TOKEN,
    HMAC_ALGORITHM,
    MISSING_TONCE,
    PARAM_SEPARATOR,
    REQUEST_METHOD,
    SIGNATURE_TEMPLATE,
    STRING_QUOTE,
    TRUE_TOKEN,
)
from config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def extract_envelope(body: Optional[str]) -> JsonRpcEnvelope:
    """
    Pull id, method and the raw params interior out of a JSON-RPC body.

    Args:
        body: Serialized request body (compact JSON)

    Returns:
        Envelope with the captured fields, or all-empty fields when the
        body does not look like {"id":..,"method":"..","params":[..]}
    """
    if not body:
        return JsonRpcEnvelope()

    match = ENVELOPE_PATTERN.search(body)
    if match is None:
        logger.debug("Request body did not match JSON-RPC envelope, signing empty fields")
        return JsonRpcEnvelope()

    request_id, method, params = match.groups()
    return JsonRpcEnvelope(id=request_id, method=method, params=params)


def _canonical_param(param: str) -> str:
    if len(param) >= 2 and param.startswith(STRING_QUOTE) and param.endswith(STRING_QUOTE):
        # string
        return param[1:-1]
    if param == TRUE_TOKEN:
        return CANONICAL_TRUE
    if param == FALSE_TOKEN:
        return CANONICAL_FALSE
    # number, null, etc.
    return param


def canonicalize_params(raw_params: str) -> str:
    """
    Strip the params for the signature message.

    Quoted strings lose one quote on each side, true becomes 1, false
    becomes empty, anything else is kept. Order is preserved.

    Args:
        raw_params: Text between the params brackets, e.g. '"abc",true,5'

    Returns:
        Comma-joined canonical params, e.g. 'abc,1,5'
    """
    if not raw_params:
        return ""
    return PARAM_SEPARATOR.join(
        _canonical_param(param) for param in raw_params.split(PARAM_SEPARATOR)
    )


def build_signing_string(tonce: Optional[str], access_key: str,
                         envelope: JsonRpcEnvelope) -> str:
    """Assemble the signature message in the order the server verifies it."""
    return SIGNATURE_TEMPLATE.format(
        tonce=MISSING_TONCE if tonce is None else tonce,
        access_key=access_key,
        request_method=REQUEST_METHOD,
        id=envelope.id,
        method=envelope.method,
        params=canonicalize_params(envelope.params),
    )


class RequestSigner:
    """
    HMAC-SHA1 signer for BTCChina JSON-RPC requests.

    One instance can be shared across threads and tasks: the keys never
    change and every call works on its own copy of the keyed hash.
    """

    def __init__(self, access_key: str, secret_key: Optional[Union[str, bytes]]):
        """
        Args:
            access_key: BTCChina access key (sent in the clear)
            secret_key: BTCChina secret key (never sent or logged)

        Raises:
            ConfigurationError: secret_key is None
        """
        if secret_key is None:
            logger.error("❌ Cannot create request signer: secret key is missing")
            raise ConfigurationError("BTCChina secret key is required")

        self.access_key = access_key
        self._secret_key = secret_key
        self._mac: Optional["hmac.HMAC"] = None
        self._key_cause: Optional[Exception] = None

    def __repr__(self) -> str:
        return f"RequestSigner(access_key={self.access_key!r})"

    def _keyed_hash(self) -> "hmac.HMAC":
        """Return a fresh HMAC keyed with the secret, initializing it on first use."""
        if self._key_cause is not None:
            raise KeyInitializationError(f"Invalid BTCChina secret key: {self._key_cause}") from self._key_cause

        if self._mac is None:
            try:
                key = self._secret_key
                if isinstance(key, str):
                    key = key.encode("utf-8")
                if not isinstance(key, (bytes, bytearray)):
                    raise TypeError(f"secret key must be str or bytes, not {type(key).__name__}")
                if not key:
                    raise ValueError("secret key is empty")
                self._mac = hmac.new(key, digestmod=HMAC_ALGORITHM)
            except (TypeError, ValueError) as e:
                logger.error(f"❌ Failed to initialize HMAC key: {e}")
                self._key_cause = e
                raise KeyInitializationError(f"Invalid BTCChina secret key: {e}") from e

        return self._mac.copy()

    def signing_string(self, request: SigningRequest) -> str:
        """Signature message for a request (safe to log, contains no secret)."""
        envelope = extract_envelope(request.body)
        return build_signing_string(request.tonce, self.access_key, envelope)

    def compute_signature(self, request: SigningRequest) -> Credential:
        """
        Sign one request.

        Args:
            request: Tonce and the exact body that will be sent

        Returns:
            Credential with the access key and the lowercase hex digest

        Raises:
            KeyInitializationError: secret key cannot be used as an HMAC key
        """
        message = self.signing_string(request)
        logger.debug(f"🔐 Signature message: {message}")

        mac = self._keyed_hash()
        mac.update(message.encode("utf-8"))

        return Credential(access_key=self.access_key, digest=mac.hexdigest())

    def sign(self, tonce: Optional[str], body: Optional[str]) -> Credential:
        """Sign a tonce/body pair."""
        return self.compute_signature(SigningRequest(tonce=tonce, body=body))


def create_signer(access_key: str,
                  secret_key: Optional[Union[str, bytes]]) -> Optional[RequestSigner]:
    """
    Create a signer, or None when no secret key is configured.

    Args:
        access_key: BTCChina access key
        secret_key: BTCChina secret key

    Returns:
        RequestSigner instance or None
    """
    if secret_key is None:
        logger.warning("⚠️ No BTCChina secret key configured, requests will not be signed")
        return None
    return RequestSigner(access_key, secret_key)


def create_signer_from_settings(settings: Optional[Settings] = None) -> Optional[RequestSigner]:
    """Create a signer from BTCCHINA_* settings."""
    settings = settings or get_settings()
    return create_signer(settings.access_key or "", settings.secret_key)
