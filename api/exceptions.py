"""Signer exceptions."""


class SignerError(Exception):
    """Base exception for request signer errors."""
    pass


class ConfigurationError(SignerError):
    """Raised when the signer is built without a secret key."""
    pass


class KeyInitializationError(SignerError):
    """Raised on first use when the secret key cannot key an HMAC."""
    pass


class RequestBodyError(SignerError):
    """Raised when an outgoing request body is not UTF-8 text."""
    pass
