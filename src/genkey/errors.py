"""Exceptions raised by genkey."""


class Error(Exception): pass


class NotInvertibleError(Error, ValueError):
    """Raised when a modular inverse is requested for non-coprime inputs."""


class EncodingError(Error, ValueError):
    """Raised when a value cannot be represented in the target encoding."""
