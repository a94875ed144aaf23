"""Interface shared by the supported private key types."""

from __future__ import annotations

import abc
import random
from typing import Optional


class PrivateKey(abc.ABC):
    """
    A freshly generated private key that can be serialized.

    Implementations provide the pieces the PKCS#8 and OpenSSH encoders
    assemble; they never build whole containers themselves.
    """

    #: OpenSSH key type name, e.g. b'ssh-ed25519'
    ssh_name: bytes

    @classmethod
    @abc.abstractmethod
    def generate(cls, rng: Optional[random.Random] = None) -> PrivateKey:
        """Create a new random key."""

    @abc.abstractmethod
    def algorithm_identifier(self) -> bytes:
        """DER-encoded AlgorithmIdentifier SEQUENCE."""

    @abc.abstractmethod
    def private_key_der(self) -> bytes:
        """Algorithm-specific private key DER, wrapped by PKCS#8."""

    @abc.abstractmethod
    def public_key_wire(self) -> bytes:
        """OpenSSH public key blob."""

    @abc.abstractmethod
    def private_key_wire(self, checkint: int, comment: bytes = b'') -> bytes:
        """Padded OpenSSH private section for a single key."""
