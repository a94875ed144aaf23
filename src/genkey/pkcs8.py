"""
PKCS#8 private key container (RFC 5958 section 2).

    OneAsymmetricKey ::= SEQUENCE {
        version              Version,
        privateKeyAlgorithm  PrivateKeyAlgorithmIdentifier,
        privateKey           PrivateKey
    }
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from genkey import der, pem

if TYPE_CHECKING:
    from genkey.keys import PrivateKey

VERSION = 0


def encode(key: PrivateKey) -> bytes:
    return der.sequence(
        der.integer(VERSION),
        key.algorithm_identifier(),
        der.octet_string(key.private_key_der()),
    )


def to_pem(key: PrivateKey) -> bytes:
    return pem.armor(encode(key), "PRIVATE KEY", pem.PKCS8_WIDTH)
