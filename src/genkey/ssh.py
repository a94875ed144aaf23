"""
OpenSSH private key format (PROTOCOL.key in the OpenSSH sources).

Keys are always written unencrypted: cipher and KDF are both "none".
"""

from __future__ import annotations

import base64
import hashlib
import random
import struct
from typing import TYPE_CHECKING, Optional

from genkey import der, pem

if TYPE_CHECKING:
    from genkey.keys import PrivateKey

AUTH_MAGIC = b'openssh-key-v1\x00'
CIPHER = b'none'
KDF = b'none'
KDF_OPTIONS = b''
BLOCK_SIZE = 8  # block size of the "none" cipher


def uint32(value: int) -> bytes:
    return struct.pack(">I", value)


def string(data: bytes) -> bytes:
    """Length-prefixed byte string."""
    return uint32(len(data)) + data


def mpint(value: int) -> bytes:
    """Non-negative multiple precision integer."""
    if value == 0:
        return string(b'')
    return string(der.int_to_bytes(value))


def pad(blob: bytes, block_size: int = BLOCK_SIZE) -> bytes:
    """Append 1, 2, 3, ... until the length is a multiple of block_size."""
    padding = bytes(range(1, (block_size - len(blob) % block_size) % block_size + 1))
    return blob + padding


def private_section(checkint: int, body: bytes, comment: bytes = b'') -> bytes:
    """
    Assemble the private section for one key.

    ``body`` holds the key type name followed by the key-specific fields.
    The check integer is written twice; readers compare both copies to
    detect a wrong passphrase.
    """
    return pad(uint32(checkint) + uint32(checkint) + body + string(comment))


def encode(key: PrivateKey, comment: bytes = b'', rng: Optional[random.Random] = None) -> bytes:
    """Binary openssh-key-v1 container holding a single key."""
    if rng is None:
        rng = random.SystemRandom()
    checkint = rng.getrandbits(32)

    return (
        AUTH_MAGIC
        + string(CIPHER)
        + string(KDF)
        + string(KDF_OPTIONS)
        + uint32(1)
        + string(key.public_key_wire())
        + string(key.private_key_wire(checkint, comment))
    )


def to_pem(key: PrivateKey, comment: bytes = b'', rng: Optional[random.Random] = None) -> bytes:
    return pem.armor(encode(key, comment, rng), "OPENSSH PRIVATE KEY", pem.OPENSSH_WIDTH)


def public_key_line(key: PrivateKey, comment: bytes = b'') -> bytes:
    """authorized_keys line for the key, newline terminated."""
    line = key.ssh_name + b' ' + base64.b64encode(key.public_key_wire())
    if comment:
        line += b' ' + comment
    return line + b'\n'


def fingerprint(key: PrivateKey) -> str:
    """SHA256 fingerprint as printed by ssh-keygen -l."""
    fp_hash = hashlib.sha256(key.public_key_wire()).digest()
    return "SHA256:" + base64.b64encode(fp_hash).decode('ascii').replace('=', '')
