"""
Ed25519 key generation (RFC 8032 section 5.1.5).

Curve arithmetic uses affine coordinates on the twisted Edwards curve
-x^2 + y^2 = 1 + d*x^2*y^2 over GF(2^255 - 19). It is not constant time.
"""

from __future__ import annotations

import hashlib
import logging
import random
from dataclasses import dataclass
from typing import Optional, Tuple

from genkey import der, ssh
from genkey.arith import mod_inverse, mod_pow
from genkey.keys import PrivateKey

logger = logging.getLogger(__name__)

Point = Tuple[int, int]

SEED_LEN = 32
PUBLIC_KEY_LEN = 32

# Ed25519 constants
P = 2**255 - 19
D = -121665 * mod_inverse(121666, P) % P
I = mod_pow(2, (P - 1) // 4, P)

# RFC 8410: id-Ed25519 OBJECT IDENTIFIER ::= { 1 3 101 112 }, parameters absent
ALGORITHM_IDENTIFIER = der.sequence(der.object_identifier("1.3.101.112"))

SSH_NAME = b'ssh-ed25519'

NEUTRAL: Point = (0, 1)


def xrecover(y: int) -> int:
    """Recover the even x coordinate for y."""
    xx = (y * y - 1) * mod_inverse(D * y * y + 1, P)
    x = mod_pow(xx % P, (P + 3) // 8, P)
    if (x * x - xx) % P != 0:
        x = (x * I) % P
    if x % 2 != 0:
        x = P - x
    return x


By = 4 * mod_inverse(5, P) % P
Bx = xrecover(By)
B: Point = (Bx, By)


def edwards_add(p1: Point, p2: Point) -> Point:
    """Complete addition law; also used for doubling."""
    x1, y1 = p1
    x2, y2 = p2
    t = D * x1 * x2 * y1 * y2 % P
    x3 = (x1 * y2 + x2 * y1) * mod_inverse(1 + t, P)
    y3 = (y1 * y2 + x1 * x2) * mod_inverse(1 - t, P)
    return (x3 % P, y3 % P)


def scalarmult(point: Point, e: int) -> Point:
    """Compute e * point by double-and-add, most significant bit first."""
    if e == 0:
        return NEUTRAL
    result = point
    # the leading 1 is consumed by starting from point itself
    for bit in bin(e)[3:]:
        result = edwards_add(result, result)
        if bit == '1':
            result = edwards_add(result, point)
    return result


def encode_point(point: Point) -> bytes:
    """Compressed point: little-endian y with the sign of x in the top bit."""
    x, y = point
    encoded = bytearray(y.to_bytes(PUBLIC_KEY_LEN, 'little'))
    encoded[-1] |= (x & 1) << 7
    return bytes(encoded)


def clamp(seed: bytes) -> int:
    """Secret scalar from a seed: SHA-512, low half, clamped."""
    h = hashlib.sha512(seed).digest()
    s = bytearray(h[:32])
    s[0] &= 0xF8
    s[31] &= 0x7F
    s[31] |= 0x40
    return int.from_bytes(bytes(s), 'little')


def derive_public_key(seed: bytes) -> bytes:
    return encode_point(scalarmult(B, clamp(seed)))


@dataclass(frozen=True)
class Ed25519(PrivateKey):
    """An Ed25519 private key, held as its 32-byte seed."""

    private_seed: bytes

    ssh_name = SSH_NAME

    def __post_init__(self) -> None:
        if len(self.private_seed) != SEED_LEN:
            raise ValueError(f"Seed must be {SEED_LEN} bytes (got {len(self.private_seed)})")

    def __repr__(self) -> str:
        return f"Ed25519(public_key={self.public_key.hex()})"

    @classmethod
    def generate(cls, rng: Optional[random.Random] = None) -> Ed25519:
        if rng is None:
            rng = random.SystemRandom()
        key = cls(rng.randbytes(SEED_LEN))
        logger.debug("Generated Ed25519 seed")
        return key

    @property
    def public_key(self) -> bytes:
        return derive_public_key(self.private_seed)

    def algorithm_identifier(self) -> bytes:
        return ALGORITHM_IDENTIFIER

    def private_key_der(self) -> bytes:
        # RFC 8410: CurvePrivateKey ::= OCTET STRING
        return der.octet_string(self.private_seed)

    def public_key_wire(self) -> bytes:
        return ssh.string(SSH_NAME) + ssh.string(self.public_key)

    def private_key_wire(self, checkint: int, comment: bytes = b'') -> bytes:
        public_key = self.public_key
        body = (
            ssh.string(SSH_NAME)
            + ssh.string(public_key)
            + ssh.string(self.private_seed + public_key)
        )
        return ssh.private_section(checkint, body, comment)
