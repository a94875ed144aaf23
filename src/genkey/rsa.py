"""
RSA-2048 key generation.

RSAPrivateKey (RFC 8017 Appendix A.1.2):

    RSAPrivateKey ::= SEQUENCE {
        version           Version,
        modulus           INTEGER,  -- n
        publicExponent    INTEGER,  -- e
        privateExponent   INTEGER,  -- d
        prime1            INTEGER,  -- p
        prime2            INTEGER,  -- q
        exponent1         INTEGER,  -- d mod (p-1)
        exponent2         INTEGER,  -- d mod (q-1)
        coefficient       INTEGER,  -- (inverse of q) mod p
        otherPrimeInfos   OtherPrimeInfos OPTIONAL
    }
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional

from genkey import der, ssh
from genkey.arith import is_probably_prime, mod_inverse
from genkey.keys import PrivateKey

logger = logging.getLogger(__name__)

KEY_SIZE = 2048
PRIME_SIZE = KEY_SIZE // 2
PUBLIC_EXPONENT = 65537
VERSION = 0

# rsaEncryption OBJECT IDENTIFIER ::= { 1 2 840 113549 1 1 1 }, parameters NULL
ALGORITHM_IDENTIFIER = der.sequence(der.object_identifier("1.2.840.113549.1.1.1"), der.null())

SSH_NAME = b'ssh-rsa'


def generate_prime(
    rng: Optional[random.Random] = None,
    bits: int = PRIME_SIZE,
    e: int = PUBLIC_EXPONENT,
) -> int:
    """
    Draw random ``bits``-bit primes until one is usable with exponent ``e``.

    Candidates have their two top bits set so that the product of two of
    them is exactly 2 * bits long.
    """
    if rng is None:
        rng = random.SystemRandom()

    low = 3 << (bits - 2)
    high = 1 << bits
    candidates = 0
    while True:
        candidates += 1
        p = rng.randrange(low, high)
        if (p - 1) % e == 0:
            continue
        if is_probably_prime(p, rng):
            logger.debug("Found %d-bit prime after %d candidates", bits, candidates)
            return p


@dataclass(frozen=True)
class RSA2048(PrivateKey):
    """An RSA private key with its CRT parameters."""

    n: int
    e: int
    d: int
    p: int
    q: int
    exponent1: int
    exponent2: int
    coefficient: int
    version: int = VERSION

    ssh_name = SSH_NAME

    def __repr__(self) -> str:
        return f"RSA2048(n={self.n:#x}, e={self.e})"

    @classmethod
    def from_primes(cls, p: int, q: int, e: int = PUBLIC_EXPONENT) -> RSA2048:
        """Derive the remaining key fields from two distinct primes."""
        if p == q:
            raise ValueError("p and q must be distinct")
        n = p * q
        d = mod_inverse(e, (p - 1) * (q - 1))
        return cls(
            n=n,
            e=e,
            d=d,
            p=p,
            q=q,
            exponent1=d % (p - 1),
            exponent2=d % (q - 1),
            coefficient=mod_inverse(q, p),
        )

    @classmethod
    def generate(cls, rng: Optional[random.Random] = None) -> RSA2048:
        if rng is None:
            rng = random.SystemRandom()
        p = generate_prime(rng)
        q = generate_prime(rng)
        while q == p:
            q = generate_prime(rng)
        key = cls.from_primes(p, q)
        logger.debug("Generated %d-bit RSA modulus", key.n.bit_length())
        return key

    def algorithm_identifier(self) -> bytes:
        return ALGORITHM_IDENTIFIER

    def private_key_der(self) -> bytes:
        return der.sequence(
            der.integer(self.version),
            der.integer(self.n),
            der.integer(self.e),
            der.integer(self.d),
            der.integer(self.p),
            der.integer(self.q),
            der.integer(self.exponent1),
            der.integer(self.exponent2),
            der.integer(self.coefficient),
        )

    def public_key_wire(self) -> bytes:
        return ssh.string(SSH_NAME) + ssh.mpint(self.e) + ssh.mpint(self.n)

    def private_key_wire(self, checkint: int, comment: bytes = b'') -> bytes:
        body = (
            ssh.string(SSH_NAME)
            + ssh.mpint(self.n)
            + ssh.mpint(self.e)
            + ssh.mpint(self.d)
            + ssh.mpint(self.coefficient)
            + ssh.mpint(self.p)
            + ssh.mpint(self.q)
        )
        return ssh.private_section(checkint, body, comment)
