"""Generate RSA-2048 and Ed25519 private keys as PKCS#8 or OpenSSH PEM."""

from genkey.ed25519 import Ed25519
from genkey.rsa import RSA2048

__version__ = "1.0.0"

ALGORITHMS = {
    'rsa': RSA2048,
    'ed25519': Ed25519,
}

__all__ = ['ALGORITHMS', 'Ed25519', 'RSA2048']
