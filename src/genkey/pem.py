"""Base64 and PEM armor for serialized keys."""

import base64

# PKCS#8 PEM wraps at 64 columns, OpenSSH at 70
PKCS8_WIDTH = 64
OPENSSH_WIDTH = 70


def b64encode(data: bytes) -> bytes:
    return base64.b64encode(data)


def wrap(text: bytes, width: int) -> bytes:
    """Insert a newline after every ``width`` characters."""
    if width <= 0:
        raise ValueError(f"width must be positive (got {width})")
    return b'\n'.join(text[i:i + width] for i in range(0, len(text), width))


def armor(data: bytes, label: str, width: int) -> bytes:
    """
    PEM-armor binary data.

    The result always ends with a newline after the END line.
    """
    header = f"-----BEGIN {label}-----\n".encode('ascii')
    footer = f"\n-----END {label}-----\n".encode('ascii')
    return header + wrap(b64encode(data), width) + footer
