"""
ASN.1 DER tag-length-value encoding.

Only the handful of universal types needed for PKCS#8 private keys are
supported, and lengths are limited to two length octets (65535 bytes).
"""

from genkey.errors import EncodingError

INTEGER = 0x02
OCTET_STRING = 0x04
NULL = 0x05
OBJECT_IDENTIFIER = 0x06
SEQUENCE = 0x30

MAX_LENGTH = 0xFFFF


def encode_length(length: int) -> bytes:
    """DER length octets: short form below 128, long form up to 2 bytes."""
    if length < 0:
        raise EncodingError(f"negative length: {length}")
    if length <= 0x7F:
        return bytes([length])
    if length <= 0xFF:
        return bytes([0x81, length])
    if length <= MAX_LENGTH:
        return bytes([0x82, length >> 8, length & 0xFF])
    raise EncodingError(f"too long data: {length} bytes (max {MAX_LENGTH})")


def encode(tag: int, value: bytes) -> bytes:
    """Encode a single TLV node."""
    return bytes([tag]) + encode_length(len(value)) + bytes(value)


def to_integer(magnitude: bytes) -> bytes:
    """
    Turn a big-endian unsigned magnitude into DER INTEGER content.

    A zero byte is prepended when the high bit is set so the value is not
    read back as negative.
    """
    if not magnitude:
        return b'\x00'
    if magnitude[0] & 0x80:
        return b'\x00' + bytes(magnitude)
    return bytes(magnitude)


def int_to_bytes(value: int) -> bytes:
    """Minimal big-endian INTEGER content for a non-negative int."""
    if value < 0:
        raise EncodingError(f"negative integers are not supported: {value}")
    magnitude = value.to_bytes((value.bit_length() + 7) // 8, 'big')
    return to_integer(magnitude)


def integer(value: int) -> bytes:
    return encode(INTEGER, int_to_bytes(value))


def octet_string(value: bytes) -> bytes:
    return encode(OCTET_STRING, value)


def null() -> bytes:
    return encode(NULL, b'')


def object_identifier(oid: str) -> bytes:
    """Encode a dotted OID such as '1.3.101.112'."""
    arcs = [int(arc) for arc in oid.split('.')]
    if len(arcs) < 2 or arcs[0] > 2 or (arcs[0] < 2 and arcs[1] >= 40):
        raise EncodingError(f"invalid object identifier: {oid}")

    body = bytearray()
    for arc in [arcs[0] * 40 + arcs[1]] + arcs[2:]:
        # base-128, high bit set on every byte but the last
        chunk = [arc & 0x7F]
        arc >>= 7
        while arc:
            chunk.append(0x80 | (arc & 0x7F))
            arc >>= 7
        body.extend(reversed(chunk))
    return encode(OBJECT_IDENTIFIER, bytes(body))


def sequence(*parts: bytes) -> bytes:
    return encode(SEQUENCE, b''.join(parts))
