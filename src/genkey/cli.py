"""Command line entry point: generate one key and write it as PEM."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from genkey import ALGORITHMS, __version__, pkcs8, ssh
from genkey.errors import Error
from genkey.keys import PrivateKey

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "GENKEY_LOG_LEVEL"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

FORMATS = ('pkcs8', 'openssh')

PRIVATE_MODE = 0o600
PUBLIC_MODE = 0o644


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="genkey", description="generate key of rsa or ed25519")
    _ = parser.add_argument("-f", "--file", type=str, default=None, help="File to save the key (default: stdout)")
    _ = parser.add_argument("-a", "--algorithm", choices=sorted(ALGORITHMS), default="rsa", help="Key type")
    _ = parser.add_argument("-t", "--format", choices=FORMATS, default="pkcs8", help="Private key container")
    _ = parser.add_argument("-C", "--comment", type=str, default="", help="Key comment (OpenSSH format only)")
    _ = parser.add_argument("--public", action="store_true", help="Also write the OpenSSH public key to FILE.pub")
    _ = parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity")
    _ = parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.getLevelName(os.environ.get(LOG_LEVEL_ENV, "WARNING").upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def serialize(key: PrivateKey, fmt: str, comment: bytes = b'') -> bytes:
    if fmt == 'openssh':
        return ssh.to_pem(key, comment)
    if fmt == 'pkcs8':
        return pkcs8.to_pem(key)
    raise ValueError(f"unknown format: {fmt}")


def write_output(data: bytes, path: Optional[str], private: bool = True) -> None:
    if path is None:
        _ = sys.stdout.buffer.write(data)
        sys.stdout.flush()
        return

    # an existing file is narrowed to PRIVATE_MODE before the key is written
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, PRIVATE_MODE if private else PUBLIC_MODE)
    with os.fdopen(fd, "wb") as f:
        if private and hasattr(os, "fchmod"):
            os.fchmod(f.fileno(), PRIVATE_MODE)
        _ = f.write(data)
    logger.info("Key written to: %s", path)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.public and not args.file:
        parser.error("--public requires --file")

    configure_logging(args.verbose)
    comment: bytes = os.fsencode(args.comment)

    try:
        key = ALGORITHMS[args.algorithm].generate()
        write_output(serialize(key, args.format, comment), args.file)

        if args.public:
            write_output(ssh.public_key_line(key, comment), args.file + ".pub", private=False)

        logger.info("Fingerprint: %s", ssh.fingerprint(key))
    except KeyboardInterrupt:
        print("\nAborted by user.", file=sys.stderr)
        return 1
    except (OSError, Error) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0
