"""SHA-256 content fingerprints for files.

The file is streamed in fixed-size chunks so large binaries are never held
in memory. Open, read and close failures are reported separately through
``FingerprintError.stage``; a digest is only returned once the whole file
has been read and the handle released.
"""

import hashlib
import logging
from pathlib import Path
from typing import Union

from omreport.errors import FingerprintError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def compute_fingerprint(path: Union[str, Path]) -> bytes:
    """Compute the SHA-256 digest of a file's bytes.

    Args:
        path: File to fingerprint

    Returns:
        32-byte raw digest

    Raises:
        FingerprintError: if the file cannot be opened, read or closed
    """
    path = str(path)
    try:
        handle = open(path, "rb")
    except OSError as exc:
        raise FingerprintError(path, "open", exc.strerror or str(exc)) from exc

    digest = hashlib.sha256()
    try:
        with handle:
            try:
                for chunk in iter(lambda: handle.read(CHUNK_SIZE), b""):
                    digest.update(chunk)
            except OSError as exc:
                raise FingerprintError(path, "read", exc.strerror or str(exc)) from exc
    except FingerprintError:
        raise
    except OSError as exc:
        raise FingerprintError(path, "close", exc.strerror or str(exc)) from exc

    result = digest.digest()
    logger.debug("sha256 of %s is %s", path, result.hex())
    return result


def fingerprint_hex(digest: bytes) -> str:
    """Render a raw digest as a ``sha256:``-prefixed hex string."""
    return f"sha256:{digest.hex()}"
