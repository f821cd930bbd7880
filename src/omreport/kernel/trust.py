"""Trust gate for the omcliproxy binary.

A ``TrustGate`` pins the binary it was built for: the path must carry the
expected base name and must not be a symlink, and the file's SHA-256 is
captured as a baseline at construction. Later checks recompute the digest
and compare it to that baseline. The gate never updates its baseline, so a
modified binary is reported on every check until its original bytes are
restored.
"""

import hmac
import logging
import os
import stat
from pathlib import Path
from typing import Union

from pydantic import BaseModel, ConfigDict

from omreport.config import DEFAULT_OMCLIPROXY_BINARY_NAME
from omreport.errors import (
    BinaryNameError,
    ExecutableNotFoundError,
    NotRegularFileError,
    SymlinkRejectedError,
    TamperDetectedError,
)
from omreport.kernel.fingerprint import compute_fingerprint, fingerprint_hex

logger = logging.getLogger(__name__)


class TrustVerdict(BaseModel):
    """Outcome of comparing a fresh fingerprint with the baseline."""

    matches: bool
    current: bytes
    baseline: bytes

    model_config = ConfigDict(frozen=True)


def validate_executable_path(
    path: Union[str, Path],
    expected_name: str = DEFAULT_OMCLIPROXY_BINARY_NAME,
) -> None:
    """Check that ``path`` is allowed to be executed.

    Checks run in order:
    1. the final path component equals ``expected_name``
    2. the path can be stat'ed (without following links)
    3. the path is not a symlink
    4. the path is a regular file

    Raises:
        BinaryNameError: base name mismatch
        ExecutableNotFoundError: lstat failed
        SymlinkRejectedError: path is a symbolic link
        NotRegularFileError: path is a directory, FIFO, device or socket
    """
    path = str(path)
    if os.path.basename(path) != expected_name:
        raise BinaryNameError(path, expected_name)

    try:
        st = os.lstat(path)
    except OSError as exc:
        raise ExecutableNotFoundError(path, exc.strerror or str(exc)) from exc

    if stat.S_ISLNK(st.st_mode):
        raise SymlinkRejectedError(path)
    if not stat.S_ISREG(st.st_mode):
        raise NotRegularFileError(path)


class TrustGate:
    """Validated omcliproxy path plus its integrity baseline.

    Construction either yields a fully initialized gate or raises; there is
    no partially initialized state.
    """

    def __init__(
        self,
        path: Union[str, Path],
        enhanced_security_mode: bool = False,
        expected_name: str = DEFAULT_OMCLIPROXY_BINARY_NAME,
    ):
        path = str(path)
        validate_executable_path(path, expected_name)
        baseline = compute_fingerprint(path)

        self._path = path
        self._enhanced_security_mode = enhanced_security_mode
        self._baseline = baseline
        logger.debug("trusted %s with baseline %s", path, fingerprint_hex(baseline))

    @property
    def path(self) -> str:
        return self._path

    @property
    def enhanced_security_mode(self) -> bool:
        return self._enhanced_security_mode

    @property
    def baseline(self) -> bytes:
        return self._baseline

    @property
    def baseline_hex(self) -> str:
        return fingerprint_hex(self._baseline)

    def verdict(self) -> TrustVerdict:
        """Recompute the binary's fingerprint and compare it with the baseline.

        Raises:
            FingerprintError: if the binary cannot be read
        """
        current = compute_fingerprint(self._path)
        return TrustVerdict(
            matches=hmac.compare_digest(current, self._baseline),
            current=current,
            baseline=self._baseline,
        )

    def check_for_tampering(self) -> None:
        """Raise ``TamperDetectedError`` if the binary changed since construction."""
        result = self.verdict()
        if not result.matches:
            raise TamperDetectedError(self._path, result.current, result.baseline)
        logger.debug("%s matches its baseline", self._path)

    def guard(self) -> None:
        """Pre-invocation hook: tamper check in enhanced security mode, no-op otherwise."""
        if self._enhanced_security_mode:
            self.check_for_tampering()

    def __repr__(self) -> str:
        return (
            f"TrustGate(path={self._path!r}, "
            f"enhanced_security_mode={self._enhanced_security_mode}, "
            f"baseline={self.baseline_hex!r})"
        )
