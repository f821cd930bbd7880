"""Exceptions raised by omreport.

Every exception carries an ``ErrorCode`` in ``.code`` so callers can branch
on the category without string matching.
"""

from typing import Optional, Sequence

from omreport.codes import ErrorCode


class OMReportError(Exception):
    """Base class for all omreport errors."""

    code = ErrorCode.OMREPORT_ERROR

    def __init__(self, message: str, code: Optional[ErrorCode] = None):
        super().__init__(message)
        if code is not None:
            self.code = code


class TrustError(OMReportError):
    """Raised when the omcliproxy binary cannot be trusted."""


class BinaryNameError(TrustError, ValueError):
    """Raised when the binary's base name is not the expected tool name."""

    code = ErrorCode.BINARY_NAME_MISMATCH

    def __init__(self, path: str, expected_name: str):
        super().__init__(f"expected binary name to be {expected_name}, got {path}")
        self.path = path
        self.expected_name = expected_name


class ExecutableNotFoundError(TrustError):
    """Raised when the binary path cannot be stat'ed."""

    code = ErrorCode.EXECUTABLE_NOT_FOUND

    def __init__(self, path: str, reason: str):
        super().__init__(f"cannot stat {path}: {reason}")
        self.path = path


class SymlinkRejectedError(TrustError):
    """Raised when the binary path is a symbolic link."""

    code = ErrorCode.SYMLINK_REJECTED

    def __init__(self, path: str):
        super().__init__(f"expected {path} to not be a symlink")
        self.path = path


class NotRegularFileError(TrustError):
    """Raised when the binary path is not a regular file (directory, FIFO, device)."""

    code = ErrorCode.NOT_REGULAR_FILE

    def __init__(self, path: str):
        super().__init__(f"expected {path} to be a regular file")
        self.path = path


class FingerprintError(TrustError, OSError):
    """Raised when a file's content fingerprint cannot be computed.

    ``stage`` is one of ``"open"``, ``"read"`` or ``"close"``.
    """

    code = ErrorCode.FINGERPRINT_IO_ERROR

    def __init__(self, path: str, stage: str, reason: str):
        OMReportError.__init__(self, f"failed to {stage} {path} for fingerprinting: {reason}")
        self.path = path
        self.stage = stage


class TamperDetectedError(TrustError):
    """Raised when the binary's fingerprint differs from the baseline."""

    code = ErrorCode.TAMPER_DETECTED

    def __init__(self, path: str, current: bytes, baseline: bytes):
        super().__init__(
            f"current binary checksum {current.hex()} of {path} does not match "
            f"the original checksum {baseline.hex()}"
        )
        self.path = path
        self.current = current
        self.baseline = baseline


class ReportInvocationError(OMReportError):
    """Raised when omcliproxy fails to spawn or exits non-zero.

    ``returncode`` is None when the process never started.
    """

    code = ErrorCode.INVOCATION_FAILED

    def __init__(
        self,
        argv: Sequence[str],
        output: bytes = b"",
        returncode: Optional[int] = None,
        reason: Optional[str] = None,
    ):
        if returncode is None:
            message = f"failed to run {argv[0]}: {reason}"
        else:
            message = f"{argv[0]} exited with status {returncode}"
            text = output.decode("utf-8", errors="replace").strip()
            if text:
                message = f"{message}: {text}"
        super().__init__(message)
        self.argv = list(argv)
        self.output = output
        self.returncode = returncode


class ReportParseError(OMReportError, ValueError):
    """Raised when omreport output cannot be decoded into a record."""

    code = ErrorCode.PARSE_FAILED
