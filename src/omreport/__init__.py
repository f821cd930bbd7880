"""omreport: typed access to Dell OpenManage omreport with a pinned-binary trust gate."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("omreport")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
from omreport.api import OMReport
from omreport.config import OMReportConfig
from omreport.codes import (
    BusProtocol,
    DiskAttribute,
    ErrorCode,
    Layout,
    State,
    Status,
    UnrecognizedCode,
)
from omreport.errors import (
    BinaryNameError,
    ExecutableNotFoundError,
    FingerprintError,
    NotRegularFileError,
    OMReportError,
    ReportInvocationError,
    ReportParseError,
    SymlinkRejectedError,
    TamperDetectedError,
    TrustError,
)
from omreport.kernel.trust import TrustGate, TrustVerdict

__all__ = [
    "__version__",
    "OMReport",
    "OMReportConfig",
    "TrustGate",
    "TrustVerdict",
    "Status",
    "State",
    "Layout",
    "BusProtocol",
    "DiskAttribute",
    "UnrecognizedCode",
    "ErrorCode",
    "OMReportError",
    "TrustError",
    "BinaryNameError",
    "ExecutableNotFoundError",
    "SymlinkRejectedError",
    "NotRegularFileError",
    "FingerprintError",
    "TamperDetectedError",
    "ReportInvocationError",
    "ReportParseError",
]
