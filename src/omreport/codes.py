"""Code tables for omreport output and library errors.

omreport encodes component health as integers. The enums below cover the
codes the library knows how to label; anything else decodes to an
``UnrecognizedCode`` carrying the raw integer so callers can still match
on it instead of parsing a formatted string.
"""

from enum import Enum, IntEnum, IntFlag
from typing import Union

from pydantic import BaseModel, ConfigDict


class ErrorCode(str, Enum):
    """Error codes attached to every ``OMReportError``."""

    # Unclassified library error
    OMREPORT_ERROR = "OMREPORT_ERROR"

    # Trust gate (construction)
    BINARY_NAME_MISMATCH = "BINARY_NAME_MISMATCH"
    EXECUTABLE_NOT_FOUND = "EXECUTABLE_NOT_FOUND"
    SYMLINK_REJECTED = "SYMLINK_REJECTED"
    NOT_REGULAR_FILE = "NOT_REGULAR_FILE"
    FINGERPRINT_IO_ERROR = "FINGERPRINT_IO_ERROR"

    # Trust gate (per invocation)
    TAMPER_DETECTED = "TAMPER_DETECTED"

    # Report client
    INVOCATION_FAILED = "INVOCATION_FAILED"
    PARSE_FAILED = "PARSE_FAILED"


class Status(IntEnum):
    """Health status of a hardware component."""

    OK = 2
    NON_CRITICAL = 3
    CRITICAL = 4

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


class State(IntEnum):
    """Operational state of a storage component."""

    READY = 1
    FAILED = 2
    ONLINE = 4
    OFFLINE = 8
    DEGRADED = 32
    NON_RAID = 4096
    REPLACING = 2097152
    REBUILDING = 8388608
    BACKGROUND_INITIALIZATION = 34359738368
    FOREIGN = 274877906944
    CLEAR = 549755813888
    DEGRADED_REDUNDANCY = 9007199254740992

    @property
    def label(self) -> str:
        return _STATE_LABELS[self]


class Layout(IntEnum):
    """RAID layout of a virtual disk."""

    RAID0 = 2
    RAID1 = 4
    RAID5 = 64
    RAID6 = 128
    RAID60 = 262144

    @property
    def label(self) -> str:
        return _LAYOUT_LABELS[self]


class BusProtocol(IntEnum):
    """Bus protocol used by a disk."""

    SCSI = 1
    IDE = 2
    SATA = 7
    SAS = 8
    PCIE = 9

    @property
    def label(self) -> str:
        return _BUS_PROTOCOL_LABELS[self]


class DiskAttribute(IntFlag):
    """Bit positions in a physical disk's ``AttributesMask``."""

    LOGICAL_CONNECTOR = 1 << 6
    GLOBAL_HOT_SPARE = 1 << 7
    DEDICATED_HOT_SPARE = 1 << 8
    NON_RAID = 1 << 9
    FAILURE_PREDICTED = 1 << 11


_STATUS_LABELS = {
    Status.OK: "OK",
    Status.NON_CRITICAL: "Non-critical",
    Status.CRITICAL: "Critical",
}

_STATE_LABELS = {
    State.READY: "Ready",
    State.FAILED: "Failed",
    State.ONLINE: "Online",
    State.OFFLINE: "Offline",
    State.DEGRADED: "Degraded",
    State.NON_RAID: "Non-RAID",
    State.REPLACING: "Replacing",
    State.REBUILDING: "Rebuilding",
    State.BACKGROUND_INITIALIZATION: "Background Initialization",
    State.FOREIGN: "Foreign",
    State.CLEAR: "Clear",
    State.DEGRADED_REDUNDANCY: "Degraded Redundancy",
}

_LAYOUT_LABELS = {
    Layout.RAID0: "RAID-0",
    Layout.RAID1: "RAID-1",
    Layout.RAID5: "RAID-5",
    Layout.RAID6: "RAID-6",
    Layout.RAID60: "RAID-60",
}

_BUS_PROTOCOL_LABELS = {
    BusProtocol.SCSI: "SCSI",
    BusProtocol.IDE: "IDE",
    BusProtocol.SATA: "SATA",
    BusProtocol.SAS: "SAS",
    BusProtocol.PCIE: "PCIe",
}


class UnrecognizedCode(BaseModel):
    """A code value that is not in the matching table.

    ``kind`` names the table ("status", "state", "layout", "bus protocol").
    """

    kind: str
    code: int

    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def label(self) -> str:
        return f"Unknown {self.kind} code {self.code:d}"


StatusCode = Union[Status, UnrecognizedCode]
StateCode = Union[State, UnrecognizedCode]
LayoutCode = Union[Layout, UnrecognizedCode]
BusProtocolCode = Union[BusProtocol, UnrecognizedCode]


def _decode(table, kind: str, raw):
    if isinstance(raw, (table, UnrecognizedCode)):
        return raw
    if isinstance(raw, str):
        raw = int(raw.strip())
    try:
        return table(raw)
    except ValueError:
        return UnrecognizedCode(kind=kind, code=raw)


def decode_status(raw) -> StatusCode:
    """Decode a raw status value (int or decimal string)."""
    return _decode(Status, "status", raw)


def decode_state(raw) -> StateCode:
    """Decode a raw state value (int or decimal string)."""
    return _decode(State, "state", raw)


def decode_layout(raw) -> LayoutCode:
    """Decode a raw RAID layout value (int or decimal string)."""
    return _decode(Layout, "layout", raw)


def decode_bus_protocol(raw) -> BusProtocolCode:
    """Decode a raw bus protocol value (int or decimal string)."""
    return _decode(BusProtocol, "bus protocol", raw)


def decode_disk_attributes(mask) -> DiskAttribute:
    """Decode an ``AttributesMask`` string of binary digits into flags.

    Bits without a named position are kept in the returned value.

    Raises:
        ValueError: if ``mask`` is not a string of binary digits
    """
    if isinstance(mask, DiskAttribute):
        return mask
    if isinstance(mask, int):
        return DiskAttribute(mask)
    text = mask.strip()
    if not text or set(text) - {"0", "1"}:
        raise ValueError(f"AttributesMask must be a string of binary digits, got {mask!r}")
    return DiskAttribute(int(text, 2))
