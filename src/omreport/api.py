"""Public API: the omreport client.

``OMReport`` runs ``omcliproxy omreport <args> -fmt xml`` and decodes the
result into the records in ``omreport.models``. The omcliproxy binary is
validated and fingerprinted when the client is built; with enhanced
security mode on, the fingerprint is re-checked before every run.
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Optional, Type, TypeVar, Union

from pydantic import BaseModel

from omreport._internal.xml_decode import decode_document
from omreport.config import OMReportConfig
from omreport.errors import ReportInvocationError
from omreport.kernel.trust import TrustGate
from omreport.models import (
    AboutOutput,
    ChassisBatteriesOutput,
    ChassisFansOutput,
    ChassisMemoryOutput,
    ChassisOutput,
    ChassisPowerMonitoringOutput,
    ChassisPowerSuppliesOutput,
    ChassisProcessorsOutput,
    ChassisTempsOutput,
    ChassisVoltsOutput,
    StorageControllerOutput,
    StorageEnclosureOutput,
    StoragePDiskOutput,
    StorageVDiskOutput,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class OMReport:
    """Client for Dell OpenManage's omreport utility.

    Raises on construction if the configured omcliproxy path is not allowed
    (wrong name, missing, symlink) or cannot be fingerprinted.
    """

    def __init__(self, config: Optional[OMReportConfig] = None):
        self.config = config or OMReportConfig()
        self.gate = TrustGate(
            self.config.resolved_path(),
            enhanced_security_mode=self.config.enhanced_security_mode,
            expected_name=self.config.binary_name,
        )

    @classmethod
    def from_path(cls, path: Union[str, Path], enhanced_security_mode: bool = False) -> "OMReport":
        """Build a client for an explicit omcliproxy path."""
        return cls(OMReportConfig(
            omcliproxy_path=str(path),
            enhanced_security_mode=enhanced_security_mode,
        ))

    @property
    def omcliproxy_path(self) -> str:
        return self.gate.path

    def suspicious_binary(self) -> None:
        """Check whether omcliproxy changed since this client was built.

        Runs regardless of enhanced security mode.

        Raises:
            TamperDetectedError: the binary's checksum differs from the baseline
            FingerprintError: the binary could not be read
        """
        self.gate.check_for_tampering()

    def build_argv(self, *args: str) -> List[str]:
        return [
            self.gate.path,
            self.config.report_command,
            *args,
            "-fmt",
            "xml",
        ]

    def report(self, *args: str) -> bytes:
        """Run an omreport command and return its combined stdout/stderr.

        Raises:
            TamperDetectedError: enhanced security mode and the binary changed
            ReportInvocationError: spawn failure or non-zero exit
        """
        self.gate.guard()

        argv = self.build_argv(*args)
        logger.debug("running %s", argv)
        try:
            completed = subprocess.run(
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                check=False,
            )
        except OSError as exc:
            raise ReportInvocationError(argv, reason=exc.strerror or str(exc)) from exc

        logger.debug("%s exited with %d (%d bytes)", argv[0], completed.returncode, len(completed.stdout))
        if completed.returncode != 0:
            raise ReportInvocationError(argv, output=completed.stdout, returncode=completed.returncode)
        return completed.stdout

    def _decode(self, model_cls: Type[M], *args: str) -> M:
        return decode_document(model_cls, self.report(*args))

    def about(self) -> AboutOutput:
        """OMSA version information."""
        return self._decode(AboutOutput, "about")

    def chassis(self) -> ChassisOutput:
        """Rolled-up chassis health."""
        return self._decode(ChassisOutput, "chassis")

    def chassis_batteries(self) -> ChassisBatteriesOutput:
        return self._decode(ChassisBatteriesOutput, "chassis", "batteries")

    def chassis_fans(self) -> ChassisFansOutput:
        return self._decode(ChassisFansOutput, "chassis", "fans")

    def chassis_processors(self) -> ChassisProcessorsOutput:
        return self._decode(ChassisProcessorsOutput, "chassis", "processors")

    def chassis_memory(self) -> ChassisMemoryOutput:
        return self._decode(ChassisMemoryOutput, "chassis", "memory")

    def chassis_temps(self) -> ChassisTempsOutput:
        return self._decode(ChassisTempsOutput, "chassis", "temps")

    def chassis_volts(self) -> ChassisVoltsOutput:
        return self._decode(ChassisVoltsOutput, "chassis", "volts")

    def chassis_power_monitoring(self) -> ChassisPowerMonitoringOutput:
        return self._decode(ChassisPowerMonitoringOutput, "chassis", "pwrmonitoring")

    def chassis_power_supplies(self) -> ChassisPowerSuppliesOutput:
        return self._decode(ChassisPowerSuppliesOutput, "chassis", "pwrsupplies")

    def storage_controller(self) -> StorageControllerOutput:
        """RAID controllers."""
        return self._decode(StorageControllerOutput, "storage", "controller")

    def storage_enclosure(self) -> StorageEnclosureOutput:
        return self._decode(StorageEnclosureOutput, "storage", "enclosure")

    def storage_vdisk(self) -> StorageVDiskOutput:
        return self._decode(StorageVDiskOutput, "storage", "vdisk")

    def storage_pdisk(self, controller_id: int) -> StoragePDiskOutput:
        """Physical disks attached to controller ``controller_id``."""
        return self._decode(StoragePDiskOutput, "storage", "pdisk", f"controller={int(controller_id):d}")
