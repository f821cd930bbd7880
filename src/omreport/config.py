"""Client configuration."""

import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_OMCLIPROXY_DIR = "/opt/dell/srvadmin/sbin"
DEFAULT_OMCLIPROXY_BINARY_NAME = "omcliproxy"
DEFAULT_OMREPORT_COMMAND_NAME = "omreport"


class OMReportConfig(BaseModel):
    """Configuration for an ``OMReport`` client.

    Defaults apply only to fields the caller leaves unset.
    """

    omcliproxy_path: Optional[str] = Field(
        None,
        description="Full path to the omcliproxy binary (defaults to install_dir/binary_name)",
    )
    enhanced_security_mode: bool = Field(
        False,
        description="Re-check the binary's sha256 against the construction-time baseline before every run",
    )
    install_dir: str = DEFAULT_OMCLIPROXY_DIR
    binary_name: str = DEFAULT_OMCLIPROXY_BINARY_NAME
    report_command: str = DEFAULT_OMREPORT_COMMAND_NAME

    model_config = ConfigDict(frozen=True, extra="forbid")

    def resolved_path(self) -> str:
        """Return the omcliproxy path this config points at."""
        if self.omcliproxy_path is not None:
            return self.omcliproxy_path
        return os.path.join(self.install_dir, self.binary_name)
