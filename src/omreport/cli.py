"""omreport-py CLI: run omreport through the trust gate and print typed JSON."""

import argparse
import json
import logging
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from typing import Optional

from omreport.config import OMReportConfig
from omreport.errors import OMReportError, TamperDetectedError

# report name -> OMReport method
REPORTS = {
    "about": "about",
    "chassis": "chassis",
    "batteries": "chassis_batteries",
    "fans": "chassis_fans",
    "processors": "chassis_processors",
    "memory": "chassis_memory",
    "temps": "chassis_temps",
    "volts": "chassis_volts",
    "pwrmonitoring": "chassis_power_monitoring",
    "pwrsupplies": "chassis_power_supplies",
    "controller": "storage_controller",
    "enclosure": "storage_enclosure",
    "vdisk": "storage_vdisk",
    "pdisk": "storage_pdisk",
}

EXIT_ERROR = 1
EXIT_TAMPERED = 2


def _config_from_args(args) -> OMReportConfig:
    return OMReportConfig(
        omcliproxy_path=args.path,
        enhanced_security_mode=getattr(args, "enhanced_security", False),
    )


def _fail(exc: OMReportError) -> int:
    print(f"Error [{exc.code.value}]: {exc}", file=sys.stderr)
    if isinstance(exc, TamperDetectedError):
        return EXIT_TAMPERED
    return EXIT_ERROR


def _run_report(args) -> int:
    from omreport.api import OMReport

    if args.name == "pdisk" and args.controller is None:
        print("Error: pdisk requires --controller", file=sys.stderr)
        return EXIT_ERROR

    client = OMReport(_config_from_args(args))
    method = getattr(client, REPORTS[args.name])
    result = method(args.controller) if args.name == "pdisk" else method()
    if not args.quiet:
        print(json.dumps(result.model_dump(mode="json"), indent=2, sort_keys=True))
    return 0


def _run_verify(args) -> int:
    from omreport.kernel.trust import TrustGate

    gate = TrustGate(args.path or OMReportConfig().resolved_path())
    if not args.quiet:
        print("[OK] Binary accepted")
        print(f"  Path: {gate.path}")
        print(f"  Fingerprint: {gate.baseline_hex}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    try:
        omreport_version = get_version("omreport")
    except PackageNotFoundError:
        omreport_version = "dev"

    parser = argparse.ArgumentParser(
        prog="omreport-py",
        description="Typed Dell OpenManage omreport output with omcliproxy integrity checks"
    )
    parser.add_argument("--version", action="version", version=f"omreport {omreport_version}")
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug output to stderr."
    )
    # Common arguments
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress all non-error output."
    )
    parent_parser.add_argument(
        "--path",
        default=None,
        help="Path to the omcliproxy binary (defaults to /opt/dell/srvadmin/sbin/omcliproxy)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    report_parser = subparsers.add_parser(
        "report",
        help="Run an omreport command and print the decoded record as JSON",
        parents=[parent_parser]
    )
    report_parser.add_argument(
        "name",
        choices=sorted(REPORTS),
        help="Report to run"
    )
    report_parser.add_argument(
        "--controller",
        type=int,
        default=None,
        help="Controller ID (required for pdisk)"
    )
    report_parser.add_argument(
        "--enhanced-security",
        action="store_true",
        help="Re-check the omcliproxy checksum before running"
    )

    subparsers.add_parser(
        "verify",
        help="Validate the omcliproxy binary and print its fingerprint",
        parents=[parent_parser]
    )
    return parser


def main(argv: Optional[list] = None):
    """Main CLI entry point for omreport-py."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(EXIT_ERROR)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        if args.command == "report":
            exit_code = _run_report(args)
        else:
            exit_code = _run_verify(args)
    except OMReportError as exc:
        exit_code = _fail(exc)

    if exit_code:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
