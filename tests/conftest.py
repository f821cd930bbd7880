"""Pytest configuration for tests.

No sys.path hacks - tests should import from the installed omreport package.
"""

import stat
from pathlib import Path

import pytest

FIXTURES = Path(__file__).resolve().parent / "fixtures"


def pytest_addoption(parser):
    """Add gated perf test option."""
    parser.addoption(
        "--run-perf",
        action="store_true",
        default=False,
        help="Run performance sentinel benchmarks (gated)."
    )


def pytest_collection_modifyitems(config, items):
    """Skip perf-marked tests unless --run-perf is set."""
    if config.getoption("--run-perf"):
        return
    skip_perf = pytest.mark.skip(reason="perf tests gated; pass --run-perf")
    for item in items:
        if "perf" in item.keywords:
            item.add_marker(skip_perf)


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def fixture_bytes():
    """Read an omreport XML fixture by name, e.g. ``"storage-vdisk"``."""
    def _read(name: str) -> bytes:
        return (FIXTURES / f"omreport-{name}.xml").read_bytes()
    return _read


@pytest.fixture
def fake_omcliproxy(tmp_path):
    """Build an executable ``omcliproxy`` shell script.

    The script records its arguments (one per line) in ``args.log`` next to
    itself, prints ``output`` and exits with ``exit_code``. Returns the
    script path.
    """
    def _make(output: bytes = b"", exit_code: int = 0, name: str = "omcliproxy") -> Path:
        bin_dir = tmp_path / "sbin"
        bin_dir.mkdir(exist_ok=True)
        payload = bin_dir / "payload.out"
        payload.write_bytes(output)
        args_log = bin_dir / "args.log"
        script = bin_dir / name
        script.write_text(
            "#!/bin/sh\n"
            f": > '{args_log}'\n"
            'for arg in "$@"; do\n'
            f"  printf '%s\\n' \"$arg\" >> '{args_log}'\n"
            "done\n"
            f"cat '{payload}'\n"
            f"exit {exit_code}\n",
            encoding="utf-8",
        )
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script
    return _make
