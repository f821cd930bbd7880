"""Guardrails to keep the trust kernel free of process spawning and client imports."""

import re
from pathlib import Path


FORBIDDEN_PATTERNS = {
    "argparse": re.compile(r"\bargparse\b"),
    "subprocess": re.compile(r"\bsubprocess\b"),
    "print(": re.compile(r"(?<![A-Za-z0-9_])print\s*\("),
    "warnings.": re.compile(r"\bwarnings\."),
    "omreport.api": re.compile(r"\bomreport\.api\b"),
    "omreport.models": re.compile(r"\bomreport\.models\b"),
    "omreport.cli": re.compile(r"\bomreport\.cli\b"),
}


def test_kernel_has_no_forbidden_tokens():
    kernel_dir = Path(__file__).resolve().parents[1] / "src" / "omreport" / "kernel"
    offenders = []

    for path in kernel_dir.glob("*.py"):
        contents = path.read_text(encoding="utf-8")
        for token, pattern in FORBIDDEN_PATTERNS.items():
            if pattern.search(contents):
                offenders.append(f"{path.name}: {token}")

    assert not offenders, "Forbidden kernel tokens found: " + ", ".join(offenders)
