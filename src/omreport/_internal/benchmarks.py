"""Performance budgets for fingerprinting (gated perf sentinels)."""

from __future__ import annotations

import os
from pathlib import Path
from time import perf_counter
from typing import Tuple

from omreport.kernel.fingerprint import CHUNK_SIZE, compute_fingerprint


def _budget_from_env(var_name: str, default_ms: float) -> float:
    raw = os.getenv(var_name)
    if not raw:
        return default_ms
    try:
        return float(raw)
    except ValueError:
        return default_ms


# omcliproxy itself is well under a megabyte; the large case covers
# pointing the gate at an unexpectedly big file.
SMALL_BINARY_BYTES = 512 * 1024
LARGE_BINARY_BYTES = 64 * 1024 * 1024

MAX_SMALL_FINGERPRINT_MS = _budget_from_env("OMREPORT_MAX_SMALL_FINGERPRINT_MS", 50.0)
MAX_LARGE_FINGERPRINT_MS = _budget_from_env("OMREPORT_MAX_LARGE_FINGERPRINT_MS", 1500.0)


def write_sentinel_binary(path: Path, size: int) -> Path:
    """Write ``size`` bytes of deterministic, non-repeating-per-chunk content."""
    block = bytes(range(256)) * (CHUNK_SIZE // 256)
    with open(path, "wb") as f:
        remaining = size
        counter = 0
        while remaining > 0:
            chunk = counter.to_bytes(8, "big") + block[8:]
            f.write(chunk[:remaining])
            remaining -= len(chunk)
            counter += 1
    return path


def run_fingerprint_sentinel(path: Path) -> Tuple[float, bytes]:
    """Fingerprint ``path`` and return elapsed ms plus the digest."""
    start = perf_counter()
    digest = compute_fingerprint(path)
    elapsed_ms = (perf_counter() - start) * 1000.0
    return elapsed_ms, digest
