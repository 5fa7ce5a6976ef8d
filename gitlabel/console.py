"""Console status output."""
from __future__ import annotations

import sys


def info(msg: str) -> None:
    print(f"[INFO] {msg}", flush=True)


def warn(msg: str) -> None:
    print(f"[WARN] {msg}", file=sys.stderr, flush=True)


def danger(msg: str) -> None:
    print(f"[DANGER] {msg}", file=sys.stderr, flush=True)


__all__ = [
    'danger',
    'info',
    'warn',
]
