"""Library initialisation and identification."""

from __future__ import annotations

import os
import time

from . import rng
from .logger import log, set_level

_NAME = "netinfer"
_VERSION = (1, 0, 8)
_max_threads: int | None = None


def init(log_level: int, random_seed: int = 0, nthreads: int = 0) -> int:
    """Set the log level, seed the package generator and set the thread limit.

    A seed of 0 means the current time; a thread count of 0 keeps the
    current setting. Returns the seed used.
    """
    global _max_threads
    set_level(log_level)
    seed = random_seed if random_seed else int(time.time())
    rng.seed(seed)
    if nthreads < 0:
        raise ValueError(f"thread count must be non-negative, got {nthreads}")
    if nthreads:
        _max_threads = nthreads
    log(
        7,
        "Library started with log level %d, initial random seed %d, and max thread count %d.",
        log_level,
        seed,
        max_threads(),
    )
    return seed


def max_threads() -> int:
    """Return the maximum number of worker threads."""
    if _max_threads is not None:
        return _max_threads
    return os.cpu_count() or 1


def name() -> str:
    """Return the library name."""
    return _NAME


def version() -> str:
    """Return the library version as major.minor.patch."""
    return ".".join(str(part) for part in _VERSION)


def version_major() -> int:
    """Return the major version number."""
    return _VERSION[0]


def version_minor() -> int:
    """Return the minor version number."""
    return _VERSION[1]


def version_patch() -> int:
    """Return the patch version number."""
    return _VERSION[2]