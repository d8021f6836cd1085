"""Numerical building blocks for directed network inference: supernormalization,
histogram bin ranges, incremental cycle detection and matrix utilities."""

__version__ = "1.0.8"

__all__ = [
    "bounds",
    "cycle",
    "dataproc",
    "general_alg",
    "hist_bins",
    "hist_data",
    "hist_null",
    "lib",
    "logger",
    "mathfuncs",
    "matrix_ops",
    "partition",
    "rng",
    "structures",
    "supernormalize",
]