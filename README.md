# netinfer

Numerical building blocks for inferring directed networks from expression
and genotype data. Matrices are NumPy arrays; functions that change data work
in place on the array they are given.

## Modules

- `netinfer.supernormalize` – rank-based transformation of every matrix row
  to a standard normal distribution: `supernormalize_rows` (deterministic
  quantiles), `supernormalize_rows_fluc` (with relative jitter),
  `supernormalize_rows_auto` (jitter of `2/ncol**2` below 30 columns) and
  `supernormalize_rows_random` (fresh normal draws). `normal_quantiles(n)`
  gives the quantiles used.
- `netinfer.dataproc` – row normalization, flattening with or without the
  diagonal (`flatten_nodiag`, `wrap_nodiag`, `strip_diag`), masked row
  selection (`rows_save`, `rows_load` and their `_nodiag` forms), row and
  column permutation, `minmax_nodiag`, `compare_rows`, and reading a raw
  float32 matrix with `from_dense_file`.
- `netinfer.matrix_ops` – covariances (`cov1`, `cov2`, `cov2_rowwise` and
  bounded forms), row and column scaling, `eq`, `diff`, `cumsum` and
  `fluctuate`.
- `netinfer.bounds` – clipping (`bound_below`, `bound_above`, `bound_both`)
  and conditional replacement (`set_cond`, `set_inf`, `set_nan`,
  `set_value`), plus `first_nan`.
- `netinfer.hist_bins`, `netinfer.hist_null`, `netinfer.hist_data` –
  histogram bin edges: uniform, finer subdivisions, equal-count bins from a
  known CDF or density, and unequal bins sized from a data set
  (`unequal_bins_exact`, `unequal_bins_exp`, which raise
  `InsufficientDataError` when the data are too few).
- `netinfer.cycle` – `CycleDetector`, a directed acyclic graph that grows by
  arcs and refuses any arc that would close a cycle, keeping a topological
  order.
- `netinfer.structures` – fixed-capacity `MinHeap`, `MaxHeap` and
  `LinkedListPool`, raising `CapacityError` when full.
- `netinfer.mathfuncs` – `lngamma_half`, `expminusone`, `logplusone`,
  `hyp2f1_minus_one` (returns a `SeriesResult`, raises `ConvergenceError`)
  and CDF quantile search.
- `netinfer.general_alg`, `netinfer.partition`, `netinfer.rng`,
  `netinfer.logger`, `netinfer.lib` – categorizing helpers, splitting work
  ranges, the package random generator, levelled logging to standard error
  (levels 0–12), and library initialization and version.

## Installation

```
pip install .
```

## Getting started

```python
import numpy as np
from netinfer import lib, supernormalize
from netinfer.cycle import CycleDetector

seed = lib.init(log_level=6, random_seed=42, nthreads=0)

data = np.random.default_rng(0).normal(size=(5, 100)).astype(np.float32)
supernormalize.supernormalize_rows(data)   # changes data in place
print(data.mean(axis=1), data.std(axis=1))

detector = CycleDetector(dim=3, max_arcs=3)
detector.add(0, 1)          # True
detector.add(1, 2)          # True
print(detector.add(2, 0))   # False: it would close a cycle
print(detector.extract_graph())
print(detector.order())
```

`lib.name()` and `lib.version()` report the library name and version
(`1.0.8`).

## What the package does not do

It provides building blocks only. There is no command-line program, and no
routine here that takes expression and genotype data and produces a
regulatory network; those steps are left to the caller. All work runs in the
calling thread: `lib.init` records a thread limit that `lib.max_threads()`
reports, and `netinfer.partition` computes how work would be split, but no
function starts threads itself. The only file input is a raw float32 matrix
through `dataproc.from_dense_file`.

## Running the tests

```
pip install .[test]
pytest
```