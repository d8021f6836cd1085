"""Special functions and quantile search on cumulative distribution functions."""

from __future__ import annotations

import math
import sys
from collections.abc import Callable
from dataclasses import dataclass

_DBL_EPSILON = sys.float_info.epsilon
_MAX_TERMS = 30000


@dataclass(frozen=True)
class SeriesResult:
    """Value of a series evaluation together with an error estimate."""

    value: float
    error: float


class ConvergenceError(ArithmeticError):
    """Raised when a series cannot be evaluated to full precision.

    The best available estimate is kept in ``result``.
    """

    def __init__(self, message: str, result: SeriesResult) -> None:
        super().__init__(message)
        self.result = result


def lngamma_half(n: int) -> float:
    """Return ln(Gamma(n/2)); infinite for n == 0."""
    if n < 0:
        raise ValueError(f"lngamma_half needs a non-negative integer, got {n}")
    if n == 0:
        return math.inf
    if n == 1:
        return math.log(math.pi) / 2
    return math.lgamma(n / 2)


def expminusone(x: float) -> float:
    """Return exp(x) - 1, accurate for x close to 0."""
    if abs(x) > 1e-4:
        return math.exp(x) - 1
    return x * (1 + (x / 2) * (1 + (x / 3) * (1 + x / 4)))


def logplusone(x: float) -> float:
    """Return log(x + 1), accurate for x close to 0."""
    if abs(x) > 1e-4:
        return math.log(x + 1)
    return x * (1 - (x / 2) * (1 + ((x * 2) / 3) * (1 - (x * 3) / 4)))


def _finish(sum_pos: float, sum_neg: float, del_pos: float, del_neg: float, k: float) -> SeriesResult:
    value = sum_pos - sum_neg
    error = del_pos + del_neg
    error += 2.0 * _DBL_EPSILON * (sum_pos + sum_neg)
    error += 2.0 * _DBL_EPSILON * (2.0 * math.sqrt(k) + 1.0) * abs(value)
    return SeriesResult(value, error)


def hyp2f1_minus_one(a: float, b: float, c: float, x: float) -> SeriesResult:
    """Return 2F1(a, b; c; x) - 1 by summing the Gauss series.

    Raises ConvergenceError when c is zero or the series does not converge
    within 30000 terms.
    """
    if abs(c) < _DBL_EPSILON:
        raise ConvergenceError("c is zero", SeriesResult(0.0, 1.0))

    sum_pos = sum_neg = 0.0
    del_pos = del_neg = 0.0
    term = 1.0
    k = 0.0
    terms = 0
    while True:
        terms += 1
        if terms > _MAX_TERMS:
            raise ConvergenceError(
                "series did not converge",
                _finish(sum_pos, sum_neg, del_pos, del_neg, k),
            )
        term *= (a + k) * (b + k) * x / ((c + k) * (k + 1.0))
        if term > 0.0:
            del_pos = term
            sum_pos += term
        elif term == 0.0:
            # Exact termination: a or b is a non-positive integer.
            del_pos = del_neg = 0.0
            break
        else:
            del_neg = -term
            sum_neg -= term
        k += 1.0
        total = sum_pos - sum_neg
        change = del_pos + del_neg
        ratio = abs(change / total) if total else math.inf
        if not ratio > _DBL_EPSILON:
            break
    return _finish(sum_pos, sum_neg, del_pos, del_neg, k)


def _fill_quantiles(
    ans: list[float],
    pos: int,
    start: float,
    step: float,
    n: int,
    left: float,
    right: float,
    func: Callable[[float], float],
    eps: float,
) -> None:
    while n:
        if right - left < eps:
            width = (right - left) / n
            value = left + width / 2
            for i in range(pos, pos + n):
                ans[i] = value
                value += width
            return
        mid = (left + right) / 2
        excess = func(mid) - start
        nleft = min(math.ceil(excess / step), n) if excess > 0 else 0
        nright = n - nleft
        # Recurse into the smaller side and iterate on the larger one.
        if nleft <= nright:
            if nleft:
                _fill_quantiles(ans, pos, start, step, nleft, left, mid, func, eps)
                start += step * nleft
                n = nright
                pos += nleft
            left = mid
        else:
            if nright:
                _fill_quantiles(ans, pos + nleft, start + nleft * step, step, nright, mid, right, func, eps)
                n = nleft
            right = mid


def cdf_quantile_calc(
    start: float,
    step: float,
    n: int,
    left: float,
    right: float,
    func: Callable[[float], float],
    eps: float,
) -> list[float]:
    """Locate the quantiles start, start+step, ... (n of them) of a CDF by bisection.

    All quantiles must lie within (left, right); the search stops once an
    interval is narrower than ``eps``.
    """
    if n < 0:
        raise ValueError(f"negative quantile count: {n}")
    ans = [0.0] * n
    _fill_quantiles(ans, 0, start, step, n, left, right, func, eps)
    return ans


def cdf_quantile(
    n: int,
    left: float,
    right: float,
    func: Callable[[float], float],
    eps: float,
) -> list[float]:
    """Return the n-1 inner quantiles that split a distribution into n equal parts."""
    if n <= 1:
        raise ValueError(f"cdf_quantile needs more than one part, got {n}")
    step = 1.0 / n
    if not (func(left) < step and func(right) > 1 - step):
        raise ValueError("left and right do not bracket the quantiles")
    return cdf_quantile_calc(step, step, n - 1, left, right, func, eps)