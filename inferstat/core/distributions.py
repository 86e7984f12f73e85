"""Approximate p-values for the t and F distributions.

Both functions map a statistic onto a standard normal deviate and evaluate
the rational approximation of the normal tail from:

    Abramowitz, M. and Stegun, I. A. (1970), Handbook of Mathematical
    Functions With Formulas, Graphs, and Mathematical Tables, NBS Applied
    Mathematics Series 55, National Bureau of Standards, Washington, DC.

    p 932: formula 26.2.19 (normal tail)
    p 948: formula 26.6.13 (F distribution)
    p 949: formula 26.7.8 (t distribution)

The results are good to two or three significant digits for moderate degrees
of freedom. They are not exact incomplete-beta values.
"""

from __future__ import annotations

import logging
import math

logger = logging.getLogger(__name__)

# a1..a6 of formula 26.2.19
TAIL_COEFFICIENTS = (
    0.049867347,
    0.0211410061,
    0.0032776263,
    0.0000380036,
    0.0000488906,
    0.000005383,
)


def _normal_two_tailed(x: float) -> float:
    """Return P(|Z| >= x) for a standard normal Z."""
    x = abs(x)
    # Horner evaluation of 1 + a1 x + ... + a6 x^6
    poly = 0.0
    for coefficient in reversed(TAIL_COEFFICIENTS):
        poly = (poly + coefficient) * x
    return (1.0 + poly) ** -16


def t_distribution(df: float, t: float) -> float:
    """Calculate the two-tailed p-value of a t statistic.

    Args:
        df: Degrees of freedom (must be positive)
        t: t statistic; the sign is ignored

    Returns:
        Two-tailed p-value, or NaN for non-positive df

    Example:
        >>> t_distribution(10, 0.0)
        1.0
    """
    if df <= 0:
        logger.debug(f"t distribution undefined for df={df}")
        return math.nan

    t = abs(t)
    scale = 1.0 - 1.0 / (4.0 * df)
    if math.isinf(t):
        x = scale * math.sqrt(2.0 * df)
    else:
        # t * scale / sqrt(1 + t^2 / (2 df)), written to avoid overflow in t^2
        x = t * scale / math.hypot(1.0, t / math.sqrt(2.0 * df))
    return _normal_two_tailed(x)


def f_distribution(f: float, df1: float, df2: float) -> float:
    """Calculate the p-value of an F statistic.

    F is standardised by the mean and standard deviation of the F
    distribution and evaluated with the two-tailed normal approximation.
    An F at or below its expected value gives p = 1.

    Args:
        f: F statistic
        df1: Numerator degrees of freedom (must be positive)
        df2: Denominator degrees of freedom (must exceed 4)

    Returns:
        p-value in [0, 1], or NaN when the degrees of freedom are out of range
    """
    if df1 <= 0 or df2 <= 4:
        logger.debug(f"F distribution undefined for df1={df1}, df2={df2}")
        return math.nan

    expected = df2 / (df2 - 2.0)
    spread = expected * math.sqrt(2.0 * (df1 + df2 - 2.0) / (df1 * (df2 - 4.0)))
    x = (f - expected) / spread
    if math.isnan(x):
        return math.nan
    if x <= 0:
        return 1.0
    return _normal_two_tailed(x)
