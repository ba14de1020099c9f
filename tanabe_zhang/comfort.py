# -*- coding: utf-8 -*-
"""
Local and overall thermal comfort.
"""
import numpy as np
from scipy.special import expit

from .construction import _expand
from .matrix import NUM_SEGMENTS
from .ranking import rank, dedupe_pairs

SCALE = 4.0
BLEND_STEEPNESS = 25.0

# Coefficients per region for overall sensation < 0 and >= 0:
# ceiling, ceiling slope, bias, bias slope
_LC_COOL = _expand([
        [2.80, -0.40, 0.00, -0.30],
        [2.60, -0.30, 0.10, -0.25],
        [2.50, -0.30, 0.10, -0.25],
        [2.40, -0.30, 0.05, -0.20],
        [2.20, -0.20, 0.00, -0.20],
        [2.20, -0.20, 0.00, -0.20],
        [2.00, -0.20, 0.15, -0.30],
        [2.20, -0.20, 0.00, -0.15],
        [2.10, -0.20, 0.00, -0.15],
        [2.00, -0.25, 0.20, -0.30],])
_LC_WARM = _expand([
        [2.80, -0.50, -0.20, 0.35],
        [2.60, -0.40, -0.10, 0.25],
        [2.50, -0.40, -0.10, 0.25],
        [2.40, -0.30, -0.05, 0.20],
        [2.20, -0.25, 0.00, 0.20],
        [2.20, -0.25, 0.00, 0.20],
        [2.00, -0.20, 0.00, 0.15],
        [2.20, -0.25, 0.00, 0.20],
        [2.10, -0.25, 0.00, 0.20],
        [2.00, -0.20, 0.00, 0.15],])
# Curve exponent per region
_LC_EXPONENT = _expand([[1.8], [1.6], [1.6], [1.5], [1.4], [1.4], [1.3], [1.4], [1.4], [1.3]])[:, 0]


def local_comfort(ls, os):
    """
    Local thermal comfort of the 16 segments.

    Comfort peaks at the ceiling where the offset sensation is zero and
    drops to -4 at a local sensation of +-4. The two sides are joined
    by a logistic blend.

    Parameters
    ----------
    ls : array-like (16,)
        Local sensation.
    os : float
        Overall sensation.

    Returns
    -------
    numpy.ndarray (16,)
        Local comfort in [-4, 4].
    """
    ls = np.asarray(ls, dtype=float)
    if ls.shape != (NUM_SEGMENTS,):
        raise ValueError("expected {} local votes, got {}".format(NUM_SEGMENTS, ls.shape))
    coef = _LC_COOL if os < 0 else _LC_WARM
    c_ceil, c_ceil_os, c_bias, c_bias_os = coef.T
    n = _LC_EXPONENT
    # the bias stays inside the sensation scale
    a = min(abs(os), SCALE)

    ceiling = c_ceil + c_ceil_os * a
    bias = c_bias + c_bias_os * a
    left = (-SCALE - ceiling) / np.abs(-SCALE + bias) ** n
    right = (-SCALE - ceiling) / np.abs(SCALE + bias) ** n

    x = ls + bias
    w = expit(-BLEND_STEEPNESS * x)
    lc = (left * w + right * (1 - w)) * np.abs(x) ** n + ceiling
    return np.clip(lc, -SCALE, SCALE)


def overall_comfort(lc, transient=False, control=False):
    """
    Overall thermal comfort.

    The mean of the two least comfortable votes, hand and foot pairs
    counting once. In transient conditions or when the occupant has
    control, the most comfortable vote joins the mean.

    Parameters
    ----------
    lc : array-like (16,)
        Local comfort.
    transient : bool, optional
        The environment is changing. The default is False.
    control : bool, optional
        The occupant controls the environment. The default is False.

    Returns
    -------
    float
    """
    lc = np.asarray(lc, dtype=float)
    reduced, _ = rank(dedupe_pairs(lc, keep="min"))
    full, _ = rank(lc)
    votes = list(reduced[-2:])
    if transient or control:
        votes.append(full[0])
    return float(np.mean(votes))
