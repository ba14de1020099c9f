# -*- coding: utf-8 -*-
"""
Ranked views of segment votes shared by the sensation and comfort rules.
"""
import numpy as np

from .matrix import NUM_SEGMENTS, PAIRS


def rank(values):
    """
    Sort votes in descending order.

    Ties keep the ascending original position.

    Parameters
    ----------
    values : array-like

    Returns
    -------
    ranked : numpy.ndarray
        Votes from the largest to the smallest.
    order : numpy.ndarray
        Original positions of the ranked votes.
    """
    values = np.asarray(values, dtype=float)
    order = np.argsort(-values, kind="stable")
    return values[order], order


def dedupe_pairs(values, keep="max"):
    """
    Merge the hand and foot pairs into one vote each.

    The merged vote takes the place of the right-hand (right-foot) entry
    and the left one is dropped, giving 14 votes.

    Parameters
    ----------
    values : array-like (16,)
    keep : str, optional
        "max" or "min", which vote of each pair survives. The default is "max".

    Returns
    -------
    numpy.ndarray (14,)
    """
    values = np.asarray(values, dtype=float)
    if values.shape != (NUM_SEGMENTS,):
        raise ValueError("expected {} votes, got {}".format(NUM_SEGMENTS, values.shape))
    if keep not in ("max", "min"):
        raise ValueError('keep must be "max" or "min"')
    pick = np.max if keep == "max" else np.min

    merged = values.copy()
    drop = []
    for right, left in PAIRS.values():
        merged[right] = pick(values[[right, left]])
        drop.append(left)
    return np.delete(merged, drop)
