# -*- coding: utf-8 -*-
"""
PMV and the neutral operative temperature used to reset set points.
"""
import logging
import math

logger = logging.getLogger(__name__)


def pmv(ta, tr, va, rh, met, clo, wme=0):
    """
    Predicted mean vote by Fanger's model (ISO 7730).

    Parameters
    ----------
    ta : float
        Air temperature [oC].
    tr : float
        Mean radiant temperature [oC].
    va : float
        Air velocity [m/s].
    rh : float
        Relative humidity [%].
    met : float
        Metabolic rate [met].
    clo : float
        Clothing insulation [clo].
    wme : float, optional
        External work [met]. The default is 0.

    Returns
    -------
    float
    """
    pa = rh * 10 * math.exp(16.6536 - 4030.183 / (ta + 235))
    icl = 0.155 * clo  # [m2.K/W]
    m = met * 58.15
    w = wme * 58.15
    mw = m - w
    if icl <= 0.078:
        fcl = 1 + (1.29 * icl)
    else:
        fcl = 1.05 + (0.645 * icl)

    # forced convection
    hcf = 12.1 * math.sqrt(va)
    taa = ta + 273
    tra = tr + 273
    tcla = taa + (35.5 - ta) / (3.5 * icl + 0.1)

    p1 = icl * fcl
    p2 = p1 * 3.96
    p3 = p1 * 100
    p4 = p1 * taa
    p5 = 308.7 - 0.028 * mw + p2 * (tra / 100) ** 4
    xn = tcla / 100
    xf = tcla / 50
    eps = 0.00015

    n = 0
    while abs(xn - xf) > eps:
        xf = (xf + xn) / 2
        hcn = 2.38 * abs(100.0 * xf - taa) ** 0.25
        hc = max(hcf, hcn)
        xn = (p5 + p4 * hc - p2 * xf ** 4) / (100 + p3 * hc)
        n += 1
        if n > 150:
            raise ValueError("PMV clothing temperature did not converge")

    tcl = 100 * xn - 273

    # skin diffusion
    hl1 = 3.05 * 0.001 * (5733 - (6.99 * mw) - pa)
    # sweating
    hl2 = 0.42 * (mw - 58.15) if mw > 58.15 else 0
    # latent respiration
    hl3 = 1.7 * 0.00001 * m * (5867 - pa)
    # dry respiration
    hl4 = 0.0014 * m * (34 - ta)
    # radiation
    hl5 = 3.96 * fcl * (xn ** 4 - (tra / 100) ** 4)
    # convection
    hl6 = fcl * hc * (tcl - ta)

    ts = 0.303 * math.exp(-0.036 * m) + 0.028
    return ts * (mw - hl1 - hl2 - hl3 - hl4 - hl5 - hl6)


def preferred_temp(va=0.1, rh=50, met=1, clo=0):
    """
    Operative temperature giving PMV = 0 [oC].

    Parameters
    ----------
    va : float, optional
        Air velocity [m/s]. The default is 0.1.
    rh : float, optional
        Relative humidity [%]. The default is 50.
    met : float, optional
        Metabolic rate [met]. The default is 1.
    clo : float, optional
        Clothing insulation [clo]. The default is 0.

    Returns
    -------
    to : float
    """
    to = 28.0
    for _ in range(1000):
        vpmv = pmv(to, to, va, rh, met, clo)
        if abs(vpmv) < 0.001:
            break
        to = to - vpmv / 3
    else:
        logger.warning("preferred temperature search stopped at PMV=%.4f", vpmv)
    return to
