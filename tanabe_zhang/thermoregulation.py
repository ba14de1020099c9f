# -*- coding: utf-8 -*-
"""
Physiological functions of the 65-node model.

All functions work on whole-body arrays: (16,) for segments and (16, 4)
for tissue nodes ordered core, muscle, fat, skin.
"""
from collections import namedtuple

import numpy as np

from . import construction as cons

HC_FALLBACK = 3.0  # convective coefficient used for non-positive inputs [W/(m2.K)]
LR = 16.5  # Lewis ratio [K/kPa]
EB_RATE = 0.06  # basal share of the unused evaporative capacity [-]
VASOMOTION_BAND = 10.0  # [K]

ControlSignals = namedtuple("ControlSignals", [
        "err",  # node error signals (16, 4) [K]
        "wrms",  # integrated warm signal of the skin [K]
        "clds",  # integrated cold signal of the skin [K]
        "err_cr",  # error of the head core [K]
        "km",  # local vasomotion multiplier (16,) [-]
        "sweat",  # sweat heat (16,) [W]
        "shiver",  # shivering heat (16,) [W]
        "dilation",  # vasodilation signal [L/h]
        "constriction",  # vasoconstriction signal [-]
        ])


def antoine(x):
    """
    Saturated vapor pressure by the Antoine equation.

    Parameters
    ----------
    x : float or array
        Temperature [oC].

    Returns
    -------
    float or array
        Saturated vapor pressure [kPa].
    """
    return np.exp(16.6536 - 4030.183 / (np.asarray(x, dtype=float) + 235))


def fixed_hc(hc):
    """Replace non-positive (or undefined) convective coefficients by HC_FALLBACK."""
    hc = np.array(hc, dtype=float)
    hc[~(hc > 0)] = HC_FALLBACK
    return hc


def clo_area_factor(clo):
    """Clothing area factor [-]."""
    clo = np.asarray(clo, dtype=float)
    return np.where(clo < 0.5, clo * 0.2 + 1, clo * 0.1 + 1.05)


def operative_temp(ta, tr, hc, hr):
    """
    Operative temperature [oC].

    Falls back to the air temperature where hc + hr vanishes.
    """
    ta = np.asarray(ta, dtype=float)
    hsum = hc + hr
    with np.errstate(divide="ignore", invalid="ignore"):
        to = (hc * ta + hr * tr) / hsum
    return np.where(hsum > 0, to, ta)


def total_htc(hc, hr, clo):
    """
    Total heat transfer coefficient between skin and environment [W/(m2.K)].

    The clothing layer is in series with convection and radiation in
    parallel: 1/h = 0.155*clo + 1/(hc + hr*fcl).
    """
    fcl = clo_area_factor(clo)
    return 1 / (0.155 * np.asarray(clo, dtype=float) + 1 / (hc + hr * fcl))


def wet_r(hc, clo, iclo=0.45, lr=LR):
    """
    Evaporative resistance between skin and environment [m2.kPa/W].

    Parameters
    ----------
    hc : array
        Convective heat transfer coefficient [W/(m2.K)].
    clo : array
        Clothing insulation [clo].
    iclo : float or array, optional
        Clothing vapor permeation efficiency [-]. The default is 0.45.
    lr : float, optional
        Lewis ratio [K/kPa]. The default is 16.5.
    """
    fcl = clo_area_factor(clo)
    r_cl = 0.155 * np.asarray(clo, dtype=float)
    r_ea = 1 / (lr * hc)
    r_ecl = r_cl / (lr * iclo)
    return r_ea / fcl + r_ecl


def error_signals(tissue, setpt, rate=None, rate_gain=0.0):
    """
    Error, warm and cold signals of all tissue nodes.

    Parameters
    ----------
    tissue : numpy.ndarray (16, 4)
        Node temperatures [oC].
    setpt : numpy.ndarray (16, 4)
        Set-point temperatures [oC].
    rate : numpy.ndarray (16, 4), optional
        Node temperature derivatives [K/s], used with rate_gain.
    rate_gain : float, optional
        Weight of the rate term [s]. The default is 0.

    Returns
    -------
    err, wrm, cld : numpy.ndarray (16, 4)
    """
    err = tissue - setpt
    if rate is not None and rate_gain:
        err = err + rate_gain * rate
    wrm = np.maximum(err, 0)
    cld = np.maximum(-err, 0)
    return err, wrm, cld


def _command(signal, err_cr, wrm_cr, cld_cr, wrms, clds, warm=True):
    # Controller shared by sweating, shivering and vasomotion
    c, s, p = (getattr(gains, signal) for gains in (cons.CORE, cons.SKIN, cons.PERIPHERAL))
    if warm:
        out = c * err_cr + s * (wrms - clds) + p * wrm_cr * wrms
    else:
        out = -c * err_cr - s * (wrms - clds) + p * cld_cr * clds
    return max(out, 0.0)


def control_signals(err, wrm, cld):
    """
    Whole-body thermoregulatory commands.

    The skin aggregates WRMS/CLDS are built first from all segments and
    only then fed to the segment outputs.

    Parameters
    ----------
    err, wrm, cld : numpy.ndarray (16, 4)
        Outputs of error_signals.

    Returns
    -------
    ControlSignals
    """
    wrms = float(np.sum(cons.SKINR * wrm[:, 3]))
    clds = float(np.sum(cons.SKINR * cld[:, 3]))
    err_cr, wrm_cr, cld_cr = err[0, 0], wrm[0, 0], cld[0, 0]
    args = (err_cr, wrm_cr, cld_cr, wrms, clds)

    km = 2.0 ** (err[:, 3] / VASOMOTION_BAND)
    sweat = _command("sweat", *args) * cons.SKINS * km
    shiver = _command("shiver", *args, warm=False) * cons.CHILF
    dilation = _command("dilation", *args)
    constriction = _command("constriction", *args, warm=False)

    return ControlSignals(err, wrms, clds, err_cr, km, sweat, shiver, dilation, constriction)


def basal_met_rate(mbase, bsa):
    """Basal metabolic rate of the whole body [met]."""
    return mbase.sum() / (cons.MET_UNIT * bsa.sum())


def local_mwork(met, mbase, bsa):
    """
    External work heat by segment [W], released in the muscle layer.

    Parameters
    ----------
    met : float
        Activity level [met].
    mbase : numpy.ndarray (16, 4)
        Basal metabolic heat [W].
    bsa : numpy.ndarray (16,)
        Local body surface area [m2].

    Returns
    -------
    numpy.ndarray (16,)
    """
    work = cons.MET_UNIT * (met - basal_met_rate(mbase, bsa)) * bsa.sum()
    return max(work, 0.0) * cons.METF


def bloodflow(bfb, mwork, ctrl):
    """
    Blood flow of all tissue nodes [L/h] (16, 4).

    Muscle flow rises with shivering and work heat; skin flow follows the
    vasomotion commands.
    """
    bf = bfb.copy()
    bf[:, 1] += (mwork + ctrl.shiver) / cons.BF_PER_WATT
    bf[:, 3] = ctrl.km * (bfb[:, 3] + cons.SKINV * ctrl.dilation) \
        / (1 + cons.SKINC * ctrl.constriction)
    return bf


def evaporation(tsk, ta, rh, hc, clo, bsa, esweat, iclo=0.45):
    """
    Evaporative heat loss from the skin.

    Parameters
    ----------
    tsk : numpy.ndarray (16,)
        Skin temperatures [oC].
    ta : numpy.ndarray (16,)
        Air temperatures [oC].
    rh : numpy.ndarray (16,)
        Relative humidity [%].
    hc : numpy.ndarray (16,)
        Convective heat transfer coefficient [W/(m2.K)].
    clo : numpy.ndarray (16,)
        Clothing insulation [clo].
    bsa : numpy.ndarray (16,)
        Local body surface area [m2].
    esweat : numpy.ndarray (16,)
        Sweat heat [W].

    Returns
    -------
    wet : numpy.ndarray (16,)
        Skin wettedness [-].
    e_sk : numpy.ndarray (16,)
        Evaporative heat loss [W].
    e_max : numpy.ndarray (16,)
        Maximum evaporative heat loss [W].
    """
    r_et = wet_r(hc, clo, iclo)
    p_sk = antoine(tsk)
    p_a = antoine(ta) * rh / 100
    e_max = np.maximum((p_sk - p_a) / r_et * bsa, 0)
    e_b = EB_RATE * np.maximum(e_max - esweat, 0)
    e_sk = np.minimum(e_b + esweat, e_max)

    wet = np.full_like(e_max, EB_RATE)
    np.divide(e_sk, e_max, out=wet, where=e_max > 0)
    return wet, e_sk, e_max


def resp_heatloss(ta, pa, qall):
    """
    Respiratory heat loss [W].

    Parameters
    ----------
    ta : float
        Inhaled air temperature [oC].
    pa : float
        Inhaled air vapor pressure [kPa].
    qall : float
        Total heat production [W].

    Returns
    -------
    res_sh, res_lh : float
        Sensible and latent respiratory heat loss [W].
    """
    res_sh = 0.0014 * qall * (34 - ta)
    res_lh = 0.017 * qall * (5.867 - pa)
    return res_sh, res_lh
