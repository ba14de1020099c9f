# -*- coding: utf-8 -*-
"""
Body construction of the 65-node model.

Constants follow the standard body of the 65MN model (height 1.72 m,
weight 74.43 kg, body surface area about 1.87 m2). Tables are written per
anatomical region and expanded to the 16 segments, left and right limbs
sharing the same values.
"""
from collections import namedtuple

import numpy as np

from .matrix import NUM_NODES, NUM_SEGMENTS, CB

# Head, Chest, Back, Pelvis, Shoulder, Arm, Hand, Thigh, Leg, Foot
_REGIONS = [0, 1, 2, 3, 4, 4, 5, 5, 6, 6, 7, 7, 8, 8, 9, 9]


def _expand(table):
    """Expand a per-region table (10 rows) to the 16 segments."""
    return np.asarray(table, dtype=float)[_REGIONS].copy()


# Local body surface area [m2]
_BSAst = _expand([0.110, 0.175, 0.161, 0.221, 0.096, 0.063, 0.050, 0.209, 0.112, 0.056])

# Heat capacity [Wh/K]: core, muscle, fat, skin
_CAP = _expand([
        [1.958, 0.271, 0.241, 0.204],
        [7.010, 4.142, 1.386, 0.324],
        [6.000, 3.780, 1.300, 0.297],
        [10.450, 7.600, 2.100, 0.408],
        [0.640, 1.300, 0.240, 0.177],
        [0.350, 0.700, 0.130, 0.116],
        [0.140, 0.090, 0.070, 0.092],
        [2.600, 5.400, 0.980, 0.386],
        [1.200, 2.300, 0.300, 0.207],
        [0.210, 0.120, 0.090, 0.103],])
_CAP_CB = 2.610

# Basal metabolic heat [W]: core, muscle, fat, skin
_MBASE = _expand([
        [16.843, 0.217, 0.109, 0.165],
        [21.182, 2.297, 0.406, 0.253],
        [18.699, 2.097, 0.372, 0.232],
        [6.988, 3.457, 0.609, 0.344],
        [0.149, 0.658, 0.071, 0.046],
        [0.081, 0.365, 0.040, 0.027],
        [0.097, 0.037, 0.016, 0.027],
        [0.352, 1.596, 0.173, 0.112],
        [0.155, 0.699, 0.076, 0.049],
        [0.108, 0.024, 0.014, 0.028],])

# Basal blood flow [L/h]: core, muscle, fat, skin
_BFB = _expand([
        [45.00, 0.12, 0.13, 5.00],
        [77.85, 0.59, 0.10, 1.66],
        [67.00, 0.50, 0.10, 1.56],
        [103.00, 1.20, 0.15, 1.86],
        [1.34, 1.02, 0.04, 0.20],
        [0.70, 0.55, 0.02, 0.10],
        [0.16, 0.09, 0.01, 1.20],
        [2.80, 1.98, 0.08, 0.28],
        [1.02, 0.70, 0.03, 0.17],
        [0.43, 0.05, 0.01, 0.95],])

# Conductance between adjacent layers [W/K]: core-muscle, muscle-fat, fat-skin
_CDT = _expand([
        [1.605, 13.224, 16.008],
        [0.616, 2.100, 9.164],
        [0.594, 2.018, 8.700],
        [0.379, 1.276, 13.940],
        [1.441, 3.604, 7.370],
        [2.532, 4.000, 4.590],
        [3.643, 4.016, 7.360],
        [2.353, 4.146, 12.680],
        [1.406, 5.314, 7.230],
        [2.940, 9.400, 8.950],])

# Set-point temperature [oC]: core, muscle, fat, skin
_SETPT = _expand([
        [36.9, 36.1, 35.8, 35.6],
        [36.5, 36.2, 34.5, 33.6],
        [36.5, 35.8, 34.4, 33.2],
        [36.3, 35.6, 34.5, 33.4],
        [35.8, 34.6, 33.8, 33.4],
        [35.5, 34.8, 34.7, 34.6],
        [35.4, 35.3, 35.3, 35.2],
        [35.8, 35.2, 34.4, 33.8],
        [35.6, 34.4, 33.9, 33.4],
        [35.1, 34.9, 34.4, 33.9],])
_SETPT_CB = 36.7

# Distribution coefficients [-]
# SKINR: skin signal weighting, SKINS: sweat, SKINV: vasodilation,
# SKINC: vasoconstriction, Chilf: shivering, Metf: external work
_DIST = _expand([
        [0.070, 0.081, 0.132, 0.05, 0.020, 0.0000],
        [0.149, 0.146, 0.149, 0.05, 0.170, 0.0910],
        [0.132, 0.129, 0.148, 0.05, 0.160, 0.0800],
        [0.212, 0.206, 0.148, 0.05, 0.260, 0.1290],
        [0.023, 0.051, 0.026, 0.05, 0.030, 0.0262],
        [0.012, 0.026, 0.020, 0.05, 0.020, 0.0143],
        [0.092, 0.0155, 0.0775, 0.35, 0.000, 0.0055],
        [0.050, 0.073, 0.025, 0.05, 0.100, 0.2053],
        [0.025, 0.036, 0.013, 0.05, 0.045, 0.0949],
        [0.017, 0.018, 0.050, 0.35, 0.000, 0.0045],])
SKINR, SKINS, SKINV, SKINC, CHILF, METF = _DIST.T.copy()

# Thermoregulatory control gains.
# sweat [W/K], shiver [W/K], dilation [L/(h.K)], constriction [1/K];
# the peripheral bundle multiplies the product of two signals.
ControlGains = namedtuple("ControlGains", ["sweat", "shiver", "dilation", "constriction"])
CORE = ControlGains(sweat=371.2, shiver=0.0, dilation=117.0, constriction=11.5)
SKIN = ControlGains(sweat=33.6, shiver=0.0, dilation=7.5, constriction=11.5)
PERIPHERAL = ControlGains(sweat=0.0, shiver=24.4, dilation=0.0, constriction=0.0)

# Default clothing [clo]: only the pelvis is covered
DEFAULT_CLO = np.zeros(NUM_SEGMENTS)
DEFAULT_CLO[3] = 0.34

RHO_C = 1.067  # volumetric heat capacity of blood [Wh/(L.K)]
BF_PER_WATT = 1.16  # extra muscle heat carried per unit of blood flow [W/(L/h)]
MET_UNIT = 58.2  # [W/m2]


def dubois(height, weight):
    """Body surface area [m2] by the DuBois formula."""
    return 0.203 * height ** 0.725 * weight ** 0.425


def bsa_rate(height=1.72, weight=74.43):
    """Ratio of the body surface area to that of the standard body [-]."""
    return dubois(height, weight) / dubois(1.72, 74.43)


def localbsa(height=1.72, weight=74.43):
    """Local body surface areas [m2] (16,)."""
    return _BSAst * bsa_rate(height, weight)


def capacity(height=1.72, weight=74.43):
    """
    Heat capacities of all nodes [J/K].

    Returns
    -------
    numpy.ndarray (65,)
    """
    cap = np.empty(NUM_NODES)
    cap[:CB] = _CAP.reshape(-1)
    cap[CB] = _CAP_CB
    return cap * weight / 74.43 * 3600


def conductance(height=1.72, weight=74.43):
    """Conductance between adjacent layers [W/K] (16, 3)."""
    return _CDT * bsa_rate(height, weight)


def basal_bloodflow(height=1.72, weight=74.43):
    """Basal blood flow [L/h] (16, 4)."""
    return _BFB * bsa_rate(height, weight)


def local_mbase(height=1.72, weight=74.43):
    """Basal metabolic heat by node [W] (16, 4)."""
    return _MBASE * bsa_rate(height, weight)


def setpoints():
    """
    Default set-point temperatures of all nodes [oC].

    Returns
    -------
    numpy.ndarray (65,)
    """
    setpt = np.empty(NUM_NODES)
    setpt[:CB] = _SETPT.reshape(-1)
    setpt[CB] = _SETPT_CB
    return setpt
