# -*- coding: utf-8 -*-
"""
Units and meanings of the output parameters.

"body part" in a meaning is replaced with the segment name of the column.
"""
import textwrap

ALL_OUT_PARAMS = {
    "CycleTime": {"unit": "-", "meaning": "the counts executing the cycle calculation"},
    "ModTime": {"unit": "sec", "meaning": "time elapsed in the model"},
    "dt": {"unit": "sec", "meaning": "time delta of the model"},
    "t": {"unit": "sec", "meaning": "simulation time"},
    "TskMean": {"unit": "oC", "meaning": "mean skin temperature"},
    "Tsk": {"unit": "oC", "meaning": "skin temperature of body part"},
    "Tcr": {"unit": "oC", "meaning": "core temperature of body part"},
    "Tms": {"unit": "oC", "meaning": "muscle temperature of body part"},
    "Tfat": {"unit": "oC", "meaning": "fat temperature of body part"},
    "Tcb": {"unit": "oC", "meaning": "central blood temperature"},
    "Wet": {"unit": "-", "meaning": "skin wettedness of body part"},
    "Met": {"unit": "W", "meaning": "total heat production of the whole body"},
    "RES": {"unit": "W", "meaning": "heat loss by respiration"},
    "RESsh": {"unit": "W", "meaning": "sensible heat loss by respiration"},
    "RESlh": {"unit": "W", "meaning": "latent heat loss by respiration"},
    "THLsk": {"unit": "W", "meaning": "heat loss from the skin of body part"},
    "SHLsk": {"unit": "W", "meaning": "sensible heat loss from the skin of body part"},
    "Esk": {"unit": "W", "meaning": "evaporative heat loss at the skin of body part"},
    "Emax": {"unit": "W", "meaning": "maximum evaporative heat loss at the skin of body part"},
    "Esweat": {"unit": "W", "meaning": "sweat heat of body part"},
    "Mshiv": {"unit": "W", "meaning": "shivering heat of body part"},
    "Mwork": {"unit": "W", "meaning": "external work heat of body part"},
    "BFcr": {"unit": "L/h", "meaning": "core blood flow of body part"},
    "BFms": {"unit": "L/h", "meaning": "muscle blood flow of body part"},
    "BFsk": {"unit": "L/h", "meaning": "skin blood flow of body part"},
    "DL": {"unit": "L/h", "meaning": "vasodilation signal"},
    "ST": {"unit": "-", "meaning": "vasoconstriction signal"},
    "WRMS": {"unit": "K", "meaning": "integrated warm signal of the skin"},
    "CLDS": {"unit": "K", "meaning": "integrated cold signal of the skin"},
    "Name": {"unit": "-", "meaning": "name of the model"},
    "Setptcr": {"unit": "oC", "meaning": "set point core temperature of body part"},
    "Setptsk": {"unit": "oC", "meaning": "set point skin temperature of body part"},
    "To": {"unit": "oC", "meaning": "operative temperature of body part"},
    "Ht": {"unit": "W/(m2.K)", "meaning": "total heat transfer coefficient of body part"},
    "Ta": {"unit": "oC", "meaning": "air temperature of body part"},
    "HTC": {"unit": "W/(m2.K)", "meaning": "convective heat transfer coefficient of body part"},
    "RAD": {"unit": "W/(m2.K) or W/m2", "meaning": "radiative coefficient or flux of body part"},
    "MRT": {"unit": "oC", "meaning": "mean radiant temperature"},
    "Tamb": {"unit": "oC", "meaning": "ambient temperature"},
    "RH": {"unit": "%", "meaning": "relative humidity of body part"},
    "Icl": {"unit": "clo", "meaning": "clothing insulation of body part"},
    "met": {"unit": "met", "meaning": "activity level"},
    "LS": {"unit": "-", "meaning": "local thermal sensation of body part"},
    "OS": {"unit": "-", "meaning": "overall thermal sensation"},
    "Branch": {"unit": "-", "meaning": "rule used for the overall thermal sensation"},
    "LC": {"unit": "-", "meaning": "local thermal comfort of body part"},
    "OC": {"unit": "-", "meaning": "overall thermal comfort"},
    "LoadApplied": {"unit": "-", "meaning": "load applied flag"},
    "LoadRemoved": {"unit": "-", "meaning": "load removed flag"},
}


def show_outparam_docs():
    """
    Show the documentation of the output parameters.

    Returns
    -------
    docstring : str
        Text of the documentation of the output parameters.
    """
    keys = sorted(ALL_OUT_PARAMS, key=str.lower)
    width = max(len(k) for k in keys)
    lines = []
    for key in keys:
        doc = ALL_OUT_PARAMS[key]
        text = "{} [{}]".format(doc["meaning"], doc["unit"])
        wrapped = textwrap.wrap(text, 70 - width)
        lines.append(key.ljust(width + 2) + wrapped[0])
        for extra in wrapped[1:]:
            lines.append(" " * (width + 2) + extra)
    return "\n".join(lines)
