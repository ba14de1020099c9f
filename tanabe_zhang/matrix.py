# -*- coding: utf-8 -*-
"""
Node layout of the 65-node body.

The state vector holds 16 segments x 4 layers (core, muscle, fat, skin),
segment-major, followed by the central blood pool.
"""
import numpy as np

BODY_NAMES = [
        "Head", "Chest", "Back", "Pelvis",
        "RShoulder", "LShoulder", "RArm", "LArm", "RHand", "LHand",
        "RThigh", "LThigh", "RLeg", "LLeg", "RFoot", "LFoot",]
LAYER_NAMES = ["core", "muscle", "fat", "skin"]

NUM_SEGMENTS = len(BODY_NAMES)
NUM_LAYERS = len(LAYER_NAMES)
NUM_NODES = NUM_SEGMENTS * NUM_LAYERS + 1
CB = NUM_NODES - 1  # central blood

KELVIN = 273.15


def node_index(segment, layer):
    """
    Position of a (segment, layer) node in the state vector.

    Parameters
    ----------
    segment : int or str
        Segment position (0-15) or body name, e.g. "Chest".
    layer : int or str
        Layer position (0-3) or layer name, e.g. "skin".

    Returns
    -------
    int
    """
    if isinstance(segment, str):
        segment = BODY_NAMES.index(segment)
    if isinstance(layer, str):
        layer = LAYER_NAMES.index(layer)
    if not (0 <= segment < NUM_SEGMENTS and 0 <= layer < NUM_LAYERS):
        raise ValueError("node ({}, {}) is outside the body".format(segment, layer))
    return segment * NUM_LAYERS + layer


INDEX = {name: np.arange(j, NUM_NODES - 1, NUM_LAYERS) for j, name in enumerate(LAYER_NAMES)}
INDEX["cb"] = np.array([CB])

# Segment groups used by the sensation and comfort rules
SEGMENT = {name: i for i, name in enumerate(BODY_NAMES)}
PAIRS = {"hand": (SEGMENT["RHand"], SEGMENT["LHand"]),
         "foot": (SEGMENT["RFoot"], SEGMENT["LFoot"])}
TRUNK = np.array([SEGMENT["Chest"], SEGMENT["Back"], SEGMENT["Pelvis"]])


def split_state(y):
    """Return the (16, 4) tissue temperatures and the central blood temperature."""
    y = np.asarray(y, dtype=float)
    if y.shape != (NUM_NODES,):
        raise ValueError("state must have {} nodes, got {}".format(NUM_NODES, y.shape))
    return y[:CB].reshape(NUM_SEGMENTS, NUM_LAYERS), y[CB]


def join_state(tissue, tcb):
    y = np.empty(NUM_NODES)
    y[:CB] = np.asarray(tissue, dtype=float).reshape(-1)
    y[CB] = tcb
    return y


def remove_bodyname(text):
    """
    Strip a trailing body name from an output column.

    Parameters
    ----------
    text : str
        Column name such as "TskHead" or "LSRHand".

    Returns
    -------
    param : str
        Parameter name, e.g. "Tsk".
    bodyname : str or None
        The removed body name, None if there was none.
    """
    for bn in sorted(BODY_NAMES, key=len, reverse=True):
        if text.endswith(bn) and len(text) > len(bn):
            return text[:-len(bn)], bn
    return text, None
