# -*- coding: utf-8 -*-
from .body65mn import Body65MN
from .simulation import ComfortSimulation
from .events import EventDetector
from .sensation import local_sensation, overall_sensation, OverallSensation, Branch
from .comfort import local_comfort, overall_comfort
from .params import show_outparam_docs

__version__ = "0.1.0"
