# -*- coding: utf-8 -*-
"""
Coupled physiology, sensation and comfort simulation.
"""
import logging

import numpy as np

from .body65mn import Body65MN, history_columns, write_csv
from .comfort import local_comfort, overall_comfort
from .events import EventDetector
from .matrix import CB, INDEX
from .sensation import OverallSensation, local_sensation

logger = logging.getLogger(__name__)

EVENT_STEP = 1e-6  # [s] integrated past a crossing to read the new signal level


class ComfortSimulation():
    """
    Drive a Body65MN and evaluate sensation and comfort.

    The integration stops at every crossing of the load signal, the local
    sensation at the crossing is handed to the overall sensation model
    with the flags from before the crossing, then the flags switch and
    the pre-event sensation is captured.

    Parameters
    ----------
    body : Body65MN, optional
        Physiological model. A default body is created when omitted.
    signal : callable, optional
        Load signal as a function of time [s]. The default is always 0.
    transient : bool, optional
        The environment is changing. The default is False.
    control : bool, optional
        The occupant controls the environment. The default is False.
    """

    def __init__(self, body=None, signal=None, transient=False, control=False):
        self.body = body if body is not None else Body65MN()
        self.signal = signal if signal is not None else (lambda t: 0.0)
        self.transient = transient
        self.control = control
        self.detector = EventDetector()
        self.overall = OverallSensation()
        self.model_name = "ComfortSimulation"
        self.t = 0.0
        self.events = []  # sensation state at every crossing
        self._history = []

        self.detector.update(self.signal(self.t), self.t)
        self._history.append(self.evaluate())

    def evaluate(self):
        """
        Sensation and comfort at the current body state.

        Returns
        -------
        dict
        """
        dtdt = self.body.dTdt
        ls = local_sensation(self.body.Tout, self.body.setpt_sk,
                             dtsk=dtdt[INDEX["skin"]], dtcb=dtdt[CB], bsa=self.body.BSA)
        os = self.overall.compute(ls, self.detector.flags)
        lc = local_comfort(ls, os.value)
        oc = overall_comfort(lc, self.transient, self.control)

        return {
                "t": self.t,
                "Tsk": self.body.Tsk,
                "Tcb": self.body.Tcb,
                "LoadApplied": self.detector.load_applied,
                "LoadRemoved": self.detector.load_removed,
                "LS": ls,
                "OS": os.value,
                "Branch": os.branch.name,
                "LC": lc,
                "OC": oc,
                }

    def step(self, dtime=60, output=True):
        """
        Advance by dtime seconds, stopping at load signal crossings.

        Returns
        -------
        dict
            Outputs at the end of the step.
        """
        t_end = self.t + dtime
        event = self.detector.crossing(self.signal)
        while self.t < t_end:
            sol = self.body.integrate(self.t, t_end, events=event)
            self.t = float(sol.t[-1])
            if sol.status != 1:
                break
            # pre-event image with the flags still unchanged
            pre = self.evaluate()
            self.events.append(pre)
            t_next = min(self.t + EVENT_STEP, t_end)
            if t_next > self.t:
                self.body.integrate(self.t, t_next)
                self.t = t_next
            # level past the crossing, time stamped at the crossing itself
            self.detector.update(self.signal(self.t), pre["t"])
            logger.debug("resumed after crossing at t=%.6f", pre["t"])

        out = self.evaluate()
        if output:
            self._history.append(out)
        return out

    def simulate(self, times, dtime=60, output=True):
        """
        Run the simulation.

        Parameters
        ----------
        times : int
            Number of loops.
        dtime : int or float, optional
            Time delta [s]. The default is 60.
        output : bool, optional
            False to skip recording. The default is True.
        """
        for _ in range(times):
            self.step(dtime, output)

    @property
    def LS(self):
        return np.asarray(self._history[-1]["LS"])

    @property
    def OS(self):
        return self._history[-1]["OS"]

    @property
    def LC(self):
        return np.asarray(self._history[-1]["LC"])

    @property
    def OC(self):
        return self._history[-1]["OC"]

    def dict_results(self):
        """
        Get results as a dictionary (convertible to pandas.DataFrame).
        """
        if not self._history:
            logger.warning("The simulation has no data.")
            return None
        return history_columns(self._history)

    def to_csv(self, path=None, folder=None, unit=True, meaning=True):
        """Export the results as csv, see Body65MN.to_csv."""
        return write_csv(self.dict_results(), self.model_name, path, folder, unit, meaning)
