# -*- coding: utf-8 -*-
"""
Load applied / load removed event flags.
"""
import logging

logger = logging.getLogger(__name__)

THRESHOLD = 0.5


class EventDetector():
    """
    Two level flags driven by one scalar signal.

    load_applied is true while the signal is above the threshold and
    load_removed while it is below. There is no hysteresis: a signal
    sitting exactly on the threshold clears both flags.

    Parameters
    ----------
    threshold : float, optional
        Switching level. The default is 0.5.
    """

    def __init__(self, threshold=THRESHOLD):
        self.threshold = threshold
        self.load_applied = False
        self.load_removed = False
        self._initialized = False
        self.history = []  # (time, flag name) of every rising edge

    def levels(self, signal):
        """Flags implied by a signal value."""
        return signal > self.threshold, signal < self.threshold

    def update(self, signal, t=None):
        """
        Set the flags from the current signal.

        The first call only initialises the flags.

        Returns
        -------
        applied, removed : bool
            True for a flag that has just switched on.
        """
        applied, removed = self.levels(signal)
        rose_applied = self._initialized and applied and not self.load_applied
        rose_removed = self._initialized and removed and not self.load_removed
        self.load_applied, self.load_removed = applied, removed
        self._initialized = True

        if rose_applied:
            self.history.append((t, "load_applied"))
            logger.info("load applied at t=%s", t)
        if rose_removed:
            self.history.append((t, "load_removed"))
            logger.info("load removed at t=%s", t)
        return rose_applied, rose_removed

    @property
    def flags(self):
        """
        Getter

        Returns
        -------
        tuple of bool
            (load_applied, load_removed).
        """
        return (self.load_applied, self.load_removed)

    def crossing(self, signal):
        """
        Build a state event for scipy.integrate.solve_ivp.

        Parameters
        ----------
        signal : callable
            Driving signal as a function of time [s].

        Returns
        -------
        callable
            Event function, zero where the signal crosses the threshold.
            Integration stops at the crossing.
        """
        def event(t, y):
            return signal(t) - self.threshold
        event.terminal = True
        event.direction = 0
        return event
