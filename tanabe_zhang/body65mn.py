# -*- coding: utf-8 -*-
import csv
import datetime as dt
import logging
import os

import numpy as np
from scipy.integrate import solve_ivp

from . import thermoregulation as threg
from . import construction as cons
from .construction import _BSAst
from .comfmod import preferred_temp
from .matrix import (NUM_NODES, NUM_SEGMENTS, CB, KELVIN, BODY_NAMES, INDEX,
                     split_state, join_state, remove_bodyname)
from .params import ALL_OUT_PARAMS

logger = logging.getLogger(__name__)

RADIATION_MODES = ("coefficient", "flux")


class Body65MN():
    """
    65-node thermoregulation model of a human body.

    16 segments of 4 layers (core, muscle, fat, skin) exchange heat with a
    central blood pool. The local boundary conditions come from outside,
    e.g. a CFD solver.

    Parameters
    ----------
    height : float, optional
        Height [m]. The default is 1.72.
    weight : float, optional
        Weight [kg]. The default is 74.43.
    met : float, optional
        Activity level [met]. The default is 1.0.
    radiation_mode : str, optional
        "coefficient" when RAD holds radiative heat transfer coefficients
        [W/(m2.K)] exchanging with MRT, "flux" when RAD holds absorbed
        radiative fluxes [W/m2]. The default is "coefficient".
    rate_gain : float, optional
        Weight of the temperature rate in the control error signals [s].
        The default is 0.
    reset_setpoint : bool, optional
        Reset the set points by a passive run at the neutral condition,
        leaving the body at steady state with Ta = MRT = the neutral
        operative temperature. False keeps the tabulated set points, which
        are not a steady state of the model. The default is True.
    ex_output : None, list or "all", optional
        Extra output parameters, e.g. ["BFsk", "Esk"]. "all" outputs
        everything. The default is None.


    Setter & Getter
    -------
    Boundary conditions are set with setters. Lists must have 16 items
    ordered as:
    "Head", "Chest", "Back", "Pelvis", "RShoulder", "LShoulder", "RArm",
    "LArm", "RHand", "LHand", "RThigh", "LThigh", "RLeg", "LLeg", "RFoot",
    "LFoot"

    Ta : float or list
        Local air temperature [oC].
    HTC : float or list
        Local convective heat transfer coefficient [W/(m2.K)].
    RAD : float or list
        Local radiative coefficient [W/(m2.K)] or flux [W/m2].
    MRT : float
        Mean radiant temperature [oC].
    Tamb : float
        Ambient temperature [oC], recorded only.
    RH : float or list
        Relative humidity [%].
    Icl : float or list
        Clothing insulation [clo].
    met : float
        Activity level [met].
    bodytemp : numpy.ndarray (65,)
        All node temperatures [oC].

    set_boundary() takes the same inputs in Kelvin.


    Getter
    -------
    Tsk, Tcr, Tms, Tfat : numpy.ndarray (16,)
        Layer temperatures [oC].
    Tcb : float
        Central blood temperature [oC].
    TskMean : float
        Mean skin temperature [oC].
    Tout : numpy.ndarray (17,)
        Skin temperatures and central blood temperature [K].
    dTdt : numpy.ndarray (65,)
        Node temperature rates [K/s].
    Wet : numpy.ndarray (16,)
        Skin wettedness [-].
    BSA : numpy.ndarray (16,)
        Local body surface area [m2].
    """

    def __init__(
            self,
            height=1.72,
            weight=74.43,
            met=1.0,
            radiation_mode="coefficient",
            rate_gain=0.0,
            reset_setpoint=True,
            ex_output=None,
            ):

        self._height = height  # [m]
        self._weight = weight  # [kg]
        self._ex_output = ex_output  # extra output keys
        self.radiation_mode = radiation_mode  # meaning of RAD
        self.rate_gain = rate_gain  # weight of dT/dt in the error signals [s]

        # Local body surface area [m2]
        self._bsa = cons.localbsa(height, weight)
        # Heat capacity [J/K]
        self._cap = cons.capacity(height, weight)
        # Conductance [W/K]
        self._cdt = cons.conductance(height, weight)
        # Basal blood flow [L/h]
        self._bfb = cons.basal_bloodflow(height, weight)
        # Basal metabolic heat [W]
        self._mbase = cons.local_mbase(height, weight)

        # Set-point temperature [oC]
        self.setpt = cons.setpoints()

        # Initial body temperature [oC]
        self._bodytemp = self.setpt.copy()

        # Default boundary conditions
        self._ta = np.ones(NUM_SEGMENTS) * 28.8
        self._htc = np.ones(NUM_SEGMENTS) * threg.HC_FALLBACK
        self._rad = np.ones(NUM_SEGMENTS) * 4.9
        self._mrt = 28.8
        self._tamb = 28.8
        self._rh = np.ones(NUM_SEGMENTS) * 50
        self._clo = cons.DEFAULT_CLO.copy()  # [clo]
        self._iclo = np.ones(NUM_SEGMENTS) * 0.45  # vapor permeation efficiency of clothing
        self._met = met  # [met]

        self.ex_q = np.zeros(NUM_NODES)  # extra heat input by node [W]
        self._t = dt.timedelta(0)
        self._cycle = 0
        self.model_name = "Body65MN"
        self.solver = {"method": "BDF", "rtol": 1e-6, "atol": 1e-8}  # solve_ivp settings

        if reset_setpoint:
            self.reset_setpoints()

        self._history = []
        self._history.append(self._output(self._heat_balance(self._bodytemp)))

    def reset_setpoints(self, duration=600000):
        """
        Reset the set points by a passive run at the neutral condition.

        Note: the boundary conditions (Ta, MRT, RH, HTC, RAD) and the body
        temperatures are reset as well.

        Parameters
        ----------
        duration : float, optional
            Length of the passive exposure [s]. The default is 600000.

        Returns
        -------
        numpy.ndarray (65,)
            The new set points [oC].
        """
        # Operative temperature where PMV = 0
        clo = float(np.average(self._clo, weights=self._bsa))
        to = preferred_temp(va=0.1, rh=50, met=self._met, clo=clo)
        self.Ta = to
        self.MRT = to
        self.RH = 50
        self.HTC = threg.HC_FALLBACK
        self.RAD = 4.9 if self.radiation_mode == "coefficient" else 0.0

        # Long passive exposure to reach the steady state
        self.integrate(0, duration, passive=True, rtol=1e-9, atol=1e-9)

        self.setpt = self._bodytemp.copy()
        logger.info("set points reset at To=%.2f oC, mean skin %.2f oC", to, self.TskMean)
        return self.setpt.copy()

    def simulate(self, times, dtime=60, output=True):
        """
        Run the model.

        Parameters
        ----------
        times : int
            Number of loops.
        dtime : int or float, optional
            Time delta [s]. The default is 60.
        output : bool, optional
            False to skip recording. The default is True.

        Returns
        -------
        None.
        """
        for t in range(times):
            self._t += dt.timedelta(0, dtime)
            self._cycle += 1
            self.integrate(0, dtime)
            if output:
                balance = self._heat_balance(self._bodytemp)
                self._history.append(self._output(balance, dtime))

    def integrate(self, t0, t1, events=None, passive=False, **options):
        """
        Advance the body temperatures from t0 to t1.

        Integration stops early when a terminal event fires; the body keeps
        the state at the stop time.

        Parameters
        ----------
        t0, t1 : float
            Start and end time [s].
        events : callable or list, optional
            State events for scipy.integrate.solve_ivp.
        passive : bool, optional
            Integrate without thermoregulation. The default is False.
        **options
            Overrides of the solver settings, e.g. rtol.

        Returns
        -------
        scipy.integrate OdeResult
        """
        def fun(t, y):
            return self._heat_balance(y, passive=passive)["dTdt"]

        solver = dict(self.solver, **options)
        sol = solve_ivp(fun, (t0, t1), self._bodytemp, events=events, **solver)
        if sol.status == -1:
            raise RuntimeError("integration failed at t={}: {}".format(sol.t[-1], sol.message))
        self._bodytemp = sol.y[:, -1].copy()
        return sol

    def derivative(self, t, y):
        """Node temperature rates [K/s] for an external integrator."""
        return self._heat_balance(y)["dTdt"]

    def _heat_balance(self, bodytemp, passive=False):
        """
        Evaluate the heat balance of all nodes.

        Parameters
        ----------
        bodytemp : numpy.ndarray (65,)
            Node temperatures [oC].
        passive : bool, optional
            Without thermoregulation. The default is False.

        Returns
        -------
        dict
            dTdt and the intermediate values of the evaluation.
        """
        tissue, tcb = split_state(bodytemp)
        if passive:  # no thermoregulation
            setpt = tissue
        else:
            setpt, _ = split_state(self.setpt)

        balance = self._balance(tissue, tcb, setpt)
        if self.rate_gain and not passive:
            # Second pass with the rates in the error signals
            rate, _ = split_state(balance["dTdt"])
            balance = self._balance(tissue, tcb, setpt, rate)
        return balance

    def _balance(self, tissue, tcb, setpt, rate=None):
        #------------------------------------------------------------------
        # Heat transfer coefficients and operative temperature
        #------------------------------------------------------------------
        hc = threg.fixed_hc(self._htc)
        if self.radiation_mode == "coefficient":
            hr = self._rad
            tr = self._mrt
            q_rad = np.zeros(NUM_SEGMENTS)
        elif self.radiation_mode == "flux":
            hr = np.zeros(NUM_SEGMENTS)
            tr = self._ta
            q_rad = self._rad * self._bsa  # absorbed [W]
        else:
            raise ValueError("radiation_mode must be one of {}".format(RADIATION_MODES))
        to = threg.operative_temp(self._ta, tr, hc, hr)
        h_t = threg.total_htc(hc, hr, self._clo)

        #------------------------------------------------------------------
        # Thermoregulation
        #------------------------------------------------------------------
        err, wrm, cld = threg.error_signals(tissue, setpt, rate, self.rate_gain)
        ctrl = threg.control_signals(err, wrm, cld)

        #------------------------------------------------------------------
        # Heat production
        #------------------------------------------------------------------
        mwork = threg.local_mwork(self._met, self._mbase, self._bsa)
        q = self._mbase.copy()
        q[:, 1] += mwork + ctrl.shiver  # work and shivering in the muscle
        qall = q.sum()

        #------------------------------------------------------------------
        # Blood flow, conduction and heat loss
        #------------------------------------------------------------------
        bf = threg.bloodflow(self._bfb, mwork, ctrl)  # [L/h]
        b = cons.RHO_C * bf * (tissue - tcb)  # exchange with the central blood [W]
        d = self._cdt * (tissue[:, :3] - tissue[:, 1:])  # between adjacent layers [W]

        tsk = tissue[:, 3]
        shlsk = h_t * (tsk - to) * self._bsa
        wet, e_sk, e_max = threg.evaporation(
                tsk, self._ta, self._rh, hc, self._clo, self._bsa, ctrl.sweat, self._iclo)

        # Respiration, inhaled air averaged over the head and chest
        ta_res = np.average(self._ta[:2], weights=self._bsa[:2])
        rh_res = np.average(self._rh[:2], weights=self._bsa[:2])
        p_a = threg.antoine(ta_res) * rh_res / 100
        res_sh, res_lh = threg.resp_heatloss(ta_res, p_a, qall)

        #------------------------------------------------------------------
        # Heat balance
        #------------------------------------------------------------------
        heat = q - b
        heat[:, :3] -= d
        heat[:, 1:] += d
        heat[:, 3] += q_rad - shlsk - e_sk
        heat[1, 0] -= res_sh + res_lh  # respiration leaves the chest core
        heat += self.ex_q[:CB].reshape(heat.shape)

        dtdt = join_state(heat, b.sum() + self.ex_q[CB]) / self._cap

        return {
                "dTdt": dtdt, "ctrl": ctrl, "to": to, "h_t": h_t, "bf": bf,
                "q": q, "mwork": mwork, "qall": qall, "shlsk": shlsk,
                "wet": wet, "e_sk": e_sk, "e_max": e_max,
                "res_sh": res_sh, "res_lh": res_lh,
                }

    def _output(self, balance, dtime=0):
        """
        Output parameters of one step.

        Returns
        -------
        dictout : dict
        """
        ctrl = balance["ctrl"]
        dictout = {}
        dictout["CycleTime"] = self._cycle
        dictout["ModTime"] = self._t
        dictout["dt"] = dtime
        dictout["TskMean"] = self.TskMean
        dictout["Tsk"] = self.Tsk
        dictout["Tcr"] = self.Tcr
        dictout["Tcb"] = self.Tcb
        dictout["Wet"] = balance["wet"]
        dictout["Met"] = balance["qall"]
        dictout["RES"] = balance["res_sh"] + balance["res_lh"]
        dictout["THLsk"] = balance["shlsk"] + balance["e_sk"]

        detailout = {}
        if self._ex_output:
            detailout["Name"] = self.model_name
            detailout["Setptcr"] = self.setpt[INDEX["core"]].copy()
            detailout["Setptsk"] = self.setpt_sk
            detailout["Tms"] = self.Tms
            detailout["Tfat"] = self.Tfat
            detailout["To"] = balance["to"]
            detailout["Ht"] = balance["h_t"]
            detailout["Ta"] = self._ta.copy()
            detailout["HTC"] = self._htc.copy()
            detailout["RAD"] = self._rad.copy()
            detailout["MRT"] = self._mrt
            detailout["Tamb"] = self._tamb
            detailout["RH"] = self._rh.copy()
            detailout["Icl"] = self._clo.copy()
            detailout["met"] = self._met
            detailout["Esk"] = balance["e_sk"]
            detailout["Emax"] = balance["e_max"]
            detailout["Esweat"] = ctrl.sweat
            detailout["Mshiv"] = ctrl.shiver
            detailout["Mwork"] = balance["mwork"]
            detailout["SHLsk"] = balance["shlsk"]
            detailout["BFcr"] = balance["bf"][:, 0]
            detailout["BFms"] = balance["bf"][:, 1]
            detailout["BFsk"] = balance["bf"][:, 3]
            detailout["DL"] = ctrl.dilation
            detailout["ST"] = ctrl.constriction
            detailout["WRMS"] = ctrl.wrms
            detailout["CLDS"] = ctrl.clds
            detailout["RESsh"] = balance["res_sh"]
            detailout["RESlh"] = balance["res_lh"]

        if self._ex_output == "all":
            dictout.update(detailout)
        elif isinstance(self._ex_output, list):
            for key in self._ex_output:
                if key in detailout:
                    dictout[key] = detailout[key]
        return dictout

    def dict_results(self):
        """
        Get results as a dictionary (convertible to pandas.DataFrame).

        Returns
        -------
        dict
        """
        if not self._history:
            logger.warning("The model has no data.")
            return None
        return history_columns(self._history)

    def to_csv(self, path=None, folder=None, unit=True, meaning=True):
        """
        Export the results as csv.

        Parameters
        ----------
        path : str, optional
            Output path. The default is "<model name>_<time>.csv".
        folder : str, optional
            Output folder used with the default file name.
        unit : bool, optional
            Write units. The default is True.
        meaning : bool, optional
            Write the meaning of the parameters. The default is True.

        Returns
        -------
        str
            The written path.
        """
        return write_csv(self.dict_results(), self.model_name, path, folder, unit, meaning)

    #--------------------------------------------------------------------------
    # Setter & getter
    #--------------------------------------------------------------------------
    def set_boundary(self, t_air=None, htc=None, rad=None, mrt=None, tamb=None):
        """
        Set the boundary conditions in Kelvin.

        Parameters
        ----------
        t_air : float or list, optional
            Local air temperature [K].
        htc : float or list, optional
            Local convective heat transfer coefficient [W/(m2.K)].
        rad : float or list, optional
            Local radiative coefficient [W/(m2.K)] or flux [W/m2].
        mrt : float, optional
            Mean radiant temperature [K].
        tamb : float, optional
            Ambient temperature [K].
        """
        if t_air is not None:
            self.Ta = _to16array(t_air) - KELVIN
        if htc is not None:
            self.HTC = htc
        if rad is not None:
            self.RAD = rad
        if mrt is not None:
            self.MRT = mrt - KELVIN
        if tamb is not None:
            self.Tamb = tamb - KELVIN

    @property
    def Ta(self):
        """
        Getter

        Returns
        -------
        Ta : numpy.ndarray (16,)
            Air temperature [oC].
        """
        return self._ta
    @Ta.setter
    def Ta(self, inp):
        self._ta = _to16array(inp)

    @property
    def HTC(self):
        """
        Getter

        Returns
        -------
        HTC : numpy.ndarray (16,)
            Convective heat transfer coefficient [W/(m2.K)].
        """
        return self._htc
    @HTC.setter
    def HTC(self, inp):
        self._htc = _to16array(inp)

    @property
    def RAD(self):
        """
        Getter

        Returns
        -------
        RAD : numpy.ndarray (16,)
            Radiative coefficient [W/(m2.K)] or flux [W/m2].
        """
        return self._rad
    @RAD.setter
    def RAD(self, inp):
        self._rad = _to16array(inp)

    @property
    def MRT(self):
        """
        Getter

        Returns
        -------
        MRT : float
            Mean radiant temperature [oC].
        """
        return self._mrt
    @MRT.setter
    def MRT(self, inp):
        self._mrt = float(inp)

    @property
    def Tamb(self):
        return self._tamb
    @Tamb.setter
    def Tamb(self, inp):
        self._tamb = float(inp)

    @property
    def RH(self):
        """
        Getter

        Returns
        -------
        RH : numpy.ndarray (16,)
            Relative humidity [%].
        """
        return self._rh
    @RH.setter
    def RH(self, inp):
        self._rh = _to16array(inp)

    @property
    def Icl(self):
        """
        Getter

        Returns
        -------
        Icl : numpy.ndarray (16,)
            Clothing insulation [clo].
        """
        return self._clo
    @Icl.setter
    def Icl(self, inp):
        self._clo = _to16array(inp)

    @property
    def met(self):
        """
        Getter

        Returns
        -------
        met : float
            Activity level [met].
        """
        return self._met
    @met.setter
    def met(self, inp):
        self._met = float(inp)

    @property
    def bodytemp(self):
        """
        Getter

        Returns
        -------
        bodytemp : numpy.ndarray (65,)
            All node temperatures [oC].
        """
        return self._bodytemp
    @bodytemp.setter
    def bodytemp(self, inp):
        inp = np.asarray(inp, dtype=float)
        if inp.shape != (NUM_NODES,):
            raise ValueError("bodytemp must have {} nodes".format(NUM_NODES))
        self._bodytemp = inp.copy()

    #--------------------------------------------------------------------------
    # Getter
    #--------------------------------------------------------------------------
    @property
    def BSA(self):
        """
        Getter

        Returns
        -------
        BSA : numpy.ndarray (16,)
            Body surface areas by local body segments [m2].
        """
        return self._bsa.copy()

    @property
    def BMR(self):
        """
        Getter

        Returns
        -------
        BMR : float
            Basal metabolic rate [met].
        """
        return threg.basal_met_rate(self._mbase, self._bsa)

    @property
    def setpt_sk(self):
        """
        Getter

        Returns
        -------
        setpt_sk : numpy.ndarray (16,)
            Skin set-point temperatures [oC].
        """
        return self.setpt[INDEX["skin"]].copy()

    @property
    def Tsk(self):
        """
        Getter

        Returns
        -------
        Tsk : numpy.ndarray (16,)
            Skin temperatures by the local body segments [oC].
        """
        return self._bodytemp[INDEX["skin"]].copy()

    @property
    def Tcr(self):
        """
        Getter

        Returns
        -------
        Tcr : numpy.ndarray (16,)
            Core temperatures by the local body segments [oC].
        """
        return self._bodytemp[INDEX["core"]].copy()

    @property
    def Tms(self):
        """
        Getter

        Returns
        -------
        Tms : numpy.ndarray (16,)
            Muscle temperatures by the local body segments [oC].
        """
        return self._bodytemp[INDEX["muscle"]].copy()

    @property
    def Tfat(self):
        """
        Getter

        Returns
        -------
        Tfat : numpy.ndarray (16,)
            Fat temperatures by the local body segments [oC].
        """
        return self._bodytemp[INDEX["fat"]].copy()

    @property
    def Tcb(self):
        """
        Getter

        Returns
        -------
        Tcb : float
            Central blood temperature [oC].
        """
        return float(self._bodytemp[CB])

    @property
    def TskMean(self):
        """
        Getter

        Returns
        -------
        TskMean : float
            Mean skin temperature of the whole body [oC].
        """
        return float(np.average(self.Tsk, weights=_BSAst))

    @property
    def Tout(self):
        """
        Getter

        Returns
        -------
        Tout : numpy.ndarray (17,)
            Skin temperatures of the 16 segments and the central blood
            temperature [K].
        """
        return np.append(self.Tsk, self.Tcb) + KELVIN

    @property
    def dTdt(self):
        """
        Getter

        Returns
        -------
        dTdt : numpy.ndarray (65,)
            Node temperature rates at the current state [K/s].
        """
        return self._heat_balance(self._bodytemp)["dTdt"]

    @property
    def Wet(self):
        """
        Getter

        Returns
        -------
        Wet : numpy.ndarray (16,)
            Skin wettedness on local body segments [-].
        """
        return self._heat_balance(self._bodytemp)["wet"]

    @property
    def bodyname(self):
        return list(BODY_NAMES)

    @property
    def results(self):
        return self.dict_results()


def history_columns(history):
    """
    Convert recorded output dictionaries to columns.

    Arrays of 16 values get the body names as suffix, other arrays their
    position.

    Parameters
    ----------
    history : list of dict

    Returns
    -------
    dict
        Column name to list of values.
    """
    key2keys = {}
    for key, value in history[0].items():
        if isinstance(value, (str, dt.timedelta)) or np.ndim(value) == 0:
            keys = [key]
        elif len(value) == NUM_SEGMENTS:
            keys = [key + bn for bn in BODY_NAMES]
        else:
            keys = [key + str(i) for i in range(len(value))]
        key2keys[key] = keys

    outdict = {k: [] for keys in key2keys.values() for k in keys}
    for dictout in history:
        for key, value in dictout.items():
            keys = key2keys[key]
            values = [value] if len(keys) == 1 else value
            for k, v in zip(keys, values):
                outdict[k].append(v)
    return outdict


def write_csv(dictout, name, path=None, folder=None, unit=True, meaning=True):
    """Write result columns to csv with unit and meaning rows."""
    if path is None:
        nowtime = dt.datetime.now().strftime("%Y%m%d-%H%M%S")
        path = "{}_{}.csv".format(name, nowtime)
        if folder:
            os.makedirs(folder, exist_ok=True)
            path = os.path.join(folder, path)
    elif not (path.endswith(".csv") or path.endswith(".txt")):
        path += ".csv"

    columns = list(dictout.keys())
    units = []
    meanings = []
    for col in columns:
        param, rbn = remove_bodyname(col)
        if param in ALL_OUT_PARAMS:
            units.append(ALL_OUT_PARAMS[param]["unit"])
            m = ALL_OUT_PARAMS[param]["meaning"]
            meanings.append(m.replace("body part", rbn) if rbn else m)
        else:
            units.append("")
            meanings.append("")

    with open(path, "wt", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(columns)
        if unit:
            writer.writerow(units)
        if meaning:
            writer.writerow(meanings)
        for i in range(len(dictout[columns[0]])):
            writer.writerow([dictout[k][i] for k in columns])
    return path


def _to16array(inp):
    """
    Make ndarray (16,).

    Parameters
    ----------
    inp : int, float, ndarray, list
        Number you make as 16array.

    Returns
    -------
    ndarray
    """
    array = np.asarray(inp, dtype=float)
    if array.ndim == 0:
        return np.ones(NUM_SEGMENTS) * float(array)
    array = array.reshape(-1)
    if array.size == NUM_SEGMENTS:
        return array.copy()
    if array.size == 1:
        return np.ones(NUM_SEGMENTS) * array[0]
    raise ValueError("expected a scalar or {} values, got {}".format(NUM_SEGMENTS, array.size))
