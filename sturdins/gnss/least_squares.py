# Copyright 2024 inuex35
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Iterative weighted least squares for position, velocity and clock from psr/psrdot"""

import logging
from typing import Optional, Tuple

import numpy as np
from numpy.linalg import norm
from scipy.linalg import LinAlgError, cho_factor, cho_solve

from ..core.config import LS_MAX_COND, LS_MAX_ITER, LS_MIN_SATS, LS_TOL
from ..core.data_structures import NavStatus, ObservationEpoch

logger = logging.getLogger(__name__)

NUM_LS_STATES = 8   # ECEF pos (3), ECEF vel (3), clock bias, clock drift


def range_and_rate(pos: np.ndarray, vel: np.ndarray, cb: float, cd: float,
                   sv_pos: np.ndarray, sv_vel: np.ndarray):
    """
    Predict pseudorange and pseudorange-rate for a set of satellites

    Parameters:
    -----------
    pos, vel : np.ndarray
        Receiver ECEF position (m) and velocity (m/s)
    cb, cd : float
        Receiver clock bias (m) and drift (m/s)
    sv_pos, sv_vel : np.ndarray
        Satellite ECEF positions (m) and velocities (m/s), shape (N, 3)

    Returns:
    --------
    u : np.ndarray
        Unit line-of-sight vectors receiver->satellite, shape (N, 3)
    udot : np.ndarray
        Time derivative of the unit vectors, shape (N, 3)
    psr : np.ndarray
        Predicted pseudoranges (m), shape (N,)
    psrdot : np.ndarray
        Predicted pseudorange-rates (m/s), shape (N,)
    """
    sv_pos = np.atleast_2d(sv_pos)
    sv_vel = np.atleast_2d(sv_vel)

    dr = sv_pos - pos
    dv = sv_vel - vel
    r = norm(dr, axis=1)
    u = dr / r[:, None]

    rr = np.sum(u * dv, axis=1)
    udot = (dv - u * rr[:, None]) / r[:, None]

    return u, udot, r + cb, rr + cd


def geometry_dop(u: np.ndarray) -> Tuple[float, float, float]:
    """
    Dilution of precision from line-of-sight unit vectors

    Parameters:
    -----------
    u : np.ndarray
        Unit line-of-sight vectors, shape (N, 3), N >= 4

    Returns:
    --------
    gdop, pdop, tdop : float
        Geometric, position and time dilution of precision
    """
    G = np.column_stack([-np.atleast_2d(u), np.ones(len(u))])
    Q = np.linalg.inv(G.T @ G)
    d = np.diag(Q)
    return np.sqrt(d.sum()), np.sqrt(d[:3].sum()), np.sqrt(d[3])


def gauss_newton(x: np.ndarray, P: np.ndarray, sv_pos: np.ndarray, sv_vel: np.ndarray,
                 psr: np.ndarray, psrdot: np.ndarray, psr_var: np.ndarray,
                 psrdot_var: np.ndarray, max_iter: int = LS_MAX_ITER,
                 tol: float = LS_TOL) -> bool:
    """
    Gauss-Newton solve for receiver position, velocity and clock

    Parameters:
    -----------
    x : np.ndarray
        State [x, y, z, vx, vy, vz, cb, cd] (ECEF m, m/s, m, m/s). Holds the
        initial guess on entry and the solution on success.
    P : np.ndarray
        8x8 covariance, overwritten on success
    sv_pos, sv_vel : np.ndarray
        Satellite ECEF positions and velocities, shape (N, 3)
    psr, psrdot : np.ndarray
        Measured pseudoranges (m) and pseudorange-rates (m/s)
    psr_var, psrdot_var : np.ndarray
        Measurement variances
    max_iter : int
        Iteration cap
    tol : float
        Convergence threshold on the norm of the state update

    Returns:
    --------
    converged : bool
        False with ``x`` and ``P`` untouched if fewer than four satellites
        are given, the information matrix is singular or ill-conditioned,
        or the iteration cap is reached
    """
    psr = np.atleast_1d(psr)
    n = psr.size
    if n < LS_MIN_SATS:
        logger.warning(f"Least squares needs {LS_MIN_SATS} satellites, got {n}")
        return False

    psrdot = np.atleast_1d(psrdot)
    w = np.concatenate([1.0 / np.atleast_1d(psr_var), 1.0 / np.atleast_1d(psrdot_var)])
    xk = np.array(x, dtype=np.float64)

    H = np.zeros((2 * n, NUM_LS_STATES))
    H[:n, 6] = 1.0
    H[n:, 7] = 1.0

    for iteration in range(max_iter):
        u, udot, psr_hat, psrdot_hat = range_and_rate(
            xk[0:3], xk[3:6], xk[6], xk[7], sv_pos, sv_vel)

        H[:n, 0:3] = -u
        H[n:, 0:3] = -udot
        H[n:, 3:6] = -u
        dz = np.concatenate([psr - psr_hat, psrdot - psrdot_hat])

        info = H.T @ (w[:, None] * H)
        if not np.all(np.isfinite(info)) or np.linalg.cond(info) > LS_MAX_COND:
            logger.warning("Least squares information matrix is ill-conditioned")
            return False
        try:
            c = cho_factor(info)
        except LinAlgError:
            logger.warning("Least squares information matrix is not positive definite")
            return False

        dx = cho_solve(c, H.T @ (w * dz))
        xk += dx

        if norm(dx) < tol:
            x[:] = xk
            P[:] = cho_solve(c, np.eye(NUM_LS_STATES))
            logger.debug(f"Least squares converged in {iteration + 1} iterations, "
                         f"|dx| = {norm(dx):.2e}")
            return True

    logger.warning(f"Least squares did not converge in {max_iter} iterations")
    return False


def solve_epoch(epoch: ObservationEpoch, x0: Optional[np.ndarray] = None):
    """
    Least squares solve of a single observation epoch

    Parameters:
    -----------
    epoch : ObservationEpoch
        Satellite states and measurements
    x0 : np.ndarray, optional
        Initial 8-element guess, Earth centre at rest by default

    Returns:
    --------
    status : NavStatus
        Outcome of the solve
    x : np.ndarray
        Solution, or the initial guess on failure
    P : np.ndarray
        8x8 covariance, NaN on failure
    """
    x = np.zeros(NUM_LS_STATES) if x0 is None else np.array(x0, dtype=np.float64)
    P = np.full((NUM_LS_STATES, NUM_LS_STATES), np.nan)

    if epoch.num_sv < LS_MIN_SATS:
        logger.warning(f"Epoch at t={epoch.time} has {epoch.num_sv} satellites, "
                       f"{LS_MIN_SATS} required")
        return NavStatus.INSUFFICIENT_OBSERVATIONS, x, P

    ok = gauss_newton(x, P, epoch.sv_pos, epoch.sv_vel, epoch.psr, epoch.psrdot,
                      epoch.psr_var, epoch.psrdot_var)
    return (NavStatus.OK if ok else NavStatus.DIVERGENCE), x, P
