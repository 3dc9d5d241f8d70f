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

"""Error-state Kalman filter for tightly-coupled GNSS/INS integration"""

import logging
from typing import Dict, Optional

import numpy as np
from scipy.linalg import LinAlgError, cho_factor, cho_solve, expm

from ..attitude import quat_multiply, rotvec2quat, skew
from ..coordinate.geodetic import EarthModel
from ..coordinate.transforms import ecef2lla, ecef2ned_dcm, ecef2nedv, lla2ecef, ned2ecefv
from ..core.config import MAX_INNOV_COND, FilterConfig
from ..core.data_structures import NavStatus, ObservationEpoch
from ..gnss.least_squares import range_and_rate
from ..io.results import make_record
from ..sensors.clock import ClockSpec
from ..sensors.imu import ImuSpec
from .state import (IDX_ATT, IDX_BA, IDX_BG, IDX_CB, IDX_CD, IDX_POS, IDX_VEL, NUM_STATES,
                    NavigationState, StateError)
from .strapdown import mechanize

logger = logging.getLogger(__name__)

# Least squares state order (pos, vel, cb, cd) mapped onto the error state
LS_TO_ERROR_STATE = np.r_[0:6, IDX_CB, IDX_CD]


class NavigationFilter:
    """Tightly-coupled GNSS/INS error-state Kalman filter

    The filter owns the mechanized ``NavigationState``, the bias and clock
    estimates, and the 17-channel error covariance. Mechanization and
    covariance propagation are separate calls so they can run at different
    rates; ``gnss_update`` folds each correction back into the state and
    resets the error mean.

    Parameters:
    -----------
    config : FilterConfig, optional
        Covariance prior, bias time constants and update options
    earth : EarthModel, optional
        Earth model (WGS84 by default)
    """

    def __init__(self, config: Optional[FilterConfig] = None,
                 earth: Optional[EarthModel] = None):
        self.config = config if config is not None else FilterConfig()
        self.earth = earth if earth is not None else EarthModel()

        self.state = NavigationState()
        self.acc_bias = np.zeros(3)
        self.gyro_bias = np.zeros(3)
        self.clock_bias = 0.0
        self.clock_drift = 0.0

        self.imu_spec: Optional[ImuSpec] = None
        self.clock_spec: Optional[ClockSpec] = None

        self.x = np.zeros(NUM_STATES)
        self.reset_covariance()
        self._last_status = NavStatus.OK

    def reset_covariance(self):
        """Reset the error state to zero and the covariance to the configured prior"""
        cfg = self.config
        std_ba = cfg.std_acc_bias if self.imu_spec is None else self.imu_spec.accel_bias_instability
        std_bg = cfg.std_gyro_bias if self.imu_spec is None else self.imu_spec.gyro_bias_instability

        P = np.zeros((NUM_STATES, NUM_STATES))
        P[IDX_POS, IDX_POS] = cfg.std_pos**2 * np.eye(3)
        P[IDX_VEL, IDX_VEL] = cfg.std_vel**2 * np.eye(3)
        P[IDX_ATT, IDX_ATT] = cfg.std_att**2 * np.eye(3)
        P[IDX_BA, IDX_BA] = std_ba**2 * np.eye(3)
        P[IDX_BG, IDX_BG] = std_bg**2 * np.eye(3)
        P[IDX_CB, IDX_CB] = cfg.std_clk_bias**2
        P[IDX_CD, IDX_CD] = cfg.std_clk_drift**2

        self.x = np.zeros(NUM_STATES)
        self.P = P

    # ------------------------------------------------------------------
    # Initialization
    # ------------------------------------------------------------------
    def set_position(self, lat: float, lon: float, alt: float):
        """Set geodetic position (rad, rad, m)"""
        self.state.set_position(lat, lon, alt)

    def set_velocity(self, vn: float, ve: float, vd: float):
        """Set NED velocity (m/s)"""
        self.state.set_velocity(vn, ve, vd)

    def set_attitude(self, roll: float, pitch: float, yaw: float):
        """Set attitude from euler angles (rad)"""
        self.state.set_euler(roll, pitch, yaw)

    def set_attitude_dcm(self, C_b_l: np.ndarray):
        """Set attitude from a body->NED rotation matrix"""
        self.state.set_dcm(C_b_l)

    def set_clock(self, cb: float, cd: float):
        """Set receiver clock bias (m) and drift (m/s)"""
        self.clock_bias = float(cb)
        self.clock_drift = float(cd)

    def set_clock_spec(self, h0: float, h1: float, h2: float):
        """Set the oscillator power-law coefficients driving the clock process noise"""
        self.clock_spec = ClockSpec(h0, h1, h2)

    def set_oscillator(self, oscillator: str):
        """Set the clock model from a named oscillator preset"""
        self.clock_spec = ClockSpec.from_oscillator(oscillator)

    def set_imu_spec(self, accel_bias_instability: float, accel_noise: float,
                     gyro_bias_instability: float, gyro_noise: float):
        """
        Set the IMU error model

        The bias instabilities also become the prior standard deviations of
        the bias channels.

        Parameters:
        -----------
        accel_bias_instability : float
            Accelerometer bias instability (m/s^2)
        accel_noise : float
            Velocity random walk (m/s/sqrt(s))
        gyro_bias_instability : float
            Gyroscope bias instability (rad/s)
        gyro_noise : float
            Angle random walk (rad/sqrt(s))
        """
        self._set_imu(ImuSpec(accel_bias_instability, accel_noise,
                              gyro_bias_instability, gyro_noise))

    def set_imu_grade(self, grade: str):
        """Set the IMU error model from a named grade preset"""
        self._set_imu(ImuSpec.from_grade(grade))

    def _set_imu(self, spec: ImuSpec):
        self.imu_spec = spec
        for idx, std in ((IDX_BA, spec.accel_bias_instability),
                         (IDX_BG, spec.gyro_bias_instability)):
            self.P[idx, :] = 0.0
            self.P[:, idx] = 0.0
            self.P[idx, idx] = std**2 * np.eye(3)

    def initialize_from_least_squares(self, x: np.ndarray, P: np.ndarray):
        """
        Seed position, velocity, clock and their covariance from a least squares solution

        Parameters:
        -----------
        x : np.ndarray
            8-element solution [ECEF pos, ECEF vel, cb, cd]
        P : np.ndarray
            8x8 solution covariance

        Raises:
        -------
        ValueError
            If the solution has the wrong shape or is not finite (a failed solve)
        """
        x = np.asarray(x, dtype=np.float64)
        P = np.asarray(P, dtype=np.float64)
        if x.shape != (8,) or P.shape != (8, 8):
            raise ValueError(f"Expected an 8-state solution, got x {x.shape} and P {P.shape}")
        if not (np.all(np.isfinite(x)) and np.all(np.isfinite(P))):
            raise ValueError("Least squares solution is not finite, check the solve status")

        lla = ecef2lla(x[0:3], self.earth.ellipsoid)
        C_e_n = ecef2ned_dcm(lla)
        vel = ecef2nedv(x[3:6], lla)

        self.state.set_position(*lla)
        self.state.set_velocity(*vel)
        self.set_clock(x[6], x[7])

        M = np.eye(8)
        M[0:3, 0:3] = C_e_n
        M[3:6, 3:6] = C_e_n
        idx = LS_TO_ERROR_STATE
        self.P[idx, :] = 0.0
        self.P[:, idx] = 0.0
        self.P[np.ix_(idx, idx)] = M @ P @ M.T
        self.x = np.zeros(NUM_STATES)
        logger.info(f"Initialized from least squares at lat={np.degrees(lla[0]):.7f}, "
                    f"lon={np.degrees(lla[1]):.7f}, h={lla[2]:.2f}")

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------
    @property
    def lla(self) -> np.ndarray:
        return self.state.lla

    @property
    def vel(self) -> np.ndarray:
        return self.state.vel.copy()

    @property
    def q_b_l(self) -> np.ndarray:
        return self.state.q_b_l.copy()

    @property
    def C_b_l(self) -> np.ndarray:
        return self.state.C_b_l.copy()

    @property
    def rpy(self) -> np.ndarray:
        return self.state.rpy

    @property
    def last_status(self) -> NavStatus:
        """Outcome of the most recent GNSS update"""
        return self._last_status

    def standard_deviations(self) -> Dict[str, np.ndarray]:
        """1-sigma of every error channel, keyed by channel name"""
        std = np.sqrt(np.diag(self.P))
        return {
            'position': std[IDX_POS],
            'velocity': std[IDX_VEL],
            'attitude': std[IDX_ATT],
            'acc_bias': std[IDX_BA],
            'gyro_bias': std[IDX_BG],
            'clock_bias': std[IDX_CB],
            'clock_drift': std[IDX_CD],
        }

    def to_result(self, t: float) -> np.ndarray:
        """Current solution as a binary result record"""
        return make_record(t, self.state.lla, self.state.vel, self.state.rpy,
                           self.clock_bias, self.clock_drift)

    # ------------------------------------------------------------------
    # Time update
    # ------------------------------------------------------------------
    def mechanize(self, w_ib_b: np.ndarray, f_ib_b: np.ndarray, dt: float):
        """Bias-compensate one IMU sample and advance the navigation state"""
        mechanize(self.state,
                  np.asarray(w_ib_b, dtype=np.float64) - self.gyro_bias,
                  np.asarray(f_ib_b, dtype=np.float64) - self.acc_bias,
                  dt, self.earth)

    def propagate(self, w_ib_b: np.ndarray, f_ib_b: np.ndarray, dt: float):
        """
        Propagate the error covariance over dt about the current mechanized state

        Does not advance the navigation state. The angular rate does not enter
        the first order error dynamics; it is accepted so the call mirrors
        ``mechanize``.

        Parameters:
        -----------
        w_ib_b : np.ndarray
            Body angular rate (rad/s)
        f_ib_b : np.ndarray
            Specific force (m/s^2)
        dt : float
            Propagation interval (s)
        """
        f_hat = np.asarray(f_ib_b, dtype=np.float64) - self.acc_bias
        F = self._system_matrix(f_hat)
        Qc = self._process_noise()

        if self.config.discretization == "van_loan":
            Phi, Qd = self._van_loan(F, Qc, dt)
        else:
            Phi = np.eye(NUM_STATES) + F * dt
            Qd = 0.5 * (Phi @ Qc @ Phi.T + Qc) * dt

        self.x = Phi @ self.x
        P = Phi @ self.P @ Phi.T + Qd
        self.P = 0.5 * (P + P.T)

        self.clock_bias += self.clock_drift * dt

    def _system_matrix(self, f_hat: np.ndarray) -> np.ndarray:
        """Continuous-time error state dynamics linearized about the current state"""
        st = self.state
        lat, h = st.lat, st.alt
        Rn, Re = self.earth.radii_of_curvature(lat)
        C = st.C_b_l

        w_ie = self.earth.earth_rate_vector(lat)
        w_en = self.earth.transport_rate_vector(lat, h, st.vel[0], st.vel[1])
        g0 = self.earth.normal_gravity(lat)
        r0 = self.earth.geocentric_radius(lat)

        F = np.zeros((NUM_STATES, NUM_STATES))

        # Attitude
        F[IDX_ATT, IDX_ATT] = -skew(w_ie + w_en)
        F[IDX_ATT, IDX_VEL] = np.array([[0.0, -1.0 / (Re + h), 0.0],
                                        [1.0 / (Rn + h), 0.0, 0.0],
                                        [0.0, np.tan(lat) / (Re + h), 0.0]])
        F[IDX_ATT, IDX_BG] = -C

        # Velocity
        F[IDX_VEL, IDX_ATT] = -skew(C @ f_hat)
        F[IDX_VEL, IDX_VEL] = -skew(w_ie + 2.0 * w_en)
        F[5, 2] = 2.0 * g0 / r0
        F[IDX_VEL, IDX_BA] = -C

        # Position
        F[IDX_POS, IDX_VEL] = np.eye(3)

        # Gauss-Markov biases
        F[IDX_BA, IDX_BA] = -np.eye(3) / self.config.tau_acc_bias
        F[IDX_BG, IDX_BG] = -np.eye(3) / self.config.tau_gyro_bias

        # Clock
        F[IDX_CB, IDX_CD] = 1.0

        return F

    def _process_noise(self) -> np.ndarray:
        """Continuous-time process noise PSD matrix"""
        Qc = np.zeros((NUM_STATES, NUM_STATES))
        if self.imu_spec is not None:
            spec = self.imu_spec
            S_ba, S_bg = spec.bias_psd(self.config.tau_acc_bias, self.config.tau_gyro_bias)
            Qc[IDX_VEL, IDX_VEL] = spec.accel_noise**2 * np.eye(3)
            Qc[IDX_ATT, IDX_ATT] = spec.gyro_noise**2 * np.eye(3)
            Qc[IDX_BA, IDX_BA] = S_ba * np.eye(3)
            Qc[IDX_BG, IDX_BG] = S_bg * np.eye(3)
        if self.clock_spec is not None:
            Qc[IDX_CB, IDX_CB] = self.clock_spec.bias_psd
            Qc[IDX_CD, IDX_CD] = self.clock_spec.drift_psd
        return Qc

    @staticmethod
    def _van_loan(F: np.ndarray, Qc: np.ndarray, dt: float):
        """Exact discretization of (F, Qc) over dt via the Van Loan matrix exponential"""
        n = F.shape[0]
        A = np.zeros((2 * n, 2 * n))
        A[:n, :n] = -F
        A[:n, n:] = Qc
        A[n:, n:] = F.T
        B = expm(A * dt)
        Phi = B[n:, n:].T
        Qd = Phi @ B[:n, n:]
        return Phi, 0.5 * (Qd + Qd.T)

    # ------------------------------------------------------------------
    # Measurement update
    # ------------------------------------------------------------------
    def gnss_update(self, sv_pos: np.ndarray, sv_vel: np.ndarray, psr: np.ndarray,
                    psrdot: np.ndarray, psr_var: np.ndarray, psrdot_var: np.ndarray) -> bool:
        """
        Correct the state with pseudorange and pseudorange-rate measurements

        Parameters:
        -----------
        sv_pos, sv_vel : np.ndarray
            Satellite ECEF positions (m) and velocities (m/s), shape (N, 3)
        psr, psrdot : np.ndarray
            Measured pseudoranges (m) and pseudorange-rates (m/s)
        psr_var, psrdot_var : np.ndarray
            Measurement variances

        Returns:
        --------
        applied : bool
            False if the update was skipped, see ``last_status``
        """
        psr = np.atleast_1d(np.asarray(psr, dtype=np.float64))
        n = psr.size
        if n < self.config.min_gnss_satellites:
            logger.warning(f"GNSS update skipped: {n} satellites, "
                           f"{self.config.min_gnss_satellites} required")
            self._last_status = NavStatus.INSUFFICIENT_OBSERVATIONS
            return False

        st = self.state
        lla = st.lla
        C_e_n = ecef2ned_dcm(lla)
        pos_e = lla2ecef(lla, self.earth.ellipsoid)
        vel_e = ned2ecefv(st.vel, lla)

        u, udot, psr_hat, psrdot_hat = range_and_rate(
            pos_e, vel_e, self.clock_bias, self.clock_drift,
            np.asarray(sv_pos, dtype=np.float64), np.asarray(sv_vel, dtype=np.float64))
        u_n = u @ C_e_n.T
        udot_n = udot @ C_e_n.T

        H = np.zeros((2 * n, NUM_STATES))
        H[:n, IDX_POS] = -u_n
        H[:n, IDX_CB] = 1.0
        H[n:, IDX_POS] = -udot_n
        H[n:, IDX_VEL] = -u_n
        H[n:, IDX_CD] = 1.0

        dz = np.concatenate([psr - psr_hat, np.atleast_1d(psrdot) - psrdot_hat])
        R = np.diag(np.concatenate([np.atleast_1d(psr_var), np.atleast_1d(psrdot_var)]))
        S = H @ self.P @ H.T + R

        if self.config.innovation_threshold is not None:
            keep = np.abs(dz) <= self.config.innovation_threshold * np.sqrt(np.diag(S))
            if not np.any(keep):
                logger.warning("GNSS update skipped: every measurement failed innovation gating")
                self._last_status = NavStatus.INSUFFICIENT_OBSERVATIONS
                return False
            if not np.all(keep):
                logger.debug(f"Innovation gating rejected {np.count_nonzero(~keep)} of {keep.size} measurements")
                H, dz, R = H[keep], dz[keep], R[np.ix_(keep, keep)]
                S = S[np.ix_(keep, keep)]

        # Pseudorange and pseudorange-rate rows differ in units, condition the correlation form
        d = np.diag(S)
        if (not np.all(np.isfinite(S)) or np.any(d <= 0.0)
                or np.linalg.cond(S / np.sqrt(np.outer(d, d))) > MAX_INNOV_COND):
            logger.warning("GNSS update skipped: innovation covariance is ill-conditioned")
            self._last_status = NavStatus.DIVERGENCE
            return False
        try:
            c = cho_factor(S)
        except LinAlgError:
            logger.warning("GNSS update skipped: innovation covariance is not positive definite")
            self._last_status = NavStatus.DIVERGENCE
            return False

        K = cho_solve(c, H @ self.P).T
        dx = self.x + K @ (dz - H @ self.x)

        I_KH = np.eye(NUM_STATES) - K @ H
        P = I_KH @ self.P @ I_KH.T + K @ R @ K.T
        self.P = 0.5 * (P + P.T)

        self._apply_correction(StateError.from_vector(dx))
        self.x = np.zeros(NUM_STATES)
        self._last_status = NavStatus.OK

        logger.debug(f"GNSS update with {n} satellites, |dx_pos|={np.linalg.norm(dx[IDX_POS]):.3f} m, "
                     f"|dx_vel|={np.linalg.norm(dx[IDX_VEL]):.4f} m/s")
        return True

    def update_epoch(self, epoch: ObservationEpoch) -> bool:
        """GNSS update from an ``ObservationEpoch``"""
        return self.gnss_update(epoch.sv_pos, epoch.sv_vel, epoch.psr, epoch.psrdot,
                                epoch.psr_var, epoch.psrdot_var)

    def _apply_correction(self, error: StateError):
        """Fold an error estimate (true minus estimate) into the navigation state"""
        st = self.state
        lat, h = st.lat, st.alt
        Rn, Re = self.earth.radii_of_curvature(lat)

        st.lat = lat + error.d_position[0] / (Rn + h)
        st.lon = st.lon + error.d_position[1] / ((Re + h) * np.cos(lat))
        st.alt = h - error.d_position[2]

        st.vel = st.vel + error.d_velocity
        st.set_quaternion(quat_multiply(rotvec2quat(error.d_theta), st.q_b_l))

        self.acc_bias = self.acc_bias + error.d_acc_bias
        self.gyro_bias = self.gyro_bias + error.d_gyro_bias
        self.clock_bias += error.d_clock_bias
        self.clock_drift += error.d_clock_drift
