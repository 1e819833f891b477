"""Exception types raised by the orbit solver and kinematics layer."""

from __future__ import annotations


class OrbitError(Exception):
    """Base class for orbit computation failures."""


class DegenerateInputError(OrbitError, ValueError):
    """Quantity is mathematically undefined for this orbit (e.g. semi-major axis at e == 1)."""


class InvalidDomainError(OrbitError, ValueError):
    """Argument outside the domain of a math helper (e.g. acosh of x < 1)."""


class ConvergenceFailure(OrbitError, RuntimeError):
    """Newton iteration did not meet its tolerance within the iteration cap.

    Attributes:
        eccentricity: Eccentricity of the failed solve.
        mean_anomaly_rad: Reduced mean anomaly the solver worked on (radians).
        iterations: Number of iterations performed.
        residual: Last Kepler-equation residual (radians).
    """

    def __init__(
        self,
        eccentricity: float,
        mean_anomaly_rad: float,
        iterations: int,
        residual: float,
    ) -> None:
        self.eccentricity = eccentricity
        self.mean_anomaly_rad = mean_anomaly_rad
        self.iterations = iterations
        self.residual = residual
        super().__init__(
            f'Kepler solver did not converge after {iterations} iterations '
            f'(e={eccentricity!r}, M={mean_anomaly_rad!r} rad, residual={residual:.3e})'
        )
