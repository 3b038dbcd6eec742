"""
Cost of brute-force quadrature for an N-electron wavefunction.

An inner product on L^2(R^{3N}) evaluated with a tensor-product rule needs
``points_per_dimension ** (3N)`` samples. For silicon (N = 28) and two points
per dimension a one-year budget leaves under two attoseconds per sample.
"""

JULIAN_YEAR = 365.25 * 24 * 3600.0  # seconds
ATTOSECOND = 1e-18  # seconds


def sample_count(n_particles: int, points_per_dimension: int = 2) -> int:
    if n_particles < 1:
        msg = "n_particles must be at least 1"
        raise ValueError(msg)
    if points_per_dimension < 1:
        msg = "points_per_dimension must be at least 1"
        raise ValueError(msg)
    return points_per_dimension ** (3 * n_particles)


def sample_time_budget(
    n_particles: int, budget_seconds: float = JULIAN_YEAR, points_per_dimension: int = 2
) -> float:
    """Seconds available per quadrature sample."""
    if budget_seconds <= 0:
        msg = "budget_seconds must be positive"
        raise ValueError(msg)
    return budget_seconds / sample_count(n_particles, points_per_dimension)


def to_attoseconds(seconds: float) -> float:
    return seconds / ATTOSECOND
