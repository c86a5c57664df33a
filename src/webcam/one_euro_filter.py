import math
from typing import Optional


class OneEuroFilter:
    """
    Adaptive low-pass filter for one axis of a jittery signal.

    Slow motion gets a low cutoff (heavy smoothing), fast motion raises the
    cutoff so the output keeps up with the hand.
    """

    def __init__(self, min_cutoff=1.0, beta=0.0, d_cutoff=1.0):
        """
        Initialize the One Euro Filter.

        Args:
            min_cutoff: Minimum cutoff frequency in Hz. Lower = more smoothing (less jitter) at low speed.
            beta: Speed coefficient. Higher = less lag (more responsiveness) at high speed.
            d_cutoff: Cutoff frequency for derivative smoothing (Hz).
        """
        self.min_cutoff = min_cutoff
        self.beta = beta
        self.d_cutoff = d_cutoff

        self.x_prev: Optional[float] = None
        self.dx_prev = 0.0
        self.t_prev: Optional[float] = None

    @staticmethod
    def smoothing_factor(t_e, cutoff):
        r = 2 * math.pi * cutoff * t_e
        return r / (r + 1)

    def _exponential_smoothing(self, a, x, x_prev):
        return a * x + (1 - a) * x_prev

    def filter(self, x, t):
        """
        Filter the signal.

        Args:
            x: Current value
            t: Current timestamp in seconds

        Returns:
            Filtered value
        """
        if self.x_prev is None or self.t_prev is None:
            self.x_prev = float(x)
            self.t_prev = float(t)
            return float(x)

        t_e = t - self.t_prev

        # Prevent division by zero or negative time
        if t_e <= 0.0:
            return self.x_prev

        # The derivative is calculated from the raw signal change
        dx = (x - self.x_prev) / t_e
        a_d = self.smoothing_factor(t_e, self.d_cutoff)
        dx_hat = self._exponential_smoothing(a_d, dx, self.dx_prev)

        # constant min_cutoff + coefficient * magnitude of velocity
        cutoff = self.min_cutoff + self.beta * abs(dx_hat)

        a = self.smoothing_factor(t_e, cutoff)
        x_hat = self._exponential_smoothing(a, x, self.x_prev)

        self.x_prev = x_hat
        self.dx_prev = dx_hat
        self.t_prev = t

        return x_hat

    def reset(self) -> None:
        """Forget all history; the next sample passes through unchanged."""
        self.x_prev = None
        self.dx_prev = 0.0
        self.t_prev = None
