from __future__ import annotations

import numpy as np


class Grid:
    """
    Uniform grid on [0, 1]: N intervals, N+1 nodes, eta[0]=0 (lower plate), eta[N]=1 (upper plate).
    """
    def __init__(self, N: int):
        if N < 1:
            raise ValueError(f"Grid needs at least one interval, got N={N}")
        self.N = int(N)
        self.h = 1.0 / self.N
        self.eta = np.arange(self.N + 1, dtype=np.float64) * self.h
        self.eta[-1] = 1.0

    @property
    def n_nodes(self) -> int:
        return self.N + 1

    def derivative(self, f: np.ndarray) -> np.ndarray:
        """
        f' on all nodes: central (f[i+1]-f[i-1])/2h inside,
        one-sided (f[1]-f[0])/h and (f[N]-f[N-1])/h at the plates.
        """
        h = self.h
        d = np.empty_like(f, dtype=np.float64)
        if self.N >= 2:
            d[1:-1] = (f[2:] - f[:-2]) / (2.0 * h)
        d[0] = (f[1] - f[0]) / h
        d[-1] = (f[-1] - f[-2]) / h
        return d

    def forward_difference(self, f: np.ndarray) -> np.ndarray:
        """(f[i+1]-f[i])/h per interval, length N."""
        return np.diff(f) / self.h

    def trapezoid(self, f: np.ndarray) -> float:
        return float(0.5 * self.h * np.sum(f[:-1] + f[1:]))
