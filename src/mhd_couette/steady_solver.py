from __future__ import annotations

import numpy as np
from scipy.sparse import csr_matrix
from scipy.sparse.linalg import spsolve

from mhd_couette.exceptions import InvalidSolveInput
from mhd_couette.grid import Grid
from mhd_couette.physics import ParameterSet
from mhd_couette.types import State


def solve_steady(params: ParameterSet) -> State:
    """
    tau -> infinity limit of the transient discretisation, solved directly.

    Momentum (linear):
      A1 (W_{i-1} - 2W_i + W_{i+1}) / h^2 - A2 Ha^2 W_i + G = 0
      W_0 = 0,  (1 + lam/h) W_N - (lam/h) W_{N-1} = Re
    Energy (linear once W is known):
      A3 (th_{i-1} - 2th_i + th_{i+1}) / h^2 + A1 Pr Ec (W'_i)^2 + A2 Pr Ec Ha^2 W_i^2 = 0
      th_0 = 1,  (1 + h Bi) th_N - th_{N-1} = 0
    """
    if int(params.N) != params.N or params.N < 1:
        raise InvalidSolveInput(f"N must be a positive integer, got {params.N}")
    if not params.Pr > 0.0:
        raise InvalidSolveInput(f"Pr must be > 0, got {params.Pr}")

    p = params
    grid = Grid(p.N)
    N = grid.N
    h = grid.h
    h2 = h * h
    n = grid.n_nodes

    # ---------------- momentum ----------------
    rows, cols, data = [], [], []
    b = np.zeros(n, dtype=np.float64)

    def add(r: int, c: int, v: float) -> None:
        rows.append(r); cols.append(c); data.append(float(v))

    a_w = p.A1 / h2
    add(0, 0, 1.0)
    for i in range(1, N):
        add(i, i - 1, a_w)
        add(i, i, -(2.0 * a_w + p.A2 * p.Ha * p.Ha))
        add(i, i + 1, a_w)
        b[i] = -p.G
    slip = p.lam / h
    add(N, N - 1, -slip)
    add(N, N, 1.0 + slip)
    b[N] = p.Re

    A = csr_matrix((data, (rows, cols)), shape=(n, n))
    W = np.asarray(spsolve(A, b), dtype=np.float64)

    # ---------------- energy ----------------
    dW = grid.derivative(W)
    source = p.A1 * p.Pr * p.Ec * dW ** 2 + p.A2 * p.Pr * p.Ec * p.Ha * p.Ha * W ** 2

    rows, cols, data = [], [], []
    b = np.zeros(n, dtype=np.float64)

    a_t = p.A3 / h2
    add(0, 0, 1.0)
    b[0] = 1.0
    for i in range(1, N):
        add(i, i - 1, a_t)
        add(i, i, -2.0 * a_t)
        add(i, i + 1, a_t)
        b[i] = -source[i]
    add(N, N - 1, -1.0)
    add(N, N, 1.0 + h * p.Bi)

    A = csr_matrix((data, (rows, cols)), shape=(n, n))
    theta = np.asarray(spsolve(A, b), dtype=np.float64)

    # pin the Dirichlet nodes exactly
    W[0] = 0.0
    theta[0] = 1.0
    return State(W=W, theta=theta)
