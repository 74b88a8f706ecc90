# discretization
DEFAULT_N = 50

# picard iteration per time step
PICARD_MAX_ITERS = 15
PICARD_TOL = 1e-10

# full solve
DEFAULT_TAU_FINAL = 2.0
DEFAULT_DTAU = 0.02
DEFAULT_SAVE_FREQ = 5

# quick solve (optimizer / sensitivity / sweeps)
QUICK_TAU_FINAL = 2.0
QUICK_DTAU = 0.04
QUICK_SAVE_FREQ = 10

# entropy guards
THETA_FLOOR = 0.01
BEJAN_EPS = 1e-12

# transient response
TAU63_LEVEL = 0.63
TAU95_LEVEL = 0.95
SETTLING_BAND = 0.02
UNDERDAMPED_OVERSHOOT = 5.0
CRITICAL_OVERSHOOT = 0.5

# genetic search
POPULATION_SIZE = 20
GENERATIONS = 30
MUTATION_RATE = 0.15
MUTATION_SPAN = 0.4  # full width, i.e. +-20% of the range
N_ELITE = 2
TOURNAMENT_DRAWS = 2

# sensitivity
SENS_PERTURBATION = 0.1
SENS_EPS = 1e-3
SENS_PARAMS = ("Ha", "Re", "Pr", "Ec", "Bi", "lam")

# base fluid (water)
RHO_F = 997.0
K_F = 0.613
CP_F = 4179.0
SIGMA_F = 0.05

RNG_SEED = 42
