from .environment import Environment, PheromoneUpdater, InvalidInputError
from .config import (EnvironmentConfig, accept_all, is_square, is_non_negative, has_zero_diagonal,
                     all_of, uniform_pheromone, vertex_pheromone, edge_pheromone, default_tau0)
from .tsp import TSPInstance
from .diagnostics import summarize, PheromoneRecorder
