from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np

from .environment import Environment

PheromoneFactory = Callable[[np.ndarray], np.ndarray]
GraphValidator = Callable[[np.ndarray], bool]


def accept_all(graph: np.ndarray) -> bool:
    return True


@dataclass
class EnvironmentConfig:
    pheromone_factory: PheromoneFactory     # builds the initial pheromone matrix from the graph
    validator: GraphValidator = accept_all  # structural constraints on the graph
    name: str = "environment"

    def build(self, problem_graph) -> Environment:
        return Environment(problem_graph, self)


# ---- pheromone factories ----

def uniform_pheromone(value: float, shape: Optional[Tuple[int, int]] = None) -> PheromoneFactory:
    """Every cell set to ``value``; graph-shaped unless ``shape`` is given."""
    def factory(graph: np.ndarray) -> np.ndarray:
        return np.full(shape if shape is not None else graph.shape, value, dtype=float)
    return factory


def vertex_pheromone(value: float) -> PheromoneFactory:
    """n x n matrix over the graph's rows, for problems that deposit on vertices."""
    def factory(graph: np.ndarray) -> np.ndarray:
        n = graph.shape[0]
        return np.full((n, n), value, dtype=float)
    return factory


def edge_pheromone(value: float) -> PheromoneFactory:
    """n x n matrix with ``value`` off the diagonal and 0.0 on it."""
    def factory(graph: np.ndarray) -> np.ndarray:
        n = graph.shape[0]
        tau = np.full((n, n), value, dtype=float)
        np.fill_diagonal(tau, 0.0)
        return tau
    return factory


def default_tau0(graph) -> float:
    # Simple heuristic: tau0 = 1 / (n * avg_dist)
    D = np.asarray(graph, dtype=float)
    n = D.shape[0]
    upper = D[np.triu_indices_from(D, k=1)]
    avg = float(upper.mean()) if upper.size else 0.0
    return 1.0 / (n * avg) if avg > 0 else 1.0


# ---- graph validators ----

def is_square(graph: np.ndarray) -> bool:
    return graph.shape[0] == graph.shape[1]


def is_non_negative(graph: np.ndarray) -> bool:
    return bool(np.all(graph >= 0))


def has_zero_diagonal(graph: np.ndarray) -> bool:
    return is_square(graph) and bool(np.all(np.diag(graph) == 0))


def all_of(*validators: GraphValidator) -> GraphValidator:
    """Combine validators; the graph is valid only if every one accepts it."""
    def validator(graph: np.ndarray) -> bool:
        return all(v(graph) for v in validators)
    return validator
