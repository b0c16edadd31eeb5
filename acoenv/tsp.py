from __future__ import annotations
import math
import random
from dataclasses import dataclass
from typing import List, Tuple, Optional

import numpy as np

from .config import (EnvironmentConfig, all_of, default_tau0, edge_pheromone,
                     has_zero_diagonal, is_non_negative, is_square)
from .environment import Environment


@dataclass
class TSPInstance:
    """Euclidean TSP instance; its distance matrix is the problem graph."""
    coords: List[Tuple[float, float]]
    name: str = "euclidean_tsp"

    @staticmethod
    def random_euclidean(n: int, seed: Optional[int] = None, square_size: float = 100.0, name: str = "random_euclidean"):
        rng = random.Random(seed)
        coords = [(rng.uniform(0, square_size), rng.uniform(0, square_size)) for _ in range(n)]
        return TSPInstance(coords=coords, name=name)

    def n_cities(self) -> int:
        return len(self.coords)

    def distance(self, i: int, j: int) -> float:
        (x1, y1), (x2, y2) = self.coords[i], self.coords[j]
        return math.hypot(x1 - x2, y1 - y2)

    def distance_matrix(self) -> np.ndarray:
        n = self.n_cities()
        D = np.zeros((n, n), dtype=float)
        for i in range(n):
            for j in range(i+1, n):
                D[i, j] = D[j, i] = self.distance(i, j)
        return D

    def environment_config(self, tau0: Optional[float] = None, D: Optional[np.ndarray] = None) -> EnvironmentConfig:
        if tau0 is None:
            tau0 = default_tau0(D if D is not None else self.distance_matrix())
        return EnvironmentConfig(
            pheromone_factory=edge_pheromone(tau0),
            validator=all_of(is_square, is_non_negative, has_zero_diagonal),
            name=self.name,
        )

    def environment(self, tau0: Optional[float] = None) -> Environment:
        D = self.distance_matrix()
        return self.environment_config(tau0, D=D).build(D)
