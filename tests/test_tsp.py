"""Tests for the Euclidean TSP graph source."""

from __future__ import annotations

import math

import numpy as np
import pytest

from acoenv.config import default_tau0
from acoenv.tsp import TSPInstance


def test_random_euclidean_is_reproducible() -> None:
    a = TSPInstance.random_euclidean(8, seed=123)
    b = TSPInstance.random_euclidean(8, seed=123)
    assert a.coords == b.coords
    assert a.n_cities() == 8
    assert all(0.0 <= x <= 100.0 and 0.0 <= y <= 100.0 for x, y in a.coords)


def test_distance_matrix_is_symmetric_with_zero_diagonal() -> None:
    inst = TSPInstance(coords=[(0.0, 0.0), (3.0, 4.0), (6.0, 8.0)])
    D = inst.distance_matrix()
    assert D.shape == (3, 3)
    np.testing.assert_allclose(D, D.T)
    assert np.all(np.diag(D) == 0.0)
    assert D[0, 1] == pytest.approx(5.0)
    assert D[0, 2] == pytest.approx(10.0)
    assert inst.distance(1, 2) == pytest.approx(math.hypot(3.0, 4.0))


def test_environment_uses_default_tau0_on_edges() -> None:
    inst = TSPInstance.random_euclidean(6, seed=7, name="demo6")
    env = inst.environment()
    tau0 = default_tau0(inst.distance_matrix())

    assert env.graph_shape == (6, 6)
    assert env.pheromone_shape == (6, 6)
    tau = env.get_pheromone_matrix()
    assert np.all(np.diag(tau) == 0.0)
    np.testing.assert_allclose(tau[~np.eye(6, dtype=bool)], tau0)
    assert env.config.name == "demo6"


def test_environment_with_explicit_tau0() -> None:
    env = TSPInstance.random_euclidean(4, seed=1).environment(tau0=0.2)
    assert env.get_pheromone_matrix()[0, 1] == 0.2


def test_evaporation_over_iterations() -> None:
    env = TSPInstance.random_euclidean(5, seed=3).environment(tau0=1.0)
    rho = 0.5
    for _ in range(3):
        env.updater().evaporate(rho)
    assert env.get_pheromone_matrix()[0, 1] == pytest.approx(0.125)
    assert env.get_pheromone_matrix()[2, 2] == 0.0


def test_environment_builds_distance_matrix_once(monkeypatch: pytest.MonkeyPatch) -> None:
    inst = TSPInstance.random_euclidean(5, seed=11)
    expected_tau0 = default_tau0(inst.distance_matrix())
    calls = []
    original = TSPInstance.distance_matrix

    def counting(self: TSPInstance) -> np.ndarray:
        calls.append(1)
        return original(self)

    monkeypatch.setattr(TSPInstance, "distance_matrix", counting)
    env = inst.environment()

    assert len(calls) == 1
    assert env.get_pheromone_matrix()[0, 1] == pytest.approx(expected_tau0)


def test_environment_config_accepts_precomputed_matrix() -> None:
    inst = TSPInstance(coords=[(0.0, 0.0), (3.0, 4.0), (6.0, 8.0)])
    D = inst.distance_matrix()
    config = inst.environment_config(D=D)
    tau = config.build(D).get_pheromone_matrix()
    assert tau[0, 1] == pytest.approx(default_tau0(D))
