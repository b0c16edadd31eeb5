from __future__ import annotations
import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Tuple, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from .config import EnvironmentConfig

logger = logging.getLogger(__name__)


class InvalidInputError(ValueError):
    """Raised when an Environment cannot be built from the given problem graph."""


def _read_only(matrix: np.ndarray) -> np.ndarray:
    view = matrix.view()
    view.flags.writeable = False
    return view


def _as_matrix(data, what: str, error=InvalidInputError) -> np.ndarray:
    if data is None:
        raise error(f"{what} is missing")
    try:
        matrix = np.asarray(data, dtype=float)
    except (TypeError, ValueError) as exc:
        # ragged nested sequences end up here
        raise error(f"{what} must be a rectangular numeric matrix") from exc
    if matrix.ndim != 2:
        raise error(f"{what} must be two-dimensional, got {matrix.ndim} dimension(s)")
    rows, cols = matrix.shape
    if rows < 1 or cols < 1:
        raise error(f"{what} must have at least one row and one column, got {rows}x{cols}")
    return matrix


class Environment:
    """The place the ants traverse: the problem graph plus the pheromone matrix.

    The problem graph is stored once and only ever handed out as a read-only
    view. The pheromone matrix is built by ``config.pheromone_factory`` and is
    afterwards replaced wholesale or mutated in bulk, usually once per
    iteration by the pheromone-update strategy.

    Construction runs the factory first and the validator second; if either
    the graph or the factory output is malformed, or the validator rejects
    the graph, ``InvalidInputError`` is raised and no instance is returned.
    """

    def __init__(self, problem_graph, config: EnvironmentConfig):
        self.config = config
        self._problem_graph = _as_matrix(problem_graph, "problem graph")
        self._pheromone = _as_matrix(
            config.pheromone_factory(self.problem_graph), "pheromone matrix"
        )
        if not self._pheromone.flags.writeable:
            self._pheromone = self._pheromone.copy()
        self._phase_lock = threading.RLock()

        if not config.validator(self.problem_graph):
            logger.warning("%s rejected problem graph of shape %s", config.name, self.graph_shape)
            raise InvalidInputError(f"problem graph rejected by {config.name} validator")

        logger.debug("Environment ready (%s): graph %s, pheromone %s",
                     config.name, self.graph_shape, self.pheromone_shape)

    # ---- read path ----
    @property
    def problem_graph(self) -> np.ndarray:
        return _read_only(self._problem_graph)

    @property
    def pheromone_matrix(self) -> np.ndarray:
        return _read_only(self._pheromone)

    def get_problem_graph(self) -> np.ndarray:
        return self.problem_graph

    def get_pheromone_matrix(self) -> np.ndarray:
        return self.pheromone_matrix

    @property
    def graph_shape(self) -> Tuple[int, int]:
        return self._problem_graph.shape

    @property
    def pheromone_shape(self) -> Tuple[int, int]:
        return self._pheromone.shape

    # ---- write path ----
    def set_pheromone_matrix(self, matrix) -> None:
        """Replace the pheromone matrix wholesale.

        The new matrix is not checked against the problem graph, but it must
        still be a non-empty 2-D matrix (``ValueError`` otherwise). A writable
        float array is stored by reference; anything else is converted.
        """
        new = _as_matrix(matrix, "pheromone matrix", error=ValueError)
        if not new.flags.writeable:
            new = new.copy()
        logger.debug("Pheromone matrix replaced: %s -> %s", self._pheromone.shape, new.shape)
        self._pheromone = new

    def populate_pheromone_matrix(self, pheromone_value: float) -> None:
        """Assign the same value to every cell of the pheromone matrix."""
        self._pheromone.fill(pheromone_value)

    def apply_factor_to_pheromone_matrix(self, factor: float) -> None:
        """Multiply every cell of the pheromone matrix by ``factor`` (no clamping)."""
        self._pheromone *= factor

    def updater(self) -> PheromoneUpdater:
        return PheromoneUpdater(self)

    @contextmanager
    def update_phase(self) -> Iterator[PheromoneUpdater]:
        """Hold the phase lock for the duration of one pheromone update.

        Readers never take this lock; callers that run agents in parallel
        must schedule the update between traversal phases themselves.
        """
        with self._phase_lock:
            yield self.updater()

    def __str__(self):
        rows, cols = self.graph_shape
        p_rows, p_cols = self.pheromone_shape
        return (f"Problem Graph: Rows {rows} Columns {cols}\n"
                f"Pheromone Matrix: Rows {p_rows} Columns {p_cols}")

    def __repr__(self):
        return (f"Environment(name={self.config.name!r}, graph={self.graph_shape}, "
                f"pheromone={self.pheromone_shape})")


class PheromoneUpdater:
    """Mutation handle given to pheromone-update strategies.

    Only the bulk operations and wholesale replacement are reachable through
    it; reads go through the same read-only view agents get.
    """

    def __init__(self, env: Environment):
        self._env = env

    @property
    def matrix(self) -> np.ndarray:
        return self._env.pheromone_matrix

    def populate(self, value: float) -> None:
        self._env.populate_pheromone_matrix(value)

    def apply_factor(self, factor: float) -> None:
        self._env.apply_factor_to_pheromone_matrix(factor)

    def evaporate(self, rho: float) -> None:
        # tau <- (1 - rho) * tau
        self._env.apply_factor_to_pheromone_matrix(1.0 - rho)

    def replace(self, matrix) -> None:
        self._env.set_pheromone_matrix(matrix)
