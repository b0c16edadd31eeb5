from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from .environment import Environment

logger = logging.getLogger(__name__)


def summarize(env: Environment) -> Dict[str, Any]:
    """Shapes of both matrices and basic pheromone statistics."""
    tau = env.pheromone_matrix
    g_rows, g_cols = env.graph_shape
    p_rows, p_cols = env.pheromone_shape
    return {
        "graph_rows": g_rows,
        "graph_cols": g_cols,
        "pheromone_rows": p_rows,
        "pheromone_cols": p_cols,
        "tau_min": float(tau.min()),
        "tau_max": float(tau.max()),
        "tau_mean": float(tau.mean()),
        "tau_sum": float(tau.sum()),
    }


class PheromoneRecorder:
    """Keeps per-iteration copies of the pheromone matrix for later inspection."""

    def __init__(self):
        self.snapshots: List[np.ndarray] = []
        self.records: List[Dict[str, Any]] = []

    def record(self, env: Environment, iteration: Optional[int] = None) -> Dict[str, Any]:
        if iteration is None:
            iteration = len(self.snapshots)
        self.snapshots.append(np.array(env.pheromone_matrix, copy=True))
        row = {"iteration": iteration, **summarize(env)}
        self.records.append(row)
        logger.debug("iter=%s tau_mean=%.6g tau_max=%.6g", iteration, row["tau_mean"], row["tau_max"])
        return row

    def __len__(self):
        return len(self.snapshots)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame.from_records(self.records)

    def to_csv(self, path: str) -> str:
        self.to_frame().to_csv(path, index=False)
        return path
