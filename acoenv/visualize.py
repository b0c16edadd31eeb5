from __future__ import annotations
from pathlib import Path
from typing import Sequence

import numpy as np
import matplotlib.pyplot as plt
import imageio


def _draw_heatmap(ax, matrix, title, vmin=None, vmax=None):
    im = ax.imshow(np.asarray(matrix, dtype=float), origin="upper", aspect="auto", vmin=vmin, vmax=vmax)
    ax.set_xlabel("column")
    ax.set_ylabel("row")
    ax.set_title(title)
    return im


def plot_pheromone_heatmap(matrix, out_png, title="Pheromone matrix"):
    fig, ax = plt.subplots(figsize=(6, 5))
    im = _draw_heatmap(ax, matrix, title)
    cbar = fig.colorbar(im, ax=ax)
    cbar.set_label("τ")
    fig.tight_layout()
    Path(out_png).parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_png, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return out_png


def make_pheromone_gif(snapshots: Sequence[np.ndarray], out_gif, step=1):
    """Render one heatmap frame per recorded snapshot (every ``step``-th)."""
    if not snapshots:
        raise ValueError("no pheromone snapshots to render")
    # shared colour scale so frames are comparable
    vmin = min(float(np.min(s)) for s in snapshots)
    vmax = max(float(np.max(s)) for s in snapshots)

    Path(out_gif).parent.mkdir(parents=True, exist_ok=True)
    with imageio.get_writer(out_gif, mode="I", duration=0.6) as writer:
        for it in range(0, len(snapshots), step):
            fig, ax = plt.subplots(figsize=(5, 4.5))
            _draw_heatmap(ax, snapshots[it], f"iter {it+1}/{len(snapshots)}", vmin=vmin, vmax=vmax)
            fig.tight_layout()
            fig.canvas.draw()
            frame = np.asarray(fig.canvas.buffer_rgba())[..., :3].copy()
            writer.append_data(frame)
            plt.close(fig)
    return out_gif
