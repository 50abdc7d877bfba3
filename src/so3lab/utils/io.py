# src/so3lab/utils/io.py
from __future__ import annotations

from pathlib import Path
from typing import Sequence

import numpy as np
import pandas as pd

from so3lab.topology.ball import BallPoint
from so3lab.topology.lift import lift_path
from so3lab.topology.loops import LoopPath


def loop_to_dataframe(loop: LoopPath, include_lift: bool = True) -> pd.DataFrame:
    """
    Tabulate a loop, one row per sample.

    Columns: t, angle, p_x..p_z, q_w..q_z, jump, and lift_w..lift_z when
    ``include_lift`` is set.
    """
    points = loop.points_array()
    quats = loop.quaternions_array()
    jumps = set(loop.jump_indices)

    df = pd.DataFrame({
        "t": loop.parameters,
        "angle": loop.angles,
        "p_x": points[:, 0], "p_y": points[:, 1], "p_z": points[:, 2],
        "q_w": quats[:, 0], "q_x": quats[:, 1], "q_y": quats[:, 2], "q_z": quats[:, 3],
        "jump": [i in jumps for i in range(len(loop.points))],
    })
    if include_lift:
        lifted = np.array([q.as_array() for q in lift_path(loop.points)])
        for k, c in enumerate("wxyz"):
            df[f"lift_{c}"] = lifted[:, k]
    return df


def stages_to_dataframe(stages: Sequence[Sequence[BallPoint]]) -> pd.DataFrame:
    """
    Long-format table of contraction stages: stage, s, i, x, y, z.

    Stage k of K is taken at s = k/(K-1), matching ``contraction_stages``.
    """
    if not stages:
        raise ValueError("No contraction stages given. Nothing to tabulate.")

    count = len(stages)
    rows = []
    for k, points in enumerate(stages):
        s = k / (count - 1) if count > 1 else 0.0
        for i, p in enumerate(points):
            rows.append({"stage": k, "s": s, "i": i, "x": p.x, "y": p.y, "z": p.z})
    return pd.DataFrame(rows)


def save_loop_history(loop: LoopPath, filepath: str | Path) -> Path:
    """
    Save a loop's samples to a CSV file.

    Args:
        loop: Sampled loop, e.g. from ``generate_loop``.
        filepath: Destination path (e.g., 'results/loop_4pi.csv')
    """
    if not loop.points:
        raise ValueError("Loop has no samples. Nothing to save.")

    path = Path(filepath)
    # Ensure the directory exists
    path.parent.mkdir(parents=True, exist_ok=True)

    loop_to_dataframe(loop).to_csv(path, index=False)
    print(f"Loop samples saved to {path.absolute()}")
    return path
