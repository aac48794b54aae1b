"""
Diagnostics Plots for smoke runs.

One panel per recorded per-tick diagnostic.
"""

import logging
from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

log = logging.getLogger(__name__)

LABELS = {
    "total_density": r"$\sum \rho$",
    "max_speed": r"$\max |\mathbf{u}|$",
    "max_divergence": r"$\max |\nabla \cdot \mathbf{u}|$",
    "kinetic_energy": r"$E$",
}


def plot_diagnostics(timeseries_df: pd.DataFrame, solver: str, N: int, output_dir: Path) -> Path:
    """Plot diagnostics over ticks."""
    if timeseries_df.empty:
        log.warning("No timeseries data available for diagnostics plot")
        return None

    columns = [c for c in LABELS if c in timeseries_df.columns]
    fig, axes = plt.subplots(len(columns), 1, figsize=(7, 2.2 * len(columns)), sharex=True, squeeze=False)

    for ax, col in zip(axes[:, 0], columns):
        data = timeseries_df[["tick", col]].dropna()
        sns.lineplot(data=data, x="tick", y=col, ax=ax)
        ax.set_ylabel(LABELS[col])

    axes[-1, 0].set_xlabel("Tick")
    fig.suptitle(rf"Diagnostics: {solver}, $N={N}$")
    fig.tight_layout()

    output_path = output_dir / "diagnostics.pdf"
    fig.savefig(output_path)
    plt.close(fig)

    return output_path
