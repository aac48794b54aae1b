"""
Plotting Style Configuration for smoke plots.

Uses the seaborn darkgrid theme with serif fonts. Text is rendered by
matplotlib's mathtext, so no TeX installation is required.
"""

import logging

import matplotlib.pyplot as plt
import seaborn as sns

log = logging.getLogger(__name__)

plt.rcParams.update(
    {
        "text.usetex": False,
        "mathtext.fontset": "cm",
        "font.family": "serif",
        "axes.labelsize": 12,
        "font.size": 11,
        "legend.fontsize": 10,
        "xtick.labelsize": 10,
        "ytick.labelsize": 10,
    }
)

# Seaborn theme after rcParams so the font settings survive
sns.set_theme(style="darkgrid", rc={"text.usetex": False, "font.family": "serif"})
