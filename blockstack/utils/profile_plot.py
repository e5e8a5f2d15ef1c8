from typing import Optional

import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from blockstack.config import TuningCfg
from blockstack.segmenter import bands_from_mask, column_profile, find_top_bottom, row_profile
from blockstack.type_defs import img_gray_t


def plot_profiles(mask: img_gray_t, tuning: TuningCfg, save_path: Optional[str] = None) -> Figure:
    """
    Plot the row profile of a silhouette mask against the stud threshold, and
    the column profile of every band against the size threshold.

    Handy when tuning the thresholds for a new camera position.
    """
    bands = bands_from_mask(mask, tuning)
    fig, axs = plt.subplots(1 + len(bands), 1, figsize=(10, 3 * (1 + len(bands))), squeeze=False)
    axs = axs[:, 0]

    rows = row_profile(mask)
    axs[0].plot(rows, color='black')
    axs[0].axhline(tuning.stud_threshold, color='red', linestyle='--', label='stud_threshold')
    tb = find_top_bottom(mask, tuning.stud_threshold)
    if tb is not None:
        for y in tb:
            axs[0].axvline(y, color='green', alpha=0.7)
    axs[0].set_title("Row profile")
    axs[0].set_xlabel("y")
    axs[0].set_ylabel("mean")
    axs[0].legend()

    for ax, band in zip(axs[1:], bands):
        cols = column_profile(mask[band.y:band.y + band.height, :])
        ax.plot(cols, color='black')
        ax.axhline(tuning.size_threshold, color='red', linestyle='--', label='size_threshold')
        ax.axvline(band.x, color='green', alpha=0.7)
        ax.axvline(band.x + band.width, color='green', alpha=0.7)
        ax.set_title(f"Band y={band.y}")
        ax.set_xlabel("x")
        ax.set_ylabel("mean")

    fig.tight_layout()
    if save_path is not None:
        fig.savefig(save_path)
    return fig
