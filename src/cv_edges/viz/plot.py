from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt

from cv_edges.pipelines.canny import CannyStages


def save_stages(stages: CannyStages, path: str | Path) -> None:
    """Save every pipeline stage, direction field included, as one figure."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    panels = [
        ("input", stages.source.intensity),
        ("blurred", stages.blurred.intensity),
        ("gradient magnitude", stages.magnitude.intensity),
        ("suppressed", stages.suppressed.intensity),
        ("double threshold", stages.classification.image.intensity),
        ("edges", stages.edges.intensity),
    ]
    fig, axes = plt.subplots(2, 4, figsize=(16, 8))
    for ax, (title, gray) in zip(axes.flat, panels):
        ax.imshow(gray, cmap="gray", vmin=0, vmax=255)
        ax.set_title(title)
        ax.axis("off")

    ax = axes.flat[len(panels)]
    im = ax.imshow(stages.directions, cmap="twilight", vmin=-90, vmax=90)
    ax.set_title("direction (deg)")
    ax.axis("off")
    fig.colorbar(im, ax=ax, fraction=0.046)
    axes.flat[-1].axis("off")

    fig.tight_layout()
    fig.savefig(path)
    plt.close(fig)
