# -*- encoding: utf-8 -*-

from typing import List, Tuple

import matplotlib.pyplot as plt
import numpy as np

from .compress import rle_runs
from .rasterization import ProjectionResult


def mask_to_rectangles(mask) -> List[Tuple[float, float, float, float]]:
    """Convert a 2D Boolean mask into a list of rectangles

    Instead of producing one square for each masked pixel, long runs of
    consecutive masked pixels in the same row are squashed together into
    one rectangle. Each rectangle is a tuple ``(x0, x1, y0, y1)`` in pixel
    coordinates, where the center of pixel ``mask[j, i]`` is ``(i, j)``.
    """
    mask = np.asarray(mask, dtype=bool)
    rectangles = []
    for row_idx in range(mask.shape[0]):
        for start, stop in rle_runs(mask[row_idx, :]):
            rectangles.append(
                (start - 0.5, stop - 0.5, row_idx - 0.5, row_idx + 0.5)
            )

    return rectangles


def mask_to_shape(mask) -> Tuple[np.ndarray, np.ndarray]:
    """Return the outline of the masked pixels as two arrays of vertices

    Each rectangle produced by :func:`.mask_to_rectangles` is represented by
    its four corners, followed by a NaN that separates it from the next
    rectangle. The result is a pair ``(xs, ys)`` of arrays with the same
    length.
    """
    xs = []
    ys = []
    for x0, x1, y0, y1 in mask_to_rectangles(mask):
        xs.extend([x0, x0, x1, x1, np.nan])
        ys.extend([y0, y1, y1, y0, np.nan])

    return np.array(xs, dtype=np.float64), np.array(ys, dtype=np.float64)


def plot_projection(
    result: ProjectionResult,
    ax=None,
    cmap="viridis",
    mask_color="grey",
    title=None,
    colorbar=True,
):
    """Draw the output of a projection using Matplotlib

    The image is drawn using ``imshow``; if some pixels are masked (see
    :class:`.ProjectionResult`), they are drawn using `mask_color`. If `ax`
    is ``None``, a new figure is created. Return the pair ``(figure, axes)``.
    """
    if ax is None:
        fig, ax = plt.subplots()
    else:
        fig = ax.figure

    # Row 0 of the bitmap corresponds to y = -1, i.e., the bottom of the plane
    image = ax.imshow(
        result.image, origin="lower", cmap=cmap, interpolation="nearest"
    )

    if result.any_masked:
        # The NaNs in the outline separate the rectangles
        xs, ys = mask_to_shape(result.mask)
        ax.fill(xs, ys, color=mask_color, linewidth=0)

    if colorbar:
        fig.colorbar(image, ax=ax, orientation="horizontal")

    if title:
        ax.set_title(title)

    ax.set_aspect("equal")
    ax.set_axis_off()

    return fig, ax
