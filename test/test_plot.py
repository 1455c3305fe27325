# -*- encoding: utf-8 -*-

import matplotlib.pyplot as plt
import numpy as np

import healpix_lite as hl
from healpix_lite.plot import mask_to_rectangles, mask_to_shape, plot_projection


def test_mask_to_rectangles():
    mask = np.array(
        [
            [True, True, False, True],
            [False, False, False, False],
            [False, True, True, True],
        ]
    )

    assert mask_to_rectangles(mask) == [
        (-0.5, 1.5, -0.5, 0.5),
        (2.5, 3.5, -0.5, 0.5),
        (0.5, 3.5, 1.5, 2.5),
    ]
    assert mask_to_rectangles(np.zeros((3, 3), dtype=bool)) == []


def test_mask_to_shape():
    mask = np.array([[False, True, True]])
    xs, ys = mask_to_shape(mask)

    np.testing.assert_array_equal(xs[0:4], [0.5, 0.5, 2.5, 2.5])
    np.testing.assert_array_equal(ys[0:4], [-0.5, 0.5, 0.5, -0.5])
    assert np.isnan(xs[4]) and np.isnan(ys[4])
    assert len(xs) == len(ys) == 5


def test_plot_projection():
    npix = hl.nside_to_npix(2)
    pixels = np.arange(npix, dtype=np.float64)
    pixels[0:8] = hl.UNSEEN
    result = hl.mollweide(
        hl.HealpixMap(pixels=pixels), hl.ProjectionParameters(width=40)
    )
    assert result.any_masked

    fig, ax = plot_projection(result, title="test map")
    assert ax.get_title() == "test map"
    assert len(ax.patches) == 1
    plt.close(fig)

    fig, ax = plt.subplots()
    new_fig, new_ax = plot_projection(
        hl.mollweide(hl.HealpixMap(pixels=np.ones(npix)), hl.ProjectionParameters(width=40)),
        ax=ax,
        colorbar=False,
    )
    assert new_fig is fig
    assert new_ax is ax
    assert len(ax.patches) == 0
    plt.close(fig)
