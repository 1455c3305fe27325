# -*- encoding: utf-8 -*-

import numpy as np

from healpix_lite.compress import rle_compress, rle_runs


def test_rle_compression():
    samples = np.array([1, 1, 1, 6, 6, 4, 4, 4, 4, 5, 1, 1, 1, 8], dtype="uint8")
    compressed = rle_compress(samples)

    assert np.all(
        compressed
        == np.array(
            [[3, 2, 4, 1, 3, 1], [1, 6, 4, 5, 1, 8]],
            dtype="uint8",
        )
    )

    assert rle_compress([]).shape == (2, 0)


def test_rle_runs():
    assert rle_runs([False, True, True, False, True]) == [(1, 3), (4, 5)]
    assert rle_runs([True, True, True]) == [(0, 3)]
    assert rle_runs([False, False]) == []
    assert rle_runs([]) == []
    assert rle_runs([3, 3, 1, 3], value=3) == [(0, 2), (3, 4)]
