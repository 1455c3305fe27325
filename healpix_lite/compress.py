# -*- encoding: utf-8 -*-

import numpy as np


def rle_compress(arr):
    """Perform a Run-Length encoding of the input array

    Returns a NumPy matrix of shape 2×N, where N is an integer; the first
    row contains the *lengths* of each run, and the second row contains
    the *values*. An empty input produces a 2×0 matrix."""

    # This code was adapted from https://stackoverflow.com/a/32681075/3967151

    ia = np.asarray(arr)  # force numpy
    nsamples = len(ia)
    if nsamples == 0:
        return np.empty((2, 0), dtype=ia.dtype)

    y = ia[1:] != ia[:-1]
    indexes = np.append(np.where(y), nsamples - 1)
    runs = np.diff(np.append(-1, indexes))
    return np.array([runs, ia[indexes]])


def rle_runs(arr, value=True):
    """Return the position of the runs of `value` within `arr`

    The result is a list of pairs ``(start, stop)``, where `stop` is
    one past the last element of the run:

    .. doctest::

        >>> rle_runs([False, True, True, False, True])
        [(1, 3), (4, 5)]
    """
    compressed = rle_compress(arr)
    stops = np.cumsum(compressed[0, :].astype(np.int64))
    starts = stops - compressed[0, :].astype(np.int64)

    return [
        (int(start), int(stop))
        for start, stop, run_value in zip(starts, stops, compressed[1, :])
        if run_value == value
    ]
