# -*- encoding: utf-8 -*-

import matplotlib
import numpy as np
import pytest

import healpix_lite as hl

matplotlib.use("Agg")


@pytest.fixture
def constant_map():
    """A NSIDE=4 map where every pixel is equal to 1"""
    return hl.HealpixMap(pixels=np.ones(hl.nside_to_npix(4)))


@pytest.fixture
def unseen_map():
    """A NSIDE=4 map where every pixel is unseen"""
    return hl.HealpixMap(pixels=np.full(hl.nside_to_npix(4), hl.UNSEEN))
