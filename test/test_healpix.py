# -*- encoding: utf-8 -*-

import healpy
import numpy as np
import pytest
from astropy.io import fits

import healpix_lite as hl


def test_nside_to_npix():
    assert hl.nside_to_npix(1) == 12
    assert hl.nside_to_npix(32) == 12288
    assert hl.nside_to_npix(2048) == 50331648

    with pytest.raises(AssertionError):
        assert hl.nside_to_npix(123) == 1


def test_npix_to_nside():
    assert hl.npix_to_nside(12) == 1
    assert hl.npix_to_nside(12288) == 32
    assert hl.npix_to_nside(50331648) == 2048

    with pytest.raises(AssertionError):
        assert hl.npix_to_nside(123) == 1


def test_is_npix_ok():
    assert hl.is_npix_ok(48)
    assert not hl.is_npix_ok(49)
    # 12 × 3², but 3 is not a power of two
    assert not hl.is_npix_ok(108)


def test_get_pixel_format():
    assert hl.get_pixel_format(np.uint8) == "B"
    assert hl.get_pixel_format(np.float32) == "E"
    assert hl.get_pixel_format(np.dtype(np.float64)) == "D"
    assert hl.get_pixel_format(np.complex128) == "M"

    with pytest.raises(ValueError):
        hl.get_pixel_format(np.uint64)


def test_healpix_map():
    sky_map = hl.HealpixMap(pixels=np.arange(hl.nside_to_npix(8)))
    assert sky_map.nside == 8
    assert sky_map.npix == 768
    assert not sky_map.nest

    theta = np.array([0.1, 1.0, 2.5])
    phi = np.array([0.0, 3.0, -1.0])
    np.testing.assert_array_equal(
        sky_map.ang2pix(theta, phi), healpy.ang2pix(8, theta, phi)
    )

    nest_map = hl.HealpixMap(pixels=np.arange(hl.nside_to_npix(8)), nest=True)
    np.testing.assert_array_equal(
        nest_map.ang2pix(theta, phi), healpy.ang2pix(8, theta, phi, nest=True)
    )

    with pytest.raises(AssertionError):
        hl.HealpixMap(pixels=np.zeros(100))


def test_write_and_read_map(tmp_path):
    pixels = np.arange(hl.nside_to_npix(4), dtype=np.float64)
    pixels[5] = hl.UNSEEN

    file_name = tmp_path / "map.fits"
    hl.write_healpix_map_to_file(
        file_name, pixels, nest=True, column_unit="K", name="MYMAP"
    )

    with fits.open(file_name) as inpf:
        assert inpf[1].header["ORDERING"] == "NESTED"
        assert inpf[1].header["NSIDE"] == 4
        assert inpf[1].header["EXTNAME"] == "MYMAP"

    sky_map = hl.read_healpix_map_from_file(file_name)
    assert sky_map.nest
    assert sky_map.nside == 4
    np.testing.assert_array_equal(sky_map.pixels, pixels)

    ring_map = hl.read_healpix_map_from_file(file_name, nest=False)
    assert not ring_map.nest
    np.testing.assert_array_equal(
        ring_map.pixels, healpy.reorder(pixels, n2r=True)
    )


def test_write_masked_map(tmp_path):
    pixels = np.ma.masked_array(np.ones(12), mask=[True] + [False] * 11)

    hdu = hl.write_healpix_map_to_hdu(pixels, dtype=np.float32)
    assert hdu.data.field(0)[0] == np.float32(hl.UNSEEN)
    assert hdu.data.field(0)[1] == 1.0
