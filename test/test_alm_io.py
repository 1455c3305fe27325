# -*- encoding: utf-8 -*-

from unittest import mock

import numpy as np
import pytest
from astropy.io import fits

import healpix_lite as hl


def _make_alm_hdu(idx, real, imag):
    return fits.BinTableHDU.from_columns(
        [
            fits.Column(name="INDEX", format="J", array=np.array(idx)),
            fits.Column(name="REAL", format="D", array=np.array(real)),
            fits.Column(name="IMAG", format="D", array=np.array(imag)),
        ]
    )


def test_read_alm_from_hdu():
    # (ℓ, m) = (0, 0), (1, 0), (1, 1), (2, 0), (2, 1), (2, 2)
    idx = [hl.encode_alm_index(ell, m) for ell, m in
           [(0, 0), (1, 0), (1, 1), (2, 0), (2, 1), (2, 2)]]
    hdu = _make_alm_hdu(
        idx,
        real=[1.0, 2.0, 3.0, 4.0, 5.0, 6.0],
        imag=[0.0, 0.0, -3.0, 0.0, -5.0, -6.0],
    )

    alm = hl.read_alm_from_fits(hdu)
    assert alm.lmax == 2
    assert alm.mmax == 2
    assert alm[0, 0] == 1.0
    assert alm[1, 1] == 3.0 - 3.0j
    assert alm[2, 1] == 5.0 - 5.0j
    assert alm[2, 2] == 6.0 - 6.0j


def test_read_alm_scatters_unsorted_rows():
    # Rows are not sorted, and some coefficients are missing
    idx = [hl.encode_alm_index(3, 1), hl.encode_alm_index(0, 0)]
    hdu = _make_alm_hdu(idx, real=[7.0, 1.0], imag=[2.0, 0.0])

    alm = hl.read_alm_from_fits(hdu)
    assert alm.lmax == 3
    assert alm.mmax == 1
    assert alm.num_of_alms == hl.num_of_alms(3, 1)
    assert alm[3, 1] == 7.0 + 2.0j
    assert alm[0, 0] == 1.0
    assert alm[2, 1] == 0.0


def test_read_malformed_alm():
    # Index 2 decodes to ℓ=1, m=-1
    hdu = _make_alm_hdu([1, 2], real=[1.0, 2.0], imag=[0.0, 0.0])

    with pytest.raises(hl.MalformedAlmIndexError):
        hl.read_alm_from_fits(hdu)

    with pytest.raises(hl.AlmDomainError):
        hl.read_alm_from_fits(_make_alm_hdu([], real=[], imag=[]))


def test_alm_fits_round_trip(tmp_path):
    alm = hl.Alm(lmax=6, mmax=4)
    alm.values[:] = np.arange(alm.num_of_alms) * (1.0 - 0.5j)

    file_name = tmp_path / "alm.fits"
    hl.write_alm_to_fits(file_name, alm)

    new_alm = hl.read_alm_from_fits(file_name)
    assert new_alm.lmax == alm.lmax
    assert new_alm.mmax == alm.mmax
    np.testing.assert_array_equal(new_alm.values, alm.values)

    with fits.open(file_name) as inpf:
        assert inpf[1].header["MAX-LPOL"] == 6
        assert inpf[1].header["MAX-MPOL"] == 4


def test_read_alm_written_by_healpy(tmp_path):
    import healpy

    lmax = 8
    values = (np.arange(hl.num_of_alms(lmax)) + 1.0) * (2.0 + 1.0j)
    # The imaginary part of m=0 coefficients must be zero for a real map
    values[:lmax + 1] = values[:lmax + 1].real

    file_name = tmp_path / "healpy_alm.fits"
    healpy.write_alm(str(file_name), values, lmax=lmax, mmax=lmax)

    alm = hl.read_alm_from_fits(file_name)
    assert alm.lmax == lmax
    assert alm.mmax == lmax
    np.testing.assert_allclose(alm.values, values)


def test_read_alm_closes_the_file(tmp_path):
    file_name = tmp_path / "bad_alm.fits"
    fits.HDUList(
        [fits.PrimaryHDU(), _make_alm_hdu([1, 2], real=[1.0, 2.0], imag=[0.0, 0.0])]
    ).writeto(file_name)

    hdu_list = fits.open(file_name)
    with mock.patch("healpix_lite.alm_io.fits.open", return_value=hdu_list):
        with pytest.raises(hl.MalformedAlmIndexError):
            hl.read_alm_from_fits(file_name)

    # The file handle has been released even if an exception was raised
    assert hdu_list._file.closed
