# -*- encoding: utf-8 -*-

import logging as log
from pathlib import Path
from typing import Union

import numpy as np
from astropy.io import fits

from .alm import (
    Alm,
    AlmDomainError,
    MalformedAlmIndexError,
    decode_alm_index,
    encode_alm_index,
)
from .healpix import get_pixel_format


def _read_alm_from_hdu(hdu: fits.BinTableHDU, dtype) -> Alm:
    num_of_rows = hdu.header["NAXIS2"]
    if num_of_rows == 0:
        raise AlmDomainError(f"HDU '{hdu.name}' does not contain any a_ℓm")

    idx = np.asarray(hdu.data.field(0), dtype=np.int64)
    alm_real = np.asarray(hdu.data.field(1), dtype=np.float64)
    alm_imag = np.asarray(hdu.data.field(2), dtype=np.float64)

    ell, m = decode_alm_index(idx)
    if np.any(m < 0) or np.any(m > ell):
        bad_rows = np.flatnonzero((m < 0) | (m > ell))
        raise MalformedAlmIndexError(
            (
                "{num} rows in HDU '{name}' contain an invalid a_ℓm index "
                "(first one: row #{row}, index {idx})"
            ).format(
                num=len(bad_rows),
                name=hdu.name,
                row=bad_rows[0],
                idx=idx[bad_rows[0]],
            )
        )

    result = Alm(lmax=int(np.max(ell)), mmax=int(np.max(m)), dtype=dtype)
    result.values[result.indices(ell, m)] = alm_real + 1j * alm_imag

    return result


def read_alm_from_fits(
    source: Union[str, Path, fits.BinTableHDU],
    hdu: Union[int, str] = 1,
    dtype=np.complex128,
) -> Alm:
    """Read a set of a_ℓm coefficients from a FITS table

    The table must contain three columns, in this order: the composite index
    ``ℓ² + ℓ + m + 1``, the real part and the imaginary part of the
    coefficient. This is the format used by Healpy's ``write_alm``.

    The parameter `source` can either be the name of a FITS file or a
    :class:`astropy.io.fits.BinTableHDU` object. In the first case, the file
    is opened and the HDU `hdu` is read; the file is always closed before the
    function returns, even if an exception is raised.

    The values of ℓ_max and m_max are the largest ones found in the table.
    If any index does not correspond to a valid pair (ℓ, m), the function
    raises :class:`.MalformedAlmIndexError`. Errors raised by Astropy while
    reading the file are propagated.
    """

    if isinstance(source, fits.BinTableHDU):
        return _read_alm_from_hdu(source, dtype=dtype)

    with fits.open(source) as inpf:
        result = _read_alm_from_hdu(inpf[hdu], dtype=dtype)

    log.info(
        "read a_ℓm from %s, lmax=%d, mmax=%d", str(source), result.lmax, result.mmax
    )
    return result


def write_alm_to_hdu(alm: Alm, name=None, extra_header=()) -> fits.BinTableHDU:
    """Save the coefficients in `alm` into a FITS HDU

    The HDU contains the three columns ``INDEX``, ``REAL``, and ``IMAG``
    expected by :func:`.read_alm_from_fits` (and by Healpy). Additional
    keywords can be passed through `extra_header`, a list of pairs
    ``(NAME, VALUE)`` or triples ``(NAME, VALUE, COMMENT)``.
    """

    ell = alm.ell_array()
    m = alm.m_array()
    index = encode_alm_index(ell, m).astype(np.int64)

    float_format = get_pixel_format(np.real(alm.values).dtype)
    cols = [
        fits.Column(name="INDEX", format=get_pixel_format(index.dtype), array=index),
        fits.Column(name="REAL", format=float_format, array=np.real(alm.values)),
        fits.Column(name="IMAG", format=float_format, array=np.imag(alm.values)),
    ]

    tbhdu = fits.BinTableHDU.from_columns(cols)
    tbhdu.header["EXTNAME"] = (
        "xtension" if not name else name,
        "name of this binary table extension",
    )
    tbhdu.header["MAX-LPOL"] = (alm.lmax, "Maximum L multipole order")
    tbhdu.header["MAX-MPOL"] = (alm.mmax, "Maximum M multipole degree")

    for args in extra_header:
        tbhdu.header[args[0]] = args[1:]

    return tbhdu


def write_alm_to_fits(filename, alm: Alm, name=None, extra_header=(), overwrite=True):
    """Wrapper around :func:`.write_alm_to_hdu` that saves a FITS file"""
    hdu = write_alm_to_hdu(alm, name=name, extra_header=extra_header)
    fits.HDUList([fits.PrimaryHDU(), hdu]).writeto(filename, overwrite=overwrite)
    log.info("a_ℓm with lmax=%d, mmax=%d written to %s", alm.lmax, alm.mmax, filename)
