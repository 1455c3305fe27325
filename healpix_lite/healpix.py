# -*- encoding: utf-8 -*-

import logging as log
from dataclasses import dataclass, field

import healpy
import numpy as np
from astropy.io import fits

# Conversion between NumPy types and the format codes used in FITS tables
_FITS_FORMATS = {
    np.dtype(bool): "L",
    np.dtype(np.uint8): "B",
    np.dtype(np.int16): "I",
    np.dtype(np.int32): "J",
    np.dtype(np.int64): "K",
    np.dtype(np.float32): "E",
    np.dtype(np.float64): "D",
    np.dtype(np.complex64): "C",
    np.dtype(np.complex128): "M",
}


def nside_to_npix(nside):
    """Return the number of pixels in a Healpix map with the specified NSIDE.

    If the value of `nside` is not valid (power of two), an
    `AssertionError` exception is raised.

    .. doctest::

        >>> nside_to_npix(1)
        12

    """
    assert nside > 0 and (nside & (nside - 1)) == 0, f"Invalid value for NSIDE: {nside}"
    return 12 * nside * nside


def is_npix_ok(num_of_pixels):
    """Return True or False whenever num_of_pixels is a valid number.

    The number of pixels must be in the form 12·NSIDE², with NSIDE being a
    power of two.

    .. doctest::

        >>> is_npix_ok(48)
        True
        >>> is_npix_ok(108)
        False

    """
    nside_float = np.sqrt(num_of_pixels / 12.0)
    nside = int(nside_float)
    return bool(nside_float == nside and nside > 0 and (nside & (nside - 1)) == 0)


def npix_to_nside(num_of_pixels):
    """Return NSIDE for a Healpix map containing `num_of_pixels` pixels.

    If the number of pixels does not conform to the Healpix standard,
    an `AssertionError` exception is raised.

    .. doctest::

        >>> npix_to_nside(48)
        2

    """
    assert is_npix_ok(num_of_pixels), f"Invalid number of pixels: {num_of_pixels}"
    return int(np.sqrt(num_of_pixels / 12))


def get_pixel_format(t):
    """Get the FITSIO format string for data type t.

    This function returns a string containing the value to be used
    with the `format` keyword in a `astropy.io.fits.Column`
    constructor.

    If the data type cannot be represented exactly in a FITS column, a
    `ValueError` exception is thrown.

    .. doctest::

        >>> import numpy
        >>> get_pixel_format(numpy.uint8)
        'B'

    """
    try:
        return _FITS_FORMATS[np.dtype(t)]
    except (KeyError, TypeError):
        raise ValueError(f"Unable to convert type {t} into a CFITSIO data type")


@dataclass
class HealpixMap:
    """A Healpix map that can be sampled by the projection code

    This is the object expected by :func:`.project` and by the high-level
    wrappers like :func:`.mollweide`: it exposes the array ``pixels`` and the
    method :meth:`.ang2pix`.

    Fields:

    - ``pixels``: one-dimensional array; it can be a NumPy masked array, in
      which case masked pixels are considered missing
    - ``nest`` (bool): ``True`` if the pixels follow the NESTED ordering,
      ``False`` (the default) for RING
    - ``nside`` (int): computed from the number of pixels

    An ``AssertionError`` is raised if the length of ``pixels`` is not a
    valid Healpix size.
    """

    pixels: np.ndarray
    nest: bool = False
    nside: int = field(init=False)

    def __post_init__(self):
        if not isinstance(self.pixels, np.ma.MaskedArray):
            self.pixels = np.asarray(self.pixels)

        assert self.pixels.ndim == 1, "A Healpix map must be a 1D array"
        self.nside = npix_to_nside(len(self.pixels))

    @property
    def npix(self) -> int:
        return len(self.pixels)

    def ang2pix(self, theta, phi):
        """Return the index of the pixels containing the directions (θ, φ)

        Both `theta` (colatitude) and `phi` (longitude) are in radians, and
        they can be scalars or arrays.
        """
        return healpy.ang2pix(self.nside, theta, phi, nest=self.nest)


def read_healpix_map_from_file(filename, field=0, nest=None) -> HealpixMap:
    """Load a :class:`.HealpixMap` from a FITS file using Healpy

    If `nest` is ``None``, the ordering specified by the ``ORDERING`` keyword
    in the file is kept; otherwise, the pixels are reordered to NESTED
    (``nest=True``) or RING (``nest=False``).
    """
    pixels, header = healpy.read_map(filename, field=field, nest=nest, h=True)

    if nest is None:
        ordering = dict(header).get("ORDERING", "RING").strip().upper()
        nest = ordering.startswith("NEST")

    log.info(
        "map read from %s, NSIDE=%d, ordering=%s",
        str(filename),
        healpy.npix2nside(len(pixels)),
        "NESTED" if nest else "RING",
    )
    return HealpixMap(pixels=pixels, nest=nest)


# This is a simplified version of `healpy.write_map`, with more
# sensible defaults (e.g., overwrite is True by default) and
# support for just one map per HDU
def write_healpix_map_to_hdu(
    pixels,
    nest=False,
    dtype=None,
    column_name="TEMPERATURE",
    column_unit=None,
    name=None,
    extra_header=(),
) -> fits.BinTableHDU:
    """Write a Healpix map into a FITS HDU.

    The HDU is not saved in a file; use :func:`.write_healpix_map_to_file`
    for that. The keyword `nest` only affects the value of ``ORDERING`` in
    the header, and `dtype` can be used to save the map with a different
    precision than the one used in memory.
    """

    pixels = np.ma.filled(pixels, fill_value=healpy.UNSEEN)
    nside = npix_to_nside(len(pixels))

    if dtype is None:
        dtype = pixels.dtype

    tbhdu = fits.BinTableHDU.from_columns(
        [
            fits.Column(
                name=column_name,
                format=get_pixel_format(dtype),
                array=pixels.astype(dtype),
                unit=column_unit,
            )
        ]
    )
    tbhdu.header["PIXTYPE"] = ("HEALPIX", "HEALPIX pixelisation")
    tbhdu.header["ORDERING"] = (
        "NESTED" if nest else "RING",
        "Pixel ordering scheme, either RING or NESTED",
    )
    tbhdu.header["EXTNAME"] = (
        "xtension" if not name else name,
        "name of this binary table extension",
    )
    tbhdu.header["NSIDE"] = (nside, "Resolution parameter of HEALPIX")
    tbhdu.header["FIRSTPIX"] = (0, "First pixel # (0 based)")
    tbhdu.header["LASTPIX"] = (nside_to_npix(nside) - 1, "Last pixel # (0 based)")
    tbhdu.header["INDXSCHM"] = ("IMPLICIT", "Indexing: IMPLICIT or EXPLICIT")
    tbhdu.header["OBJECT"] = ("FULLSKY", "Sky coverage, either FULLSKY or PARTIAL")

    for args in extra_header:
        tbhdu.header[args[0]] = args[1:]

    return tbhdu


def write_healpix_map_to_file(filename, pixels, overwrite=True, **kwargs):
    """Save a Healpix map in a FITS file

    All the keywords but `overwrite` are passed to
    :func:`.write_healpix_map_to_hdu`.
    """
    hdu = write_healpix_map_to_hdu(pixels, **kwargs)
    fits.HDUList([fits.PrimaryHDU(), hdu]).writeto(filename, overwrite=overwrite)
