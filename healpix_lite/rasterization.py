# -*- encoding: utf-8 -*-

import logging as log
from typing import NamedTuple, Optional

import numpy as np
import numpy.typing as npt
from numba import njit
from numba.core.dispatcher import Dispatcher

from .parameters import ProjectionParameters
from .projections import (
    equiprojinv,
    gnominv,
    lat2colat,
    mollweideprojinv,
    orthoinv,
    orthoinv2,
)


class ProjectionResult(NamedTuple):
    """The bitmaps produced by :func:`.project`

    - ``image``: 2D array with shape ``(height, width)`` containing the
      value of the map for each pixel; pixels outside the projection or
      with no data are set to NaN
    - ``mask``: Boolean array with the same shape as ``image``, which is
      ``True`` for the pixels that fall within the projection but have no
      valid data (unseen, NaN, or masked)
    - ``any_masked``: ``True`` if at least one element of ``mask`` is set
    """

    image: npt.NDArray
    mask: npt.NDArray[np.bool_]
    any_masked: bool


def _find_bad_samples(samples, unseen) -> npt.NDArray[np.bool_]:
    data = np.ma.getdata(samples)
    bad = np.ma.getmaskarray(samples).copy()

    if np.issubdtype(data.dtype, np.floating):
        bad |= np.isnan(data)
        if unseen is not None:
            # Compare using the precision of the map, as UNSEEN is not
            # exactly representable with 32-bit floats
            bad |= data == data.dtype.type(unseen)
    elif unseen is not None:
        bad |= data.astype(np.float64) == unseen

    return bad


@njit
def _fill_bitmap(visible, values, bad, img, mask):
    num_of_masked = 0
    for j in range(img.shape[0]):
        for i in range(img.shape[1]):
            if not visible[j, i]:
                img[j, i] = np.nan
            elif bad[j, i]:
                img[j, i] = np.nan
                mask[j, i] = True
                num_of_masked += 1
            else:
                img[j, i] = values[j, i]

    return num_of_masked


def _sample_plane(invprojfn, proj_args, visible, lat, lon):
    height, width = visible.shape
    for j in range(height):
        y = 2 * j / (height - 1) - 1
        for i in range(width):
            x = 2 * i / (width - 1) - 1
            ok, cur_lat, cur_lon = invprojfn(x, y, *proj_args)
            visible[j, i] = ok
            lat[j, i] = cur_lat
            lon[j, i] = cur_lon


# Used when the inverse projection is itself compiled with Numba
_sample_plane_compiled = njit(_sample_plane)


def project(
    invprojfn,
    sky_map,
    bmpwidth: int,
    bmpheight: int,
    params: Optional[ProjectionParameters] = None,
    proj_args: tuple = (),
) -> ProjectionResult:
    """Compute a cartographic projection of a map

    Return a :class:`.ProjectionResult` containing the 2D bitmap with the
    projection of the map and a 2D mask. The size of the bitmaps is
    `bmpwidth`×`bmpheight` pixels.

    The function `invprojfn` must accept two parameters ``x`` and ``y``
    (numbers between -1 and 1) and return a tuple ``(visible, lat, lon)``
    like :func:`.mollweideprojinv`. If the tuple `proj_args` is not empty,
    its elements are passed to `invprojfn` after ``x`` and ``y``. When
    `invprojfn` is compiled with Numba (like all the inverse projections in
    this package), the loop over the pixels is compiled too.

    The object `sky_map` must provide the array ``pixels`` and the method
    ``ang2pix(theta, phi)``, which must work with NumPy arrays;
    :class:`.HealpixMap` satisfies these requirements.

    Pixels outside the projection are set to NaN. Pixels whose value in
    the map is NaN, masked, or equal to ``params.unseen`` are set to NaN too,
    and they are flagged in the mask. Errors raised by `sky_map` are not
    caught.
    """
    if params is None:
        params = ProjectionParameters()

    if bmpwidth < 2 or bmpheight < 2:
        raise ValueError(
            f"The bitmap must be at least 2×2 pixels wide, not {bmpwidth}×{bmpheight}"
        )

    visible = np.zeros((bmpheight, bmpwidth), dtype=bool)
    lat = np.zeros((bmpheight, bmpwidth), dtype=np.float64)
    lon = np.zeros((bmpheight, bmpwidth), dtype=np.float64)

    if isinstance(invprojfn, Dispatcher):
        _sample_plane_compiled(invprojfn, tuple(proj_args), visible, lat, lon)
    else:
        _sample_plane(invprojfn, tuple(proj_args), visible, lat, lon)

    values = np.full((bmpheight, bmpwidth), np.nan, dtype=np.float64)
    bad = np.zeros((bmpheight, bmpwidth), dtype=bool)
    if np.any(visible):
        pixidx = sky_map.ang2pix(lat2colat(lat[visible]), lon[visible])
        samples = sky_map.pixels[pixidx]

        bad[visible] = _find_bad_samples(samples, params.unseen)
        values[visible] = np.ma.getdata(samples).astype(np.float64)

    img = np.empty((bmpheight, bmpwidth), dtype=params.desttype)
    mask = np.zeros((bmpheight, bmpwidth), dtype=bool)
    num_of_masked = _fill_bitmap(visible, values, bad, img, mask)

    log.debug(
        "projection of %d×%d pixels: %d visible, %d masked",
        bmpwidth,
        bmpheight,
        np.count_nonzero(visible),
        num_of_masked,
    )

    return ProjectionResult(image=img, mask=mask, any_masked=bool(num_of_masked > 0))


def equirectangular(
    sky_map, params: Optional[ProjectionParameters] = None
) -> ProjectionResult:
    """High-level wrapper around :func:`.project` for equirectangular projections

    The default size of the bitmap is 720×720 pixels.
    """
    if params is None:
        params = ProjectionParameters()

    width = params.width
    height = params.height_or(width)
    return project(equiprojinv, sky_map, width, height, params)


def mollweide(sky_map, params: Optional[ProjectionParameters] = None) -> ProjectionResult:
    """High-level wrapper around :func:`.project` for Mollweide projections

    The default size of the bitmap is 720×360 pixels.
    """
    if params is None:
        params = ProjectionParameters()

    width = params.width
    height = params.height_or(width // 2)
    return project(mollweideprojinv, sky_map, width, height, params)


def orthographic(
    sky_map, params: Optional[ProjectionParameters] = None
) -> ProjectionResult:
    """High-level wrapper around :func:`.project` for orthographic projections

    The projection is centered on the point ``params.center``, a pair
    ``(latitude, longitude)``. The default size of the bitmap is 720×720
    pixels.
    """
    if params is None:
        params = ProjectionParameters()

    width = params.width
    height = params.height_or(width)
    phi1, lambda0 = params.center[0:2]
    return project(
        orthoinv, sky_map, width, height, params, proj_args=(phi1, lambda0)
    )


def orthographic2(
    sky_map, params: Optional[ProjectionParameters] = None
) -> ProjectionResult:
    """High-level wrapper around :func:`.project` for double orthographic projections

    The left globe is centered on ``params.center``, the right globe shows
    the opposite hemisphere. The default size of the bitmap is 720×360
    pixels.
    """
    if params is None:
        params = ProjectionParameters()

    width = params.width
    height = params.height_or(width // 2)
    phi1, lambda0 = params.center[0:2]
    return project(
        orthoinv2, sky_map, width, height, params, proj_args=(phi1, lambda0)
    )


def gnomonic(sky_map, params: Optional[ProjectionParameters] = None) -> ProjectionResult:
    """High-level wrapper around :func:`.project` for gnomonic projections

    The tangent point is ``params.center``, which can be either a pair
    ``(latitude, longitude)`` or a triple ``(latitude, longitude, psi)``,
    where ``psi`` is the rotation around the line of sight. The field of
    view is ``params.fov_rad``. The default size of the bitmap is 720×720
    pixels.
    """
    if params is None:
        params = ProjectionParameters()

    width = params.width
    height = params.height_or(width)
    phi1, lambda0 = params.center[0:2]
    psi0 = params.center[2] if len(params.center) > 2 else 0.0
    return project(
        gnominv,
        sky_map,
        width,
        height,
        params,
        proj_args=(phi1, lambda0, psi0, float(params.fov_rad)),
    )


"""The projections that can be selected by name, e.g., from the command line"""
PROJECTIONS = {
    "equirectangular": equirectangular,
    "mollweide": mollweide,
    "orthographic": orthographic,
    "orthographic2": orthographic2,
    "gnomonic": gnomonic,
}
