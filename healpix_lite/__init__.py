# -*- encoding: utf-8 -*-

from .alm import (
    Alm,
    AlmDomainError,
    AlmSizeMismatchError,
    InconsistentLmaxMmaxError,
    MalformedAlmIndexError,
    NegativeLmaxError,
    NegativeMmaxError,
    alm_index,
    alm_index_array,
    alm_index_l0,
    decode_alm_index,
    encode_alm_index,
    num_of_alms,
)
from .alm_io import (
    read_alm_from_fits,
    write_alm_to_hdu,
    write_alm_to_fits,
)
from .compress import rle_compress, rle_runs
from .healpix import (
    HealpixMap,
    nside_to_npix,
    npix_to_nside,
    is_npix_ok,
    get_pixel_format,
    read_healpix_map_from_file,
    write_healpix_map_to_hdu,
    write_healpix_map_to_file,
)
from .parameters import (
    DEFAULT_FOV_RAD,
    DEFAULT_WIDTH,
    ProjectionParameters,
)
from .projections import (
    UNSEEN,
    lat2colat,
    colat2lat,
    equiproj,
    equiprojinv,
    mollweideproj,
    mollweideprojinv,
    orthoinv,
    orthoinv2,
    gnominv,
)
from .rasterization import (
    PROJECTIONS,
    ProjectionResult,
    project,
    equirectangular,
    mollweide,
    orthographic,
    orthographic2,
    gnomonic,
)
from .version import __author__, __version__

__all__ = [
    "__author__",
    "__version__",
    # alm.py
    "Alm",
    "AlmDomainError",
    "AlmSizeMismatchError",
    "InconsistentLmaxMmaxError",
    "MalformedAlmIndexError",
    "NegativeLmaxError",
    "NegativeMmaxError",
    "alm_index",
    "alm_index_array",
    "alm_index_l0",
    "decode_alm_index",
    "encode_alm_index",
    "num_of_alms",
    # alm_io.py
    "read_alm_from_fits",
    "write_alm_to_hdu",
    "write_alm_to_fits",
    # compress.py
    "rle_compress",
    "rle_runs",
    # healpix.py
    "HealpixMap",
    "nside_to_npix",
    "npix_to_nside",
    "is_npix_ok",
    "get_pixel_format",
    "read_healpix_map_from_file",
    "write_healpix_map_to_hdu",
    "write_healpix_map_to_file",
    # parameters.py
    "DEFAULT_FOV_RAD",
    "DEFAULT_WIDTH",
    "ProjectionParameters",
    # projections.py
    "UNSEEN",
    "lat2colat",
    "colat2lat",
    "equiproj",
    "equiprojinv",
    "mollweideproj",
    "mollweideprojinv",
    "orthoinv",
    "orthoinv2",
    "gnominv",
    # rasterization.py
    "PROJECTIONS",
    "ProjectionResult",
    "project",
    "equirectangular",
    "mollweide",
    "orthographic",
    "orthographic2",
    "gnomonic",
]
