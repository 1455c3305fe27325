# -*- encoding: utf-8 -*-

import argparse
import logging as log
import os
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402

from .healpix import read_healpix_map_from_file  # noqa: E402
from .parameters import ProjectionParameters  # noqa: E402
from .plot import plot_projection  # noqa: E402
from .rasterization import PROJECTIONS  # noqa: E402


def initialize_logging():
    log_format = "[%(asctime)s %(levelname)s] %(message)s"

    if "LOG_DEBUG" in os.environ:
        log_level = log.DEBUG
    else:
        log_level = log.INFO

    log.basicConfig(level=log_level, format=log_format)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="healpix-lite-project",
        description="Save a cartographic projection of a Healpix map in an image file",
    )
    parser.add_argument("map_file", type=Path, help="FITS file containing the map")
    parser.add_argument(
        "output_file", type=Path, help="Image file to create (e.g., map.png)"
    )
    parser.add_argument(
        "--projection",
        choices=sorted(PROJECTIONS.keys()),
        default="mollweide",
        help="Kind of projection (default: %(default)s)",
    )
    parser.add_argument(
        "--parameters",
        type=Path,
        default=None,
        help="TOML file with a [projection] section. Options passed on the "
        "command line override the values in the file",
    )
    parser.add_argument("--width", type=int, default=None, help="Width in pixels")
    parser.add_argument("--height", type=int, default=None, help="Height in pixels")
    parser.add_argument(
        "--center",
        type=float,
        nargs="+",
        metavar="ANGLE",
        default=None,
        help="Latitude, longitude and (gnomonic only) rotation of the center "
        "of the image, in degrees",
    )
    parser.add_argument(
        "--fov",
        type=float,
        default=None,
        help="Field of view of the gnomonic projection, in degrees",
    )
    parser.add_argument(
        "--field", type=int, default=0, help="Column of the map to read (default: 0)"
    )
    parser.add_argument("--title", type=str, default=None, help="Title of the plot")

    return parser


def parameters_from_args(args) -> ProjectionParameters:
    if args.parameters:
        params = ProjectionParameters.from_toml_file(args.parameters)
    else:
        params = ProjectionParameters()

    if args.width is not None:
        params.width = args.width
    if args.height is not None:
        params.height = args.height
    if args.center is not None:
        if len(args.center) not in (2, 3):
            raise ValueError("--center requires two or three angles")
        params.center = tuple(np.deg2rad(args.center))
    if args.fov is not None:
        params.fov_rad = np.deg2rad(args.fov)

    return params


def main(argv=None):
    initialize_logging()

    args = build_parser().parse_args(argv)
    params = parameters_from_args(args)
    sky_map = read_healpix_map_from_file(args.map_file, field=args.field)

    result = PROJECTIONS[args.projection](sky_map, params)
    log.info(
        "%s projection computed, size %d×%d",
        args.projection,
        result.image.shape[1],
        result.image.shape[0],
    )

    fig, _ = plot_projection(result, title=args.title)
    fig.savefig(args.output_file)
    plt.close(fig)
    log.info('image saved in "%s"', str(args.output_file))


if __name__ == "__main__":
    main()
