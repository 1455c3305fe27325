# -*- encoding: utf-8 -*-

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import numpy as np
import tomlkit

from .projections import UNSEEN

"""Default width (in pixels) of the bitmaps produced by the projections"""
DEFAULT_WIDTH = 720

"""Default field of view of gnomonic projections"""
DEFAULT_FOV_RAD = np.deg2rad(15.0)


def _tomlkit_to_popo(d):
    # Convert an object returned by tomlkit into a Plain Old Python
    # Object (POPO), so that it can be compared and copied freely
    try:
        result = getattr(d, "value")
    except AttributeError:
        result = d

    if isinstance(result, list):
        result = [_tomlkit_to_popo(x) for x in result]
    elif isinstance(result, dict):
        result = {
            _tomlkit_to_popo(key): _tomlkit_to_popo(val) for key, val in result.items()
        }
    elif isinstance(result, tomlkit.items.Bool):
        result = bool(result)
    elif isinstance(result, tomlkit.items.Integer):
        result = int(result)
    elif isinstance(result, tomlkit.items.Float):
        result = float(result)
    elif isinstance(result, tomlkit.items.String):
        result = str(result)

    return result


@dataclass
class ProjectionParameters:
    """Parameters used by :func:`.project` and by the high-level projections

    Fields:

    - ``width`` (int): width of the bitmap, in pixels
    - ``height`` (int): height of the bitmap, in pixels. If ``None``, each
      projection picks a height that matches its aspect ratio (e.g., half
      the width for the Mollweide projection)
    - ``center`` (tuple): the point that is placed at the center of
      the image, as a pair ``(latitude, longitude)`` in radians. Gnomonic
      projections accept a third angle, the rotation ψ around the line of
      sight
    - ``unseen`` (float): value marking pixels with no data. Healpix maps
      use -1.6375e30, and you should not change this in common
      applications. Set it to ``None`` to disable the check
    - ``desttype``: the NumPy type used for the output bitmap
    - ``fov_rad`` (float): the field of view of gnomonic projections, i.e.,
      the angle between the center and the border of the image
    """

    width: int = DEFAULT_WIDTH
    height: Optional[int] = None
    center: Tuple[float, ...] = (0.0, 0.0)
    unseen: Optional[float] = UNSEEN
    desttype: Any = np.float32
    fov_rad: float = DEFAULT_FOV_RAD

    def __post_init__(self):
        self.center = tuple(float(x) for x in self.center)
        if len(self.center) not in (2, 3):
            raise ValueError(
                f"center must contain 2 or 3 angles, but {self.center} was given"
            )

        self.desttype = np.dtype(self.desttype)
        if not np.issubdtype(self.desttype, np.floating):
            raise ValueError(
                f"desttype must be a floating-point type, but {self.desttype} was given"
            )

    def height_or(self, default_height: int) -> int:
        """Return the height of the bitmap, or `default_height` if it is not set"""
        return default_height if self.height is None else self.height

    @staticmethod
    def from_dict(dictionary: Dict[str, Any]) -> "ProjectionParameters":
        """Create an object from the contents of a dictionary

        The dictionary can contain any of the fields of this dataclass;
        missing keys take their default value. A ``ValueError`` is raised if
        the dictionary contains unknown keys.
        """
        valid_keys = {f.name for f in fields(ProjectionParameters)}
        unknown_keys = set(dictionary.keys()) - valid_keys
        if unknown_keys:
            raise ValueError(
                "unknown projection parameter(s): {0}".format(
                    ", ".join(sorted(unknown_keys))
                )
            )

        return ProjectionParameters(**dictionary)

    @staticmethod
    def from_toml_file(
        file_name: Union[str, Path], section: Optional[str] = "projection"
    ) -> "ProjectionParameters":
        """Read the parameters from a section of a TOML file

        If `section` is ``None``, the keys are read from the top level of
        the file. If the section is missing, all the parameters keep their
        default value.
        """
        with Path(file_name).open("rt") as inpf:
            param_file_contents = "".join(inpf.readlines())

        parameters = _tomlkit_to_popo(tomlkit.parse(param_file_contents))
        if section is not None:
            parameters = parameters.get(section, {})

        return ProjectionParameters.from_dict(parameters)
