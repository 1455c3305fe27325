# -*- encoding: utf-8 -*-

# Cartographic projections between the unit sphere and the plane
# [-1, 1] × [-1, 1]. The notation used for the orthographic projection
# (ϕ1, λ0) follows «Map Projections: A Working Manual» by John P. Snyder
# (USGS Professional Paper 1395, 1987), p. 145 and ff.

from math import asin, atan2, cos, isfinite, nan, pi, sin, sqrt, tan

from numba import njit

"""Value used by Healpix maps to mark pixels with no data"""
UNSEEN = -1.6375e30

# Tolerance used to detect degenerate cases (projection center, poles)
_EPSILON = 1e-12

# Maximum number of Newton iterations used by the Mollweide projection
_MOLLWEIDE_MAX_ITERATIONS = 100


@njit
def lat2colat(x):
    """Convert latitude into colatitude (both in radians)"""
    return pi / 2 - x


@njit
def colat2lat(x):
    """Convert colatitude into latitude (both in radians)"""
    return pi / 2 - x


@njit
def _safe_asin(x):
    # Rounding errors can push the argument slightly outside [-1, 1]
    return asin(min(1.0, max(-1.0, x)))


def _wrap_angle(angle):
    # Bring the angle in the range [-π, π], picking the nearest period
    return angle - 2 * pi * round(angle / (2 * pi))


def equiproj(lat, lon):
    """Equirectangular projection

    Given a point on the sphere (latitude and longitude in radians), return
    a tuple ``(visible, x, y)`` where ``x`` and ``y`` lie in [-1, 1].
    Angles outside the usual ranges are first wrapped to the nearest period.
    """
    x = _wrap_angle(lon) / pi
    y = 2 * _wrap_angle(lat) / pi

    return (-1 <= x <= 1) and (-1 <= y <= 1), x, y


@njit
def equiprojinv(x, y):
    """Inverse equirectangular projection

    Given a point (x, y) on the plane [-1, 1] × [-1, 1], return a tuple
    ``(visible, lat, lon)`` where ``visible`` tells if the point falls
    within the projection and the two angles are in radians.
    """
    if not ((-1 <= x <= 1) and (-1 <= y <= 1)):
        return False, 0.0, 0.0

    return True, pi / 2 * y, pi * x


def _mollweide_theta(lat):
    # Solve 2θ + sin(2θ) = π sin(lat) using Newton's method
    if abs(abs(lat) - pi / 2) < _EPSILON:
        return lat

    target = pi * sin(lat)
    theta = lat
    for _ in range(_MOLLWEIDE_MAX_ITERATIONS):
        delta = (2 * theta + sin(2 * theta) - target) / (2 + 2 * cos(2 * theta))
        theta -= delta
        if abs(delta) < _EPSILON:
            break

    return theta


def mollweideproj(lat, lon):
    """Mollweide projection

    This is the inverse of :func:`.mollweideprojinv`: the ellipse is
    inscribed in the square [-1, 1] × [-1, 1], and positive longitudes are
    on the left side of the map. Return a tuple ``(visible, x, y)``.
    """
    theta = _mollweide_theta(lat)
    x = -_wrap_angle(lon) * cos(theta) / pi
    y = sin(theta)

    return x * x + y * y <= 1, x, y


@njit
def mollweideprojinv(x, y):
    """Inverse Mollweide projection

    Given a point (x, y) on the plane, with x ∈ [-1, 1], y ∈ [-1, 1], return
    a tuple ``(visible, lat, lon)``. Points outside the ellipse are not
    visible. At the poles (y = ±1) the longitude is undefined and the
    result contains a NaN.
    """

    # See https://en.wikipedia.org/wiki/Mollweide_projection, with R = 1/√2
    if x * x + y * y >= 1:
        return False, 0.0, 0.0

    sin_theta = y
    cos_theta = sqrt(1 - sin_theta * sin_theta)
    theta = asin(sin_theta)

    lat = _safe_asin((2 * theta + 2 * sin_theta * cos_theta) / pi)
    if cos_theta == 0.0:
        lon = nan
    else:
        lon = -pi * x / cos_theta

    return True, lat, lon


@njit
def orthoinv(x, y, phi1, lambda0):
    """Inverse orthographic projection centered on (ϕ1, λ0)

    Given a point (x, y) on the plane, with x ∈ [-1, 1], y ∈ [-1, 1], return
    a tuple ``(visible, lat, lon)``. Points outside the unit circle are not
    visible. The center of the plane is mapped exactly to (ϕ1, λ0).
    """
    rho = sqrt(x * x + y * y)
    if rho > 1:
        return False, 0.0, 0.0

    c = asin(rho)
    sin_c, cos_c = sin(c), cos(c)
    if cos_c < 0:
        return False, 0.0, 0.0

    if rho < _EPSILON:
        return True, float(phi1), float(lambda0)

    phi = _safe_asin(cos_c * sin(phi1) + y * sin_c * cos(phi1) / rho)
    if abs(phi1 - pi / 2) < _EPSILON:
        lam = lambda0 + atan2(x, -y)
    elif abs(phi1 + pi / 2) < _EPSILON:
        lam = lambda0 + atan2(x, y)
    else:
        lam = lambda0 + atan2(
            x * sin_c, rho * cos(phi1) * cos_c - y * sin(phi1) * sin_c
        )

    return True, phi, lam


@njit
def orthoinv2(x, y, phi1, lambda0):
    """Inverse of a double orthographic projection

    The left half of the plane (x ≤ 0) shows the hemisphere centered on
    (ϕ1, λ0), the right half shows the opposite hemisphere, centered on
    (ϕ1, λ0 + π). Each half is rescaled so that its globe spans [-1, 1] in
    both directions; the natural aspect ratio of the image is therefore 2:1.
    """
    if x <= 0:
        return orthoinv(2 * x + 1, y, phi1, lambda0)

    return orthoinv(2 * x - 1, y, phi1, lambda0 + pi)


@njit
def gnominv(x, y, phi1, lambda0, psi0, fov_rad):
    """Inverse gnomonic projection

    The plane is tangent to the sphere in (ϕ1, λ0) and rotated by the angle
    ψ0 around the line of sight. The parameter `fov_rad` is the angle between
    the center and the border (x = ±1 or y = ±1) of the image; as it
    approaches π/2, the projection diverges. Return a tuple
    ``(visible, lat, lon)``.
    """
    radius = 1 / tan(fov_rad)

    norm = sqrt(radius * radius + x * x + y * y)
    vx, vy, vz = radius / norm, x / norm, y / norm

    # Roll around the line of sight. The sign is reversed to match the
    # convention used by Healpy
    cos_psi, sin_psi = cos(-psi0), sin(-psi0)
    vy, vz = vy * cos_psi - vz * sin_psi, vy * sin_psi + vz * cos_psi

    # Move the center of the image from the equator to latitude ϕ1
    cos_phi, sin_phi = cos(phi1), sin(phi1)
    vx, vz = vx * cos_phi - vz * sin_phi, vx * sin_phi + vz * cos_phi

    # Move the center to longitude λ0
    cos_lam, sin_lam = cos(lambda0), sin(lambda0)
    vx, vy = vx * cos_lam - vy * sin_lam, vx * sin_lam + vy * cos_lam

    if not (isfinite(vx) and isfinite(vy) and isfinite(vz)):
        return False, 0.0, 0.0

    colat = atan2(sqrt(vx * vx + vy * vy), vz)
    lon = atan2(vy, vx)

    return True, colat2lat(colat), lon
