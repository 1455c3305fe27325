# -*- encoding: utf-8 -*-

from dataclasses import dataclass, field
from typing import Any, Tuple

import numpy as np
import numpy.typing as npt


class AlmDomainError(ValueError):
    """Base class for errors caused by invalid a_ℓm dimensions or indices"""


class NegativeLmaxError(AlmDomainError):
    pass


class NegativeMmaxError(AlmDomainError):
    pass


class InconsistentLmaxMmaxError(AlmDomainError):
    pass


class AlmSizeMismatchError(AlmDomainError):
    pass


class MalformedAlmIndexError(AlmDomainError):
    pass


def num_of_alms(lmax: int, mmax: int | None = None) -> int:
    """Return the number of a_ℓm coefficients for the given ℓ_max and m_max

    If `mmax` is not provided, it is assumed to be equal to `lmax`. The
    result is the size of the array needed to store all the coefficients
    with ``0 ≤ m ≤ mmax`` and ``m ≤ ℓ ≤ lmax``.

    A subclass of :class:`.AlmDomainError` is raised if `lmax` or `mmax`
    are negative or if ``mmax > lmax``.

    .. doctest::

        >>> num_of_alms(3)
        10
        >>> num_of_alms(5, 2)
        15
    """
    if mmax is None:
        mmax = lmax

    if lmax < 0:
        raise NegativeLmaxError(f"lmax={lmax} is not positive or zero")
    if mmax < 0:
        raise NegativeMmaxError(f"mmax={mmax} is not positive or zero")
    if mmax > lmax:
        raise InconsistentLmaxMmaxError(
            f"lmax={lmax} and mmax={mmax} are inconsistent"
        )

    return (mmax + 1) * (mmax + 2) // 2 + (mmax + 1) * (lmax - mmax)


def alm_index_l0(tval: int, m: int) -> int:
    """Return the offset of the first coefficient with order `m`

    The parameter `tval` must be equal to ``2·lmax + 1``. The product
    ``m·(tval - m)`` is always even, so the right shift is an exact division.
    """
    return (m * (tval - m)) >> 1


def alm_index(tval: int, ell: int, m: int) -> int:
    """Return the (0-based) position of a_ℓm in the packed array

    The layout is the same used by Healpy: coefficients are grouped by
    increasing `m`, and within each group they are sorted by increasing ℓ.
    The value of `tval` is ``2·lmax + 1``.
    """
    return alm_index_l0(tval, m) + ell


def alm_index_array(tval: int, ells, ms) -> npt.NDArray[np.int64]:
    """Vectorized version of :func:`.alm_index`

    The two sequences `ells` and `ms` must have the same shape; the result is
    an integer array with that shape.
    """
    ells = np.asarray(ells, dtype=np.int64)
    ms = np.asarray(ms, dtype=np.int64)
    if ells.shape != ms.shape:
        raise ValueError(
            f"ℓ and m arrays have different shapes: {ells.shape} != {ms.shape}"
        )

    return np.right_shift(ms * (tval - ms), 1) + ells


def encode_alm_index(ell, m):
    """Return the composite index ``ℓ² + ℓ + m + 1`` used in FITS files"""
    return ell * ell + ell + m + 1


def decode_alm_index(idx) -> Tuple[Any, Any]:
    """Convert a composite FITS index back into the pair (ℓ, m)

    This works both with scalars and with NumPy arrays. No check is done on
    the result: malformed indices produce negative values of `m`.

    .. doctest::

        >>> decode_alm_index(1)
        (0, 0)
        >>> decode_alm_index(7)
        (2, 0)
    """
    idx = np.asarray(idx, dtype=np.int64)
    ell = np.floor(np.sqrt(idx - 1)).astype(np.int64)
    m = idx - ell * ell - ell - 1

    if ell.ndim == 0:
        return int(ell), int(m)

    return ell, m


@dataclass(frozen=True, eq=False)
class Alm:
    """A set of a_ℓm coefficients stored in a packed array

    The dimensions ``lmax`` and ``mmax`` are fixed when the object is
    created, while the coefficients in ``values`` can be freely modified.
    The quantity ``tval = 2·lmax + 1`` is computed once in the constructor
    and reused by every index lookup.

    Fields:

    - ``lmax`` (int): maximum degree ℓ
    - ``mmax`` (int): maximum order m; if ``None`` (the default), it is
      set equal to ``lmax``
    - ``values``: one-dimensional NumPy array containing the coefficients.
      If ``None``, a zero-filled array is allocated; otherwise its length
      must match :func:`.num_of_alms`, or :class:`.AlmSizeMismatchError`
      is raised. Complex arrays are used as they are; real arrays are
      copied into a new complex array
    - ``dtype``: the type used for a freshly-allocated array

    Coefficients can be accessed using the pair ``(ℓ, m)`` as a key::

        alm = Alm(lmax=3)
        alm[2, 1] = 1.0 + 2.0j
        print(alm[2, 1])
    """

    lmax: int
    mmax: int | None = None
    values: Any = None
    dtype: Any = np.complex128
    tval: int = field(init=False)

    def __post_init__(self):
        mmax = self.lmax if self.mmax is None else self.mmax
        nalm = num_of_alms(self.lmax, mmax)

        if self.values is None:
            values = np.zeros(nalm, dtype=self.dtype)
        else:
            values = np.asarray(self.values)
            if not np.issubdtype(values.dtype, np.complexfloating):
                # Real or integer buffers are copied into a complex array
                values = values.astype(np.result_type(values.dtype, np.complex64))
            if values.ndim != 1 or values.size != nalm:
                raise AlmSizeMismatchError(
                    (
                        "Wrong size for the a_ℓm array: it is {actual} "
                        "instead of {expected} (lmax={lmax}, mmax={mmax})"
                    ).format(
                        actual=values.shape,
                        expected=nalm,
                        lmax=self.lmax,
                        mmax=mmax,
                    )
                )

        # The dataclass is frozen, so we must bypass __setattr__
        object.__setattr__(self, "mmax", mmax)
        object.__setattr__(self, "values", values)
        object.__setattr__(self, "dtype", values.dtype)
        object.__setattr__(self, "tval", 2 * self.lmax + 1)

    @property
    def num_of_alms(self) -> int:
        return len(self.values)

    def _check_ell_m(self, ell: int, m: int):
        if not (0 <= m <= self.mmax and m <= ell <= self.lmax):
            raise IndexError(
                f"(ℓ={ell}, m={m}) is outside the range lmax={self.lmax}, "
                f"mmax={self.mmax}"
            )

    def index(self, ell: int, m: int) -> int:
        """Return the position of a_ℓm within :attr:`values`"""
        self._check_ell_m(ell, m)
        return alm_index(self.tval, ell, m)

    def indices(self, ells, ms) -> npt.NDArray[np.int64]:
        """Return the positions of many coefficients within :attr:`values`"""
        ells = np.asarray(ells, dtype=np.int64)
        ms = np.asarray(ms, dtype=np.int64)
        if np.any(
            (ms < 0) | (ms > self.mmax) | (ells < ms) | (ells > self.lmax)
        ):
            raise IndexError(
                f"Some (ℓ, m) pairs are outside the range lmax={self.lmax}, "
                f"mmax={self.mmax}"
            )
        return alm_index_array(self.tval, ells, ms)

    def __getitem__(self, key):
        ell, m = key
        return self.values[self.index(ell, m)]

    def __setitem__(self, key, value):
        ell, m = key
        self.values[self.index(ell, m)] = value

    def ell_array(self) -> npt.NDArray[np.int64]:
        """Return the value of ℓ for each element of :attr:`values`"""
        return np.concatenate(
            [np.arange(m, self.lmax + 1) for m in range(self.mmax + 1)]
        )

    def m_array(self) -> npt.NDArray[np.int64]:
        """Return the value of m for each element of :attr:`values`"""
        return np.concatenate(
            [np.full(self.lmax - m + 1, m) for m in range(self.mmax + 1)]
        )

    def copy(self) -> "Alm":
        return Alm(lmax=self.lmax, mmax=self.mmax, values=self.values.copy())

    def __repr__(self):
        return (
            f"Alm(lmax={self.lmax}, mmax={self.mmax}, "
            f"num_of_alms={self.num_of_alms}, dtype={self.dtype})"
        )
