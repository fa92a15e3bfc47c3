"""NumPy ``dtype=object`` array helpers for :class:`~bigfraction.fraction.Fraction`."""
from __future__ import annotations

import logging
import numbers
from typing import Any, Callable, Optional

import numpy as np

from .fraction import DEFAULT_PRECISION, IRREDUCIBLE, Fraction, is_fraction_like

LOG = logging.getLogger(__name__)


def _coerce_item(item: Any, *, copy: bool) -> Fraction:
    if isinstance(item, Fraction):
        return item.clone() if copy else item
    if is_fraction_like(item) or isinstance(item, numbers.Integral):
        return Fraction(item)
    raise TypeError(f"Cannot interpret {type(item)!r} as Fraction")


def as_fraction_array(values: Any, *, copy: bool = True) -> np.ndarray:
    """Return a ``numpy.ndarray`` of :class:`Fraction` values.

    ``values`` can be any iterable of fractions, fraction-like records or
    integers, or an existing NumPy array. With ``copy`` every fraction is
    cloned, so mutating the result never touches the input. When ``copy`` is
    ``False`` and ``values`` is already an object array of fractions, it is
    returned unchanged.
    """

    if isinstance(values, np.ndarray):
        if not copy and values.dtype == object and all(
            isinstance(item, Fraction) for item in values.flat
        ):
            return values
        coerced = [_coerce_item(item, copy=copy) for item in values.flat]
        array = np.empty(len(coerced), dtype=object)
        array[:] = coerced
        return array.reshape(values.shape)

    if isinstance(values, (list, tuple)):
        array = np.empty(len(values), dtype=object)
        array[:] = [_coerce_item(item, copy=copy) for item in values]
        return array

    return as_fraction_array(list(values), copy=copy)


def zeros(length: int) -> np.ndarray:
    """Return a one-dimensional array of ``length`` independent zero fractions."""

    if length < 0:
        raise ValueError("length must be non-negative")
    return as_fraction_array([Fraction() for _ in range(length)], copy=False)


def zeros_like(values: Any) -> np.ndarray:
    """Return a zero-filled array that matches the shape of ``values``."""

    array = as_fraction_array(values, copy=False)
    return as_fraction_array([Fraction() for _ in range(array.size)], copy=False).reshape(
        array.shape
    )


def reduce_all(values: np.ndarray, callback: Optional[Callable[[int], Any]] = None) -> np.ndarray:
    """Reduce every fraction of ``values`` in place.

    Returns an object array holding each element's :meth:`Fraction.reduce`
    result, i.e. ``IRREDUCIBLE`` or whatever ``callback`` returned.
    """

    array = as_fraction_array(values, copy=False)
    results = np.empty(array.shape, dtype=object)
    for index, item in np.ndenumerate(array):
        results[index] = item.reduce(callback)
    reduced = sum(1 for item in results.flat if item is not IRREDUCIBLE)
    LOG.debug("reduce_all: %d of %d fractions reduced", reduced, array.size)
    return results


def irreducible_mask(values: Any) -> np.ndarray:
    """Return a boolean array telling which fractions are in lowest terms."""

    array = as_fraction_array(values, copy=False)
    vectorised = np.vectorize(lambda item: item.is_irreducible, otypes=[bool])
    return vectorised(array)


def to_strings(values: Any, precision: int = DEFAULT_PRECISION) -> np.ndarray:
    """Render each fraction with :meth:`Fraction.to_string`."""

    array = as_fraction_array(values, copy=False)
    rendered = [item.to_string(precision) for item in array.flat]
    return np.array(rendered, dtype=str).reshape(array.shape)


__all__ = [
    "as_fraction_array",
    "irreducible_mask",
    "reduce_all",
    "to_strings",
    "zeros",
    "zeros_like",
]
