"""Exact fractions over arbitrary-precision integers."""

from .arrays import (
    as_fraction_array,
    irreducible_mask,
    reduce_all,
    to_strings,
    zeros,
    zeros_like,
)
from .euclidean import gcd, gcd_async
from .fraction import (
    DEFAULT_PRECISION,
    IRREDUCIBLE,
    Fraction,
    FractionLike,
    InvalidDenominatorType,
    Irreducible,
    Reducible,
    is_fraction_like,
)

__all__ = [
    "DEFAULT_PRECISION",
    "Fraction",
    "FractionLike",
    "InvalidDenominatorType",
    "IRREDUCIBLE",
    "Irreducible",
    "Reducible",
    "as_fraction_array",
    "gcd",
    "gcd_async",
    "irreducible_mask",
    "is_fraction_like",
    "reduce_all",
    "to_strings",
    "zeros",
    "zeros_like",
]
