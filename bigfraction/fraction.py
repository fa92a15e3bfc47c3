"""Mutable exact fractions backed by arbitrary-precision integers."""
from __future__ import annotations

import asyncio
import inspect
import logging
import numbers
from typing import (
    Any,
    Awaitable,
    Callable,
    NamedTuple,
    Optional,
    Protocol,
    Tuple,
    TypeVar,
    Union,
)

from .euclidean import _ensure_int, gcd, gcd_async

LOG = logging.getLogger(__name__)

DEFAULT_PRECISION = 80

Integer = Union[int, numbers.Integral]
T = TypeVar("T")
ReduceAsyncCallback = Callable[[int], Union[Awaitable[T], T]]


class InvalidDenominatorType(TypeError):
    """A denominator argument was supplied but is not an integer."""

    def __init__(self, message: str = "illegal denominator type") -> None:
        super().__init__(message)


class FractionLike(Protocol):
    """Anything exposing integer ``numerator`` and ``denominator`` fields."""

    numerator: int
    denominator: int


class Reducible(Protocol):
    """Something that can report on, or attempt, a lowest-terms reduction.

    Used for static typing only: an ``isinstance`` check would have to read
    ``is_irreducible`` and so fill in a fraction's memoized flag.
    """

    @property
    def is_irreducible(self) -> bool:
        ...

    def reduce(self, callback: Optional[Callable[[int], T]] = None) -> Any:
        ...

    async def reduce_async(self, callback: ReduceAsyncCallback) -> Any:
        ...


class _Ratio(NamedTuple):
    numerator: int
    denominator: int


def is_fraction_like(value: Any) -> bool:
    """Return ``True`` when *value* structurally looks like a fraction.

    Plain integers are excluded even though ``int`` exposes
    ``numerator``/``denominator`` attributes.
    """
    if value is None or isinstance(value, numbers.Integral):
        return False
    return isinstance(getattr(value, "numerator", None), numbers.Integral) and isinstance(
        getattr(value, "denominator", None), numbers.Integral
    )


def _coerce_denominator(denominator: Any) -> Optional[int]:
    if denominator is None:
        return None
    if isinstance(denominator, numbers.Integral):
        return int(denominator)
    raise InvalidDenominatorType()


def _ratio_of(value: FractionLike) -> _Ratio:
    return _Ratio(int(value.numerator), int(value.denominator))


def _as_ratio(value: Any, denominator: Any) -> _Ratio:
    if is_fraction_like(value):
        return _ratio_of(value)
    den = _coerce_denominator(denominator)
    numerator = _ensure_int(value, name="numerator")
    return _Ratio(numerator, 1 if den is None else den)


def _reciprocal(value: Any, denominator: Any) -> _Ratio:
    if is_fraction_like(value):
        return _Ratio(int(value.denominator), int(value.numerator))
    den = _coerce_denominator(denominator)
    numerator = _ensure_int(value, name="numerator")
    return _Ratio(1 if den is None else den, numerator)


def _negated(value: Any, denominator: Any) -> Tuple[Any, Any]:
    if is_fraction_like(value):
        negated = Fraction(value)
        negated._numerator = -negated._numerator
        return negated, None
    return -_ensure_int(value, name="numerator"), denominator


async def _product(a: int, b: int, divisor: int = 1) -> int:
    await asyncio.sleep(0)
    return a * b // divisor


async def _resolve(result: Any) -> Any:
    if inspect.isawaitable(result):
        result = await result
    return result


def _render(numerator: int, denominator: int, precision: int) -> str:
    if not denominator:
        if not numerator:
            return "NaN"
        return "Infinity" if numerator > 0 else "-Infinity"
    if denominator < 0:
        return _render(-numerator, -denominator, precision)
    if numerator < 0:
        return "-" + _render(-numerator, denominator, precision)

    quotient = numerator // denominator
    remainder = numerator - quotient * denominator
    multiples = [denominator * k for k in range(10)]
    digits = []
    while remainder and len(digits) < precision:
        remainder *= 10
        digit = 9
        while multiples[digit] > remainder:
            digit -= 1
        remainder -= multiples[digit]
        digits.append(str(digit))
    return f"{quotient}.{''.join(digits)}"


class Irreducible:
    """Marker returned by a reduction that had nothing to divide out.

    There is exactly one instance, :data:`IRREDUCIBLE`; calling the class
    again hands back that same object.
    """

    __slots__ = ()
    _instance: Optional["Irreducible"] = None

    def __new__(cls) -> "Irreducible":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def is_irreducible(self) -> bool:
        return True

    def reduce(self, callback: Optional[Callable[[int], T]] = None) -> "Irreducible":
        """Do nothing; *callback* is never called."""
        return self

    async def reduce_async(self, callback: Optional[ReduceAsyncCallback] = None) -> "Irreducible":
        """Do nothing; *callback* is never called."""
        return self

    def __copy__(self) -> "Irreducible":
        return self

    def __deepcopy__(self, memo: Any) -> "Irreducible":
        return self

    def __reduce__(self) -> str:
        return "IRREDUCIBLE"

    def __repr__(self) -> str:
        return "IRREDUCIBLE"


IRREDUCIBLE = Irreducible()


class Fraction:
    """A mutable fraction of two arbitrary-precision integers.

    Values are kept exactly as supplied or computed: the denominator may be
    zero or negative and nothing is reduced unless :meth:`reduce` (or
    :meth:`reduce_async`) is called. Every arithmetic method mutates the
    receiver in place.
    """

    __slots__ = ("_numerator", "_denominator", "_irreducible")

    def __init__(
        self,
        source: Union["Fraction", FractionLike, Integer, None] = None,
        denominator: Optional[Integer] = None,
    ) -> None:
        # None means "not known"; only reduction checks fill it in.
        self._irreducible: Optional[bool] = None
        if isinstance(source, Fraction):
            self._numerator = source._numerator
            self._denominator = source._denominator
            self._irreducible = source._irreducible
        elif is_fraction_like(source):
            self._numerator, self._denominator = _ratio_of(source)
        elif source is None:
            self._numerator = 0
            self._denominator = 1
        else:
            den = _coerce_denominator(denominator)
            self._numerator = _ensure_int(source, name="numerator")
            self._denominator = 1 if den is None else den

    # ------------------------------------------------------------------
    # Properties
    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    @property
    def known_irreducible(self) -> Optional[bool]:
        """Memoized irreducibility, or ``None`` when it has not been checked."""
        return self._irreducible

    @property
    def is_irreducible(self) -> bool:
        """Whether numerator and denominator share no factor above one.

        Only the memoized flag is touched; the value itself is unchanged.
        """
        if self._irreducible is None:
            self._irreducible = gcd(self._denominator, self._numerator) == 1
        return self._irreducible

    def clone(self) -> "Fraction":
        """Return an independent copy, memoized flag included."""
        return Fraction(self)

    # ------------------------------------------------------------------
    # Addition and subtraction
    def _commit_sum(self, lcm: int, lhs: int, rhs: int) -> None:
        self._irreducible = None
        self._denominator = lcm
        self._numerator = lhs + rhs

    def add(self, value: Union["Fraction", FractionLike, Integer], denominator: Optional[Integer] = None) -> None:
        """Add *value* (or ``value/denominator``) to this fraction in place.

        The new denominator is the least common multiple of both
        denominators. Raises :class:`InvalidDenominatorType` when
        *denominator* is given but is not an integer.
        """
        other = _as_ratio(value, denominator)
        # gcd() is 0 when a denominator is 0; fall back to plain cross products.
        divisor = gcd(self._denominator, other.denominator) or 1
        self._commit_sum(
            self._denominator * other.denominator // divisor,
            self._numerator * other.denominator // divisor,
            self._denominator * other.numerator // divisor,
        )

    async def add_async(
        self, value: Union["Fraction", FractionLike, Integer], denominator: Optional[Integer] = None
    ) -> None:
        """Cooperative form of :meth:`add`."""
        other = _as_ratio(value, denominator)
        divisor = (await gcd_async(self._denominator, other.denominator)) or 1
        lcm, lhs, rhs = await asyncio.gather(
            _product(self._denominator, other.denominator, divisor),
            _product(self._numerator, other.denominator, divisor),
            _product(self._denominator, other.numerator, divisor),
        )
        self._commit_sum(lcm, lhs, rhs)

    def subtract(self, value: Union["Fraction", FractionLike, Integer], denominator: Optional[Integer] = None) -> None:
        """Subtract *value* (or ``value/denominator``) from this fraction in place."""
        self.add(*_negated(value, denominator))

    async def subtract_async(
        self, value: Union["Fraction", FractionLike, Integer], denominator: Optional[Integer] = None
    ) -> None:
        await self.add_async(*_negated(value, denominator))

    # ------------------------------------------------------------------
    # Multiplication and division
    def multiply(self, value: Union["Fraction", FractionLike, Integer], denominator: Optional[Integer] = None) -> None:
        """Multiply this fraction by *value* (or ``value/denominator``) in place.

        No reduction happens here; call :meth:`reduce` afterwards if needed.
        """
        if is_fraction_like(value):
            other = _ratio_of(value)
            self._irreducible = None
            self._denominator *= other.denominator
            self._numerator *= other.numerator
            return
        numerator = _ensure_int(value, name="numerator")
        den = _coerce_denominator(denominator)
        if den is None:
            self._irreducible = None
            self._numerator *= numerator
        else:
            self.multiply(_Ratio(numerator, den))

    async def multiply_async(
        self, value: Union["Fraction", FractionLike, Integer], denominator: Optional[Integer] = None
    ) -> None:
        """Cooperative form of :meth:`multiply`."""
        if is_fraction_like(value):
            other = _ratio_of(value)
            self._irreducible = None
            den, num = await asyncio.gather(
                _product(self._denominator, other.denominator),
                _product(self._numerator, other.numerator),
            )
            self._denominator = den
            self._numerator = num
            return
        numerator = _ensure_int(value, name="numerator")
        den = _coerce_denominator(denominator)
        if den is None:
            self._irreducible = None
            self._numerator *= numerator
            await asyncio.sleep(0)
        else:
            await self.multiply_async(_Ratio(numerator, den))

    def divide(self, value: Union["Fraction", FractionLike, Integer], denominator: Optional[Integer] = None) -> None:
        """Divide this fraction by *value* (or ``value/denominator``) in place."""
        self.multiply(_reciprocal(value, denominator))

    async def divide_async(
        self, value: Union["Fraction", FractionLike, Integer], denominator: Optional[Integer] = None
    ) -> None:
        await self.multiply_async(_reciprocal(value, denominator))

    # ------------------------------------------------------------------
    # Reduction
    def reduce(self, callback: Optional[Callable[[int], T]] = None) -> Union[Irreducible, T, None]:
        """Divide numerator and denominator by their greatest common divisor.

        Returns :data:`IRREDUCIBLE` when there was nothing to divide out (the
        callback is not called then). Otherwise ``callback(gcd)`` is returned,
        or ``None`` without a callback.
        """
        divisor = gcd(self._denominator, self._numerator)
        if divisor <= 1:
            self._irreducible = True
            return IRREDUCIBLE
        self._irreducible = None
        result = callback(divisor) if callback is not None else None
        self._denominator //= divisor
        self._numerator //= divisor
        self._irreducible = True
        LOG.debug("reduced %r by %d", self, divisor)
        return result

    async def reduce_async(self, callback: ReduceAsyncCallback) -> Any:
        """Cooperative form of :meth:`reduce`.

        *callback* may return a plain value or an awaitable. It is called
        before anything is divided; an awaitable result is then awaited
        alongside the two divisions.
        """
        divisor = await gcd_async(self._denominator, self._numerator)
        if divisor <= 1:
            self._irreducible = True
            return IRREDUCIBLE
        self._irreducible = None
        pending = callback(divisor)

        async def divide_denominator() -> None:
            self._denominator //= divisor

        async def divide_numerator() -> None:
            self._numerator //= divisor

        result, _, _ = await asyncio.gather(
            _resolve(pending),
            divide_denominator(),
            divide_numerator(),
        )
        self._irreducible = True
        LOG.debug("reduced %r by %d", self, divisor)
        return result

    # ------------------------------------------------------------------
    # Representation
    def to_string(self, precision: int = DEFAULT_PRECISION) -> str:
        """Render the exact decimal expansion, cut after *precision* digits.

        Zero denominators render as ``"NaN"``, ``"Infinity"`` or
        ``"-Infinity"``. The separator is always emitted, so a whole number
        renders as ``"1."``.
        """
        precision = _ensure_int(precision, name="precision")
        if precision < 0:
            raise ValueError("precision must be >= 0")
        return _render(self._numerator, self._denominator, precision)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Fraction({self._numerator}, {self._denominator})"


__all__ = [
    "DEFAULT_PRECISION",
    "Fraction",
    "FractionLike",
    "InvalidDenominatorType",
    "IRREDUCIBLE",
    "Irreducible",
    "Reducible",
    "is_fraction_like",
]
