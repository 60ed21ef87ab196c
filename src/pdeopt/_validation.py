"""Shared argument checks for the pricing modules."""

from __future__ import annotations

import math

from pdeopt._errors import InvalidArgument


def _require_finite(**values) -> None:
    """Raise if any keyword value is NaN or infinite.

    Keyword names are used in the error message, so pass them as they
    should read to the caller (e.g. ``_require_finite(r=r, k=k)``).
    """
    bad = [name for name, value in values.items() if not math.isfinite(value)]
    if bad:
        raise InvalidArgument(
            f"All parameters must be finite; got non-finite {', '.join(bad)}"
        )


def _require_non_negative(label: str, value: float) -> None:
    if value < 0.0:
        raise InvalidArgument(f"{label} must be non-negative, got {value:g}")


def _require_positive(label: str, value: float) -> None:
    if value <= 0.0:
        raise InvalidArgument(f"{label} must be positive, got {value:g}")


def _require_member(value, enum_type) -> None:
    """Raise TypeError unless *value* is a member of *enum_type*."""
    if not isinstance(value, enum_type):
        raise TypeError(
            f"Expected a {enum_type.__name__} member, got {type(value).__name__} "
            f"{value!r}"
        )
