"""Gregorian calendar ↔ Julian day conversions.

The array functions (``caldate_to_*``, ``jd_to_*``, ``mjd_to_*``) are
JAX-traceable. :func:`julian_day_from_calendar` and
:func:`calendar_from_julian_day` are the date-only helpers used at the
interface boundary; the latter builds a Python string and is eager only.

No leap seconds or time-scale differences are modelled: a day is 86400 s
and the input is taken as UT.
"""

from __future__ import annotations

from typing import NamedTuple

import jax
import jax.numpy as jnp
from jax.typing import ArrayLike

from .config import get_dtype
from .constants import JD_MJD_OFFSET


class CalendarDate(NamedTuple):
    """Calendar date with its ``YYYY-MM-DD`` representation."""

    year: int
    month: int
    day: int
    string: str


def caldate_to_mjd(
    year: ArrayLike,
    month: ArrayLike,
    day: ArrayLike,
    hour: ArrayLike = 0,
    minute: ArrayLike = 0,
    second: ArrayLike = 0.0,
) -> jax.Array:
    """Convert a calendar date to Modified Julian Date.

    Uses the proleptic Gregorian calendar for every date.

    Args:
        year (ArrayLike): Year of the calendar date.
        month (ArrayLike): Month of the calendar date.
        day (ArrayLike): Day of the calendar date.
        hour (ArrayLike): Hour of the calendar date. Default: ``0``
        minute (ArrayLike): Minute of the calendar date. Default: ``0``
        second (ArrayLike): Second of the calendar date. Default: ``0.0``

    Returns:
        Modified Julian Date.

    References:

        1. Montenbruck, O., & Gill, E. (2012). *Satellite Orbits: Models, Methods and Applications*. Springer Science & Business Media.
    """

    is_jan_or_feb = month <= 2
    year = jnp.where(is_jan_or_feb, year - 1, year)
    month = jnp.where(is_jan_or_feb, month + 12, month)

    B = jnp.floor(year / 400) - jnp.floor(year / 100) + jnp.floor(year / 4)

    mjd = 365 * year - 679004 + B + jnp.floor(30.6001 * (month + 1)) + day

    frac_day = (hour + (minute + second / 60.0) / 60.0) / 24.0

    return get_dtype()(jnp.floor(mjd).astype(jnp.int32)) + frac_day


def caldate_to_jd(
    year: ArrayLike,
    month: ArrayLike,
    day: ArrayLike,
    hour: ArrayLike = 0,
    minute: ArrayLike = 0,
    second: ArrayLike = 0.0,
) -> jax.Array:
    """Convert a calendar date to Julian Date.

    Args:
        year (ArrayLike): Year of the calendar date.
        month (ArrayLike): Month of the calendar date.
        day (ArrayLike): Day of the calendar date.
        hour (ArrayLike): Hour of the calendar date. Default: ``0``
        minute (ArrayLike): Minute of the calendar date. Default: ``0``
        second (ArrayLike): Second of the calendar date. Default: ``0.0``

    Returns:
        Julian Date.
    """

    mjd = caldate_to_mjd(year, month, day, hour, minute, second)

    return mjd + JD_MJD_OFFSET


def jd_to_mjd(jd: ArrayLike) -> jax.Array:
    """Convert Julian Date to Modified Julian Date.

    Args:
        jd (ArrayLike): Julian Date.

    Returns:
        Modified Julian Date.
    """

    return jd - JD_MJD_OFFSET


def mjd_to_jd(mjd: ArrayLike) -> jax.Array:
    """Convert Modified Julian Date to Julian Date.

    Args:
        mjd (ArrayLike): Modified Julian Date.

    Returns:
        Julian Date.
    """

    return mjd + JD_MJD_OFFSET


def jd_to_caldate(
    jd: ArrayLike,
) -> tuple[jax.Array, jax.Array, jax.Array, jax.Array, jax.Array, jax.Array]:
    """Convert Julian Date to calendar date.

    The Gregorian correction is applied to every date; dates before the
    1582 calendar reform are returned in the proleptic Gregorian calendar
    rather than the Julian calendar in use at the time.

    Args:
        jd (ArrayLike): Julian Date.

    Returns:
        tuple[jax.Array, ...]: (year, month, day, hour, minute, second) where
            year/month/day/hour/minute are int32 and second is configurable float dtype.

    References:

        1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and
           Applications*, 2012, p. 322.
    """
    jd_shifted = jd + 0.5
    z = jnp.floor(jd_shifted).astype(jnp.int32)
    f = jd_shifted - z

    # Scaled integer arithmetic: (z - 1867216.25)/36524.25
    # = (100*z - 186721625) / 3652425
    alpha = (100 * z - 186721625) // 3652425
    a = z + 1 + alpha - alpha // 4

    b = a + 1524
    # Scaled: (b - 122.1)/365.25 = (100*b - 12210)/36525
    c = (100 * b - 12210) // 36525
    # Scaled: 365.25*c = 36525*c/100
    d = (36525 * c) // 100
    # Scaled: (b - d)/30.6001 = (b - d)*10000/306001
    e = ((b - d) * 10000) // 306001

    # Scaled: 30.6001*e = 306001*e/10000
    day_with_frac = b - d - (306001 * e) // 10000 + f
    day = jnp.floor(day_with_frac).astype(jnp.int32)
    frac_of_day = day_with_frac - day

    month = jnp.where(e < 14, e - 1, e - 13)
    year = jnp.where(month > 2, c - 4716, c - 4715)

    # Decompose fractional day via integer milliseconds to avoid
    # truncation artifacts from floating-point precision limits. Capped at
    # 23:59:59.999 so rounding never yields hour 24 on the same day.
    total_ms = jnp.round(frac_of_day * 86400000.0).astype(jnp.int32)
    total_ms = jnp.minimum(total_ms, 86399999)
    hour = total_ms // 3600000
    total_ms = total_ms - hour * 3600000
    minute = total_ms // 60000
    total_ms = total_ms - minute * 60000
    second = get_dtype()(total_ms) / 1000.0

    return year, month, day, hour, minute, second


def mjd_to_caldate(
    mjd: ArrayLike,
) -> tuple[jax.Array, jax.Array, jax.Array, jax.Array, jax.Array, jax.Array]:
    """Convert Modified Julian Date to calendar date.

    Args:
        mjd (ArrayLike): Modified Julian Date.

    Returns:
        tuple[jax.Array, ...]: (year, month, day, hour, minute, second).
    """
    return jd_to_caldate(mjd + JD_MJD_OFFSET)


def julian_day_from_calendar(year: ArrayLike, month: ArrayLike, day: ArrayLike) -> jax.Array:
    """Julian day at 0h UT of a calendar date.

    Args:
        year (ArrayLike): Year.
        month (ArrayLike): Month, 1-12.
        day (ArrayLike): Day of month.

    Returns:
        Julian Date (ends in ``.5``).

    Examples:
        ```python
        from orbitjax.time import julian_day_from_calendar
        julian_day_from_calendar(2000, 1, 1)  # 2451544.5
        ```
    """
    return caldate_to_jd(year, month, day)


def calendar_from_julian_day(jd: ArrayLike) -> CalendarDate:
    """Calendar date containing a Julian day.

    The time of day is discarded. See :func:`jd_to_caldate` for the
    treatment of pre-Gregorian dates.

    Args:
        jd (ArrayLike): Julian Date (scalar).

    Returns:
        CalendarDate: Year, month, day and ``YYYY-MM-DD`` string.

    Examples:
        ```python
        from orbitjax.time import calendar_from_julian_day
        calendar_from_julian_day(2451547.5).string  # '2000-01-04'
        ```
    """
    year, month, day, _, _, _ = jd_to_caldate(jnp.asarray(jd, dtype=get_dtype()))
    year, month, day = int(year), int(month), int(day)
    return CalendarDate(year, month, day, f"{year:d}-{month:02d}-{day:02d}")
