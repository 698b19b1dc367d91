"""Durees de bail DHCP.

Les durees sont exprimees en notation TimeSpan ``[d.]hh:mm[:ss[.f]]``
(ex: ``8.00:00:00`` pour huit jours), ou en nombre entier de jours.
"""

import re
from datetime import timedelta
from typing import Union

from dhcp_scope_sync.errors.exceptions import FormatError

DEFAULT_LEASE_DURATION = timedelta(days=8)

_TIMESPAN = re.compile(
    r"^(?:(?P<days>[0-9]+)\.)?"
    r"(?P<hours>[0-9]{1,2}):(?P<minutes>[0-9]{2})"
    r"(?::(?P<seconds>[0-9]{2})(?:\.(?P<fraction>[0-9]{1,7}))?)?$"
)
_DAYS_ONLY = re.compile(r"^[0-9]+$")


def parse_duration(value: Union[str, timedelta]) -> timedelta:
    """Analyse une duree de bail.

    Args:
        value: Notation TimeSpan, nombre de jours ou timedelta.

    Returns:
        La duree correspondante.

    Raises:
        FormatError: Si la valeur est mal formee ou negative.
    """
    if isinstance(value, timedelta):
        if value < timedelta(0):
            raise FormatError(f"Duree negative : {value}")
        return value
    if not isinstance(value, str):
        raise FormatError(f"Duree invalide : {value!r}")

    text = value.strip()
    negative = text.startswith("-")
    if negative:
        text = text[1:]

    if _DAYS_ONLY.match(text):
        try:
            duration = timedelta(days=int(text))
        except (OverflowError, ValueError) as exc:
            raise FormatError(f"Duree hors plage : {value!r}") from exc
    else:
        match = _TIMESPAN.match(text)
        if not match:
            raise FormatError(f"Duree invalide : {value!r}")
        parts = match.groupdict()
        hours = int(parts["hours"])
        minutes = int(parts["minutes"])
        seconds = int(parts["seconds"] or 0)
        if hours > 23 or minutes > 59 or seconds > 59:
            raise FormatError(f"Duree hors plage : {value!r}")
        # 7 chiffres = ticks de 100 ns, ramenes en microsecondes
        fraction = (parts["fraction"] or "").ljust(7, "0")
        try:
            duration = timedelta(
                days=int(parts["days"] or 0),
                hours=hours,
                minutes=minutes,
                seconds=seconds,
                microseconds=int(fraction) // 10,
            )
        except (OverflowError, ValueError) as exc:
            raise FormatError(f"Duree hors plage : {value!r}") from exc

    if negative and duration:
        raise FormatError(f"Duree negative : {value!r}")
    return duration


def format_duration(duration: timedelta) -> str:
    """Formate une duree en notation TimeSpan ``d.hh:mm:ss``."""
    total = int(duration.total_seconds())
    days, rest = divmod(total, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{days}.{hours:02d}:{minutes:02d}:{seconds:02d}"
