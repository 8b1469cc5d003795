"""Splitting of combined person names."""

import re
from typing import NamedTuple

_WHITESPACE = re.compile(r"\s+")


class PersonName(NamedTuple):
    """First and last name parts."""

    first_name: str | None
    last_name: str | None


def split_name(full_name: str | None) -> PersonName:
    """
    Split a combined name into first and last name.

    The first whitespace-separated token is the first name and the rest of
    the string is the last name, so "Mary Ann Smith" gives ("Mary",
    "Ann Smith"). Runs of whitespace are collapsed first.

    Args:
        full_name: Name as stored on a combined-name address.

    Returns:
        PersonName with ``None`` for parts that are missing.
    """
    value = _WHITESPACE.sub(" ", full_name or "").strip()
    if not value:
        return PersonName(None, None)

    first, _, last = value.partition(" ")
    return PersonName(first, last or None)
