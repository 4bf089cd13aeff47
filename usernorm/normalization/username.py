"""Unique username generator.

A base username is lowercased and stripped of every space.  When the
injected predicate reports that it is already taken, the last four
characters of the user's phone are appended.  The suffixed name is not
checked again, and a phone shorter than four characters leaves the
collision unresolved (``modified`` stays ``False``).

Safety rule: raw values are never logged.
"""
from __future__ import annotations

import logging
from typing import Callable, NamedTuple

from usernorm.normalization.phone_suffix import phone_last_four

logger = logging.getLogger(__name__)

ExistsPredicate = Callable[[str], bool]


class UsernameResult(NamedTuple):
    username: str
    modified: bool


def canonical_username(raw: str) -> str:
    """Lowercase *raw* and remove all space characters, interior ones included."""
    return raw.replace(" ", "").lower()


def generate_unique_username(
    base_username: str,
    phone: str,
    check_exists: ExistsPredicate,
) -> UsernameResult:
    """Return ``(username, modified)`` for *base_username*.

    *check_exists* is called exactly once, with the canonical form of
    *base_username*.  Exceptions it raises propagate.
    """
    username = canonical_username(base_username)

    if not check_exists(username):
        return UsernameResult(username, False)

    suffix = phone_last_four(phone)
    if not suffix:
        logger.debug("generate_unique_username: collision left unresolved, phone too short")
        return UsernameResult(username, False)

    logger.debug("generate_unique_username: collision resolved with phone suffix")
    return UsernameResult(username + suffix, True)
