"""User record validation and normalization.

Runs before a user is written to the directory or database and mutates
``username`` and ``mail`` in place:

1. ``username`` goes through ``generate_unique_username``.
2. ``mail`` is forced to ``<username>@<default_domain>`` when the username
   was suffixed, when the original mail was empty, or when sanitizing its
   local part would change it.  The forced address is built by plain
   concatenation and is not passed through ``is_valid_email``.
3. Otherwise ``mail`` goes through ``normalize_email``.

Nothing here locks or reserves the chosen username; two records
processed concurrently can end up with the same suffixed name.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from usernorm.normalization.email_normalizer import (
    default_email,
    normalize_email,
    sanitize_local_part,
    split_email,
)
from usernorm.normalization.username import ExistsPredicate, generate_unique_username

logger = logging.getLogger(__name__)


class SupportsUserFields(Protocol):
    username: str
    mobile: str
    mail: str


@dataclass
class UserRecord:
    """In-memory user record as delivered by an upstream feed."""

    username: str = ""
    mobile: str = ""
    mail: str = ""


def _local_part_needs_cleaning(email: str) -> bool:
    parts = split_email(email)
    if parts is None:
        return False
    local, _ = parts
    return sanitize_local_part(local) != local


def validate_and_normalize_user(
    user: SupportsUserFields,
    default_domain: str,
    check_exists: ExistsPredicate,
) -> None:
    """Normalize *user*'s ``username`` and ``mail`` in place.

    Parameters
    ----------
    user:
        Any object with mutable ``username``, ``mobile`` and ``mail``
        strings; ``UserRecord`` and the ORM ``User`` both qualify.
    default_domain:
        Domain for generated addresses, e.g. ``"hzxb.com"``.
    check_exists:
        Predicate telling whether a username is already taken in the
        target store.

    Returns ``None`` for every input.  Only exceptions raised by
    *check_exists* can escape.
    """
    username, modified = generate_unique_username(user.username, user.mobile, check_exists)
    user.username = username

    original_mail = user.mail
    force_default = modified or not original_mail or _local_part_needs_cleaning(original_mail)

    if force_default:
        logger.debug("validate_and_normalize_user: mail reset to default form (modified=%s)", modified)
        user.mail = default_email(username, default_domain)
    else:
        user.mail = normalize_email(original_mail, username, default_domain)
