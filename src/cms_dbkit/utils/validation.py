"""Identifier validation and filename sanitisation utilities.

Identifiers that are interpolated into DDL (``CREATE INDEX``) pass through
:func:`assert_safe_identifier` immediately before use.  Table names are
compared case-sensitively and may contain upper-case letters because the
CMS uses camelCase column names (``authorId``, ``dateCreated``).

Security model
--------------
- Input length is capped *before* the regex runs to prevent ReDoS attacks
  on pathologically long strings.
- All patterns are compiled once at module load time.
- ``assert_safe_identifier`` raises on invalid input; it never silently
  truncates.  Length fitting is the job of
  :func:`~cms_dbkit.utils.naming.trim_object_name`.
"""

from __future__ import annotations

import re
import unicodedata

################################
# Compiled regular expressions #
################################

# Letters, digits and underscores; must not start with a digit.
_IDENT_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Table prefixes may be empty and may start with a digit (``"1_"``).
_PREFIX_RE = re.compile(r"^[A-Za-z0-9_]*$")

# Characters that are never allowed in a generated filename.
_FILENAME_DISALLOWED_RE = re.compile(r"[^\w\s.\-]")
_WHITESPACE_RE = re.compile(r"\s+")

# Hard cap applied before any regex to prevent ReDoS.
_MAX_INPUT_LEN: int = 512


def validate_identifier(identifier: str) -> bool:
    """Return ``True`` if *identifier* is a plain SQL identifier.

    Args:
        identifier: The value to validate.

    Returns:
        ``True`` when valid; ``False`` otherwise.

    Examples::

        validate_identifier("craft_entries_authorId_fk")  # True
        validate_identifier("1table")                     # False
        validate_identifier("x; DROP TABLE y")            # False
    """
    if not identifier or not isinstance(identifier, str):
        return False
    if len(identifier) > _MAX_INPUT_LEN:
        return False
    return bool(_IDENT_RE.match(identifier))


def validate_table_prefix(prefix: str) -> bool:
    """Return ``True`` if *prefix* may be prepended to table names."""
    if not isinstance(prefix, str) or len(prefix) > _MAX_INPUT_LEN:
        return False
    return bool(_PREFIX_RE.match(prefix))


def assert_safe_identifier(identifier: str, *, context: str = "") -> None:
    """Raise ``ValueError`` if *identifier* is not a plain SQL identifier.

    Args:
        identifier: The identifier to check.
        context: Optional call-site description for the error message.

    Raises:
        ValueError: When *identifier* fails validation.
    """
    if not validate_identifier(identifier):
        ctx = f" ({context})" if context else ""
        msg = (
            f"Unsafe identifier{ctx}: {identifier!r}. "
            "Only letters, digits, and underscores are allowed."
        )
        raise ValueError(msg)


def clean_filename(filename: str, *, ascii_only: bool = False, separator: str = "-") -> str:
    """Return *filename* with characters unsafe for file systems removed.

    Transformation rules:
        1. With *ascii_only*, accented letters are folded to ASCII and any
           other non-ASCII character is dropped.
        2. Characters other than word characters, whitespace, dots and
           hyphens are removed.
        3. Runs of whitespace become *separator*.
        4. Leading/trailing dots, hyphens and separators are stripped.

    Examples::

        clean_filename("Happy Lager")                     # "Happy-Lager"
        clean_filename("Café: Ünïcode", ascii_only=True)  # "Cafe-Unicode"
    """
    if ascii_only:
        filename = (
            unicodedata.normalize("NFKD", filename)
            .encode("ascii", "ignore")
            .decode("ascii")
        )
    filename = _FILENAME_DISALLOWED_RE.sub("", filename)
    filename = _WHITESPACE_RE.sub(separator, filename.strip())
    return filename.strip(f".-{separator}")


__all__ = [
    "assert_safe_identifier",
    "clean_filename",
    "validate_identifier",
    "validate_table_prefix",
]
