"""Object-name builders and identifier-length trimming.

Every table, index, foreign-key and primary-key name issued in DDL passes
through :func:`trim_object_name` so it fits the target engine's identifier
limit.  The trimmer is deterministic and collision-tolerant by convention
only: two long names that share their proportional prefixes trim to the same
result.

Trimming algorithm
------------------
1. ``max_length is None`` (the engine has no limit) → return the name as-is.
2. Strip leading and trailing underscores.
3. Names already within ``max_length`` code points are returned untouched.
4. Otherwise split on ``_`` (dropping empty segments) and give each part a
   share of the letter budget proportional to its length::

       new_len(part) = round(max_letters * len(part) / total_letters)

   where ``total_letters`` and ``max_letters`` both discount one separator per
   gap between parts.
5. Rejoin with ``_`` and, if rounding drift still overflows the limit,
   hard-truncate to ``max_length`` code points.

Rounding policy
---------------
Shares are computed with exact rational arithmetic and rounded **half away
from zero** (``2.5 → 3``, ``1.5 → 2``), never with banker's rounding.  Shares
that would be negative (a limit smaller than the separator count) become
zero, leaving an empty part.

All lengths are Unicode code-point counts, so multi-byte table and column
names are measured and cut by character, never by byte.

The functions here are pure: the table prefix and the length limit are
explicit arguments, so they are safe to call from any thread or task.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum
from fractions import Fraction
import math
from typing import NamedTuple

from cms_dbkit.core.exceptions import InvalidArgumentError
from cms_dbkit.utils.db_compat import raw_table_name

SEPARATOR = "_"


class NameRole(StrEnum):
    """Suffix appended to a derived object name."""

    FOREIGN_KEY = "_fk"
    INDEX = "_idx"
    UNIQUE_INDEX = "_unq_idx"
    PRIMARY_KEY = "_pk"


class QualifiedName(NamedTuple):
    """An object name split into its non-empty ``_``-delimited parts."""

    parts: tuple[str, ...]

    @classmethod
    def parse(cls, name: str) -> QualifiedName:
        """Split *name* on underscores, discarding empty segments."""
        return cls(tuple(part for part in name.split(SEPARATOR) if part))

    def __str__(self) -> str:
        return SEPARATOR.join(self.parts)


###########
# Helpers #
###########


def round_half_away_from_zero(value: Fraction | float) -> int:
    """Round *value* to the nearest integer, ties away from zero.

    Example::

        round_half_away_from_zero(Fraction(5, 2))   # 3
        round_half_away_from_zero(Fraction(-5, 2))  # -3
    """
    magnitude = math.floor(abs(Fraction(value)) + Fraction(1, 2))
    return magnitude if value >= 0 else -magnitude


def normalize_columns(columns: str | Iterable[str]) -> list[str]:
    """Return *columns* as an ordered list of names.

    A lone string is a single column name; it is never iterated character
    by character.
    """
    if isinstance(columns, str):
        return [columns]
    return [str(column) for column in columns]


def strip_table_prefix(table: str, table_prefix: str) -> str:
    """Return *table* without *table_prefix*.

    The table reference is first resolved to its raw form (see
    :func:`~cms_dbkit.utils.db_compat.raw_table_name`).  The prefix is only
    removed on an exact leading match; an empty prefix removes nothing.
    """
    table = raw_table_name(table, table_prefix)
    if table_prefix and table.startswith(table_prefix):
        return table[len(table_prefix):]
    return table


def _proportional_length(max_letters: int, part_length: int, total_letters: int) -> int:
    share = Fraction(max_letters * part_length, total_letters)
    return max(0, round_half_away_from_zero(share))


###########
# Trimmer #
###########


def trim_object_name(name: str, max_length: int | None) -> str:
    """Ensure *name* fits within *max_length* code points.

    Args:
        name: Candidate object name.
        max_length: The engine's identifier limit, or ``None`` when the
            engine has none.

    Returns:
        The trimmed name.  Its length never exceeds *max_length*.

    Raises:
        InvalidArgumentError: When *max_length* is zero or negative.

    Examples::

        trim_object_name("___leading_trailing___", 100)  # "leading_trailing"
        trim_object_name("averylongprefixname_shortcol", 20)
        # "averylongpref_shortc"
    """
    if max_length is None:
        return name
    if max_length <= 0:
        raise InvalidArgumentError(
            "max_length",
            "must be a positive integer or None",
            details={"max_length": max_length},
        )

    name = name.strip(SEPARATOR)
    length = len(name)
    if length <= max_length:
        return name

    parts = QualifiedName.parse(name).parts
    gaps = len(parts) - 1
    total_letters = length - gaps
    max_letters = max_length - gaps

    # Consecutive underscores inflate ``length`` without adding parts.
    if total_letters > max_letters:
        parts = tuple(
            part[: _proportional_length(max_letters, len(part), total_letters)]
            for part in parts
        )

    name = str(QualifiedName(parts))

    if len(name) > max_length:
        name = name[:max_length]

    return name


#################
# Name builders #
#################


def build_object_name(
    table_prefix: str,
    table: str,
    columns: str | Iterable[str],
    role: NameRole,
    max_length: int | None = None,
) -> str:
    """Compose ``<prefix><table>_<columns...><role>`` and trim it.

    Args:
        table_prefix: Configured table prefix, re-applied after stripping.
        table: Table reference; any existing prefix is stripped first.
        columns: One column name or a sequence of them.
        role: The suffix identifying the kind of object.
        max_length: Identifier limit passed to :func:`trim_object_name`.

    Returns:
        The trimmed object name.
    """
    table = strip_table_prefix(table, table_prefix)
    joined = SEPARATOR.join(normalize_columns(columns))
    return trim_object_name(f"{table_prefix}{table}{SEPARATOR}{joined}{role}", max_length)


def foreign_key_name(
    table_prefix: str,
    table: str,
    columns: str | Iterable[str],
    max_length: int | None = None,
) -> str:
    """Return the foreign-key name for *columns* of *table*."""
    return build_object_name(table_prefix, table, columns, NameRole.FOREIGN_KEY, max_length)


def index_name(
    table_prefix: str,
    table: str,
    columns: str | Iterable[str],
    unique: bool = False,
    max_length: int | None = None,
) -> str:
    """Return the index name for *columns* of *table*.

    Example::

        index_name("craft_", "craft_entries", ["title", "slug"], unique=True)
        # "craft_entries_title_slug_unq_idx"
    """
    role = NameRole.UNIQUE_INDEX if unique else NameRole.INDEX
    return build_object_name(table_prefix, table, columns, role, max_length)


def primary_key_name(
    table_prefix: str,
    table: str,
    columns: str | Iterable[str],
    max_length: int | None = None,
) -> str:
    """Return the primary-key name for *columns* of *table*."""
    return build_object_name(table_prefix, table, columns, NameRole.PRIMARY_KEY, max_length)


__all__ = [
    "NameRole",
    "QualifiedName",
    "build_object_name",
    "foreign_key_name",
    "index_name",
    "normalize_columns",
    "primary_key_name",
    "round_half_away_from_zero",
    "strip_table_prefix",
    "trim_object_name",
]
