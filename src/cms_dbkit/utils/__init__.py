"""Utility functions: object naming, identifier validation, and DB compatibility."""

from cms_dbkit.utils.db_compat import (
    DbDialect,
    default_port,
    detect_dialect,
    max_identifier_length,
    raw_table_name,
)
from cms_dbkit.utils.naming import (
    NameRole,
    QualifiedName,
    foreign_key_name,
    index_name,
    normalize_columns,
    primary_key_name,
    strip_table_prefix,
    trim_object_name,
)
from cms_dbkit.utils.validation import (
    assert_safe_identifier,
    clean_filename,
    validate_identifier,
    validate_table_prefix,
)

__all__ = [
    # DB compatibility
    "DbDialect",
    "default_port",
    "detect_dialect",
    "max_identifier_length",
    "raw_table_name",
    # Naming
    "NameRole",
    "QualifiedName",
    "foreign_key_name",
    "index_name",
    "normalize_columns",
    "primary_key_name",
    "strip_table_prefix",
    "trim_object_name",
    # Validation
    "assert_safe_identifier",
    "clean_filename",
    "validate_identifier",
    "validate_table_prefix",
]
