"""Test-suite bootstrapping: config assembly, DB cleansing, schema install."""

from cms_dbkit.testing.migration import Migration
from cms_dbkit.testing.setup import (
    cleanse_db,
    create_test_config,
    merge_config,
    primary_site_config,
    setup_db,
    setup_project_config,
    validate_and_apply_migration,
)

__all__ = [
    "Migration",
    "cleanse_db",
    "create_test_config",
    "merge_config",
    "primary_site_config",
    "setup_db",
    "setup_project_config",
    "validate_and_apply_migration",
]
