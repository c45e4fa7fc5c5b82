"""Identifier generation for workflow rows and audit entries."""

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()


def generate_cuid() -> str:
    """Return a new CUID2 string (primary keys of every table)."""
    return str(cuid_generator())
