"""Shared utilities: UTC datetimes and identifier generation."""

from app.shared.utils.datetime import ensure_utc, utc_now
from app.shared.utils.generators import generate_cuid

__all__ = ["ensure_utc", "generate_cuid", "utc_now"]
