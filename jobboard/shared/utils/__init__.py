"""Shared utility helpers."""

from jobboard.shared.utils.datetime import ensure_utc, from_epoch_millis, utc_now
from jobboard.shared.utils.generators import generate_cuid

__all__ = ["ensure_utc", "from_epoch_millis", "generate_cuid", "utc_now"]
