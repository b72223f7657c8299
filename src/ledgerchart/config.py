"""Runtime settings for ledgerchart."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from ledgerchart.domain.errors import ValidationError, invalid_setting

DEFAULT_ASSETS_PREFIX = "Assets"
DEFAULT_LIABILITIES_PREFIX = "Liabilities"
DEFAULT_MAX_WINDOW_DAYS = 15


@dataclass(frozen=True)
class Settings:
    """Account prefixes used for net worth and the widest chart window."""

    assets_prefix: str = DEFAULT_ASSETS_PREFIX
    liabilities_prefix: str = DEFAULT_LIABILITIES_PREFIX
    max_window_days: int = DEFAULT_MAX_WINDOW_DAYS


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build settings from environment variables.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Returns:
        Settings instance

    Raises:
        ValidationError: If LEDGERCHART_MAX_WINDOW_DAYS is not a positive integer
    """
    if environ is None:
        environ = os.environ

    raw_window = environ.get("LEDGERCHART_MAX_WINDOW_DAYS")
    max_window_days = DEFAULT_MAX_WINDOW_DAYS
    if raw_window is not None:
        try:
            max_window_days = int(raw_window)
        except ValueError:
            raise ValidationError(invalid_setting("LEDGERCHART_MAX_WINDOW_DAYS", raw_window))
        if max_window_days < 1:
            raise ValidationError(invalid_setting("LEDGERCHART_MAX_WINDOW_DAYS", raw_window))

    return Settings(
        assets_prefix=environ.get("LEDGERCHART_ASSETS_PREFIX", DEFAULT_ASSETS_PREFIX),
        liabilities_prefix=environ.get(
            "LEDGERCHART_LIABILITIES_PREFIX", DEFAULT_LIABILITIES_PREFIX
        ),
        max_window_days=max_window_days,
    )
