"""
Ilios runtime defaults.

Values come from the environment so the surrounding application can tune
them per deployment without code changes.
"""

import logging
import os

METAL_PRICE_GRAM = float(os.getenv("ILIOS_METAL_PRICE_GRAM", "0.82"))
LOSS_PERCENTAGE = float(os.getenv("ILIOS_LOSS_PERCENTAGE", "10.0"))

# Widest numeric span expand_sku_range will enumerate
RANGE_LIMIT = int(os.getenv("ILIOS_RANGE_LIMIT", "500"))

LOG_LEVEL = os.getenv("ILIOS_LOG_LEVEL", "INFO")


def default_settings():
    """GlobalSettings built from the environment defaults."""
    from ilios.catalog.models import GlobalSettings

    return GlobalSettings(
        metal_price_gram=METAL_PRICE_GRAM,
        loss_percentage=LOSS_PERCENTAGE,
    )


def configure_logging(level: str = None) -> None:
    """Apply the configured level to the ilios logger tree."""
    logger = logging.getLogger("ilios")
    logger.setLevel((level or LOG_LEVEL).upper())
