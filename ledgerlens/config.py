"""
Application configuration.

Settings come from LEDGERLENS_* environment variables; a .env file in the
working directory is loaded first. CLI options override these values.
"""

import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

from ledgerlens.exceptions import ConfigurationError
from ledgerlens.models.chart import DEFAULT_CHART_PATH
from ledgerlens.models.enums import BalanceOrdering

load_dotenv()


class Settings:
    """Settings read from the environment at construction time.

    Raises:
        ConfigurationError: A variable is set to a value outside its choices.
    """

    def __init__(self) -> None:
        chart = os.getenv("LEDGERLENS_CHART")
        self.chart_path: Path = Path(chart) if chart else DEFAULT_CHART_PATH
        self.output_dir: Path = Path(os.getenv("LEDGERLENS_OUTPUT_DIR", "reports"))
        self.currency: str = os.getenv("LEDGERLENS_CURRENCY", "EUR")
        self.balance_ordering = self._balance_ordering()
        self.log_level: str = os.getenv("LEDGERLENS_LOG_LEVEL", "WARNING").upper()

    @staticmethod
    def _balance_ordering() -> BalanceOrdering:
        value = os.getenv("LEDGERLENS_BALANCE_ORDERING", BalanceOrdering.GLOBAL.value)
        try:
            return BalanceOrdering(value.strip().lower())
        except ValueError:
            valid = ", ".join(o.value for o in BalanceOrdering)
            raise ConfigurationError(
                "LEDGERLENS_BALANCE_ORDERING", f"'{value}' (expected one of: {valid})"
            ) from None


@lru_cache()
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()
