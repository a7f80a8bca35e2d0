"""Runtime configuration read from the environment.

Every setting has a default so the CLI works out of the box against the
repo-local ``data/`` directory. Values may also come from a ``.env`` file.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from shop_pricing.domain.exceptions import ValidationError
from shop_pricing.domain.model.value_objects import DEFAULT_CURRENCY, to_decimal

ENV_PREFIX = "SHOP_PRICING_"

# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    global_tax_rate: Decimal = Decimal("0")  # fallback when no tax rule is active
    currency: str = DEFAULT_CURRENCY
    log_level: str = "WARNING"

    @property
    def tax_rules_file(self) -> Path:
        return self.data_dir / "tax_rules.json"

    @property
    def discount_rules_file(self) -> Path:
        return self.data_dir / "discount_rules.json"

    @staticmethod
    def from_env(
        environ: Mapping[str, str] | None = None,
        env_file: str | Path | None = None,
    ) -> Settings:
        """Build settings from ``environ``, or from the process environment.

        Without an explicit mapping, a ``.env`` file (``env_file``, or the
        nearest one above the working directory) is loaded first. Variables
        already set in the environment take precedence over the file.
        """
        if environ is None:
            load_dotenv(env_file or find_dotenv(usecwd=True), override=False)
            env: Mapping[str, str] = os.environ
        else:
            env = environ

        def get(name: str) -> str | None:
            value = env.get(ENV_PREFIX + name)
            return value.strip() if value and value.strip() else None

        data_dir = get("DATA_DIR")
        rate = to_decimal(get("GLOBAL_TAX_RATE") or "0", "global tax rate")
        if rate < 0:
            raise ValidationError(f"Global tax rate cannot be negative, got {rate}")

        log_level = (get("LOG_LEVEL") or "WARNING").upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValidationError(f"Unknown log level: {log_level!r}")

        return Settings(
            data_dir=Path(data_dir) if data_dir else DEFAULT_DATA_DIR,
            global_tax_rate=rate,
            currency=(get("CURRENCY") or DEFAULT_CURRENCY).upper(),
            log_level=log_level,
        )
