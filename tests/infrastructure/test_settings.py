import os
from decimal import Decimal
from pathlib import Path

import pytest

from shop_pricing.domain.exceptions import ValidationError
from shop_pricing.infrastructure.settings import DEFAULT_DATA_DIR, Settings


class TestSettingsFromEnv:

    def test_defaults(self):
        config = Settings.from_env({})
        assert config.data_dir == DEFAULT_DATA_DIR
        assert config.global_tax_rate == Decimal("0")
        assert config.currency == "GHS"
        assert config.log_level == "WARNING"

    def test_overrides(self, tmp_path):
        config = Settings.from_env({
            "SHOP_PRICING_DATA_DIR": str(tmp_path),
            "SHOP_PRICING_GLOBAL_TAX_RATE": "15",
            "SHOP_PRICING_CURRENCY": "usd",
            "SHOP_PRICING_LOG_LEVEL": "debug",
        })
        assert config.data_dir == Path(tmp_path)
        assert config.tax_rules_file == Path(tmp_path) / "tax_rules.json"
        assert config.discount_rules_file == Path(tmp_path) / "discount_rules.json"
        assert config.global_tax_rate == Decimal("15")
        assert config.currency == "USD"
        assert config.log_level == "DEBUG"

    def test_blank_values_fall_back(self):
        config = Settings.from_env({"SHOP_PRICING_GLOBAL_TAX_RATE": "  ", "SHOP_PRICING_CURRENCY": ""})
        assert config.global_tax_rate == Decimal("0")
        assert config.currency == "GHS"

    def test_negative_global_rate_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Settings.from_env({"SHOP_PRICING_GLOBAL_TAX_RATE": "-1"})

    def test_non_numeric_global_rate_rejected(self):
        with pytest.raises(ValidationError, match="Invalid global tax rate"):
            Settings.from_env({"SHOP_PRICING_GLOBAL_TAX_RATE": "lots"})

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError, match="Unknown log level"):
            Settings.from_env({"SHOP_PRICING_LOG_LEVEL": "chatty"})


ENV_KEYS = (
    "SHOP_PRICING_DATA_DIR",
    "SHOP_PRICING_GLOBAL_TAX_RATE",
    "SHOP_PRICING_CURRENCY",
    "SHOP_PRICING_LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    yield
    # load_dotenv writes straight into os.environ
    for key in ENV_KEYS:
        os.environ.pop(key, None)


class TestSettingsFromDotenv:

    def test_reads_explicit_env_file(self, tmp_path, clean_env):
        env_file = tmp_path / ".env"
        env_file.write_text(
            f"SHOP_PRICING_DATA_DIR={tmp_path / 'store'}\n"
            "SHOP_PRICING_GLOBAL_TAX_RATE=12.5\n"
            "SHOP_PRICING_CURRENCY=usd\n"
        )
        config = Settings.from_env(env_file=env_file)
        assert config.data_dir == tmp_path / "store"
        assert config.global_tax_rate == Decimal("12.5")
        assert config.currency == "USD"

    def test_finds_env_file_in_working_directory(self, tmp_path, monkeypatch, clean_env):
        (tmp_path / ".env").write_text("SHOP_PRICING_LOG_LEVEL=info\n")
        monkeypatch.chdir(tmp_path)
        assert Settings.from_env().log_level == "INFO"

    def test_process_environment_wins(self, tmp_path, monkeypatch, clean_env):
        env_file = tmp_path / ".env"
        env_file.write_text("SHOP_PRICING_GLOBAL_TAX_RATE=12.5\n")
        monkeypatch.setenv("SHOP_PRICING_GLOBAL_TAX_RATE", "5")
        assert Settings.from_env(env_file=env_file).global_tax_rate == Decimal("5")

    def test_explicit_mapping_ignores_env_file(self, tmp_path, monkeypatch, clean_env):
        (tmp_path / ".env").write_text("SHOP_PRICING_CURRENCY=usd\n")
        monkeypatch.chdir(tmp_path)
        assert Settings.from_env({}).currency == "GHS"
