import logging
from decimal import Decimal
from pathlib import Path

import pytest

from backoffice.config import Config, LoggingConfig, configure_logging


class TestConfig:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("BACKOFFICE_CONFIG_FILE", raising=False)
        config = Config()

        assert config.pos.tax_rate == Decimal("0.08")
        assert config.pos.currency_symbol == "₱"
        assert config.catalog.low_stock_threshold == 5
        assert config.auth.inherit_by_level is False
        assert config.api.use_mock is False

    def test_nested_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BACKOFFICE_POS__TAX_RATE", "0.12")
        monkeypatch.setenv("BACKOFFICE_AUTH__INHERIT_BY_LEVEL", "true")

        config = Config()

        assert config.pos.tax_rate == Decimal("0.12")
        assert config.auth.inherit_by_level is True

    def test_yaml_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "backoffice.yaml"
        path.write_text("catalog:\n  low_stock_threshold: 2\napi:\n  use_mock: true\n")
        monkeypatch.setenv("BACKOFFICE_CONFIG_FILE", str(path))

        config = Config()

        assert config.catalog.low_stock_threshold == 2
        assert config.api.use_mock is True

    def test_env_beats_yaml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "backoffice.yaml"
        path.write_text("catalog:\n  low_stock_threshold: 2\n")
        monkeypatch.setenv("BACKOFFICE_CONFIG_FILE", str(path))
        monkeypatch.setenv("BACKOFFICE_CATALOG__LOW_STOCK_THRESHOLD", "9")

        assert Config().catalog.low_stock_threshold == 9


class TestConfigureLogging:
    def test_writes_to_log_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        log_file = tmp_path / "logs" / "backoffice.log"
        monkeypatch.setenv("BACKOFFICE_LOG_FILE", str(log_file))

        configure_logging(LoggingConfig(level="DEBUG"))
        logging.getLogger("backoffice.test").info("hello")

        root = logging.getLogger()
        for handler in root.handlers:
            handler.flush()
        assert "hello" in log_file.read_text()

        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()
