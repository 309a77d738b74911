"""
Модульные тесты для epc_qr/__init__.py
Тестирует метаданные, конфигурацию, логирование и публичный API.
"""

import json
import logging
import re
from pathlib import Path

import pytest

import epc_qr


class TestVersionMetadata:
    def test_version_format(self) -> None:
        assert re.match(r"^\d+\.\d+\.\d+$", epc_qr.__version__)

    def test_version_components(self) -> None:
        expected = f"{epc_qr.VERSION_MAJOR}.{epc_qr.VERSION_MINOR}.{epc_qr.VERSION_PATCH}"
        assert epc_qr.__version__ == expected

    def test_metadata_attributes(self) -> None:
        for attr in ("__author__", "__description__", "__license__", "__python_requires__"):
            value = getattr(epc_qr, attr)
            assert isinstance(value, str) and value


class TestLogging:
    def test_package_logger_configured(self) -> None:
        package_logger = logging.getLogger("epc_qr")
        assert package_logger.handlers
        assert package_logger.propagate is False

    def test_setup_is_idempotent(self) -> None:
        package_logger = logging.getLogger("epc_qr")
        before = list(package_logger.handlers)
        epc_qr._setup_logging()
        assert package_logger.handlers == before

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("cli", "epc_qr.cli"),
            ("epc_qr.generator", "epc_qr.generator"),
            ("epc_qr", "epc_qr"),
            ("__main__", "epc_qr.main"),
            (".relative", "epc_qr.relative"),
            ("epc_qr_other", "epc_qr.epc_qr_other"),
        ],
    )
    def test_get_logger_namespace(self, name: str, expected: str) -> None:
        assert epc_qr.get_logger(name).name == expected


class TestLoadConfig:
    def test_defaults_when_missing(self, tmp_path: Path) -> None:
        config = epc_qr.load_config(tmp_path / "absent.json")
        assert config["module_size"] == 8
        assert config["image_format"] == "png"
        assert config["error_correction"] == "M"
        assert "log_level" not in config

    def test_user_values_override(self, tmp_path: Path) -> None:
        path = tmp_path / "epc_qr.json"
        path.write_text(json.dumps({"module_size": 4, "extra": True}), encoding="utf-8")
        config = epc_qr.load_config(path)
        assert config["module_size"] == 4
        assert config["extra"] is True
        assert config["quiet_zone"] == 4

    def test_default_path_in_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / "epc_qr.json").write_text('{"image_format": "qoi"}', encoding="utf-8")
        assert epc_qr.load_config()["image_format"] == "qoi"

    @pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]"])
    def test_invalid_file_falls_back(self, tmp_path: Path, content: str) -> None:
        path = tmp_path / "broken.json"
        path.write_text(content, encoding="utf-8")
        assert epc_qr.load_config(path) == epc_qr._DEFAULT_CONFIG

    def test_defaults_not_mutated(self, tmp_path: Path) -> None:
        path = tmp_path / "c.json"
        path.write_text('{"module_size": 99}', encoding="utf-8")
        epc_qr.load_config(path)
        assert epc_qr._DEFAULT_CONFIG["module_size"] == 8


def test_check_dependencies() -> None:
    deps = epc_qr.check_dependencies()
    assert deps == {"qrcode": True, "pillow": True}


def test_public_api_exports() -> None:
    for name in epc_qr.__all__:
        assert hasattr(epc_qr, name), name


def test_end_to_end_through_package_api() -> None:
    record = epc_qr.PaymentRecord.new("Jane Doe", "DE02120300000000202051")
    assert epc_qr.serialize(record) == b"BCD\n002\n1\nSCT\n\nJane Doe\nDE02120300000000202051"
