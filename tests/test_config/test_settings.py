"""
测试全局设置与日志配置
"""

import logging
import pytest
from pydantic import ValidationError

from dyno_estimate.config import Settings, config_manager, get_settings
from dyno_estimate.estimator import estimate
from dyno_estimate.utils.logging import LOGGER_NAME, setup_logger


class TestSettings:

    def test_defaults(self):
        settings = get_settings()
        assert settings.safety_factor == 0.5
        assert settings.web_redis_connections_per_dyno == 3
        assert settings.db_pool_scope == "instance"
        assert settings.default_output_format == "table"

    def test_singleton(self):
        assert get_settings() is get_settings()

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("DYNO_ESTIMATE_SAFETY_FACTOR", "0.25")
        monkeypatch.setenv("DYNO_ESTIMATE_DB_POOL_SCOPE", "process")
        settings = config_manager.reload()

        assert settings.safety_factor == 0.25
        assert settings.db_pool_scope == "process"

    def test_invalid_environment_value(self, monkeypatch):
        monkeypatch.setenv("DYNO_ESTIMATE_SAFETY_FACTOR", "2")
        with pytest.raises(ValidationError):
            config_manager.reload()

    def test_update_settings(self):
        config_manager.update_settings(scale_max_floor=20, unknown_key=1)
        assert get_settings().scale_max_floor == 20

    def test_settings_validation(self):
        with pytest.raises(ValidationError):
            Settings(default_output_format="yaml")

    def test_log_level_is_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("DYNO_ESTIMATE_LOG_LEVEL", "debug")
        assert config_manager.reload().log_level == "DEBUG"

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("DYNO_ESTIMATE_LOG_LEVEL", "verbose")
        with pytest.raises(ValidationError):
            config_manager.reload()


class TestLogging:

    def test_setup_is_idempotent(self):
        logger = setup_logger("INFO")
        setup_logger("INFO")
        assert logger.name == LOGGER_NAME
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1

    def test_log_file(self, tmp_path, sample_config):
        log_file = tmp_path / "estimate.log"
        logger = setup_logger("DEBUG", str(log_file))
        try:
            estimate(sample_config)
            for handler in logger.handlers:
                handler.flush()
            assert "估算完成" in log_file.read_text(encoding="utf-8")
        finally:
            setup_logger("WARNING")

    def test_level_from_settings(self, monkeypatch):
        monkeypatch.setenv("DYNO_ESTIMATE_LOG_LEVEL", "error")
        config_manager.reload()
        try:
            assert setup_logger().level == logging.ERROR
        finally:
            setup_logger("WARNING")

    def test_log_file_from_settings_with_explicit_level(self, tmp_path, monkeypatch, sample_config):
        log_file = tmp_path / "settings.log"
        monkeypatch.setenv("DYNO_ESTIMATE_LOG_FILE", str(log_file))
        config_manager.reload()
        try:
            logger = setup_logger("DEBUG")
            assert len(logger.handlers) == 2
            estimate(sample_config)
            for handler in logger.handlers:
                handler.flush()
            assert "估算完成" in log_file.read_text(encoding="utf-8")
        finally:
            setup_logger("WARNING", "")
