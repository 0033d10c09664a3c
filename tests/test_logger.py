"""Tests for logging setup."""
import dataclasses
import logging
import pytest

from tokenauth.main import create_app
from tokenauth.utils.logger import ROOT_LOGGER, get_logger, set_log_level


class TestLogger:
    """Test logger hierarchy and level control."""
    
    @pytest.fixture(autouse=True)
    def restore_level(self):
        """Put the package level back after each test."""
        package = logging.getLogger(ROOT_LOGGER)
        original = package.level
        yield
        package.setLevel(original)
    
    def test_module_loggers_share_package_handler(self):
        """Test module loggers propagate to the single package handler."""
        logger = get_logger("tokenauth.some.module")
        
        assert logger.name == "tokenauth.some.module"
        assert logger.handlers == []
        assert len(logging.getLogger(ROOT_LOGGER).handlers) == 1
    
    def test_set_log_level(self):
        """Test level applies to every module logger."""
        logger = get_logger("tokenauth.some.module")
        
        set_log_level("debug")
        assert logger.getEffectiveLevel() == logging.DEBUG
        
        set_log_level("WARNING")
        assert logger.getEffectiveLevel() == logging.WARNING
    
    def test_unknown_level_falls_back_to_info(self):
        """Test unknown level names mean INFO."""
        set_log_level("chatty")
        
        assert logging.getLogger(ROOT_LOGGER).level == logging.INFO
    
    def test_create_app_applies_config_level(self, test_config):
        """Test app factory applies the configured level."""
        create_app(dataclasses.replace(test_config, log_level="ERROR"))
        
        assert logging.getLogger(ROOT_LOGGER).level == logging.ERROR
