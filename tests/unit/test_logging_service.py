"""Tests for logging service configuration."""

import logging
from unittest.mock import patch

from partnerdesk.services.logging import get_log_level, setup_server_logging


class TestServerLogging:
    """Test server logging configuration."""

    def setup_method(self):
        """Save original handlers before each test."""
        self.root_logger = logging.getLogger()
        self.original_handlers = self.root_logger.handlers.copy()
        self.original_level = self.root_logger.level

    def teardown_method(self):
        """Restore original handlers after each test."""
        for handler in self.root_logger.handlers[:]:
            handler.close()
            self.root_logger.removeHandler(handler)
        for handler in self.original_handlers:
            self.root_logger.addHandler(handler)
        self.root_logger.setLevel(self.original_level)

    def test_creates_log_directory(self, tmp_path) -> None:
        log_file = tmp_path / "nested" / "logs" / "server.log"

        setup_server_logging(str(log_file))

        assert log_file.parent.exists()

    def test_creates_stdout_and_file_handlers(self, tmp_path) -> None:
        setup_server_logging(str(tmp_path / "server.log"))

        assert len(self.root_logger.handlers) == 2
        assert any(isinstance(h, logging.FileHandler) for h in self.root_logger.handlers)

    def test_level_from_environment(self, tmp_path) -> None:
        with patch.dict("os.environ", {"LOG_LEVEL": "WARNING"}, clear=False):
            setup_server_logging(str(tmp_path / "server.log"))

        assert self.root_logger.level == logging.WARNING
        for handler in self.root_logger.handlers:
            assert handler.level == logging.WARNING

    def test_explicit_level_overrides_environment(self, tmp_path) -> None:
        with patch.dict("os.environ", {"LOG_LEVEL": "WARNING"}, clear=False):
            setup_server_logging(str(tmp_path / "server.log"), level="debug")

        assert self.root_logger.level == logging.DEBUG

    def test_writes_formatted_messages_to_file(self, tmp_path) -> None:
        log_file = tmp_path / "server.log"
        setup_server_logging(str(log_file), level="INFO")

        logging.getLogger("partnerdesk.test").warning("Collection rejected")

        contents = log_file.read_text()
        assert "partnerdesk.test - WARNING - Collection rejected" in contents
        assert contents.startswith("[20")

    def test_removes_existing_handlers(self, tmp_path) -> None:
        dummy_handler = logging.StreamHandler()
        self.root_logger.addHandler(dummy_handler)

        setup_server_logging(str(tmp_path / "server.log"))
        setup_server_logging(str(tmp_path / "server.log"))

        assert len(self.root_logger.handlers) == 2
        assert dummy_handler not in self.root_logger.handlers


class TestGetLogLevel:
    """Test level name resolution."""

    def test_known_names(self):
        assert get_log_level("error") == logging.ERROR
        assert get_log_level("DEBUG") == logging.DEBUG

    def test_unknown_name_defaults_to_info(self):
        assert get_log_level("chatty") == logging.INFO
