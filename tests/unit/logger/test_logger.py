"""Unit tests for logger setup and formatting."""

import pytest

from logger import _file_format, format_details, get_logger, setup_logger


@pytest.fixture
def restore_logger(monkeypatch):
    """Reinstall the default sinks after a test reconfigures loguru."""
    monkeypatch.delenv("LOG_FILE", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    yield
    setup_logger()


@pytest.mark.unit
class TestSetupLogger:
    """Tests for sink configuration."""

    def test_file_sink_writes_module_and_backend(self, tmp_path, restore_logger):
        """Test that the file sink is created and carries bound context."""
        log_file = tmp_path / "logs" / "app.log"

        setup_logger(log_level="DEBUG", log_file=str(log_file))
        log = get_logger("storage.audit").bind(backend="LOCAL")
        log.debug("not for the file")
        log.info("hello sink")

        content = log_file.read_text(encoding="utf-8")
        assert "hello sink" in content
        assert "storage.audit" in content
        assert "| Backend=LOCAL |" in content
        assert "not for the file" not in content

    def test_file_sink_from_environment(self, tmp_path, monkeypatch, restore_logger):
        """Test LOG_FILE is picked up when no path is passed."""
        log_file = tmp_path / "env" / "storage.log"
        monkeypatch.setenv("LOG_FILE", str(log_file))

        setup_logger()
        get_logger("storage.env").info("from env")

        assert "from env" in log_file.read_text(encoding="utf-8")


@pytest.mark.unit
class TestFormatting:
    """Tests for format helpers."""

    def test_context_zone_only_when_bound(self):
        """Test backend zone is rendered only when set."""
        bound = _file_format({"extra": {"backend": "LOCAL"}})
        unbound = _file_format({"extra": {"backend": None}})

        assert " | Backend=LOCAL | {message}" in bound
        assert "Backend" not in unbound
        assert bound.endswith("{exception}")

    def test_format_details(self):
        """Test key=value rendering."""
        assert format_details(key="a/b.txt", size=5) == "key=a/b.txt • size=5"
        assert format_details() == ""
