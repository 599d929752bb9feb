import json
import logging
import logging.handlers

import pytest
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider

from rootfinder.core.config import _DEFAULT_LOG_FMT
from rootfinder.core.config import Config
from rootfinder.core.config import LoggerConfig
from rootfinder.utils.logging import ColouredFormatter
from rootfinder.utils.logging import JSONFormatter
from rootfinder.utils.logging import RootfinderFormatter
from rootfinder.utils.logging import configure
from rootfinder.utils.logging import dehumanise
from rootfinder.utils.logging import perf_logger
from rootfinder.utils.opentelemetry import get_tracer


def make_record(**extra):
    record = logging.LogRecord(
        name="rootfinder.core.resolver",
        level=logging.WARNING,
        pathname=__file__,
        lineno=42,
        msg="walk stopped at %r",
        args=("/",),
        exc_info=None,
        func="resolve_project_root",
    )
    record.__dict__.update(extra)
    return record


@pytest.fixture
def logger_name(request):
    name = f"rootfinder.tests.{request.node.name}"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.mark.unit
class TestDehumanise:
    @pytest.mark.parametrize(
        "size, expected",
        [
            ("10MB", 10 * 1024**2),
            ("1gb", 1024**3),
            ("512", 512),
            ("1.5 KB", 1536),
            ("2K", 2048),
        ],
    )
    def test_valid(self, size, expected):
        assert dehumanise(size) == expected

    @pytest.mark.parametrize("invalid", ["", "ten MB", "10PB", "-1MB"])
    def test_invalid(self, invalid):
        with pytest.raises(ValueError, match="Invalid size format"):
            dehumanise(invalid)


@pytest.mark.unit
class TestFormatters:
    def test_extra_fields_rendered(self):
        formatter = RootfinderFormatter(fmt="%(extra)s%(message)s")
        record = make_record(markers=("etc", "data"), attempt=1)
        assert formatter.format(record) == (
            "attempt: 1 markers: ('etc', 'data')walk stopped at '/'"
        )

    def test_no_extra_fields(self):
        formatter = RootfinderFormatter(fmt="[%(extra)s] %(message)s")
        assert formatter.format(make_record()) == "[] walk stopped at '/'"

    def test_default_format_without_coloured_formatter(self):
        formatter = RootfinderFormatter(fmt=_DEFAULT_LOG_FMT)
        output = formatter.format(make_record())
        assert "rootfinder.core.resolver:42" in output

    def test_coloured_plain(self):
        formatter = ColouredFormatter(fmt="%(levelname)s %(qualName)s")
        output = formatter.format(make_record())
        assert output == (
            " WARNING rootfinder.core.resolver.resolve_project_root"
        )

    def test_coloured_tty(self):
        formatter = ColouredFormatter(fmt="%(levelname)s %(message)s")
        formatter.is_tty = True
        output = formatter.format(make_record())
        assert output.startswith(ColouredFormatter.COLORS["WARNING"])
        assert ColouredFormatter.COLORS["RESET"] in output

    def test_json(self):
        record = make_record(markers=["etc"])
        payload = json.loads(JSONFormatter().format(record))
        assert payload["level"] == "WARNING"
        assert payload["logger"] == "rootfinder.core.resolver"
        assert payload["function"] == "resolve_project_root"
        assert payload["line"] == 42
        assert payload["message"] == "walk stopped at '/'"
        assert payload["markers"] == ["etc"]
        assert "pathname" not in payload

    def test_json_without_extras(self):
        record = make_record(markers=["etc"])
        payload = json.loads(JSONFormatter(extras=False).format(record))
        assert "markers" not in payload


@pytest.mark.integration
class TestConfigure:
    def test_console_only_by_default(self, logger_name):
        configure(LoggerConfig(), name=logger_name)
        logger = logging.getLogger(logger_name)
        assert len(logger.handlers) == 1
        (handler,) = logger.handlers
        assert isinstance(handler, logging.StreamHandler)
        assert isinstance(handler.formatter, ColouredFormatter)
        assert logger.level == logging.DEBUG

    def test_reconfigure_replaces_handlers(self, logger_name):
        configure(LoggerConfig(), name=logger_name)
        configure(LoggerConfig(), name=logger_name)
        assert len(logging.getLogger(logger_name).handlers) == 1

    def test_file_handler(self, tmp_path, logger_name):
        config = LoggerConfig()
        config.tty.enable = False
        config.file.enable = True
        config.file.level = "WARNING"
        config.file.path = str(tmp_path / "logs" / "nested")
        config.as_json = True
        configure(config, name=logger_name)
        logger = logging.getLogger(logger_name)
        (handler,) = logger.handlers
        assert isinstance(handler, logging.handlers.RotatingFileHandler)
        assert handler.maxBytes == 10 * 1024**2
        assert handler.backupCount == 5
        assert logger.level == logging.WARNING
        logger.warning("written", extra={"markers": ["etc"]})
        handler.flush()
        output = tmp_path / "logs" / "nested" / "rootfinder.log"
        payload = json.loads(output.read_text().splitlines()[-1])
        assert payload["message"] == "written"
        assert payload["markers"] == ["etc"]

    def test_no_handlers(self, logger_name):
        config = LoggerConfig()
        config.tty.enable = False
        config.level = "ERROR"
        configure(config, name=logger_name)
        logger = logging.getLogger(logger_name)
        assert logger.handlers == []
        assert logger.level == logging.ERROR


@pytest.mark.unit
class TestPerfLogger:
    def test_success(self, caplog):
        @perf_logger
        def walk():
            return "/srv/app"

        caplog.set_level(logging.DEBUG, logger=__name__)
        assert walk() == "/srv/app"
        (record,) = caplog.records
        assert record.levelno == logging.DEBUG
        assert "completed in" in record.getMessage()
        assert record.elapsed >= 0

    def test_failure_is_reraised(self, caplog):
        @perf_logger
        def walk():
            raise OSError("boom")

        caplog.set_level(logging.DEBUG, logger=__name__)
        with pytest.raises(OSError, match="boom"):
            walk()
        (record,) = caplog.records
        assert record.levelno == logging.ERROR
        assert record.exc_info is not None


@pytest.mark.unit
class TestGetTracer:
    def test_disabled_leaves_global_provider(self, monkeypatch):
        installed = []
        monkeypatch.setattr(trace, "set_tracer_provider", installed.append)
        tracer = get_tracer(Config())
        assert installed == []
        with tracer.start_as_current_span("noop"):
            pass

    def test_enabled_installs_provider(self, monkeypatch):
        installed = []
        monkeypatch.setattr(trace, "set_tracer_provider", installed.append)
        config = Config()
        config.debug = True
        config.telemetry.enabled = True
        config.telemetry.name = "rootfinder-tests"
        get_tracer(config)
        (provider,) = installed
        assert isinstance(provider, TracerProvider)
        attributes = provider.resource.attributes
        assert attributes["service.name"] == "rootfinder-tests"
        assert attributes["deployment.environment"] == "development"


if __name__ == "__main__":
    pytest.main([__file__])
