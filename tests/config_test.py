from concurrent.futures import ThreadPoolExecutor

import pytest

from errchain.core.config import _ALLOWED_LOG_LEVELS
from errchain.core.config import _DEFAULT_LOG_DATEFMT
from errchain.core.config import _DEFAULT_LOG_FMT
from errchain.core.config import _DEFAULT_SITE_FMT
from errchain.core.config import Config
from errchain.core.config import ConsoleLoggerConfig
from errchain.core.config import FileLoggerConfig
from errchain.core.config import LoggerConfig
from errchain.core.config import RenderConfig
from errchain.core.config import TelemetryConfig
from errchain.core.config import config_property
from errchain.core.config import settings
from errchain.core.exceptions import ConfigValidationError as Error


@pytest.fixture
def factory():
    def _create_test_class(name="internal", default=None, **kwargs):
        class TestClass:
            pass

        _property = config_property(default, **kwargs)
        _property.__set_name__(TestClass, name)
        setattr(TestClass, name, _property)
        return TestClass

    return _create_test_class


@pytest.mark.unit
class TestConfigProperty:
    @pytest.mark.parametrize(
        "default, frozen, description",
        [
            ("zuko", True, "Prince of the Fire Nation"),
            (9001, False, "It's over 9000!"),
            ([], True, None),
        ],
    )
    def test_init_with_parameters(self, default, frozen, description):
        _property = config_property(
            default,
            frozen=frozen,
            description=description,
        )
        assert _property.default == default
        assert _property.frozen is frozen
        assert _property.description == description
        assert _property.allowed is None
        assert _property.check is None
        assert _property.between is None
        assert _property.property == ""
        assert _property.validate is False
        assert _property.locks == {}

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("separator", "_separator"),
            ("site_format", "_site_format"),
            ("qualified", "_qualified"),
        ],
    )
    def test_set_name_configures_name(self, name, expected, factory):
        TestClass = factory(name, "appa")
        descriptor = getattr(TestClass, name)
        assert descriptor.property == expected
        assert descriptor.default == "appa"

    def test_invalid_default_fails_at_class_creation(self, factory):
        with pytest.raises(Error, match="got invalid value for 'level'"):
            factory("level", "TRACE", allowed=_ALLOWED_LOG_LEVELS)

    @pytest.mark.parametrize(
        "allowed, valid, invalid",
        [
            (("aang", "katara", "sokka"), "sokka", "zuko"),
            ((-1, 1), -1, 0),
            (("DEBUG", "INFO", "ERROR"), "INFO", "TRACE"),
        ],
    )
    def test_set_value_with_validation(self, allowed, valid, invalid, factory):
        TestClass = factory("avatar", valid, allowed=allowed)
        instance = TestClass()
        instance.avatar = valid
        assert instance.avatar == valid
        with pytest.raises(Error, match="not one of the allowed values"):
            instance.avatar = invalid
        assert instance.avatar == valid

    @pytest.mark.parametrize(
        "default, between, valids, invalids",
        [
            (7, (1, 10), [1, 5, 10], [0, 11]),
            (0.5, (0.0, 1.0), [0.0, 1.0], [-0.1, 1.1]),
        ],
    )
    def test_between(self, default, between, valids, invalids):
        _property = config_property(default, between=between)
        for value in valids:
            _property.__validate__(value)
        for value in invalids:
            with pytest.raises(Error, match="is not between"):
                _property.__validate__(value)

    @pytest.mark.parametrize("invalid", [("a", "z"), (None, 5)])
    def test_between_invalid_ranges(self, invalid):
        _property = config_property(None, between=invalid)
        with pytest.raises(Error, match="must be a tuple of two numbers"):
            _property.__validate__(5)

    def test_check_failure(self):
        _property = config_property(1, check=lambda x: x > 0)
        with pytest.raises(Error, match="property validation failed"):
            _property.__validate__(-1)

    def test_check_exception_is_chained(self):
        _property = config_property("x", check=lambda x: x.missing)
        with pytest.raises(Error) as caught:
            _property.__validate__("y")
        assert isinstance(caught.value.__cause__, AttributeError)

    def test_frozen(self, factory):
        TestClass = factory("avatar", "aang", frozen=True)
        instance = TestClass()
        assert instance.avatar == "aang"
        with pytest.raises(Error, match="cannot modify frozen property"):
            instance.avatar = "korra"
        with pytest.raises(Error) as exc:
            instance.avatar = "korra"
        assert "avatar" in str(exc.value)

    def test_class_access_returns_descriptor(self):
        assert isinstance(RenderConfig.separator, config_property)

    @pytest.mark.parametrize("threads, iterations", [(5, 100), (10, 200)])
    def test_thread_safety(self, threads, iterations, factory):
        members = ["aang", "katara", "sokka", "toph", "zuko"]
        TestClass = factory("member", "aang", allowed=set(members))
        team = TestClass()
        errors = []

        def worker(wid):
            for index in range(iterations):
                team.member = members[index % len(members)]
                if team.member not in members:
                    errors.append(f"{team.member} from worker {wid}")

        with ThreadPoolExecutor(max_workers=threads) as executor:
            futures = [executor.submit(worker, i) for i in range(threads)]
            for future in futures:
                future.result()
        assert errors == []
        assert len(TestClass.member.locks) == 1


@pytest.mark.unit
class TestRenderConfig:
    @pytest.fixture
    def config(self):
        return RenderConfig()

    def test_defaults(self, config):
        assert config.separator == ": "
        assert config.line_separator == "\n"
        assert config.site_format == _DEFAULT_SITE_FMT
        assert config.qualified is True

    def test_line_separator_frozen(self, config):
        with pytest.raises(Error, match="cannot modify frozen property"):
            config.line_separator = "\r\n"

    @pytest.mark.parametrize(
        "site_format",
        ["{file}:{line} {function}", "<{function} {file} {line}>"],
    )
    def test_site_format_valid(self, config, site_format):
        config.site_format = site_format
        assert config.site_format == site_format

    @pytest.mark.parametrize(
        "invalid",
        ["{file}:{line}", "[{function}]", "plain"],
    )
    def test_site_format_requires_every_field(self, config, invalid):
        with pytest.raises(Error):
            config.site_format = invalid

    @pytest.mark.parametrize("invalid", ["yes", 2, None])
    def test_qualified_validation(self, config, invalid):
        with pytest.raises(Error):
            config.qualified = invalid


@pytest.mark.unit
class TestFileLoggerConfig:
    @pytest.fixture
    def config(self):
        return FileLoggerConfig()

    def test_defaults(self, config):
        assert config.enable is False
        assert config.level == "INFO"
        assert config.fmt == _DEFAULT_LOG_FMT
        assert config.datefmt == _DEFAULT_LOG_DATEFMT
        assert config.path == "logs/errchain.log"
        assert config.encoding == "utf-8"
        assert config.max_bytes == 10485760
        assert config.backups == 5
        assert config.traceback is True

    @pytest.mark.parametrize("level", list(_ALLOWED_LOG_LEVELS))
    def test_level_allowed(self, config, level):
        config.level = level
        assert config.level == level

    @pytest.mark.parametrize("invalid", ["danger", "trace", "Info"])
    def test_level_invalids(self, config, invalid):
        with pytest.raises(Error):
            config.level = invalid

    @pytest.mark.parametrize("invalid", ["", "   ", 42])
    def test_path_invalids(self, config, invalid):
        with pytest.raises(Error):
            config.path = invalid

    @pytest.mark.parametrize("invalid", [-1, -1024])
    def test_negative_sizes(self, config, invalid):
        with pytest.raises(Error):
            config.max_bytes = invalid
        with pytest.raises(Error):
            config.backups = invalid

    def test_encoding_frozen(self, config):
        with pytest.raises(Error, match="cannot modify frozen property"):
            config.encoding = "latin-1"


@pytest.mark.unit
class TestConsoleLoggerConfig:
    @pytest.fixture
    def config(self):
        return ConsoleLoggerConfig()

    def test_defaults(self, config):
        assert config.enable is True
        assert config.level == "DEBUG"
        assert config.fmt == _DEFAULT_LOG_FMT
        assert config.datefmt == _DEFAULT_LOG_DATEFMT
        assert config.colour is True
        assert config.traceback is False

    @pytest.mark.parametrize("invalid", ["true", 2, "yes"])
    def test_colour_validation(self, config, invalid):
        with pytest.raises(Error):
            config.colour = invalid


@pytest.mark.integration
class TestConfig:
    @pytest.fixture
    def config(self):
        return Config()

    def test_defaults(self, config):
        assert config.name == "errchain"
        assert config.version == "18.10.2026"
        assert config.debug is False
        assert isinstance(config.render, RenderConfig)
        assert isinstance(config.logger, LoggerConfig)
        assert isinstance(config.telemetry, TelemetryConfig)
        assert config.telemetry.enabled is False
        assert config.telemetry.name == "errchain"

    @pytest.mark.parametrize(
        "frozen, new",
        [("name", "other"), ("version", "1.0")],
    )
    def test_frozen_properties(self, config, frozen, new):
        with pytest.raises(Error, match="cannot modify frozen property"):
            setattr(config, frozen, new)

    def test_nested_logger_configuration(self, config):
        assert config.logger.file.level == "INFO"
        assert config.logger.tty.level == "DEBUG"
        assert config.logger.as_json is False

    def test_settings_is_a_config(self):
        assert isinstance(settings, Config)

    def test_logger_instances_are_independent(self):
        app_logger = LoggerConfig()
        app_logger.level = "ERROR"
        plugin_logger = LoggerConfig()
        assert plugin_logger.level == "DEBUG"
        plugin_logger.level = "WARNING"
        assert app_logger.level == "ERROR"
