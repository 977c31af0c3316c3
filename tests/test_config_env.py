"""
Unit tests for Config environment loading and protected attributes
"""

import pytest

from srest.config import Config, DevConfig, Options, ProdConfig, _auto_detect


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Run every test where no stray .env file can be picked up."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_env_class_structure():
    """Test that Env class is properly nested"""
    assert Config.Env.file == ".env"
    assert Config.Env.auto_load is True
    assert Config.Env.override is True


def test_devconfig_env():
    """Test DevConfig has its own Env configuration"""
    assert DevConfig.Env.file == ".env.dev"
    assert DevConfig.DEBUG is True
    assert DevConfig.HOST == "127.0.0.1"


def test_prodconfig_env():
    """Test ProdConfig does not override system variables"""
    assert ProdConfig.Env.file == ".env.prod"
    assert ProdConfig.Env.override is False
    assert ProdConfig.VERBOSE_LOGGING is False


def test_load_env_with_srest_prefix(monkeypatch):
    """Test that only SREST_* variables are loaded"""
    monkeypatch.setenv("SREST_PORT", "9000")
    monkeypatch.setenv("SREST_DEBUG", "True")
    monkeypatch.setenv("SREST_HOST", "testhost")
    monkeypatch.setenv("OTHER_VAR", "should_be_ignored")

    class TestConfig(Config):
        pass

    TestConfig.load_from_env()

    assert TestConfig.PORT == 9000
    assert TestConfig.DEBUG is True
    assert TestConfig.HOST == "testhost"
    assert not hasattr(TestConfig, "OTHER_VAR")
    assert Config.PORT == 7000


def test_views_dir_keeps_raw_value(monkeypatch):
    monkeypatch.setenv("SREST_VIEWS_DIR", "templates, themes/dark")

    class TestConfig(Config):
        pass

    TestConfig.load_from_env()

    assert TestConfig.VIEWS_DIR == "templates, themes/dark"


def test_internal_cannot_be_set_from_env(monkeypatch):
    monkeypatch.setenv("SREST_SUPPORTED_HTTP_METHODS", "GET")

    class TestConfig(Config):
        pass

    TestConfig.load_from_env()

    assert TestConfig.Internal.SUPPORTED_HTTP_METHODS == ["GET", "POST", "PUT", "DELETE"]
    assert not hasattr(TestConfig, "SUPPORTED_HTTP_METHODS")


def test_internal_cannot_be_overridden():
    with pytest.raises(TypeError, match="Cannot override Config.Internal"):
        class BadConfig(Config):
            class Internal:
                SUPPORTED_HTTP_METHODS = ["GET"]


@pytest.mark.parametrize("value", ["LOUD", "3"])
def test_invalid_log_level_is_skipped(monkeypatch, value):
    monkeypatch.setenv("SREST_LOG_LEVEL", value)

    class TestConfig(Config):
        pass

    TestConfig.load_from_env()

    assert TestConfig.LOG_LEVEL == "INFO"


def test_log_level_is_uppercased(monkeypatch):
    monkeypatch.setenv("SREST_LOG_LEVEL", "debug")

    class TestConfig(Config):
        pass

    TestConfig.load_from_env()

    assert TestConfig.LOG_LEVEL == "DEBUG"


@pytest.mark.parametrize("value", ["70000", "-1", "http"])
def test_invalid_port_is_skipped(monkeypatch, value):
    monkeypatch.setenv("SREST_PORT", value)

    class TestConfig(Config):
        pass

    TestConfig.load_from_env()

    assert TestConfig.PORT == 7000


def test_load_env_file(monkeypatch, isolated_cwd):
    """Test that the .env file is read into the environment"""
    # Registered with monkeypatch so the values dotenv writes are undone
    monkeypatch.setenv("SREST_PORT", "placeholder")
    monkeypatch.setenv("SREST_USE_TLS", "placeholder")
    (isolated_cwd / ".env.test").write_text("SREST_PORT=8123\nSREST_USE_TLS=on\n")

    class TestConfig(Config):
        pass

    TestConfig.load_from_env(".env.test")

    assert TestConfig.PORT == 8123
    assert TestConfig.USE_TLS is True


def test_missing_env_file_is_fine():
    class TestConfig(Config):
        pass

    assert TestConfig.load_from_env(".env.missing") is TestConfig


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("true", True),
        ("off", False),
        ("42", 42),
        ("1.5", 1.5),
        ("a,b", ["a", "b"]),
        ("none", None),
        ("text", "text"),
    ],
)
def test_env_type_conversion(raw, expected):
    assert _auto_detect(raw) == expected


class TestValidate:
    def test_default_config_is_valid(self):
        assert Config.validate() is True

    def test_tls_requires_cert_and_key(self):
        class TLSConfig(Config):
            USE_TLS = True
            TLS_CERT = "cert.pem"

        with pytest.raises(ValueError, match="TLS_CERT and TLS_KEY"):
            TLSConfig.validate()

    def test_tls_with_cert_and_key(self):
        class TLSConfig(Config):
            USE_TLS = True
            TLS_CERT = "cert.pem"
            TLS_KEY = "key.pem"

        assert TLSConfig.validate() is True

    def test_invalid_log_level(self):
        class LoudConfig(Config):
            LOG_LEVEL = "LOUD"

        with pytest.raises(ValueError, match="LOG_LEVEL"):
            LoudConfig.validate()


class TestOptions:
    def test_defaults(self):
        options = Options()

        assert options.use_tls is False
        assert options.host == "0.0.0.0"

    def test_from_config(self):
        class TLSConfig(Config):
            USE_TLS = True
            TLS_CERT = "cert.pem"
            TLS_KEY = "key.pem"
            HOST = "127.0.0.1"

        options = Options.from_config(TLSConfig)

        assert options == Options(use_tls=True, tls_cert="cert.pem", tls_key="key.pem", host="127.0.0.1")
