import logging

import pytest

from jobportal.config.settings import ConfigurationManager, LoggingConfig, PortalSettings
from jobportal.core.exceptions import ConfigurationError


def test_defaults_from_environment(monkeypatch):
    monkeypatch.setenv("API_URL", "https://portal.example.com/api/")
    monkeypatch.setenv("REQUEST_TIMEOUT", "12.5")
    monkeypatch.setenv("SUGGESTIONS_LIMIT", "4")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = PortalSettings()

    assert settings.api_base_url == "https://portal.example.com/api"
    assert settings.request_timeout_seconds == 12.5
    assert settings.suggestions_limit == 4
    assert settings.log_level == "DEBUG"


def test_builtin_defaults(monkeypatch):
    for name in ("API_URL", "SERVER_URL", "REQUEST_TIMEOUT", "CONNECTIONS_PAGE_SIZE"):
        monkeypatch.delenv(name, raising=False)

    settings = PortalSettings()

    assert settings.api_base_url == "http://localhost:5000/api"
    assert settings.server_base_url == "http://localhost:5000"
    assert settings.request_timeout_seconds == 30
    assert settings.connections_page_size == 20


def test_invalid_values_rejected():
    with pytest.raises(ValueError):
        PortalSettings(api_base_url="ftp://portal")
    with pytest.raises(ValueError):
        PortalSettings(request_timeout_seconds=0)
    with pytest.raises(ValueError):
        PortalSettings(users_page_size=0)
    with pytest.raises(ValueError):
        PortalSettings(log_level="LOUD")


def test_manager_wraps_bad_environment(monkeypatch):
    monkeypatch.setenv("API_URL", "portal.example.com")
    manager = ConfigurationManager()

    with pytest.raises(ConfigurationError):
        _ = manager.settings

    result = manager.validate_configuration()
    assert result['valid'] is False
    assert result['errors']


def test_validate_configuration_warns_on_plain_http(monkeypatch, tmp_path):
    monkeypatch.setenv("API_URL", "http://portal.example.com/api")
    monkeypatch.setenv("JOBPORTAL_SESSION_FILE", str(tmp_path / "session.json"))
    manager = ConfigurationManager()

    result = manager.validate_configuration()

    assert result['valid'] is True
    assert result['settings']['api_base_url'] == "http://portal.example.com/api"
    assert any("HTTPS" in w for w in result['warnings'])


def test_update_setting_and_export(monkeypatch):
    monkeypatch.delenv("API_URL", raising=False)
    manager = ConfigurationManager()
    monkeypatch.setattr(manager, "_logger", logging.getLogger("jobportal.test"))

    manager.update_setting("suggestions_limit", 3)
    assert manager.export_config()["suggestions_limit"] == 3

    with pytest.raises(ValueError):
        manager.update_setting("no_such_setting", 1)


def test_reset_rereads_environment(monkeypatch):
    manager = ConfigurationManager()
    monkeypatch.setenv("USERS_PAGE_SIZE", "5")
    assert manager.settings.users_page_size == 5

    monkeypatch.setenv("USERS_PAGE_SIZE", "7")
    assert manager.settings.users_page_size == 5
    manager.reset()
    assert manager.settings.users_page_size == 7


def test_setup_logging_attaches_file_handler(settings, tmp_path):
    log_file = tmp_path / "portal.log"
    settings = settings.model_copy(update={"log_file": str(log_file), "enable_console_logging": False})

    logger = LoggingConfig.setup_logging(settings)
    try:
        assert logger.name == "jobportal"
        assert logger.level == logging.DEBUG
        assert [type(h) for h in logger.handlers] == [logging.FileHandler]
    finally:
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()


def test_react_app_urls_take_precedence(monkeypatch):
    monkeypatch.setenv("REACT_APP_API_URL", "https://jobs.example.com/api")
    monkeypatch.setenv("REACT_APP_SERVER_URL", "https://jobs.example.com")
    monkeypatch.setenv("API_URL", "http://fallback.example.com/api")

    settings = PortalSettings()

    assert settings.api_base_url == "https://jobs.example.com/api"
    assert settings.server_base_url == "https://jobs.example.com"


def test_plain_urls_used_without_react_app_names(monkeypatch):
    monkeypatch.setenv("API_URL", "http://fallback.example.com/api")
    monkeypatch.delenv("SERVER_URL", raising=False)

    settings = PortalSettings()

    assert settings.api_base_url == "http://fallback.example.com/api"
    assert settings.server_base_url == "http://localhost:5000"


def test_update_setting_is_validated(monkeypatch):
    manager = ConfigurationManager()
    monkeypatch.setattr(manager, "_logger", logging.getLogger("jobportal.test"))
    limit = manager.settings.suggestions_limit

    with pytest.raises(ValueError):
        manager.update_setting("suggestions_limit", 0)
    with pytest.raises(ValueError):
        manager.update_setting("api_base_url", "ftp://portal")

    assert manager.settings.suggestions_limit == limit

    manager.update_setting("api_base_url", "https://portal.example.com/api/")
    assert manager.settings.api_base_url == "https://portal.example.com/api"
