import logging
from pathlib import Path

from sitelink.base.config import (
    HttpConfig,
    LogConfig,
    SiteLinkConfig,
    get_config,
    set_config,
    setup_logging,
)


def test_defaults():
    cfg = SiteLinkConfig()
    assert cfg.http == HttpConfig()
    assert cfg.http.follow_redirects is True
    assert cfg.websocket.max_size == 2 ** 20
    assert cfg.log.file_path is None
    assert cfg.debug is False


def test_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("SITELINK_HTTP_TIMEOUT", "2.5")
    monkeypatch.setenv("SITELINK_HTTP_VERIFY", "false")
    monkeypatch.setenv("SITELINK_FOLLOW_REDIRECTS", "FALSE")
    monkeypatch.setenv("SITELINK_USER_AGENT", "sitelink-test/1.0")
    monkeypatch.setenv("SITELINK_WS_OPEN_TIMEOUT", "4")
    monkeypatch.setenv("SITELINK_WS_MAX_SIZE", "2048")
    monkeypatch.setenv("SITELINK_LOG_LEVEL", "WARNING")
    monkeypatch.setenv("SITELINK_LOG_FILE", str(tmp_path / "client.log"))
    monkeypatch.setenv("SITELINK_DEBUG", "true")

    cfg = SiteLinkConfig.from_env()

    assert cfg.http == HttpConfig(timeout=2.5, verify=False, follow_redirects=False, user_agent="sitelink-test/1.0")
    assert cfg.websocket.open_timeout == 4.0
    assert cfg.websocket.max_size == 2048
    assert cfg.log.level == "WARNING"
    assert cfg.log.file_path == tmp_path / "client.log"
    assert cfg.debug is True


def test_set_config_none_reloads_from_env(monkeypatch):
    set_config(None)
    monkeypatch.setenv("SITELINK_HTTP_TIMEOUT", "7")
    assert get_config().http.timeout == 7.0


def test_setup_logging_with_file(tmp_path):
    log_file = tmp_path / "logs" / "sitelink.log"
    cfg = SiteLinkConfig(log=LogConfig(level="INFO", file_path=log_file))

    setup_logging(cfg)
    try:
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert any(getattr(h, "baseFilename", None) == str(log_file) for h in root.handlers)
        assert Path(log_file).parent.is_dir()
    finally:
        for handler in logging.getLogger().handlers:
            handler.close()
        logging.basicConfig(force=True)


def test_setup_logging_debug_overrides_level():
    setup_logging(SiteLinkConfig(debug=True, log=LogConfig(level="ERROR")))
    try:
        assert logging.getLogger().level == logging.DEBUG
    finally:
        logging.basicConfig(force=True)
