from collabcanvas.core.settings import Settings


def test_settings_defaults_without_env(monkeypatch):
    for name in ("DATABASE_URL", "CURSOR_TTL_SECONDS", "SERVER_PORT", "RPC_PREFIX"):
        monkeypatch.delenv(name, raising=False)

    s = Settings(_env_file=None)

    assert s.cursor_ttl_seconds == 30
    assert s.cursor_poll_interval_seconds == 1.0
    assert s.server_port == 2022
    assert s.rpc_prefix == "/trpc"
    assert s.database_url.startswith("sqlite:///")


def test_settings_read_env_aliases(monkeypatch):
    monkeypatch.setenv("CURSOR_TTL_SECONDS", "45")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.delenv("COLLABCANVAS_LOG_LEVEL", raising=False)

    s = Settings(_env_file=None)

    assert s.cursor_ttl_seconds == 45
    assert s.effective_log_level == "debug"
