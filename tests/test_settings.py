from pathlib import Path

from settings import get_settings


def test_defaults(monkeypatch) -> None:
    for name in (
        "SUPABASE_URL",
        "SUPABASE_ANON_KEY",
        "CASA_FRESCA_STORE",
        "CASA_FRESCA_TABLE",
        "CASA_FRESCA_ASSET_BUCKET",
        "CASA_FRESCA_TIMEZONE",
        "CASA_FRESCA_HTTP_TIMEOUT",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()
    assert settings.supabase_url is None
    assert settings.supabase_key is None
    assert settings.store_backend == "supabase"
    assert settings.table_name == "casa_fresca_readings"
    assert settings.asset_bucket == "casa-fresca-assets"
    assert settings.timezone == "Europe/Madrid"
    assert settings.http_timeout == 10.0
    assert settings.log_level == "INFO"


def test_environment_overrides_apply(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("SUPABASE_URL", " https://demo.supabase.co ")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")
    monkeypatch.setenv("CASA_FRESCA_STORE", "SQLite")
    monkeypatch.setenv("CASA_FRESCA_TABLE", "readings_test")
    monkeypatch.setenv("CASA_FRESCA_DB_PATH", str(tmp_path / "x.db"))
    monkeypatch.setenv("CASA_FRESCA_TIMEZONE", "UTC")
    monkeypatch.setenv("CASA_FRESCA_HTTP_TIMEOUT", "2.5")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = get_settings()
    assert settings.supabase_url == "https://demo.supabase.co"
    assert settings.store_backend == "sqlite"
    assert settings.table_name == "readings_test"
    assert settings.db_path == Path(tmp_path / "x.db")
    assert settings.timezone == "UTC"
    assert settings.http_timeout == 2.5
    assert settings.log_level == "DEBUG"


def test_invalid_values_fall_back(monkeypatch) -> None:
    monkeypatch.setenv("CASA_FRESCA_STORE", "mongo")
    monkeypatch.setenv("CASA_FRESCA_HTTP_TIMEOUT", "-1")
    monkeypatch.setenv("CASA_FRESCA_TABLE", "   ")
    monkeypatch.setenv("SUPABASE_URL", "")

    settings = get_settings()
    assert settings.store_backend == "supabase"
    assert settings.http_timeout == 10.0
    assert settings.table_name == "casa_fresca_readings"
    assert settings.supabase_url is None
