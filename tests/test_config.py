from fueltrack.config import Settings


def _settings(**overrides) -> Settings:
    fields = {"DATABASE_URL": "sqlite://", "SECRET_KEY": "x"}
    fields.update(overrides)
    return Settings(_env_file=None, **fields)


def test_cors_origins_are_split_and_trimmed():
    s = _settings(CORS_ORIGINS="http://a.test, http://b.test")
    assert s.get_cors_origins() == ["http://a.test", "http://b.test"]


def test_environment_predicates():
    assert _settings(APP_ENV="development").is_development
    assert not _settings(APP_ENV="production").is_development
    assert _settings().is_sqlite
    assert not _settings(DATABASE_URL="postgresql+psycopg2://u:p@h/db").is_sqlite


def test_timezone_defaults_to_utc():
    assert _settings().APP_TIMEZONE == "UTC"
