import pytest
from pydantic import ValidationError

from config.settings import Settings

SECRET = "a-long-enough-secret-for-signing-tokens"


def test_plain_postgres_urls_use_psycopg():
    s = Settings(DATABASE_URL="postgresql://u:p@db:5432/eco", SECRET_KEY=SECRET)
    assert s.DATABASE_URL == "postgresql+psycopg://u:p@db:5432/eco"
    assert not s.is_sqlite


def test_sqlite_url_is_accepted():
    s = Settings(DATABASE_URL="sqlite:///./ecometrics.db", SECRET_KEY=SECRET)
    assert s.is_sqlite


def test_unsupported_database_url():
    with pytest.raises(ValidationError):
        Settings(DATABASE_URL="mysql://u:p@db/eco", SECRET_KEY=SECRET)


def test_short_secret_is_rejected():
    with pytest.raises(ValidationError):
        Settings(DATABASE_URL="sqlite://", SECRET_KEY="short")


def test_allowed_file_types_are_parsed():
    s = Settings(DATABASE_URL="sqlite://", SECRET_KEY=SECRET, ALLOWED_FILE_TYPES="Image/PNG, video/mp4 ,")
    assert s.allowed_file_types_list == ["image/png", "video/mp4"]
