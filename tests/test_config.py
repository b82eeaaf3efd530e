from decimal import Decimal

import pytest

from delivery.core.config import Settings
from delivery.main import create_app


@pytest.fixture
def env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("MONGO_URL", "JWT_SECRET", "MONGO_TLS", "PAYMENT_PER_KM", "JWT_EXPIRE_MIN"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_missing_mongo_url_aborts_startup(env):
    env.setenv("JWT_SECRET", "s")
    with pytest.raises(RuntimeError, match="MONGO_URL"):
        create_app()


def test_missing_jwt_secret_aborts_startup(env):
    env.setenv("MONGO_URL", "mongodb://localhost:27017")
    with pytest.raises(RuntimeError, match="JWT_SECRET"):
        Settings.from_env()


def test_settings_from_env(env):
    env.setenv("MONGO_URL", "mongodb+srv://cluster.example.net")
    env.setenv("JWT_SECRET", "s")
    env.setenv("PAYMENT_PER_KM", "0.25")
    env.setenv("JWT_EXPIRE_MIN", "15")

    settings = Settings.from_env()
    assert settings.mongo_tls is True
    assert settings.payment_per_km == Decimal("0.25")
    assert settings.payment_per_order == Decimal("10")
    assert settings.jwt_expire_min == 15


def test_health(client):
    assert client.get("/health").json() == {"ok": True}
