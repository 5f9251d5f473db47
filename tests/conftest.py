import pytest

TEST_JWT_SECRET = "test-secret-key-for-unit-tests-must-be-32-chars"


# ── Patch settings before any other import ──────────────────────────────────
@pytest.fixture(autouse=True)
def _patch_settings(monkeypatch):
    monkeypatch.setenv("JWT_SECRET_KEY", TEST_JWT_SECRET)
    from catalog.core.config import settings
    monkeypatch.setattr(settings, "jwt_secret_key", TEST_JWT_SECRET)
    monkeypatch.setattr(settings, "jwt_access_token_expire_minutes", 15)
    monkeypatch.setattr(settings, "default_currency", "USD")
    monkeypatch.setattr(settings, "max_variant_combinations", 1000)
    monkeypatch.setattr(settings, "driver_payment_per_delivery", 20.0)
