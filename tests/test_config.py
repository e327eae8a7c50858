import pytest

from app.core.config import Settings, validate_settings


def make_settings(**overrides) -> Settings:
    values = {
        "ENVIRONMENT": "production",
        "FINANZAS_API_BASE_URL": "http://finanzas.test/api/",
        "TWILIO_ACCOUNT_SID": "AC123",
        "TWILIO_AUTH_TOKEN": "secret",
        "TWILIO_WHATSAPP_NUMBER": "whatsapp:+14155238886",
    }
    values.update(overrides)
    return Settings(**values)


def test_base_url_trailing_slash_is_stripped():
    assert make_settings().FINANZAS_API_BASE_URL == "http://finanzas.test/api"


def test_complete_production_settings_are_valid():
    validate_settings(make_settings())


@pytest.mark.parametrize("missing", ["TWILIO_ACCOUNT_SID", "TWILIO_AUTH_TOKEN", "TWILIO_WHATSAPP_NUMBER"])
def test_production_requires_every_twilio_credential(missing):
    with pytest.raises(ValueError, match="required in production"):
        validate_settings(make_settings(**{missing: None}))


def test_development_runs_without_twilio():
    validate_settings(make_settings(
        ENVIRONMENT="development",
        TWILIO_ACCOUNT_SID=None,
        TWILIO_AUTH_TOKEN=None,
        TWILIO_WHATSAPP_NUMBER=None,
    ))


def test_empty_base_url_is_rejected():
    with pytest.raises(ValueError, match="FINANZAS_API_BASE_URL"):
        validate_settings(make_settings(FINANZAS_API_BASE_URL=""))
