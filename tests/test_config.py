import pytest

from jalalitools.config import (
    DEFAULT_ISO_SHIFT_MINUTES,
    DEFAULT_TIME_AGO_SUFFIX,
    ISO_SHIFT_ENV,
    TIME_AGO_SUFFIX_ENV,
    Settings,
    load_settings,
)
from jalalitools.errors import ConfigurationError


def test_defaults_when_unset():
    assert load_settings({}) == Settings(DEFAULT_ISO_SHIFT_MINUTES, DEFAULT_TIME_AGO_SUFFIX)
    assert load_settings() == Settings()


def test_values_from_environment():
    settings = load_settings({ISO_SHIFT_ENV: " 0 ", TIME_AGO_SUFFIX_ENV: "قبل"})
    assert settings.iso_shift_minutes == 0
    assert settings.time_ago_suffix == "قبل"


def test_blank_values_keep_defaults():
    settings = load_settings({ISO_SHIFT_ENV: "", TIME_AGO_SUFFIX_ENV: "  "})
    assert settings == Settings()


def test_malformed_shift_is_rejected():
    with pytest.raises(ConfigurationError, match=ISO_SHIFT_ENV):
        load_settings({ISO_SHIFT_ENV: "one hour"})
