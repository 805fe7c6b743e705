import pytest

from src.utils import ConfigurationError, Settings
from src.utils.settings import DEFAULT_VIDEO_ID


def test_defaults_with_only_token():
    s = Settings.from_env({"PAGE_ACCESS_TOKEN": "tok"})
    assert s.access_token == "tok"
    assert s.video_id == DEFAULT_VIDEO_ID
    assert s.port == 3000
    assert s.sample_size == 5
    assert s.refresh_interval == 30.0
    assert s.startup_delay == 10.0
    assert s.request_timeout > 0


def test_missing_token_is_fatal():
    with pytest.raises(ConfigurationError):
        Settings.from_env({})
    with pytest.raises(ConfigurationError):
        Settings.from_env({"PAGE_ACCESS_TOKEN": "   "})


def test_blank_video_id_is_fatal():
    with pytest.raises(ConfigurationError):
        Settings.from_env({"PAGE_ACCESS_TOKEN": "tok", "VIDEO_ID": ""})


def test_overrides():
    s = Settings.from_env({
        "PAGE_ACCESS_TOKEN": "tok",
        "VIDEO_ID": "42",
        "PORT": "8080",
        "REFRESH_INTERVAL_SEC": "120",
        "DISPLAY_INTERVAL_SEC": "7.5",
        "SAMPLE_SIZE": "3",
    })
    assert (s.video_id, s.port, s.refresh_interval, s.display_interval, s.sample_size) == (
        "42", 8080, 120.0, 7.5, 3,
    )


@pytest.mark.parametrize("key,value", [
    ("PORT", "abc"),
    ("PORT", "0"),
    ("SAMPLE_SIZE", "0"),
    ("REFRESH_INTERVAL_SEC", "-1"),
    ("REFRESH_INTERVAL_SEC", "inf"),
    ("DISPLAY_INTERVAL_SEC", "nan"),
    ("STARTUP_DELAY_SEC", "Infinity"),
    ("REQUEST_TIMEOUT_SEC", "-inf"),
])
def test_invalid_numbers(key, value):
    with pytest.raises(ConfigurationError):
        Settings.from_env({"PAGE_ACCESS_TOKEN": "tok", key: value})


def test_describe_hides_token():
    s = Settings.from_env({"PAGE_ACCESS_TOKEN": "super-secret"})
    assert "super-secret" not in str(s.describe())
    assert s.describe()["token_set"] is True
