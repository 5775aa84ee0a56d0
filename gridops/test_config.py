"""
Configuration tests: signing secret rules per environment.

Run: pytest gridops/test_config.py -v
"""

import pytest

from gridops import config
from gridops.config import SECRET_KEY_MIN_BYTES, load_secret_key


class TestSecretKey:
    def test_dev_fallback_is_long_enough_for_hs256(self):
        secret = load_secret_key("", is_dev=True)
        assert len(secret.encode("utf-8")) >= SECRET_KEY_MIN_BYTES

    def test_missing_secret_outside_dev(self):
        with pytest.raises(RuntimeError):
            load_secret_key("", is_dev=False)

    def test_short_secret_outside_dev(self):
        with pytest.raises(RuntimeError):
            load_secret_key("x" * (SECRET_KEY_MIN_BYTES - 1), is_dev=False)

    def test_short_secret_tolerated_in_dev(self):
        assert load_secret_key("short", is_dev=True) == "short"

    def test_long_enough_secret_outside_dev(self):
        secret = "x" * SECRET_KEY_MIN_BYTES
        assert load_secret_key(secret, is_dev=False) == secret

    def test_active_secret_meets_minimum(self):
        assert len(config.SECRET_KEY.encode("utf-8")) >= SECRET_KEY_MIN_BYTES
