"""Property-based tests for configuration validation."""

import pytest
from hypothesis import given
from hypothesis import strategies as st
from pydantic import ValidationError

from linkedin_extractor.config import (
    AuthConfig,
    AuthMethod,
    BrowserConfig,
    Config,
    ExtractionConfig,
)

cookies = st.text(
    min_size=1,
    max_size=60,
    alphabet=st.characters(categories=("Lu", "Ll", "Nd")),
)


class TestAuthConfig:
    """Tests for authentication method selection."""

    @given(cookie=cookies)
    def test_cookie_detected(self, cookie):
        auth = AuthConfig(cookie=cookie)
        assert auth.method == AuthMethod.COOKIE
        assert auth.cookie == cookie

    def test_cookie_preferred_over_credentials(self):
        auth = AuthConfig(cookie="abc", email="a@b.com", password="pw")
        assert auth.method == AuthMethod.COOKIE

    def test_credentials_detected(self):
        auth = AuthConfig(email=" user@example.com ", password="pw")
        assert auth.method == AuthMethod.CREDENTIALS
        assert auth.email == "user@example.com"

    def test_stored_detected_when_file_exists(self, tmp_path):
        storage = tmp_path / "session.json"
        storage.write_text("[]")

        auth = AuthConfig(storage_path=str(storage), email="a@b.com", password="pw")

        assert auth.method == AuthMethod.STORED

    def test_missing_storage_file_falls_back_to_credentials(self, tmp_path):
        auth = AuthConfig(
            storage_path=str(tmp_path / "missing.json"),
            email="a@b.com",
            password="pw",
        )
        assert auth.method == AuthMethod.CREDENTIALS
        assert auth.remember is True

    def test_nothing_configured_fails(self):
        with pytest.raises(ValidationError) as exc_info:
            AuthConfig()
        assert "LINKEDIN_COOKIE" in str(exc_info.value)

    def test_blank_cookie_treated_as_missing(self):
        with pytest.raises(ValidationError):
            AuthConfig(cookie="   ")

    def test_invalid_email(self):
        with pytest.raises(ValidationError) as exc_info:
            AuthConfig(email="not-an-email", password="pw")
        assert "email" in str(exc_info.value).lower()

    def test_explicit_method_requires_its_inputs(self):
        with pytest.raises(ValidationError):
            AuthConfig(method=AuthMethod.CREDENTIALS, cookie="abc")
        with pytest.raises(ValidationError):
            AuthConfig(method=AuthMethod.STORED, cookie="abc")


class TestBrowserConfig:
    """Tests for browser settings."""

    def test_defaults(self):
        browser = BrowserConfig()
        assert browser.headless is True
        assert browser.page_load_timeout == 30
        assert browser.max_retries == 3

    @given(timeout=st.one_of(st.integers(max_value=4), st.integers(min_value=121)))
    def test_page_load_timeout_range(self, timeout):
        with pytest.raises(ValidationError):
            BrowserConfig(page_load_timeout=timeout)

    @given(retries=st.one_of(st.integers(max_value=-1), st.integers(min_value=11)))
    def test_max_retries_range(self, retries):
        with pytest.raises(ValidationError):
            BrowserConfig(max_retries=retries)


class TestExtractionConfig:
    """Tests for extraction pacing settings."""

    def test_defaults(self):
        extraction = ExtractionConfig()
        assert extraction.settle_delay == 5.0
        assert (extraction.jitter_min, extraction.jitter_max) == (5.0, 10.0)
        assert extraction.detailed_skills is True

    @given(
        low=st.floats(min_value=0, max_value=100),
        high=st.floats(min_value=0, max_value=100),
    )
    def test_jitter_range(self, low, high):
        if high < low:
            with pytest.raises(ValidationError):
                ExtractionConfig(jitter_min=low, jitter_max=high)
        else:
            config = ExtractionConfig(jitter_min=low, jitter_max=high)
            assert config.jitter_min <= config.jitter_max

    def test_poll_interval_must_be_positive(self):
        with pytest.raises(ValidationError):
            ExtractionConfig(poll_interval=0)


class TestConfig:
    """Tests for the top-level configuration."""

    @given(
        profile_id=st.one_of(
            st.just(""),
            st.from_regex(r"^\s+$", fullmatch=True),
        )
    )
    def test_empty_profile_id_rejected(self, profile_id):
        with pytest.raises(ValidationError) as exc_info:
            Config(auth=AuthConfig(cookie="abc"), profile_id=profile_id)
        assert "empty" in str(exc_info.value).lower()

    def test_profile_id_stripped(self):
        config = Config(auth=AuthConfig(cookie="abc"), profile_id="  jane-doe ")
        assert config.profile_id == "jane-doe"
        assert config.browser == BrowserConfig()
        assert config.extraction == ExtractionConfig()
