"""Tests for the text parsing helpers.

Covers the dash-split rule shared by role and education dates, the
certification dates pattern, credential labels, company headers and
endorser usernames.
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from linkedin_extractor.models import DateInterval
from linkedin_extractor.parsing import (
    NO_EXPIRATION,
    parse_certification_dates,
    parse_company_header,
    parse_leading_int,
    parse_text_interval,
    parse_year_interval,
    split_dashes,
    strip_credential_label,
    username_from_profile_url,
)

# Tokens without dashes or surrounding whitespace
date_tokens = st.text(
    alphabet=st.characters(
        exclude_characters="-–—", exclude_categories=("Zs", "Cc", "Zl", "Zp")
    ),
    min_size=1,
    max_size=20,
)


class TestDashSplit:
    """Tests for the interval dash-split rule."""

    def test_two_parts(self):
        assert parse_text_interval("Jan 2019 - Mar 2021") == DateInterval(
            start="Jan 2019", end="Mar 2021"
        )

    def test_single_part_is_start_and_end(self):
        assert parse_text_interval("Jan 2019") == DateInterval(
            start="Jan 2019", end="Jan 2019"
        )

    def test_en_dash(self):
        interval = parse_text_interval("Jan 2019 – Present")
        assert interval.start == "Jan 2019"
        assert interval.end == "Present"

    def test_empty_text(self):
        assert parse_text_interval("") == DateInterval(start="", end="")

    def test_only_dashes(self):
        assert split_dashes(" - ") == []

    def test_more_than_two_parts_uses_first(self):
        assert parse_text_interval("a - b - c") == DateInterval(start="a", end="a")

    @given(start=date_tokens, end=date_tokens)
    def test_two_tokens_round_trip(self, start, end):
        """Any two dash-free tokens split back into themselves."""
        interval = parse_text_interval(f"{start} - {end}")
        assert interval == DateInterval(start=start.strip(), end=end.strip())

    @given(token=date_tokens)
    def test_single_token(self, token):
        interval = parse_text_interval(token)
        assert interval.start == interval.end == token.strip()


class TestYearInterval:
    """Tests for education year intervals."""

    def test_year_range(self):
        assert parse_year_interval("2015 - 2019") == DateInterval(start=2015, end=2019)

    def test_single_year(self):
        assert parse_year_interval("2020") == DateInterval(start=2020, end=2020)

    def test_unparseable(self):
        assert parse_year_interval("sometime") == DateInterval(start=-1, end=-1)

    def test_empty(self):
        assert parse_year_interval("") == DateInterval(start=-1, end=-1)

    def test_partially_unparseable(self):
        assert parse_year_interval("2015 - Present") == DateInterval(start=2015, end=-1)

    def test_more_than_two_parts_uses_second_as_end(self):
        assert parse_year_interval("2015 - 2019 - 2020") == DateInterval(
            start=2015, end=2019
        )

    @given(
        start=st.integers(min_value=1900, max_value=2100),
        end=st.integers(min_value=1900, max_value=2100),
    )
    def test_any_years(self, start, end):
        assert parse_year_interval(f"{start} – {end}") == DateInterval(
            start=start, end=end
        )


class TestLeadingInt:
    """Tests for endorsement count parsing."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("42", 42),
            ("99+", 99),
            (" 7 endorsements", 7),
            ("", None),
            ("many", None),
        ],
    )
    def test_values(self, text, expected):
        assert parse_leading_int(text) == expected

    def test_default(self):
        assert parse_leading_int("n/a", -1) == -1

    @given(st.integers(min_value=0, max_value=10**6))
    def test_numbers(self, value):
        assert parse_leading_int(str(value)) == value


class TestCertificationDates:
    """Tests for the certification dates pattern."""

    def test_no_expiration(self):
        assert parse_certification_dates("Issued Jan 2022 No expiration date") == (
            "Jan 2022",
            NO_EXPIRATION,
        )

    def test_case_insensitive(self):
        assert parse_certification_dates("ISSUED Jan 2022 NO EXPIRATION DATE") == (
            "Jan 2022",
            "N/A",
        )

    def test_expiration_after_no_marker(self):
        issued, expiration = parse_certification_dates(
            "Issued Jan 2022 No expiration date Mar 2024"
        )
        assert issued == "Jan 2022"
        assert expiration == "Mar 2024"

    def test_no_match(self):
        assert parse_certification_dates("Credential ID 1234") == ("", "")

    def test_empty(self):
        assert parse_certification_dates("") == ("", "")


class TestCredentialLabel:
    """Tests for credential id label stripping."""

    def test_strips_label(self):
        assert strip_credential_label("Credential ID ABC-123") == "ABC-123"

    def test_only_first_occurrence(self):
        assert (
            strip_credential_label("Credential ID credential id x")
            == "credential id x"
        )

    def test_plain_value(self):
        assert strip_credential_label("  XYZ  ") == "XYZ"


class TestCompanyHeader:
    """Tests for single-role company header splitting."""

    def test_name_and_contract(self):
        assert parse_company_header("Acme Corp\nFull-time") == ("Acme Corp", "Full-time")

    def test_name_only(self):
        assert parse_company_header("Acme Corp") == ("Acme Corp", "")

    def test_blank_lines_ignored(self):
        assert parse_company_header("\n  Acme Corp \n\n Part-time\n") == (
            "Acme Corp",
            "Part-time",
        )

    def test_empty(self):
        assert parse_company_header("") == ("", "")


class TestUsername:
    """Tests for endorser username extraction."""

    def test_profile_path(self):
        assert username_from_profile_url("/in/jane-doe/") == "jane-doe"

    def test_non_matching_passes_through(self):
        assert username_from_profile_url("/company/acme/") == "/company/acme/"

    def test_absolute_url_passes_through(self):
        url = "https://www.linkedin.com/in/jane-doe/"
        assert username_from_profile_url(url) == url

    def test_empty(self):
        assert username_from_profile_url("") == ""

    @given(
        st.text(
            alphabet=st.characters(exclude_characters="/\n"), min_size=1, max_size=30
        )
    )
    def test_any_segment(self, segment):
        assert username_from_profile_url(f"/in/{segment}/") == segment
