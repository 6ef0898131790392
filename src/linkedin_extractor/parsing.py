"""Text parsing for dates, credentials, company headers and profile links."""

import re
from typing import Optional

from .models import DateInterval

DASH_PATTERN = re.compile(r"[-–—]")
LEADING_INT_PATTERN = re.compile(r"^\s*([+-]?\d+)")

# Matches e.g. "Issued Jan 2022 No expiration date" and
# "Issued Jan 2022 No expiration date Mar 2024". Group 3 is only reachable
# after the "no" marker.
CERTIFICATION_DATES_PATTERN = re.compile(
    r"issued\s*([^\d]*\s+[0-9]+)\s*(no)? expiration date\s*([^\d]*\s+[0-9]+)?",
    re.IGNORECASE,
)
CREDENTIAL_LABEL_PATTERN = re.compile(r"\s*credential\s+id\s*", re.IGNORECASE)
PROFILE_PATH_PATTERN = re.compile(r"/in/([^/]+)/")

NO_EXPIRATION = "N/A"


def split_dashes(text: str) -> list[str]:
    """Split an interval text on dashes into trimmed, non-empty parts."""
    return [part.strip() for part in DASH_PATTERN.split(text or "") if part.strip()]


def parse_text_interval(text: str) -> DateInterval:
    """Parse ``"Jan 2019 - Mar 2021"`` into a raw string interval.

    Only an exact two-part split yields distinct ends; otherwise the first
    part (``"Jan 2019"``) becomes both start and end.
    """
    parts = split_dashes(text)
    if not parts:
        return DateInterval(start="", end="")
    end = parts[1] if len(parts) == 2 else parts[0]
    return DateInterval(start=parts[0], end=end)


def parse_leading_int(text: str, default: Optional[int] = None) -> Optional[int]:
    """Parse the integer at the start of ``text`` (``"99+"`` gives 99)."""
    match = LEADING_INT_PATTERN.match(text or "")
    if match is None:
        return default
    return int(match.group(1))


def parse_year_interval(text: str) -> DateInterval:
    """Parse ``"2015 - 2019"`` into integer years, ``-1`` where unparseable.

    Unlike role intervals, any text with two or more parts takes the
    second part as its end year.
    """
    parts = split_dashes(text)
    start = parts[0] if parts else ""
    end = parts[1] if len(parts) > 1 else start
    return DateInterval(
        start=parse_leading_int(start, -1),
        end=parse_leading_int(end, -1),
    )


def parse_certification_dates(text: str) -> tuple[str, str]:
    """Return ``(issued, expiration)`` from a certification dates line.

    ``expiration`` is ``"N/A"`` whenever the pattern matches without a
    captured expiration date; both values are ``""`` when it does not
    match at all.
    """
    match = CERTIFICATION_DATES_PATTERN.search(text or "")
    if match is None:
        return "", ""
    issued = match.group(1).strip()
    if match.group(2):
        expiration = (match.group(3) or NO_EXPIRATION).strip()
    else:
        expiration = NO_EXPIRATION
    return issued, expiration


def strip_credential_label(text: str) -> str:
    """Remove a leading "Credential ID" label and surrounding whitespace."""
    return CREDENTIAL_LABEL_PATTERN.sub("", text or "", count=1).strip()


def parse_company_header(text: str) -> tuple[str, str]:
    """Split a single-role company header into ``(company, contract_type)``.

    The header renders as the company name and, on the next line, the
    contract type (``"Acme Corp\\nFull-time"``).
    """
    lines = [line.strip() for line in (text or "").split("\n")]
    lines = [line for line in lines if line]
    company = lines[0] if lines else ""
    contract_type = lines[1] if len(lines) > 1 else ""
    return company, contract_type


def username_from_profile_url(href: str) -> str:
    """Extract ``<segment>`` from a ``/in/<segment>/`` profile path.

    Anything that is not exactly such a path is returned unchanged.
    """
    match = PROFILE_PATH_PATTERN.fullmatch(href or "")
    if match is None:
        return href
    return match.group(1)
