"""Data models for extracted LinkedIn profile data.

Every record is a frozen dataclass built once by an extractor and never
mutated afterwards. Collections are tuples so that whole records stay
immutable and hashable.
"""

from dataclasses import asdict, dataclass
from typing import Any, Optional, Union


@dataclass(frozen=True)
class DateInterval:
    """Start and end of a period.

    Education uses integer years (``-1`` when unparseable); experience and
    roles keep the raw trimmed text. When only one token is present, start
    and end are equal.
    """

    start: Union[int, str]
    end: Union[int, str]


@dataclass(frozen=True)
class School:
    """School an education entry belongs to."""

    name: str = ""
    url: str = ""


@dataclass(frozen=True)
class Education:
    """LinkedIn education entry."""

    school: School
    date: DateInterval
    field_of_study: str = ""
    degree: str = ""
    description: str = ""
    activities_and_societies: str = ""


@dataclass(frozen=True)
class Company:
    """Company an experience belongs to."""

    name: str = ""
    linkedin_url: str = ""


@dataclass(frozen=True)
class Role:
    """A single role held at a company."""

    time_interval: DateInterval
    name: str = ""
    location: str = ""
    description: str = ""
    duration: str = ""
    contract_type: str = ""


@dataclass(frozen=True)
class Experience:
    """LinkedIn work experience, grouping one or more roles at a company."""

    company: Company
    roles: tuple[Role, ...] = ()
    location: str = ""
    total_duration: str = ""


@dataclass(frozen=True)
class Issuer:
    """Organization that issued a certification."""

    name: str = ""
    linkedin_url: str = ""


@dataclass(frozen=True)
class Credential:
    """Credential identifier and verification URL of a certification."""

    id: str = ""
    url: str = ""


@dataclass(frozen=True)
class Certification:
    """LinkedIn license or certification."""

    name: str
    issuer: Issuer
    credential: Credential
    issued: str = ""
    expiration: str = ""


@dataclass(frozen=True)
class User:
    """A LinkedIn member, as listed in an endorsers popup."""

    name: str
    username: str


@dataclass(frozen=True)
class Skill:
    """LinkedIn skill with its endorsements."""

    name: str
    has_assessment_badge: bool = False
    endorsement_count: Optional[int] = None
    endorsements: tuple[User, ...] = ()


@dataclass(frozen=True)
class Profile:
    """Complete extracted LinkedIn profile.

    A text field is ``None`` when it is absent or its read failed. A section
    is ``None`` only when its extraction step failed; an empty tuple means
    the section is absent from the page or lists nothing.
    """

    full_name: Optional[str] = None
    short_description: Optional[str] = None
    about: Optional[str] = None
    location: Optional[str] = None
    is_premium: Optional[bool] = None
    is_influencer: Optional[bool] = None
    experiences: Optional[tuple[Experience, ...]] = None
    educations: Optional[tuple[Education, ...]] = None
    certifications: Optional[tuple[Certification, ...]] = None
    skills: Optional[tuple[Skill, ...]] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert the profile to plain dicts and lists for JSON output."""
        return asdict(self)
