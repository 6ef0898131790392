"""Selector catalogue for the LinkedIn profile page.

Selectors starting with ``/``, ``./`` or ``(`` are XPath, everything else
is CSS. Item-level selectors are evaluated relative to their item
element. LinkedIn changes its markup regularly; extractors take a
``ProfileSelectors`` instance so callers can supply updated values
without touching extraction code.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LoginSelectors:
    username: str = "#username"
    password: str = "#password"
    submit: str = "button[type='submit']"


@dataclass(frozen=True)
class BaseSelectors:
    full_name: str = ".pv-text-details__left-panel h1"
    short_description: str = ".pv-text-details__left-panel .text-body-medium"
    location: str = ".pv-text-details__left-panel .text-body-small.inline"
    about: str = "#about ~ .display-flex .inline-show-more-text"
    about_see_more: str = ".inline-show-more-text__button"
    premium_badge: str = ".pv-member-badge--for-top-card .premium-icon"
    influencer_badge: str = ".pv-member-badge--for-top-card .influencer-icon"


@dataclass(frozen=True)
class ExperienceSelectors:
    group: str = "#experience-section .pv-profile-section__card-item-v2"
    more_button: str = "#experience-section .pv-profile-section__see-more-inline"
    company_link: str = "//a"
    role_container: str = ".pv-entity__position-group-role-item"
    expand_roles: str = ".pv-profile-section__see-more-inline"
    group_title: str = ".pv-entity__company-summary-info h3 span:nth-child(2)"
    group_subtitle: str = ".pv-entity__company-summary-info h4 span:nth-child(2)"
    role_name: str = ".pv-entity__summary-info-v2 h3 span:nth-child(2)"
    contract_type: str = ".pv-entity__summary-info-v2 .pv-entity__secondary-title"
    role_info: str = ".pv-entity__summary-info-v2 h4 span:nth-child(2)"
    role_description: str = ".pv-entity__description"
    role_description_more: str = ".inline-show-more-text__button"
    summary_company_name: str = ".pv-entity__summary-info .pv-entity__secondary-title"
    summary_role_name: str = "//div[contains(@class, 'pv-entity__summary-info')]//h3"
    summary_time_interval: str = ".pv-entity__summary-info .pv-entity__date-range span:nth-child(2)"
    summary_location: str = ".pv-entity__summary-info .pv-entity__location span:nth-child(2)"
    summary_duration: str = ".pv-entity__summary-info .pv-entity__bullet-item-v2"
    description: str = ".pv-entity__description"


@dataclass(frozen=True)
class EducationSelectors:
    section: str = "#education-section"
    see_more_button: str = ".pv-profile-section__see-more-inline"
    list_item: str = ".pv-education-entity"
    school_name: str = ".pv-entity__school-name"
    school_link: str = "//a"
    date: str = ".pv-entity__dates span:nth-child(2)"
    field_name: str = ".pv-entity__fos .pv-entity__comma-item"
    degree_name: str = ".pv-entity__degree-name .pv-entity__comma-item"
    description: str = ".pv-entity__description"
    activities_and_societies: str = ".activities-societies"


@dataclass(frozen=True)
class CertificationSelectors:
    section: str = "#certifications-section"
    see_more: str = ".pv-profile-section__see-more-inline"
    item: str = ".pv-certification-entity"
    company_url: str = "a[data-control-name='background_details_company']"
    company_name: str = ".pv-certifications__summary-info p:nth-of-type(1) span:nth-child(2)"
    name: str = ".pv-certifications__summary-info h3"
    dates: str = ".pv-certifications__summary-info p:nth-of-type(2)"
    credential_id: str = ".pv-certifications__summary-info p:nth-of-type(3)"
    credential_url: str = "a.pv-certifications__credential-link"


@dataclass(frozen=True)
class EndorsementSelectors:
    popup: str = "div[role='dialog'].pv-skill-endorsements"
    list_container: str = ".artdeco-modal__content"
    entity: str = ".pv-endorsement-entity"
    entity_name: str = ".pv-endorsement-entity__name--has-hover"
    entity_link: str = "a.pv-endorsement-entity__link"
    close_button: str = "button.artdeco-modal__dismiss"


@dataclass(frozen=True)
class SkillSelectors:
    section: str = ".pv-skill-categories-section"
    see_more: str = ".pv-skills-section__additional-skills"
    item: str = ".pv-skill-category-entity"
    entity_name: str = ".pv-skill-category-entity__name-text"
    assessment_badge: str = ".pv-skill-entity__verified-icon"
    detail_link: str = "a.pv-skill-entity__featured-endorse-button-shared"
    # Looked up inside detail_link
    endorsement_count: str = ".pv-skill-category-entity__endorsement-count"
    endorsements: EndorsementSelectors = field(default_factory=EndorsementSelectors)


@dataclass(frozen=True)
class ProfileSelectors:
    """All selectors the extractors use, grouped by page area."""

    login: LoginSelectors = field(default_factory=LoginSelectors)
    base: BaseSelectors = field(default_factory=BaseSelectors)
    experience: ExperienceSelectors = field(default_factory=ExperienceSelectors)
    education: EducationSelectors = field(default_factory=EducationSelectors)
    certifications: CertificationSelectors = field(
        default_factory=CertificationSelectors
    )
    skills: SkillSelectors = field(default_factory=SkillSelectors)


DEFAULT_SELECTORS = ProfileSelectors()
