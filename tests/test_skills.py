"""Tests for skill extraction and endorsers popup crawling."""

import logging

import pytest

from fake_surface import FakeElement, FakeSurface, ScrollState, make_context, text
from linkedin_extractor.endorsements import EndorsementCrawler
from linkedin_extractor.models import Skill, User
from linkedin_extractor.selectors import DEFAULT_SELECTORS
from linkedin_extractor.skills import SkillExtractor

SKILLS = DEFAULT_SELECTORS.skills
ENDORSEMENTS = SKILLS.endorsements


def endorser(name, href):
    entity = FakeElement(name=name)
    entity.add(ENDORSEMENTS.entity_name, text(name))
    entity.add(ENDORSEMENTS.entity_link, text("", href=href))
    return entity


def attach_popup(surface, link, endorsers, pages=1):
    """Make ``link`` open an endorsers popup listing ``endorsers``.

    The list shows the first endorser and loads the rest over ``pages``
    scrolls.
    """
    popup = FakeElement(name="popup")
    container = FakeElement(name="list")
    container.add(ENDORSEMENTS.entity, *endorsers[:1])
    pending = list(endorsers[1:])

    def load(state):
        if pending:
            batch = max(1, len(endorsers) // pages)
            container.add(ENDORSEMENTS.entity, *pending[:batch])
            del pending[:batch]
            if pending:
                state.limit += state.viewport

    container.scroll = ScrollState(0, 100, 200 if pending else 100, on_scroll=load)
    popup.add(ENDORSEMENTS.list_container, container)
    close = FakeElement(name="close", on_click=lambda: surface.root.remove(ENDORSEMENTS.popup))
    popup.add(ENDORSEMENTS.close_button, close)

    link.on_click = lambda: surface.root.add(ENDORSEMENTS.popup, popup)
    return popup, close


def skill_item(name, count="", badge=False, link=None):
    item = FakeElement(name=name)
    item.add(SKILLS.entity_name, text(name))
    if count or link is not None:
        link = link if link is not None else FakeElement(name=f"{name}-link")
        if count:
            link.add(SKILLS.endorsement_count, text(count))
        item.add(SKILLS.detail_link, link)
    if badge:
        item.add(SKILLS.assessment_badge, FakeElement())
    return item


def skills_page(*items):
    surface = FakeSurface()
    section = FakeElement(name="skills")
    section.add(SKILLS.item, *items)
    surface.root.add(SKILLS.section, section)
    return surface, section


class TestEndorsementCrawler:
    """Tests for the endorsers popup."""

    @pytest.mark.asyncio
    async def test_no_link_yields_empty(self):
        ctx = make_context(FakeSurface())
        assert await EndorsementCrawler(ctx).collect(None) == ()

    @pytest.mark.asyncio
    async def test_empty_popup_yields_empty(self):
        surface = FakeSurface()
        link = FakeElement(name="link")
        popup, close = attach_popup(surface, link, [])
        ctx = make_context(surface)

        assert await EndorsementCrawler(ctx).collect(link) == ()
        assert close.clicks == 1
        assert ENDORSEMENTS.popup not in surface.root.children

    @pytest.mark.asyncio
    async def test_collects_all_pages(self):
        surface = FakeSurface()
        link = FakeElement(name="link")
        attach_popup(
            surface,
            link,
            [
                endorser("Jane Doe", "/in/jane-doe/"),
                endorser("John Roe", "/in/john-roe/"),
                endorser("Ann Lee", "https://www.linkedin.com/in/ann-lee/"),
            ],
            pages=2,
        )
        ctx = make_context(surface)

        users = await EndorsementCrawler(ctx).collect(link)

        assert users == (
            User(name="Jane Doe", username="jane-doe"),
            User(name="John Roe", username="john-roe"),
            User(name="Ann Lee", username="https://www.linkedin.com/in/ann-lee/"),
        )
        assert ctx.events.named("endorsements.collected")[0].fields["count"] == 3

    @pytest.mark.asyncio
    async def test_popup_timeout_yields_empty(self):
        surface = FakeSurface()
        link = FakeElement(name="link")  # Click opens nothing
        ctx = make_context(surface)

        assert await EndorsementCrawler(ctx).collect(link) == ()
        [warning] = ctx.events.named("endorsements.popup_timeout")
        assert warning.level == logging.WARNING

    @pytest.mark.asyncio
    async def test_missing_list_closes_popup(self):
        surface = FakeSurface()
        popup = FakeElement(name="popup")
        close = FakeElement(on_click=lambda: surface.root.remove(ENDORSEMENTS.popup))
        popup.add(ENDORSEMENTS.close_button, close)
        link = FakeElement(on_click=lambda: surface.root.add(ENDORSEMENTS.popup, popup))
        ctx = make_context(surface)

        assert await EndorsementCrawler(ctx).collect(link) == ()
        assert close.clicks == 1
        assert ctx.events.named("endorsements.list_missing")

    @pytest.mark.asyncio
    async def test_detached_link_yields_empty(self):
        link = FakeElement()
        link.detached = True
        ctx = make_context(FakeSurface())

        assert await EndorsementCrawler(ctx).collect(link) == ()
        assert ctx.events.named("endorsements.link_detached")

    @pytest.mark.asyncio
    async def test_missing_close_button_is_not_fatal(self):
        surface = FakeSurface()
        popup = FakeElement(name="popup")
        popup.add(ENDORSEMENTS.list_container, FakeElement(scroll=ScrollState()))
        link = FakeElement(on_click=lambda: surface.root.add(ENDORSEMENTS.popup, popup))
        ctx = make_context(surface)

        assert await EndorsementCrawler(ctx).collect(link) == ()
        assert ctx.events.named("endorsements.close_missing")


class TestSkillExtractor:
    """Tests for the skills section."""

    @pytest.mark.asyncio
    async def test_absent_section(self):
        ctx = make_context(FakeSurface())
        assert await SkillExtractor(ctx).extract() == ()

    @pytest.mark.asyncio
    async def test_basic_skills(self):
        surface, _ = skills_page(
            skill_item("Python", "99+", badge=True),
            skill_item("SQL", "12"),
            skill_item("Go"),
        )
        ctx = make_context(surface)

        skills = await SkillExtractor(ctx).extract(detailed=False)

        assert skills == (
            Skill(name="Python", has_assessment_badge=True, endorsement_count=99),
            Skill(name="SQL", has_assessment_badge=False, endorsement_count=12),
            Skill(name="Go", has_assessment_badge=False, endorsement_count=None),
        )
        assert surface.delays[0] == ctx.settle_delay

    @pytest.mark.asyncio
    async def test_see_more_discloses_additional_skills(self):
        surface, section = skills_page(skill_item("Python", "3"))
        button = FakeElement(name="see-more")

        def reveal_rest():
            section.add(SKILLS.item, skill_item("Rust", "1"))
            section.remove(SKILLS.see_more)

        button.on_click = reveal_rest
        section.add(SKILLS.see_more, button)
        ctx = make_context(surface)

        skills = await SkillExtractor(ctx).extract(detailed=False)

        assert [skill.name for skill in skills] == ["Python", "Rust"]

    @pytest.mark.asyncio
    async def test_detailed_skills_collect_endorsers(self):
        link = FakeElement(name="link")
        python = skill_item("Python", "2", link=link)
        go = skill_item("Go")
        surface, _ = skills_page(python, go)
        attach_popup(
            surface,
            link,
            [endorser("Jane Doe", "/in/jane-doe/"), endorser("John Roe", "/in/john-roe/")],
        )
        ctx = make_context(surface)

        skills = await SkillExtractor(ctx).extract(detailed=True)

        assert skills[0].endorsements == (
            User(name="Jane Doe", username="jane-doe"),
            User(name="John Roe", username="john-roe"),
        )
        assert skills[1].endorsements == ()

    @pytest.mark.asyncio
    async def test_basic_mode_never_opens_popups(self):
        link = FakeElement(name="link")
        python = skill_item("Python", "2", link=link)
        surface, _ = skills_page(python)
        ctx = make_context(surface)

        await SkillExtractor(ctx).extract(detailed=False)

        assert link.clicks == 0

    @pytest.mark.asyncio
    async def test_count_is_read_inside_detail_link(self):
        stray = skill_item("Go")
        stray.add(SKILLS.endorsement_count, text("7"))
        surface, _ = skills_page(skill_item("Python", "4"), stray)
        ctx = make_context(surface)

        skills = await SkillExtractor(ctx).extract(detailed=False)

        assert [skill.endorsement_count for skill in skills] == [4, None]

    @pytest.mark.asyncio
    async def test_detached_endorsers_list_only_affects_its_skill(self):
        python_link = FakeElement(name="python-link")
        go_link = FakeElement(name="go-link")
        surface, _ = skills_page(
            skill_item("Python", "2", link=python_link),
            skill_item("Go", "1", link=go_link),
        )
        popup, close = attach_popup(
            surface,
            python_link,
            [endorser("Jane Doe", "/in/jane-doe/"), endorser("John Roe", "/in/john-roe/")],
        )
        container = popup.children[ENDORSEMENTS.list_container][0]

        def detach(state):
            container.detached = True

        container.scroll.on_scroll = detach
        attach_popup(surface, go_link, [endorser("Ann Lee", "/in/ann-lee/")])
        ctx = make_context(surface)

        skills = await SkillExtractor(ctx).extract(detailed=True)

        assert [skill.name for skill in skills] == ["Python", "Go"]
        assert skills[0].endorsements == ()
        assert skills[1].endorsements == (User(name="Ann Lee", username="ann-lee"),)
        assert close.clicks == 1
        assert ENDORSEMENTS.popup not in surface.root.children
        [warning] = ctx.events.named("endorsements.list_detached")
        assert warning.level == logging.WARNING
