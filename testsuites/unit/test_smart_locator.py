import pytest

from testsuites.ui_testing.framework.smart_locator import (
    ElementNotFoundError,
    SmartLocator,
    xpath_literal,
)
from testsuites.unit.fakes import FakeElement


@pytest.mark.parametrize(
    "value, expected",
    [
        ("In Progress", "'In Progress'"),
        ("Bob's Pool", '"Bob\'s Pool"'),
        ("a'b\"c", "concat('a', \"'\", 'b\"c')"),
    ],
)
def test_xpath_literal_quotes_values(value, expected):
    assert xpath_literal(value) == expected


@pytest.mark.asyncio
async def test_highest_priority_strategy_wins_regardless_of_declaration_order(fake_page):
    fake_page.add("structural", "#board-title", FakeElement("by structure"))
    fake_page.add("test_id", "board-name-display", FakeElement("by test id"))
    smart = SmartLocator(fake_page)

    element = smart.element(
        "Board Name",
        structural="#board-title",
        test_id="board-name-display",
    )

    assert await element.inner_text() == "by test id"
    assert "No maintenance needed" in smart.get_health_report()


@pytest.mark.asyncio
async def test_falls_back_and_reports_health(fake_page):
    fake_page.add("placeholder", "Enter list name…", FakeElement())
    smart = SmartLocator(fake_page)
    element = smart.element(
        "List Name Input",
        test_id="list-name-textarea",
        placeholder="Enter list name…",
    )

    await element.fill("Prospects")

    assert fake_page.actions[-1] == ("fill", ("placeholder", "Enter list name…"), "Prospects")
    report = smart.get_health_report()
    assert "[List Name Input]" in report
    assert "test_id -> list-name-textarea" in report


@pytest.mark.asyncio
async def test_all_strategies_failing_raises_element_not_found(fake_page):
    smart = SmartLocator(fake_page)
    element = smart.element("Ghost", test_id="ghost", structural="//div[@id='ghost']")

    with pytest.raises(ElementNotFoundError) as exc_info:
        await element.click(timeout=100)

    message = str(exc_info.value)
    assert "test_id: ghost" in message
    assert "structural: //div[@id='ghost']" in message
    assert not [a for a in fake_page.actions if a[0] == "click"]


@pytest.mark.asyncio
async def test_ambiguous_match_counts_as_failed_strategy(fake_page):
    fake_page.add("test_id", "card-name", FakeElement("A"), FakeElement("B"))
    smart = SmartLocator(fake_page)

    with pytest.raises(ElementNotFoundError, match="strict mode"):
        await smart.element("Any Card", test_id="card-name").locate(timeout=100)


@pytest.mark.asyncio
async def test_is_visible_does_not_wait(fake_page):
    fake_page.add("test_id", "hidden", FakeElement(visible=False))
    smart = SmartLocator(fake_page)

    assert await smart.element("Hidden", test_id="hidden").is_visible() is False
    assert await smart.element("Missing", test_id="missing").is_visible() is False
    assert fake_page.waits == []


@pytest.mark.asyncio
async def test_collection_reads_are_live(fake_page):
    cards = [FakeElement("Alpha")]
    fake_page.add_dynamic("structural", "//li", lambda: cards)
    element = SmartLocator(fake_page).element("Cards", structural="//li")

    assert await element.count() == 1
    cards.append(FakeElement("Beta"))
    assert await element.count() == 2
    assert await element.all_inner_texts() == ["Alpha", "Beta"]


@pytest.mark.asyncio
async def test_library_mode_uses_named_locators(fake_page):
    fake_page.add("structural", "#username", FakeElement())
    smart = SmartLocator(fake_page)

    await smart.fill("username_input", "qa@example.test")

    assert fake_page.actions == [("fill", ("structural", "#username"), "qa@example.test")]


@pytest.mark.asyncio
async def test_unknown_element_and_strategy(fake_page):
    smart = SmartLocator(fake_page)

    with pytest.raises(ElementNotFoundError, match="No locators defined"):
        await smart.locate("no_such_element")

    with pytest.raises(ValueError, match="Unknown locator strategies"):
        await smart.locate({"css": ".x"}, element_name="Bad")
