"""
================================================================================
Trello Board Flow
================================================================================

End-to-end board flow on one shared session. Each scenario starts from
the UI state left by the previous one:

    1. login                      provides logged_in
    2. create board               provides board_created
    3. add lists (x2)             provides lists_created
    4. add cards (x2)             provides cards_created
    5. add date to a card
    6. drag card between lists    provides card_moved
    7. drag card within a list
    8. archive a card

================================================================================
"""

from __future__ import annotations

from datetime import date

from testsuites.ui_testing.framework.scenario_runner import ScenarioContext, ScenarioPipeline
from testsuites.ui_testing.pages.boards_page import BoardsPage


BOARD_NAME = "Bob's Pool Maintenance"
PROSPECTS = "Prospects"
IN_PROGRESS = "In Progress"
AMSTERDAM_CARD = "Public Pool Amsterdam Renovation"
DELFT_CARD = "New Public Pool - Delft"

pipeline = ScenarioPipeline("Trello board flow")


@pipeline.scenario("Login with Valid User Credentials", provides={"logged_in"})
async def login_with_valid_credentials(ctx: ScenarioContext) -> None:
    ctx.log("Performing user login.")
    await ctx.login_page.login(ctx.settings.username, ctx.settings.password)

    ctx.log("Waiting for Boards page to load.")
    await ctx.boards_page.wait_for_url("**/boards")

    assert await ctx.boards_page.page_title() == BoardsPage.PAGE_TITLE


@pipeline.scenario(
    "Create Trello Board",
    requires={"logged_in"},
    provides={"board_created"},
)
async def create_board(ctx: ScenarioContext) -> None:
    ctx.log("Creating new board.")
    await ctx.boards_page.create_board(BOARD_NAME)

    assert await ctx.boards_page.get_board_name() == BOARD_NAME


@pipeline.scenario(
    "Add List on Board: {list_name}",
    requires={"board_created"},
    provides={"lists_created"},
    params=[{"list_name": PROSPECTS}, {"list_name": IN_PROGRESS}],
)
async def add_list_on_board(ctx: ScenarioContext, list_name: str) -> None:
    ctx.log("Adding a new list to the board.")
    await ctx.boards_page.add_list_to_board(list_name)

    assert await ctx.boards_page.get_list_name(list_name) == list_name


@pipeline.scenario(
    "Add Card '{card_name}' to List '{list_name}'",
    requires={"lists_created"},
    provides={"cards_created"},
    params=[
        {"list_name": PROSPECTS, "card_name": AMSTERDAM_CARD},
        {"list_name": IN_PROGRESS, "card_name": DELFT_CARD},
    ],
)
async def add_card_to_list(ctx: ScenarioContext, list_name: str, card_name: str) -> None:
    ctx.log("Adding a new card to the list.")
    await ctx.boards_page.add_card_to_list(list_name, card_name)

    assert await ctx.boards_page.get_card_name(card_name) == card_name


@pipeline.scenario("Add date to the card", requires={"cards_created"})
async def add_date_to_card(ctx: ScenarioContext) -> None:
    expected_date_in_list = date.today().strftime("%b %d")

    ctx.log("Adding a date to the card.")
    await ctx.boards_page.add_date_to_card(AMSTERDAM_CARD)

    ctx.log("Getting start date.")
    actual_date = await ctx.boards_page.get_start_date_in_list()

    assert expected_date_in_list in actual_date, (
        f"Expected '{expected_date_in_list}' in badge text '{actual_date}'"
    )


@pipeline.scenario(
    "Drag a card between lists",
    requires={"cards_created"},
    provides={"card_moved"},
)
async def drag_card_between_lists(ctx: ScenarioContext) -> None:
    ctx.log("Drag a card between lists.")
    await ctx.boards_page.drag_card_between_lists(AMSTERDAM_CARD, IN_PROGRESS)

    ctx.log("Take current position of the selected card.")
    position = await ctx.boards_page.get_card_index_in_list(AMSTERDAM_CARD, IN_PROGRESS)

    ctx.log("Get total number of cards in the list.")
    number_of_cards = await ctx.boards_page.get_number_of_cards_in_list(IN_PROGRESS)

    assert (position, number_of_cards) == (1, 2), (
        f"Expected position 1 of 2 cards, got position {position} of {number_of_cards}"
    )


@pipeline.scenario("Move a selected card within a list", requires={"card_moved"})
async def drag_card_within_list(ctx: ScenarioContext) -> None:
    ctx.log("Move a card within a selected list.")
    await ctx.boards_page.drag_card_within_list(AMSTERDAM_CARD, IN_PROGRESS)

    ctx.log("Take current position of the selected card.")
    position = await ctx.boards_page.get_card_index_in_list(AMSTERDAM_CARD, IN_PROGRESS)

    ctx.log("Get total number of cards in the list.")
    number_of_cards = await ctx.boards_page.get_number_of_cards_in_list(IN_PROGRESS)

    assert (position, number_of_cards) == (0, 2), (
        f"Expected position 0 of 2 cards, got position {position} of {number_of_cards}"
    )


@pipeline.scenario("Archive a card in a list", requires={"card_moved"})
async def archive_card_in_list(ctx: ScenarioContext) -> None:
    ctx.log("Archive a card from the list.")
    await ctx.boards_page.archive_card_in_list(DELFT_CARD)

    ctx.log("Get total number of cards in the list.")
    number_of_cards = await ctx.boards_page.get_number_of_cards_in_list(IN_PROGRESS)
    still_visible = await ctx.boards_page.is_card_visible_in_list(DELFT_CARD)

    assert number_of_cards == 1, f"Expected 1 card in '{IN_PROGRESS}', got {number_of_cards}"
    assert not still_visible, f"Archived card '{DELFT_CARD}' is still visible"
