"""
================================================================================
Boards Page Object (Async / Playwright)
================================================================================

Board, list and card operations on the kanban board screen.

Key Features:
- Board/list/card creation through the inline composers
- Due date assignment from the card detail panel
- Drag and drop between and within lists
- Archival through the quick card editor
- Live reads (names, counts, positions, visibility); nothing is cached

================================================================================
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import allure
from loguru import logger

from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.framework.smart_locator import SmartElement, xpath_literal


NOT_FOUND = -1


def find_card_index(card_texts: Sequence[str], card_name: str) -> int:
    """
    Position of the first card whose text contains `card_name`.

    Card texts include badges (due dates, checklists), so the match is a
    substring match. Card names within one list must not be prefixes of
    each other.

    Returns:
        0-based index, or NOT_FOUND (-1)
    """
    for index, text in enumerate(card_texts):
        if card_name in text:
            return index
    return NOT_FOUND


def _list_xpath(list_name: str) -> str:
    return (
        f"//h2[@data-testid='list-name' and text()={xpath_literal(list_name)}]"
        "/ancestor::div[@data-testid='list']"
    )


class BoardsPage(PageBase):
    """
    Page Object for the boards screen and an open board.

    Static elements are properties; elements that depend on a list or card
    name are methods.
    """

    PAGE_TITLE = "Boards | Trello"

    # ============================================================
    # Page Elements
    # ============================================================

    @property
    def create_button(self) -> SmartElement:
        """'Create' button in the header."""
        return self.smart_locator("Create Button", test_id="AddIcon")

    @property
    def create_board_option(self) -> SmartElement:
        """'Create board' entry of the create menu."""
        return self.smart_locator(
            "Create Board Option",
            structural="//span[text()='Create board']",
        )

    @property
    def board_title_input(self) -> SmartElement:
        return self.smart_locator("Board Title Input", test_id="create-board-title-input")

    @property
    def submit_board_button(self) -> SmartElement:
        return self.smart_locator("Submit Board Button", test_id="create-board-submit-button")

    @property
    def board_name_display(self) -> SmartElement:
        return self.smart_locator("Board Name", test_id="board-name-display")

    @property
    def list_composer_button(self) -> SmartElement:
        """'Add another list' button that opens the list composer."""
        return self.smart_locator("List Composer Button", test_id="list-composer-button")

    @property
    def list_name_input(self) -> SmartElement:
        return self.smart_locator("List Name Input", placeholder="Enter list name…")

    @property
    def submit_list_button(self) -> SmartElement:
        return self.smart_locator("Submit List Button", test_id="list-composer-add-list-button")

    @property
    def card_name_input(self) -> SmartElement:
        return self.smart_locator("Card Name Input", test_id="list-card-composer-textarea")

    @property
    def submit_card_button(self) -> SmartElement:
        return self.smart_locator("Submit Card Button", test_id="list-card-composer-add-card-button")

    @property
    def dates_button(self) -> SmartElement:
        """'Dates' button on the card detail panel."""
        return self.smart_locator("Dates Button", test_id="card-back-due-date-button")

    @property
    def start_date_checkbox(self) -> SmartElement:
        return self.smart_locator(
            "Start Date Checkbox",
            structural=(
                "xpath=//label[text()='Start date']"
                "/following-sibling::label[@data-testid='clickable-checkbox']"
            ),
        )

    @property
    def due_date_checkbox(self) -> SmartElement:
        return self.smart_locator(
            "Due Date Checkbox",
            structural=(
                "xpath=//label[text()='Due date']"
                "/following-sibling::label[@data-testid='clickable-checkbox']"
            ),
        )

    @property
    def save_date_button(self) -> SmartElement:
        return self.smart_locator("Save Date Button", test_id="save-date-button")

    @property
    def close_dialog_button(self) -> SmartElement:
        return self.smart_locator("Close Card Details", label="Close dialog")

    @property
    def start_date_badge(self) -> SmartElement:
        """Date text of the first not-completed due date badge on the board."""
        return self.smart_locator(
            "Start Date Badge",
            structural=(
                "xpath=(//li[@data-testid='list-card']"
                "//span[@data-testid='badge-due-date-not-completed']/span[last()])[1]"
            ),
        )

    @property
    def archive_button(self) -> SmartElement:
        """'Archive' action of the quick card editor."""
        return self.smart_locator("Archive Button", test_id="quick-card-editor-archive")

    def list_header(self, list_name: str) -> SmartElement:
        return self.smart_locator(
            f"List '{list_name}'",
            structural=f"xpath=//h2[@data-testid='list-name' and text()={xpath_literal(list_name)}]",
        )

    def add_card_button(self, list_name: str) -> SmartElement:
        """'Add a card' affordance at the bottom of a list."""
        return self.smart_locator(
            f"Add Card Button '{list_name}'",
            structural=f"xpath={_list_xpath(list_name)}//button[@data-testid='list-add-card-button']",
        )

    def card(self, card_name: str) -> SmartElement:
        return self.smart_locator(
            f"Card '{card_name}'",
            structural=f"xpath=//*[@data-testid='card-name' and text()={xpath_literal(card_name)}]",
        )

    def card_in_list(self, list_name: str, card_name: str) -> SmartElement:
        """A named card, matched only inside the given list."""
        return self.smart_locator(
            f"Card '{card_name}' in '{list_name}'",
            structural=(
                f"xpath={_list_xpath(list_name)}/ol[@data-testid='list-cards']"
                f"/li[.//*[@data-testid='card-name' and text()={xpath_literal(card_name)}]]"
            ),
        )

    def cards_in_list(self, list_name: str) -> SmartElement:
        """Every card of a list, in display order (use locate_all/count)."""
        return self.smart_locator(
            f"Cards in '{list_name}'",
            structural=f"xpath={_list_xpath(list_name)}/ol[@data-testid='list-cards']/li",
        )

    def first_card_in_list(self, list_name: str) -> SmartElement:
        return self.smart_locator(
            f"First card in '{list_name}'",
            structural=f"xpath=({_list_xpath(list_name)}/ol[@data-testid='list-cards']/li)[1]",
        )

    # ============================================================
    # Composed Actions
    # ============================================================

    @allure.step("Create board '{board_name}'")
    async def create_board(self, board_name: str) -> None:
        """Open the create menu, choose 'Create board', name it and submit."""
        await self.create_button.click(timeout=self.timeout)
        await self.create_board_option.click(timeout=self.timeout)
        await self.board_title_input.fill(board_name, timeout=self.timeout)
        await self.submit_board_button.click(timeout=self.timeout)
        logger.info(f"Board created: {board_name}")

    @allure.step("Add list '{list_name}'")
    async def add_list_to_board(self, list_name: str) -> None:
        """
        Add a list to the open board.

        The list composer stays open after a submission, so the composer
        button is only clicked when it is showing.
        """
        if await self.list_composer_button.is_visible():
            await self.list_composer_button.click(timeout=self.timeout)
        await self.list_name_input.fill(list_name, timeout=self.timeout)
        await self.submit_list_button.click(timeout=self.timeout)
        logger.info(f"List added: {list_name}")

    @allure.step("Add card '{card_name}' to list '{list_name}'")
    async def add_card_to_list(self, list_name: str, card_name: str) -> None:
        await self.add_card_button(list_name).click(timeout=self.timeout)
        await self.card_name_input.fill(card_name, timeout=self.timeout)
        await self.submit_card_button.click(timeout=self.timeout)
        logger.info(f"Card added: {card_name} -> {list_name}")

    @allure.step("Add start and due date to card '{card_name}'")
    async def add_date_to_card(self, card_name: str) -> None:
        """
        Enable start and due dates on a card and close its detail panel.

        A failure part-way leaves the detail panel open.
        """
        await self.card(card_name).click(timeout=self.timeout)
        await self.dates_button.click(timeout=self.timeout)
        await self.start_date_checkbox.click(timeout=self.timeout)
        await self.due_date_checkbox.click(timeout=self.timeout)
        await self.save_date_button.click(timeout=self.timeout)
        await self.close_dialog_button.click(timeout=self.timeout)

    @allure.step("Drag card '{card_name}' to list '{destination_list}'")
    async def drag_card_between_lists(
        self,
        card_name: str,
        destination_list: str,
        before_card: Optional[str] = None,
    ) -> None:
        """
        Move a card to another list with one drag gesture.

        Args:
            card_name: Card to move
            destination_list: List that receives the card
            before_card: Card in the destination list to drop onto; when
                None the card is dropped on the list's 'Add a card' button
        """
        if before_card is None:
            target = self.add_card_button(destination_list)
        else:
            target = self.card_in_list(destination_list, before_card)
        await self.drag(self.card(card_name), target)

    @allure.step("Drag card '{card_name}' to the top of list '{list_name}'")
    async def drag_card_within_list(self, card_name: str, list_name: str) -> None:
        await self.drag(self.card(card_name), self.first_card_in_list(list_name))

    @allure.step("Archive card '{card_name}'")
    async def archive_card_in_list(self, card_name: str) -> None:
        """Open the quick card editor with a right click and archive."""
        await self.card(card_name).click(timeout=self.timeout, button="right")
        await self.archive_button.click(timeout=self.timeout)
        logger.info(f"Card archived: {card_name}")

    # ============================================================
    # Reads
    # ============================================================

    async def get_board_name(self) -> str:
        return await self.board_name_display.inner_text(timeout=self.timeout)

    async def get_list_name(self, list_name: str) -> str:
        return await self.list_header(list_name).inner_text(timeout=self.timeout)

    async def get_card_name(self, card_name: str) -> str:
        return await self.card(card_name).inner_text(timeout=self.timeout)

    async def get_start_date_in_list(self) -> str:
        return await self.start_date_badge.inner_text(timeout=self.timeout)

    async def get_card_texts_in_list(self, list_name: str) -> List[str]:
        return await self.cards_in_list(list_name).all_inner_texts()

    async def get_card_index_in_list(self, card_name: str, list_name: str) -> int:
        """0-based position of a card in a list, NOT_FOUND (-1) when absent."""
        return find_card_index(await self.get_card_texts_in_list(list_name), card_name)

    async def get_number_of_cards_in_list(self, list_name: str) -> int:
        return await self.cards_in_list(list_name).count()

    async def is_card_visible_in_list(self, card_name: str) -> bool:
        return await self.card(card_name).is_visible()
