"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for the kanban board application.

Each page class encapsulates:
    - Element locators
    - Page-specific composed actions
    - Live reads used by scenario assertions

Author: Automation Team
License: MIT
================================================================================
"""

from .login_page import LoginPage
from .boards_page import BoardsPage

__all__ = [
    "LoginPage",
    "BoardsPage",
]
