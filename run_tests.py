#!/usr/bin/env python3
# ================================================================================
# Test Runner Script
# ================================================================================
#
# Main entry point for executing the kanban board suites.
#
# Features:
#   - Run the browser-free unit suite
#   - Run the end-to-end board flow against a live board application
#   - Pick browser and headed mode for the board flow
#   - Generate Allure reports
#
# Usage:
#   python run_tests.py --suite unit
#   python run_tests.py --suite e2e --browser firefox --no-headless
#   python run_tests.py --suite all --tags P0 --no-allure
#
# ================================================================================

import argparse
import os
import subprocess
import sys
from pathlib import Path
from typing import Dict, List

from loguru import logger

from kanban_tools.report_tools.allure_utils import generate_allure_report


# Configure logging
logger.remove()
logger.add(
    sys.stdout,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    level="INFO"
)

SUITE_PATHS = {
    "unit": ["testsuites/unit"],
    "e2e": ["testsuites/ui_testing/tests"],
    "all": ["testsuites/unit", "testsuites/ui_testing/tests"],
}


class TestRunner:
    """
    Main test runner class for orchestrating test execution.

    Browser options are handed to the suite through the environment
    (BROWSER_TYPE, BROWSER_HEADLESS), the same overrides the config
    loader reads.
    """

    # Not a test class
    __test__ = False

    def __init__(
        self,
        suite: str = "unit",
        tags: List[str] = None,
        browser: str = "chromium",
        headless: bool = True,
        allure_report: bool = True,
        verbose: bool = False
    ):
        """
        Initialize test runner.

        Args:
            suite: Test suite to run - "unit", "e2e", "all"
            tags: List of pytest markers to filter tests
            browser: Browser for the board flow - "chromium", "firefox", "webkit"
            headless: Run browser in headless mode
            allure_report: Generate Allure report
            verbose: Enable verbose output
        """
        self.suite = suite
        self.tags = tags or []
        self.browser = browser
        self.headless = headless
        self.allure_report = allure_report
        self.verbose = verbose

        # Paths
        self.root_dir = Path(__file__).parent
        self.reports_dir = self.root_dir / "reports"
        self.allure_results = self.reports_dir / "allure-results"
        self.allure_report_dir = self.reports_dir / "allure-report"

    @property
    def runs_browser(self) -> bool:
        return self.suite in ("e2e", "all")

    def run(self) -> int:
        """
        Execute the test run.

        Returns:
            Exit code of pytest (0 for success)
        """
        logger.info("=" * 60)
        logger.info("Starting Test Execution")
        logger.info("=" * 60)
        logger.info(f"Suite: {self.suite}")
        logger.info(f"Tags: {self.tags or 'All'}")
        if self.runs_browser:
            logger.info(f"Browser: {self.browser}")
            logger.info(f"Headless: {self.headless}")
        logger.info("=" * 60)

        self._prepare_environment()

        cmd = self._build_pytest_command()
        logger.info(f"Executing: {' '.join(cmd)}")

        result = subprocess.run(cmd, cwd=str(self.root_dir), env=self._build_env())
        exit_code = result.returncode

        if self.allure_report:
            logger.info("Generating Allure report...")
            generate_allure_report(self.allure_results, self.allure_report_dir)

        self._print_summary(exit_code)
        return exit_code

    def _prepare_environment(self) -> None:
        """Prepare test environment."""
        self.reports_dir.mkdir(parents=True, exist_ok=True)
        if self.allure_report:
            self.allure_results.mkdir(parents=True, exist_ok=True)
        logger.debug("Environment prepared")

    def _build_env(self) -> Dict[str, str]:
        env = dict(os.environ)
        if self.runs_browser:
            env["BROWSER_TYPE"] = self.browser
            env["BROWSER_HEADLESS"] = "true" if self.headless else "false"
        return env

    def _build_pytest_command(self) -> List[str]:
        """Build the pytest command with all options."""
        cmd = [sys.executable, "-m", "pytest"]
        cmd.extend(SUITE_PATHS[self.suite])

        if self.runs_browser:
            cmd.append("--run-e2e")

        # Add tags filter
        if self.tags:
            marker_expr = " or ".join(self.tags)
            cmd.extend(["-m", marker_expr])

        if self.allure_report:
            cmd.extend(["--alluredir", str(self.allure_results), "--clean-alluredir"])

        cmd.append("-v" if self.verbose else "-q")
        return cmd

    def _print_summary(self, exit_code: int) -> None:
        """Print test execution summary."""
        logger.info("=" * 60)
        if exit_code == 0:
            logger.info("✅ TEST EXECUTION COMPLETED SUCCESSFULLY")
        else:
            logger.error(f"❌ TEST EXECUTION FAILED (exit code: {exit_code})")

        if self.allure_report:
            logger.info(f"📊 Report available at: {self.allure_report_dir}")
        logger.info(f"📄 Run report: {self.reports_dir}/KanbanReport_*.html")

        logger.info("=" * 60)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Kanban Board UI Test Runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the browser-free unit suite
  python run_tests.py --suite unit

  # Run the board flow with a visible Firefox window
  python run_tests.py --suite e2e --no-headless --browser firefox

  # Run P0 tests of every suite without Allure
  python run_tests.py --suite all --tags P0 --no-allure
        """
    )

    parser.add_argument(
        "--suite",
        choices=sorted(SUITE_PATHS),
        default="unit",
        help="Test suite to run (default: unit)"
    )

    parser.add_argument(
        "--tags",
        nargs="+",
        default=[],
        help="Pytest markers to filter tests (e.g., P0 smoke board)"
    )

    parser.add_argument(
        "--browser",
        choices=["chromium", "firefox", "webkit"],
        default="chromium",
        help="Browser for the board flow (default: chromium)"
    )

    parser.add_argument(
        "--no-headless",
        action="store_true",
        help="Run browser in headed mode (visible)"
    )

    parser.add_argument(
        "--no-allure",
        action="store_true",
        help="Disable Allure results and report generation"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    return parser


def main():
    """Main entry point."""
    args = build_parser().parse_args()

    runner = TestRunner(
        suite=args.suite,
        tags=args.tags,
        browser=args.browser,
        headless=not args.no_headless,
        allure_report=not args.no_allure,
        verbose=args.verbose
    )

    sys.exit(runner.run())


if __name__ == "__main__":
    main()
