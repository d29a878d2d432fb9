"""
Test suites package.

Kept importable so `run_tests.py`, IDEs and the unit tests can reach the
framework, page objects and scenario pipelines:

  - ui_testing: Playwright framework, page objects, the board flow
  - unit: browser-free tests backed by fake engine handles
"""
