"""
================================================================================
Scenario Pipelines
================================================================================

Ordered scenario definitions executed by `ScenarioRunner`.

    - trello_flow: login -> board -> lists -> cards -> dates -> drag -> archive

================================================================================
"""

from .trello_flow import pipeline

__all__ = [
    "pipeline",
]
