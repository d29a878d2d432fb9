"""
================================================================================
Allure Report Utilities
================================================================================

Attachment helpers used by the outcome reporter and page objects, plus
HTML report generation through the Allure command line.

================================================================================
"""

import json
import subprocess
from pathlib import Path
from typing import Any, Optional

import allure
from loguru import logger


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_json(data: Any, name: str = "Data"):
    """
    Attach JSON data to Allure report.

    Args:
        data: Data to attach (will be JSON serialized)
        name: Attachment name
    """
    json_str = json.dumps(data, indent=2, default=str)
    allure.attach(
        json_str,
        name=name,
        attachment_type=allure.attachment_type.JSON
    )


def attach_text(text: str, name: str = "Text"):
    """
    Attach text content to Allure report.

    Args:
        text: Text to attach
        name: Attachment name
    """
    allure.attach(
        text,
        name=name,
        attachment_type=allure.attachment_type.TEXT
    )


# ================================================================================
# Report Generation
# ================================================================================

def generate_allure_report(results_dir: Path, output_dir: Optional[Path] = None) -> bool:
    """
    Generate Allure HTML report from results.

    Args:
        results_dir: Path to allure-results directory
        output_dir: Output directory (defaults to sibling 'allure-report')

    Returns:
        True if successful
    """
    results_dir = Path(results_dir)
    output_dir = Path(output_dir or results_dir.parent / "allure-report")

    cmd = [
        "allure", "generate",
        str(results_dir),
        "-o", str(output_dir),
        "--clean"
    ]

    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except FileNotFoundError:
        logger.warning("Allure CLI not found. Please install Allure to generate reports.")
        return False

    if result.returncode != 0:
        logger.error(f"Report generation failed: {result.stderr}")
        return False

    logger.info(f"Report generated at {output_dir}")
    return True


__all__ = [
    "attach_json",
    "attach_text",
    "generate_allure_report",
]
