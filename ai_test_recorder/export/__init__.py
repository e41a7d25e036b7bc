"""Test script export for recorded events.

Renders Playwright or Selenium scripts in Python, JavaScript or TypeScript.
"""

from .engine import TEMPLATE_REGISTRY, ExportEngine, generate_code
from .models import (
    FILE_EXTENSIONS,
    FRAMEWORK_DEPENDENCIES,
    ExportResult,
    SupportedFramework,
    SupportedLanguage,
    parse_framework,
    parse_language,
)

__all__ = [
    "ExportEngine",
    "generate_code",
    "TEMPLATE_REGISTRY",
    "ExportResult",
    "SupportedFramework",
    "SupportedLanguage",
    "FILE_EXTENSIONS",
    "FRAMEWORK_DEPENDENCIES",
    "parse_framework",
    "parse_language",
]
