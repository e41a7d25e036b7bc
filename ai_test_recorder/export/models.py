"""Data models for test script export."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SupportedLanguage(str, Enum):
    """Supported output languages."""

    PYTHON = "python"
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"


class SupportedFramework(str, Enum):
    """Supported browser automation frameworks."""

    PLAYWRIGHT = "playwright"
    SELENIUM = "selenium"


# File extensions for each language
FILE_EXTENSIONS = {
    SupportedLanguage.PYTHON: ".py",
    SupportedLanguage.JAVASCRIPT: ".js",
    SupportedLanguage.TYPESCRIPT: ".ts",
}


# Packages the generated script needs, per framework and language
FRAMEWORK_DEPENDENCIES = {
    (SupportedFramework.PLAYWRIGHT, SupportedLanguage.PYTHON): ["playwright"],
    (SupportedFramework.PLAYWRIGHT, SupportedLanguage.JAVASCRIPT): ["playwright"],
    (SupportedFramework.PLAYWRIGHT, SupportedLanguage.TYPESCRIPT): ["playwright", "typescript"],
    (SupportedFramework.SELENIUM, SupportedLanguage.PYTHON): ["selenium"],
    (SupportedFramework.SELENIUM, SupportedLanguage.JAVASCRIPT): ["selenium-webdriver"],
    (SupportedFramework.SELENIUM, SupportedLanguage.TYPESCRIPT): ["selenium-webdriver", "typescript"],
}


def parse_language(value: Any) -> SupportedLanguage | None:
    """Case-insensitive lookup; None for unknown values."""
    if isinstance(value, SupportedLanguage):
        return value
    if not isinstance(value, str):
        return None
    try:
        return SupportedLanguage(value.strip().lower())
    except ValueError:
        return None


def parse_framework(value: Any) -> SupportedFramework | None:
    """Case-insensitive lookup; None for unknown values."""
    if isinstance(value, SupportedFramework):
        return value
    if not isinstance(value, str):
        return None
    try:
        return SupportedFramework(value.strip().lower())
    except ValueError:
        return None


@dataclass
class ExportResult:
    """Generated script plus what a caller needs to save and run it.

    ``success`` is False only when no template exists for the requested
    framework/language pair; ``code`` is then empty and ``error`` says why.
    """

    success: bool
    code: str = ""
    framework: SupportedFramework | None = None
    language: SupportedLanguage | None = None
    dependencies: list[str] = field(default_factory=list)
    event_count: int = 0
    step_count: int = 0  # Events that produced a line of code
    error: str | None = None

    @property
    def file_extension(self) -> str:
        return FILE_EXTENSIONS.get(self.language, ".txt")

    def suggested_filename(self, stem: str = "recorded_test") -> str:
        """File name for saving the script, e.g. ``recorded_test.py``."""
        return f"{stem}{self.file_extension}"

    def to_dict(self) -> dict:
        """camelCase form for the recorder panel."""
        if not self.success:
            return {"success": False, "error": self.error}
        return {
            "success": True,
            "code": self.code,
            "framework": self.framework.value,
            "language": self.language.value,
            "fileExtension": self.file_extension,
            "dependencies": list(self.dependencies),
            "eventCount": self.event_count,
            "stepCount": self.step_count,
        }
