"""TypeScript Playwright export template."""

from .javascript_playwright import JavaScriptPlaywrightTemplate


class TypeScriptPlaywrightTemplate(JavaScriptPlaywrightTemplate):
    """Template for a Playwright script using ES module imports."""

    language = "typescript"
    file_extension = ".ts"

    def generate_imports(self) -> list[str]:
        return ["import { chromium } from 'playwright';"]
