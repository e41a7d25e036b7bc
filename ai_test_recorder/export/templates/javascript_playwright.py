"""JavaScript Playwright export template."""

from .base import BaseTemplate


class JavaScriptPlaywrightTemplate(BaseTemplate):
    """Template for a Node.js Playwright script (CommonJS)."""

    language = "javascript"
    framework = "playwright"
    file_extension = ".js"

    def generate_imports(self) -> list[str]:
        return ["const { chromium } = require('playwright');"]

    def generate_preamble(self) -> list[str]:
        return [
            *self.generate_imports(),
            "",
            "(async () => {",
            f"{self.indent}const browser = await chromium.launch({{ headless: false }});",
            f"{self.indent}const page = await browser.newPage();",
        ]

    def generate_click(self, selector: str) -> str:
        return f'{self.indent}await page.click("{selector}");'

    def generate_input(self, selector: str, value: str) -> str:
        return f'{self.indent}await page.fill("{selector}", "{value}");'

    def generate_postamble(self) -> list[str]:
        return [
            f"{self.indent}await browser.close();",
            "})();",
        ]
