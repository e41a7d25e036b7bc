"""Python Playwright export template."""

from .base import BaseTemplate


class PythonPlaywrightTemplate(BaseTemplate):
    """Template for a sync Playwright script."""

    language = "python"
    framework = "playwright"
    file_extension = ".py"

    def generate_preamble(self) -> list[str]:
        return [
            "from playwright.sync_api import sync_playwright",
            "",
            "with sync_playwright() as p:",
            f"{self.indent}browser = p.chromium.launch(headless=False)",
            f"{self.indent}page = browser.new_page()",
        ]

    def generate_click(self, selector: str) -> str:
        return f'{self.indent}page.click("{selector}")'

    def generate_input(self, selector: str, value: str) -> str:
        return f'{self.indent}page.fill("{selector}", "{value}")'

    def generate_postamble(self) -> list[str]:
        return [f"{self.indent}browser.close()"]
