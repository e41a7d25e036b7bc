"""TypeScript Selenium export template."""

from .javascript_selenium import JavaScriptSeleniumTemplate


class TypeScriptSeleniumTemplate(JavaScriptSeleniumTemplate):
    """Template for a selenium-webdriver script using ES module imports."""

    language = "typescript"
    file_extension = ".ts"

    def generate_imports(self) -> list[str]:
        return [
            "import { Builder, By } from 'selenium-webdriver';",
            "import * as chrome from 'selenium-webdriver/chrome';",
        ]
