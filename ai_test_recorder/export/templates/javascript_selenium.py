"""JavaScript Selenium export template."""

from .base import BaseTemplate


class JavaScriptSeleniumTemplate(BaseTemplate):
    """Template for a selenium-webdriver script (CommonJS)."""

    language = "javascript"
    framework = "selenium"
    file_extension = ".js"

    def generate_imports(self) -> list[str]:
        return [
            "const { Builder, By } = require('selenium-webdriver');",
            "const chrome = require('selenium-webdriver/chrome');",
        ]

    def generate_preamble(self) -> list[str]:
        return [
            *self.generate_imports(),
            "",
            "(async () => {",
            f"{self.indent}const driver = await new Builder()",
            f"{self.indent * 2}.forBrowser('chrome')",
            f"{self.indent * 2}.setChromeOptions(new chrome.Options().addArguments('--headless=new'))",
            f"{self.indent * 2}.build();",
            f"{self.indent}await driver.get('REPLACE_URL');",
        ]

    def generate_click(self, selector: str) -> str:
        return f'{self.indent}await driver.findElement(By.css("{selector}")).click();'

    def generate_input(self, selector: str, value: str) -> str:
        return f'{self.indent}await driver.findElement(By.css("{selector}")).sendKeys("{value}");'

    def generate_postamble(self) -> list[str]:
        return [
            f"{self.indent}await driver.quit();",
            "})();",
        ]
