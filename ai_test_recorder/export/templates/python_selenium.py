"""Python Selenium export template."""

from .base import BaseTemplate


class PythonSeleniumTemplate(BaseTemplate):
    """Template for a Selenium WebDriver script."""

    language = "python"
    framework = "selenium"
    file_extension = ".py"

    def generate_preamble(self) -> list[str]:
        return [
            "from selenium import webdriver",
            "from selenium.webdriver.common.by import By",
            "",
            "driver = webdriver.Chrome()",
            "driver.get('REPLACE_URL')",
        ]

    def generate_click(self, selector: str) -> str:
        return f'driver.find_element(By.CSS_SELECTOR, "{selector}").click()'

    def generate_input(self, selector: str, value: str) -> str:
        return f'driver.find_element(By.CSS_SELECTOR, "{selector}").send_keys("{value}")'

    def generate_postamble(self) -> list[str]:
        return ["driver.quit()"]
