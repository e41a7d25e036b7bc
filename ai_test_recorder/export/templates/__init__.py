"""Export templates for each framework/language combination."""

from .base import BaseTemplate
from .javascript_playwright import JavaScriptPlaywrightTemplate
from .javascript_selenium import JavaScriptSeleniumTemplate
from .python_playwright import PythonPlaywrightTemplate
from .python_selenium import PythonSeleniumTemplate
from .typescript_playwright import TypeScriptPlaywrightTemplate
from .typescript_selenium import TypeScriptSeleniumTemplate

__all__ = [
    "BaseTemplate",
    "PythonPlaywrightTemplate",
    "JavaScriptPlaywrightTemplate",
    "TypeScriptPlaywrightTemplate",
    "PythonSeleniumTemplate",
    "JavaScriptSeleniumTemplate",
    "TypeScriptSeleniumTemplate",
]
