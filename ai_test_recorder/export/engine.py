"""Export Engine - turns recorded events into runnable test scripts."""

from typing import Any, Iterable

import structlog

from ..recording.models import RecordedEvent
from .models import (
    FRAMEWORK_DEPENDENCIES,
    ExportResult,
    SupportedFramework,
    SupportedLanguage,
    parse_framework,
    parse_language,
)
from .templates import (
    BaseTemplate,
    JavaScriptPlaywrightTemplate,
    JavaScriptSeleniumTemplate,
    PythonPlaywrightTemplate,
    PythonSeleniumTemplate,
    TypeScriptPlaywrightTemplate,
    TypeScriptSeleniumTemplate,
)

logger = structlog.get_logger()


# Template registry mapping (framework, language) to template class
TEMPLATE_REGISTRY: dict[tuple[SupportedFramework, SupportedLanguage], type[BaseTemplate]] = {
    (SupportedFramework.PLAYWRIGHT, SupportedLanguage.PYTHON): PythonPlaywrightTemplate,
    (SupportedFramework.PLAYWRIGHT, SupportedLanguage.JAVASCRIPT): JavaScriptPlaywrightTemplate,
    (SupportedFramework.PLAYWRIGHT, SupportedLanguage.TYPESCRIPT): TypeScriptPlaywrightTemplate,
    (SupportedFramework.SELENIUM, SupportedLanguage.PYTHON): PythonSeleniumTemplate,
    (SupportedFramework.SELENIUM, SupportedLanguage.JAVASCRIPT): JavaScriptSeleniumTemplate,
    (SupportedFramework.SELENIUM, SupportedLanguage.TYPESCRIPT): TypeScriptSeleniumTemplate,
}


class ExportEngine:
    """Generates automation scripts from recorded events.

    Generation is a pure function of the events and the target combination:
    the same input always yields byte-identical output.

    Example:
        engine = ExportEngine()
        code = engine.generate(events, "selenium", "python")
    """

    def __init__(self):
        """Initialize the export engine."""
        self.log = logger.bind(component="export_engine")

    def get_template(self, framework: Any, language: Any) -> BaseTemplate | None:
        """Template instance for the combination, or None if unsupported."""
        fw = parse_framework(framework)
        lang = parse_language(language)
        if fw is None or lang is None:
            return None
        template_class = TEMPLATE_REGISTRY.get((fw, lang))
        return template_class() if template_class else None

    def generate(
        self,
        events: Iterable[RecordedEvent | dict[str, Any]],
        framework: Any,
        language: Any,
    ) -> str:
        """Generate a script, or an empty string for an unsupported combination."""
        template = self.get_template(framework, language)
        if template is None:
            self.log.debug("Unsupported export combination", framework=framework, language=language)
            return ""
        return template.generate(events or [])

    def export(
        self,
        events: Iterable[RecordedEvent | dict[str, Any]],
        framework: Any = "playwright",
        language: Any = "python",
    ) -> ExportResult:
        """Generate a script along with file and dependency information.

        Args:
            events: Recorded events in replay order
            framework: Target framework name
            language: Target language name

        Returns:
            ExportResult; ``success`` is False for unsupported combinations
        """
        fw = parse_framework(framework)
        lang = parse_language(language)
        template = self.get_template(fw, lang)
        if template is None:
            return ExportResult(
                success=False,
                language=lang,
                framework=fw,
                error=f"No template available for {framework}/{language}",
            )

        events = list(events or [])
        code = template.generate(events)
        steps = len(code.split("\n")) - len(template.generate_preamble()) - len(template.generate_postamble())

        self.log.info(
            "Export successful",
            framework=fw.value,
            language=lang.value,
            events=len(events),
            steps=steps,
        )

        return ExportResult(
            success=True,
            code=code,
            framework=fw,
            language=lang,
            dependencies=list(FRAMEWORK_DEPENDENCIES.get((fw, lang), [])),
            event_count=len(events),
            step_count=steps,
        )

    def get_supported_combinations(self) -> dict[str, list[str]]:
        """Get supported framework-language combinations.

        Returns:
            Dict mapping framework names to list of language names
        """
        combinations: dict[str, list[str]] = {}
        for fw, lang in TEMPLATE_REGISTRY:
            combinations.setdefault(fw.value, []).append(lang.value)
        return combinations


def generate_code(
    events: Iterable[RecordedEvent | dict[str, Any]],
    framework: Any,
    language: Any,
) -> str:
    """Quick generation function; empty string when unsupported."""
    return ExportEngine().generate(events, framework, language)
