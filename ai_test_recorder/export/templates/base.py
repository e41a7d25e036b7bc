"""Base template class for script export."""

from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional

from ...recording.models import ActionType, RecordedEvent


class BaseTemplate(ABC):
    """Base class for export templates.

    Each framework/language combination renders a fixed preamble, one line per
    supported action and a fixed postamble. Only click and input produce code;
    other actions are skipped.
    """

    # Override these in subclasses
    language: str = "unknown"
    framework: str = "unknown"
    file_extension: str = ".txt"
    indent: str = "  "

    @abstractmethod
    def generate_preamble(self) -> list[str]:
        """Imports and browser setup."""
        pass

    @abstractmethod
    def generate_click(self, selector: str) -> str:
        """Code for a click on ``selector``."""
        pass

    @abstractmethod
    def generate_input(self, selector: str, value: str) -> str:
        """Code for typing ``value`` into ``selector``."""
        pass

    @abstractmethod
    def generate_postamble(self) -> list[str]:
        """Browser teardown."""
        pass

    def generate_step_code(self, event: RecordedEvent) -> Optional[str]:
        """Generate the line for one event, or None for unsupported actions."""
        selector = self.escape_string(event.resolved_selector())
        if event.action == ActionType.CLICK.value:
            return self.generate_click(selector)
        if event.action == ActionType.INPUT.value:
            return self.generate_input(selector, self.escape_string(event.value or ""))
        return None

    def generate(self, events: Iterable[RecordedEvent | dict[str, Any]]) -> str:
        """Generate the complete script.

        Args:
            events: Recorded events in replay order

        Returns:
            Script source, lines joined with newlines
        """
        lines = list(self.generate_preamble())
        for event in events:
            if isinstance(event, dict):
                event = RecordedEvent.from_dict(event)
            elif not isinstance(event, RecordedEvent):
                continue
            step_code = self.generate_step_code(event)
            if step_code:
                lines.append(step_code)
        lines.extend(self.generate_postamble())
        return "\n".join(lines)

    def escape_string(self, value: str) -> str:
        """Escape string for a double-quoted literal."""
        if value is None:
            return ""
        return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
