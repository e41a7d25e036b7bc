"""Tests for the command-line interface."""

import json

import pytest

from ai_test_recorder.main import EXIT_FAILED, EXIT_OK, EXIT_USAGE, cli


@pytest.fixture
def events_file(tmp_path):
    path = tmp_path / "events.json"
    path.write_text(json.dumps({
        "events": [
            {"action": "click", "primarySelector": "#go"},
            {"action": "input", "primarySelector": "#box", "value": "hi"},
        ]
    }))
    return path


class TestCodegenCommand:
    """Tests for the codegen subcommand."""

    def test_prints_script(self, clean_env, events_file, capsys):
        code = cli(["codegen", str(events_file), "--framework", "selenium", "--language", "python"])

        out = capsys.readouterr().out
        assert code == EXIT_OK
        assert 'driver.find_element(By.CSS_SELECTOR, "#box").send_keys("hi")' in out

    def test_missing_file(self, clean_env, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            cli(["codegen", str(tmp_path / "nope.json")])

        assert exc_info.value.code == EXIT_USAGE

    def test_unknown_framework(self, clean_env, events_file):
        with pytest.raises(SystemExit) as exc_info:
            cli(["codegen", str(events_file), "--framework", "cypress"])

        assert exc_info.value.code == EXIT_USAGE


class TestNormalizeCommand:
    """Tests for the normalize subcommand."""

    def test_prints_candidates(self, clean_env, tmp_path, capsys):
        path = tmp_path / "response.txt"
        path.write_text('```json\n{"selectors": ["#a", "#a", "#b"]}\n```')

        code = cli(["normalize", str(path)])

        data = json.loads(capsys.readouterr().out)
        assert code == EXIT_OK
        assert [c["selector"] for c in data["candidates"]] == ["#a", "#b"]

    def test_empty_response(self, clean_env, tmp_path, capsys):
        path = tmp_path / "response.txt"
        path.write_text("{}")

        assert cli(["normalize", str(path)]) == EXIT_FAILED


class TestSuggestCommand:
    """Tests for the suggest subcommand."""

    def test_without_endpoint(self, clean_env, tmp_path, capsys):
        path = tmp_path / "event.json"
        path.write_text(json.dumps({"action": "click", "primarySelector": "#a"}))

        code = cli(["suggest", str(path), "--tab-id", "3"])

        data = json.loads(capsys.readouterr().out)
        assert code == EXIT_FAILED
        assert data == {"ok": False, "reason": "AI API endpoint is not configured."}

    def test_event_must_be_object(self, clean_env, tmp_path):
        path = tmp_path / "event.json"
        path.write_text("[]")

        with pytest.raises(SystemExit) as exc_info:
            cli(["suggest", str(path)])

        assert exc_info.value.code == EXIT_USAGE
