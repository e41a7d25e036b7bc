"""Tests for recorded event and candidate models."""

import pytest

from ai_test_recorder.recording.models import (
    EvaluationResult,
    RecordedEvent,
    SelectorCandidate,
    identity_key,
    infer_selector_type,
    is_number,
)


class TestHelpers:
    """Tests for module-level helpers."""

    @pytest.mark.parametrize(
        "selector,expected",
        [
            ("#id", "css"),
            ("  xpath=//a", "xpath"),
            ("//div", "xpath"),
            ("(//li)[2]", "xpath"),
            ('text="Go"', "text"),
            ("", None),
            (None, None),
        ],
    )
    def test_infer_selector_type(self, selector, expected):
        assert infer_selector_type(selector) == expected

    @pytest.mark.parametrize(
        "value,expected",
        [(1, True), (2.5, True), (True, False), (float("inf"), False), (float("nan"), False), ("1", False)],
    )
    def test_is_number(self, value, expected):
        assert is_number(value) is expected

    def test_identity_key(self):
        assert identity_key("#a", "css") == "#a::css"
        assert identity_key("#a", None) == "#a::"


class TestSelectorCandidate:
    """Tests for SelectorCandidate."""

    def test_from_dict_defaults_to_dom_source(self):
        """Stored candidates without a source came from the recorder."""
        candidate = SelectorCandidate.from_dict({"selector": " #a ", "score": 71.6, "matchCount": 2})

        assert candidate.selector == "#a"
        assert candidate.source == "dom"
        assert candidate.score == 72
        assert candidate.match_count == 2

    def test_from_dict_clamps_score_and_rejects_negative_count(self):
        """Stored scores follow the same half-up clamp as AI scores."""
        event = RecordedEvent.from_dict({
            "action": "click",
            "selectorCandidates": [
                {"selector": "#a", "score": 250, "matchCount": -3},
                {"selector": "#b", "score": 92.5},
                {"selector": "#c", "score": -4},
            ],
        })

        scores = [c.score for c in event.selector_candidates]
        assert scores == [100, 93, 0]
        assert event.selector_candidates[0].match_count is None

    @pytest.mark.parametrize("data", [None, {}, {"selector": ""}, {"selector": 5}])
    def test_from_dict_rejects_missing_selector(self, data):
        assert SelectorCandidate.from_dict(data) is None

    def test_to_dict_omits_unset(self):
        candidate = SelectorCandidate(selector="#a", type="css", unique=False)

        assert candidate.to_dict() == {"selector": "#a", "type": "css", "unique": False, "source": "ai"}

    def test_copy_is_independent(self, candidate):
        copied = candidate.copy(score=50)

        assert copied.score == 50
        assert candidate.score is None
        assert copied.key == candidate.key == "#login::css"


class TestEvaluationResult:
    """Tests for EvaluationResult."""

    def test_from_dict(self):
        result = EvaluationResult.from_dict({"selector": "#a", "matchCount": -1, "error": "", "unique": "no"})

        assert result == EvaluationResult(selector="#a")
        assert result.fallback_key == "#a::"

    def test_from_dict_requires_selector(self):
        assert EvaluationResult.from_dict({"matchCount": 1}) is None
        assert EvaluationResult.from_dict("x") is None


class TestRecordedEvent:
    """Tests for RecordedEvent."""

    def test_round_trip_keeps_unknown_fields(self, sample_event):
        """Recorder fields the model does not know survive."""
        sample_event["classes"] = ["btn"]

        event = RecordedEvent.from_dict(sample_event)
        data = event.to_dict()

        assert event.primary_selector == "#submit"
        assert event.selector_candidates[0].source == "dom"
        assert data["classes"] == ["btn"]
        assert data["primarySelector"] == "#submit"
        assert data["timestamp"] == 1700000000000

    @pytest.mark.parametrize("primary", [42, "   ", ["#a"], {"css": "#a"}])
    def test_non_string_primary_selector_dropped(self, primary):
        """Only non-blank strings become the primary selector."""
        assert RecordedEvent.from_dict({"action": "click", "primarySelector": primary}).primary_selector is None

    @pytest.mark.parametrize("raw", [7, "#a", {"selector": "#a"}, None])
    def test_non_list_candidates_ignored(self, raw):
        """selectorCandidates must be a list."""
        assert RecordedEvent.from_dict({"action": "click", "selectorCandidates": raw}).selector_candidates == []

    def test_value_coerced_to_string(self):
        assert RecordedEvent.from_dict({"action": "input", "value": 42}).value == "42"

    def test_malformed_candidates_skipped(self):
        event = RecordedEvent.from_dict({"action": "click", "selectorCandidates": [{"selector": ""}, "x", {"selector": "#ok"}]})

        assert [c.selector for c in event.selector_candidates] == ["#ok"]

    def test_apply_selector(self, candidate):
        event = RecordedEvent(action="click", selector_candidates=[candidate])

        event.apply_selector(candidate)

        assert event.primary_selector == "#login"
        assert event.primary_selector_type == "css"

    def test_apply_selector_string(self):
        event = RecordedEvent(action="click")

        event.apply_selector("  //button  ")

        assert event.primary_selector == "//button"
        assert event.primary_selector_type == "xpath"

    def test_apply_empty_selector(self):
        with pytest.raises(ValueError):
            RecordedEvent(action="click").apply_selector("  ")

    def test_resolved_selector_order(self, candidate):
        assert RecordedEvent(action="click", primary_selector="#p", selector_candidates=[candidate]).resolved_selector() == "#p"
        assert RecordedEvent(action="click", selector_candidates=[candidate]).resolved_selector() == "#login"
        assert RecordedEvent(action="click", tag="a").resolved_selector() == "a"
        assert RecordedEvent(action="click").resolved_selector() == ""
