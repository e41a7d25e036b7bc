"""Tests for candidate extraction from arbitrary payloads."""

from ai_test_recorder.candidates.extractor import extract_candidates


def _selectors(candidates):
    return [c.selector for c in candidates]


class TestExtractCandidates:
    """Tests for extract_candidates."""

    def test_none_and_empty(self):
        """Nothing to find in empty values."""
        assert extract_candidates(None) == []
        assert extract_candidates("") == []
        assert extract_candidates({}) == []

    def test_nested_payload(self):
        """Container lists are walked and strings split into lines."""
        found = extract_candidates({"results": [{"css": "#a"}, "  #b  \n.c"]})

        assert _selectors(found) == ["#a", "#b", ".c"]
        assert found[0].type == "css"
        assert found[1].type is None

    def test_crlf_lines(self):
        """Windows line endings and blank lines are handled."""
        assert _selectors(extract_candidates("#one\r\n\r\n#two\n")) == ["#one", "#two"]

    def test_container_keys_scanned_first(self):
        """Known container keys are visited before other nested values."""
        payload = {
            "meta": {"notes": ["#late"]},
            "suggestions": ["#early"],
        }

        assert _selectors(extract_candidates(payload)) == ["#early", "#late"]

    def test_candidate_object_is_terminal(self):
        """Objects that coerce are not searched further."""
        payload = [{"selector": "#outer", "candidates": ["#inner"]}]

        assert _selectors(extract_candidates(payload)) == ["#outer"]

    def test_deeply_nested_wrapper(self):
        """Arbitrary wrapper keys are searched."""
        payload = {"response": {"output": {"data": [{"xpath": "//button"}]}}}

        assert _selectors(extract_candidates(payload)) == ["xpath=//button"]

    def test_duplicates_are_kept(self):
        """Extraction does not de-duplicate."""
        assert _selectors(extract_candidates(["#a", "#a"])) == ["#a", "#a"]

    def test_cyclic_input_terminates(self):
        """Self-referencing structures are visited once."""
        payload = {"candidates": ["#a"]}
        payload["self"] = payload
        loop = ["#b"]
        loop.append(loop)
        payload["loop"] = loop

        assert _selectors(extract_candidates(payload)) == ["#a", "#b"]

    def test_non_container_scalars_ignored(self):
        """Numbers and booleans are not selectors."""
        assert extract_candidates({"items": [1, True, 2.5, None]}) == []
