"""
Tests for parser options.
"""
import pytest

from pagesift.core.options import (
    DEFAULT_CHAR_THRESHOLD,
    DEFAULT_N_TOP_CANDIDATES,
    ParserOptions,
    inner_markup,
)


class TestParserOptions:
    """Test option defaults and validation."""

    def test_defaults(self):
        options = ParserOptions()
        assert options.char_threshold == DEFAULT_CHAR_THRESHOLD == 500
        assert options.nb_top_candidates == DEFAULT_N_TOP_CANDIDATES == 5
        assert options.max_elems_to_parse == 0
        assert options.serializer is inner_markup
        assert options.preserved_classes == frozenset({"page"})

    @pytest.mark.parametrize("changes", [
        {"char_threshold": -1},
        {"max_elems_to_parse": -1},
        {"nb_top_candidates": 0},
        {"allowed_video_regex": "("},
    ])
    def test_invalid_values(self, changes):
        with pytest.raises(ValueError):
            ParserOptions(**changes)

    def test_classes_string_split(self):
        options = ParserOptions(classes_to_preserve="lead, note,")
        assert options.classes_to_preserve == ["lead", "note"]
        assert options.preserved_classes == frozenset({"page", "lead", "note"})

    def test_video_regex_compiled(self):
        options = ParserOptions(allowed_video_regex=r"//videos\.example\.com")
        assert options.allowed_video_regex.search("https://VIDEOS.example.com/embed/1")

    def test_dict_round_trip(self):
        options = ParserOptions(char_threshold=100, classes_to_preserve=["lead"], keep_classes=True)
        data = options.to_dict()
        assert "serializer" not in data
        assert isinstance(data["allowed_video_regex"], str)
        assert ParserOptions.from_dict(data).to_dict() == data

    def test_unknown_keys_ignored(self):
        options = ParserOptions.from_dict({"char_threshold": 200, "user_agent": "x"})
        assert options.char_threshold == 200

    def test_replace(self):
        options = ParserOptions(char_threshold=100)
        changed = options.replace(keep_classes=True)
        assert changed.keep_classes and changed.char_threshold == 100
        assert not options.keep_classes

    def test_replace_validates(self):
        with pytest.raises(ValueError):
            ParserOptions().replace(nb_top_candidates=0)

    def test_inner_markup(self, soup):
        doc = soup("<div><p>Hi</p></div>")
        assert inner_markup(doc.div) == "<p>Hi</p>"
