"""Tests for treeart.style."""

import dataclasses

import pytest

from treeart.style import StyleConfig, TreeStyle


class TestStyleConfig:
    def test_default_is_unicode(self):
        config = StyleConfig()
        assert config.branch == " ├─"
        assert config.last == " └─"
        assert config.vertical == " │ "
        assert config.empty == "   "
        assert config == StyleConfig.unicode()

    def test_ascii_style(self):
        config = StyleConfig.ascii()
        assert config.branch == " +-"
        assert config.last == " `-"
        assert config.vertical == " | "

    def test_box_drawing_matches_unicode_glyphs(self):
        assert StyleConfig.box_drawing() == StyleConfig.unicode()

    def test_custom_style(self):
        config = StyleConfig.custom(">", "<", "|", " ")
        assert config.branch == ">"
        assert config.last == "<"
        assert config.vertical == "|"
        assert config.empty == " "

    def test_get_branch(self):
        config = StyleConfig()
        assert config.get_branch(False) == " ├─"
        assert config.get_branch(True) == " └─"
        assert config.get_vertical() == " │ "
        assert config.get_empty() == "   "

    def test_is_immutable(self):
        config = StyleConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.branch = "x"


class TestFromStyle:
    def test_none_gives_default(self):
        assert StyleConfig.from_style(None) == StyleConfig.unicode()

    def test_enum_members(self):
        assert StyleConfig.from_style(TreeStyle.ASCII) == StyleConfig.ascii()
        assert StyleConfig.from_style(TreeStyle.BOX) == StyleConfig.box_drawing()
        assert StyleConfig.from_style(TreeStyle.UNICODE) == StyleConfig.unicode()

    def test_names_are_case_insensitive(self):
        assert StyleConfig.from_style(" ASCII ") == StyleConfig.ascii()

    def test_existing_config_passes_through(self):
        custom = StyleConfig.custom("a", "b", "c", "d")
        assert StyleConfig.from_style(custom) is custom

    def test_unknown_name_raises(self):
        with pytest.raises(ValueError, match="Unknown tree style"):
            StyleConfig.from_style("fancy")
