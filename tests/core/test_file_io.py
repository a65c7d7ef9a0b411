"""Tests for folio.core.utils.file_io."""

import datetime

import pytest

from folio.core.utils.file_io import load_front_matter, read_text, split_front_matter


class TestSplitFrontMatter:
    def test_split(self):
        content = "---\ntitle: Test\n---\n\nBody text"
        block, body = split_front_matter(content)
        assert block == "\ntitle: Test\n"
        assert body == "\n\nBody text"

    def test_no_delimiters(self):
        assert split_front_matter("# Just a heading\n\nContent") is None

    def test_single_delimiter(self):
        assert split_front_matter("---\ntitle: Test\nno closing") is None

    def test_later_delimiters_stay_in_body(self):
        content = "---\ntitle: T\n---\nabove\n---\nbelow"
        _block, body = split_front_matter(content)
        assert body == "\nabove\n---\nbelow"

    def test_preamble_ignored(self):
        content = "preamble\n---\ntitle: T\n---\nbody"
        block, body = split_front_matter(content)
        assert block == "\ntitle: T\n"
        assert body == "\nbody"


class TestLoadFrontMatter:
    def test_mapping(self):
        data = load_front_matter("title: Test\ntags: [a, b]\n")
        assert data["title"] == "Test"
        assert data["tags"] == ["a", "b"]

    def test_unquoted_date_becomes_date(self):
        data = load_front_matter("date: 2024-01-01\n")
        assert data["date"] == datetime.date(2024, 1, 1)

    def test_empty_block(self):
        assert load_front_matter("\n") == {}

    def test_invalid_yaml(self):
        with pytest.raises(ValueError, match="invalid YAML"):
            load_front_matter("title: [unclosed\n")

    def test_scalar_is_not_mapping(self):
        with pytest.raises(ValueError, match="mapping"):
            load_front_matter("just a string")


def test_read_text(tmp_dir):
    path = f"{tmp_dir}/a.md"
    with open(path, "w", encoding="utf-8") as f:
        f.write("héllo")
    assert read_text(path) == "héllo"
