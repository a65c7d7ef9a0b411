"""Tests for folio.content.loader."""

import pytest

from folio.content.config import ContentConfig
from folio.content.loader import is_source_file, list_source_files, load_directory
from folio.core.exceptions import ContentDirectoryError


def _content_tuples(documents):
    return {(d.id, d.title, d.published_at, d.tags, d.rendered_body) for d in documents.values()}


class TestListSourceFiles:
    def test_sorted_and_filtered(self, content_dir, write_post):
        write_post("b.md")
        write_post("a.md")
        (content_dir / "notes.txt").write_text("ignore me")
        (content_dir / "sub").mkdir()
        (content_dir / "sub" / "nested.md").write_text("ignored: not recursive")

        files = list_source_files(content_dir, [".md"])
        assert [p.name for p in files] == ["a.md", "b.md"]

    def test_hidden_files_skipped_by_default(self, content_dir, write_post):
        write_post(".draft.md")
        write_post("visible.md")
        assert [p.name for p in list_source_files(content_dir, [".md"])] == ["visible.md"]
        assert len(list_source_files(content_dir, [".md"], include_hidden=True)) == 2

    def test_directory_named_like_source_skipped(self, content_dir):
        (content_dir / "folder.md").mkdir()
        assert list_source_files(content_dir, [".md"]) == []

    def test_missing_directory(self, tmp_dir):
        with pytest.raises(ContentDirectoryError, match="does not exist"):
            list_source_files(f"{tmp_dir}/nope", [".md"])

    def test_not_a_directory(self, content_dir, write_post):
        path = write_post("file.md")
        with pytest.raises(ContentDirectoryError, match="not a directory"):
            list_source_files(path, [".md"])


def test_is_source_file():
    assert is_source_file("/c/post.md", [".md"])
    assert is_source_file("/c/POST.MD", [".md"])
    assert not is_source_file("/c/post.md.swp", [".md"])
    assert not is_source_file("/c/.post.md", [".md"])
    assert is_source_file("/c/.post.md", [".md"], include_hidden=True)


class TestLoadDirectory:
    def test_loads_all(self, content_dir, write_post):
        write_post("one.md", title="One")
        write_post("two.md", title="Two")

        result = load_directory(content_dir)
        assert result.loaded_count == 2
        assert result.documents["one"].title == "One"
        assert result.skipped == []

    def test_malformed_file_skipped_not_fatal(self, content_dir, write_post):
        write_post("good.md", title="Good")
        bad = content_dir / "bad.md"
        bad.write_text("---\ntitle: missing date\n---\nbody", encoding="utf-8")

        result = load_directory(content_dir)
        assert list(result.documents) == ["good"]
        assert result.skipped == [str(bad)]

    def test_numeric_front_matter_values_load(self, content_dir):
        (content_dir / "orwell.md").write_text(
            "---\ntitle: 1984\ndate: 1949-06-08\ntags: [2024, books]\n---\nBig Brother", encoding="utf-8"
        )

        result = load_directory(content_dir)
        assert result.skipped == []
        assert result.documents["orwell"].title == "1984"
        assert result.documents["orwell"].tags == frozenset({"2024", "books"})

    def test_empty_directory(self, content_dir):
        result = load_directory(content_dir)
        assert len(result.documents) == 0

    def test_idempotent_reload(self, content_dir, write_post):
        write_post("a.md", title="A", tags=["x", "y"], body="# A\n\ntext")
        write_post("b.md", title="B", date="2024-02-01")

        first = load_directory(content_dir)
        second = load_directory(content_dir)
        assert first.documents is not second.documents
        assert _content_tuples(first.documents) == _content_tuples(second.documents)

    def test_collision_last_in_name_order_wins(self, content_dir, write_post):
        write_post("post.md", title="Lower")
        write_post("post.MD", title="Upper")

        result = load_directory(content_dir)
        # "post.MD" sorts before "post.md"
        assert result.documents["post"].title == "Lower"
        assert result.collisions == {"post": [str(content_dir / "post.MD"), str(content_dir / "post.md")]}

    def test_custom_extensions(self, content_dir, write_post):
        write_post("a.md")
        write_post("b.markdown")

        result = load_directory(content_dir, ContentConfig(extensions=[".markdown"]))
        assert list(result.documents) == ["b"]

    def test_missing_directory_raises(self, tmp_dir):
        with pytest.raises(ContentDirectoryError):
            load_directory(f"{tmp_dir}/nope")
