"""Tests for the HTTP surface (folio.web)."""

import pytest
from fastapi.testclient import TestClient

from folio.content.config import WatcherConfig
from folio.content.models import DocumentSet, ParsedDocument
from folio.content.store import DocumentStore
from folio.content.watcher import ContentWatcher, WatcherState
from folio.web import create_app


def _doc(doc_id, title, date, tags=None, body="", rendered=""):
    return ParsedDocument(
        id=doc_id,
        title=title,
        published_at=date,
        tags=frozenset(tags) if tags is not None else None,
        raw_body=body,
        rendered_body=rendered or f"<p>{body}</p>",
    )


@pytest.fixture
def store():
    return DocumentStore(
        DocumentSet(
            [
                _doc("rust", "Rust Guide", "2024-03-01", tags=["x"], body="ownership"),
                _doc("go", "Go Guide", "2024-01-15", tags=["y"], body="goroutines"),
                _doc("xss", "<script>alert(1)</script>", "2023-12-31", body="escaped"),
            ]
        )
    )


@pytest.fixture
def client(store):
    return TestClient(create_app(store))


class TestHtmlPages:
    def test_home_lists_newest_first(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        html = response.text
        assert html.index("Rust Guide") < html.index("Go Guide")

    def test_home_filters(self, client):
        html = client.get("/", params={"q": "guide", "tag": "x"}).text
        assert 'href="/posts/rust"' in html
        assert 'href="/posts/go"' not in html

    def test_home_shows_tag_links(self, client):
        html = client.get("/").text
        assert 'href="/?tag=x"' in html
        assert 'href="/?tag=y"' in html

    def test_home_no_results(self, client):
        assert "No posts found" in client.get("/", params={"q": "haskell"}).text

    def test_titles_escaped(self, client):
        html = client.get("/").text
        assert "<script>alert(1)</script>" not in html
        assert "&lt;script&gt;" in html

    def test_post_detail(self, client):
        response = client.get("/posts/rust")
        assert response.status_code == 200
        assert "<h1>Rust Guide</h1>" in response.text
        assert "<p>ownership</p>" in response.text
        assert "Date: 2024-03-01" in response.text

    def test_post_not_found(self, client):
        response = client.get("/posts/nope")
        assert response.status_code == 404
        assert "404 - Post Not Found" in response.text


class TestJsonApi:
    def test_list_posts(self, client):
        data = client.get("/api/posts").json()
        assert [p["id"] for p in data] == ["rust", "go", "xss"]

    def test_list_posts_conjunction(self, client):
        data = client.get("/api/posts", params={"q": "guide", "tag": "x"}).json()
        assert [p["id"] for p in data] == ["rust"]

    def test_list_posts_limit(self, client):
        assert len(client.get("/api/posts", params={"limit": 1}).json()) == 1
        assert client.get("/api/posts", params={"limit": -1}).status_code == 422

    def test_get_post(self, client):
        data = client.get("/api/posts/go").json()
        assert data["title"] == "Go Guide"
        assert data["tags"] == ["y"]

    def test_untagged_post_has_null_tags(self, client):
        assert client.get("/api/posts/xss").json()["tags"] is None

    def test_get_post_404(self, client):
        assert client.get("/api/posts/nope").status_code == 404

    def test_tags(self, client):
        assert client.get("/api/tags").json() == ["x", "y"]

    def test_reads_follow_replace(self, client, store):
        store.replace(DocumentSet([_doc("new", "New", "2025-01-01")]))
        assert [p["id"] for p in client.get("/api/posts").json()] == ["new"]
        assert client.get("/posts/rust").status_code == 404


class TestHealth:
    def test_without_watcher(self, client):
        data = client.get("/healthz").json()
        assert data == {"status": "ok", "documents": 3, "generation": 0, "watcher": "stopped"}

    def test_lifespan_runs_watcher(self, store, content_dir):
        watcher = ContentWatcher(
            content_dir,
            store,
            watcher_config=WatcherConfig(debounce_seconds=0.05),
            watch_filesystem=False,
        )
        with TestClient(create_app(store, watcher=watcher)) as client:
            assert client.get("/healthz").json()["watcher"] == "idle"
        assert watcher.state is WatcherState.STOPPED


def test_static_mounted_when_present(store, tmp_dir):
    with open(f"{tmp_dir}/site.css", "w") as f:
        f.write("body {}")
    client = TestClient(create_app(store, static_dir=tmp_dir))
    assert client.get("/static/site.css").text == "body {}"


def test_static_missing_not_mounted(store, tmp_dir):
    client = TestClient(create_app(store, static_dir=f"{tmp_dir}/missing"))
    assert client.get("/static/site.css").status_code == 404
