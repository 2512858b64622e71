import pytest

from pytest_httpspec import URIBuilder


class TestPath:
    def test_appends_segments(self):
        uri = URIBuilder("http://example.com/api").path("users", 42)

        assert str(uri) == "http://example.com/api/users/42"

    def test_composes_over_calls(self):
        uri = URIBuilder("http://example.com").path("a").path("b/c")

        assert str(uri) == "http://example.com/a/b/c"

    def test_keeps_query(self):
        uri = URIBuilder("http://example.com/api?page=2").path("items")

        assert str(uri) == "http://example.com/api/items?page=2"

    def test_trailing_slash_preserved(self):
        uri = URIBuilder("http://example.com").path("dir/")

        assert str(uri) == "http://example.com/dir/"

    def test_returns_new_instance(self):
        base = URIBuilder("http://example.com")
        base.path("x")

        assert str(base) == "http://example.com"


class TestQuery:
    def test_single_parameter(self):
        uri = URIBuilder("http://example.com/search").query("q", "cats")

        assert str(uri) == "http://example.com/search?q=cats"

    def test_mapping_merges_with_existing(self):
        uri = URIBuilder("http://example.com/search?q=cats").query({"page": 2})

        assert uri.url.params["q"] == "cats"
        assert uri.url.params["page"] == "2"

    def test_overrides_existing_value(self):
        uri = URIBuilder("http://example.com/search?q=cats").query("q", "dogs")

        assert uri.url.params["q"] == "dogs"

    def test_none_removes_parameter(self):
        uri = URIBuilder("http://example.com/search?q=cats&page=1").query("page", None)

        assert "page" not in uri.url.params
        assert uri.url.params["q"] == "cats"

    def test_invalid_argument(self):
        with pytest.raises(TypeError, match="expects a name or a mapping"):
            URIBuilder("http://example.com").query(42)
