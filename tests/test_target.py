import pytest

from core.exceptions import TargetDecodeError
from core.target import TargetResolver, decode_component, is_reserved_static_path


@pytest.fixture
def resolver():
    return TargetResolver()


class TestQueryParameter:
    def test_plain_url_param_used_as_is(self, resolver):
        assert resolver.resolve("/", "", "https://example.com/data") == "https://example.com/data"

    def test_once_decoded_http_value_is_not_decoded_again(self, resolver):
        target = resolver.resolve("/", "", "https%3A%2F%2Fexample.com%2Fb")
        assert target == "https%3A%2F%2Fexample.com%2Fb"

    def test_non_http_value_is_decoded_again(self, resolver):
        target = resolver.resolve("/", "", "%68ttps%3A%2F%2Fexample.com%2Fc")
        assert target == "https://example.com/c"

    def test_url_param_wins_over_path(self, resolver):
        target = resolver.resolve("/https://other.example", "", "https://example.com")
        assert target == "https://example.com"

    def test_empty_url_param_falls_back_to_path(self, resolver):
        target = resolver.resolve("/https://example.com/a", "url=", "")
        assert target == "https://example.com/a?url="

    def test_malformed_second_decode_raises(self, resolver):
        with pytest.raises(TargetDecodeError):
            resolver.resolve("/", "", "%zz")


class TestPathTarget:
    def test_encoded_path_with_query(self, resolver):
        target = resolver.resolve("/https%3A%2F%2Fexample.com%2Fa", "x=1", None)
        assert target == "https://example.com/a?x=1"

    def test_plain_path_without_query(self, resolver):
        assert resolver.resolve("/http://example.com/a/b", "", None) == "http://example.com/a/b"

    def test_query_string_is_appended_verbatim(self, resolver):
        target = resolver.resolve("/https://example.com", "q=a%20b&x=%2B", None)
        assert target == "https://example.com?q=a%20b&x=%2B"

    def test_path_not_starting_with_http_is_not_a_target(self, resolver):
        assert resolver.resolve("/index.html", "", None) is None

    def test_root_is_not_a_target(self, resolver):
        assert resolver.resolve("/", "", None) is None

    def test_malformed_path_escape_raises(self, resolver):
        with pytest.raises(TargetDecodeError):
            resolver.resolve("/https%3A%2F%2Fexample.com%2", "", None)


class TestDecodeComponent:
    def test_plus_is_kept(self):
        assert decode_component("a+b%20c") == "a+b c"

    def test_utf8_sequences(self):
        assert decode_component("%E4%BB%A3%E7%90%86") == "代理"

    def test_invalid_utf8_raises(self):
        with pytest.raises(TargetDecodeError):
            decode_component("%E4%BB")

    def test_lone_percent_raises(self):
        with pytest.raises(TargetDecodeError):
            decode_component("100%")


@pytest.mark.parametrize(
    "path",
    ["/", "/index.html", "/logo.ico", "/logo.gif", "/_headers", "/wrangler.toml", "/wrangler.json"],
)
def test_reserved_static_paths(path):
    assert is_reserved_static_path(path)


def test_other_paths_are_not_reserved():
    assert not is_reserved_static_path("/favicon.ico")
