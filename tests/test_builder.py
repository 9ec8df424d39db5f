"""Tests for Builder, Director and RecipeDirector."""

import pytest

from protoforge import (
    BuilderFinalizedError,
    BuildStatus,
    Director,
    InvalidOperationError,
    Leaf,
    RecipeDirector,
)
from protoforge.builtin_products import (
    HttpRequest,
    HttpRequestBuilder,
    JsonPostDirector,
    json_get_recipe,
)
from protoforge.config import ProtoforgeSettings, configure


def test_post_request_scenario():
    request = (
        HttpRequestBuilder()
        .method("POST")
        .url("https://api.example.com/data")
        .header("Content-Type", "application/json")
        .body({"name": "Uzair"})
        .build()
    )

    assert isinstance(request, HttpRequest)
    assert request.to_dict() == {
        "method": "POST",
        "url": "https://api.example.com/data",
        "headers": {"Content-Type": "application/json"},
        "body": {"name": "Uzair"},
    }
    assert request.timeout is None


def test_setters_return_builder_for_chaining():
    builder = HttpRequestBuilder()
    assert builder.method("GET") is builder
    assert builder.header("Accept", "text/html") is builder


def test_last_value_per_field_wins():
    request = (
        HttpRequestBuilder()
        .method("GET")
        .url("https://first.example.com")
        .url("https://second.example.com")
        .method("delete")
        .header("X-Trace", "1")
        .header("X-Trace", "2")
        .build()
    )

    assert request.url == "https://second.example.com"
    assert request.method == "DELETE"
    assert request.headers == {"X-Trace": "2"}


def test_status_transitions():
    builder = HttpRequestBuilder()
    assert builder.status is BuildStatus.EMPTY

    builder.method("GET").url("https://example.com")
    assert builder.status is BuildStatus.CONFIGURING
    assert builder.configured_fields() == {"method": "GET", "url": "https://example.com"}

    builder.build()
    assert builder.status is BuildStatus.BUILT
    assert builder.is_built


def test_strict_builder_rejects_reuse():
    builder = HttpRequestBuilder(strict=True)
    builder.method("GET").url("https://example.com").build()

    with pytest.raises(BuilderFinalizedError):
        builder.url("https://other.example.com")
    with pytest.raises(BuilderFinalizedError):
        builder.build()
    # BuilderFinalizedError is an InvalidOperationError.
    with pytest.raises(InvalidOperationError):
        builder.header("A", "B")


def test_lenient_builder_ignores_reuse(caplog):
    builder = HttpRequestBuilder(strict=False)
    first = builder.method("GET").url("https://example.com").build()

    with caplog.at_level("WARNING", logger="protoforge.builder"):
        assert builder.url("https://other.example.com") is builder
        second = builder.build()

    assert second is first
    assert second.url == "https://example.com"
    assert "already built" in caplog.text


def test_strict_default_comes_from_settings():
    assert HttpRequestBuilder().strict is True

    configure(ProtoforgeSettings(strict_builders=False))
    assert HttpRequestBuilder().strict is False


def test_strict_default_from_environment(monkeypatch):
    monkeypatch.setenv("PROTOFORGE_STRICT_BUILDERS", "false")
    assert HttpRequestBuilder().strict is False


def test_builder_ignores_project_config_in_cwd(tmp_path, monkeypatch):
    (tmp_path / "pyproject.toml").write_text("[tool.protoforge]\nlog_level = \"LOUD\"\n")
    monkeypatch.chdir(tmp_path)

    builder = HttpRequestBuilder()

    assert builder.strict is True
    assert builder.method("GET").url("https://example.com").build().method == "GET"


def test_incomplete_build_raises_and_builder_stays_open():
    builder = HttpRequestBuilder().method("GET")

    with pytest.raises(InvalidOperationError, match="url"):
        builder.build()

    assert builder.status is BuildStatus.CONFIGURING
    assert builder.url("https://example.com").build().url == "https://example.com"


@pytest.mark.parametrize(
    "method, timeout",
    [("FETCH", None), ("GET", 0), ("GET", -1.5), ("GET", "soon"), ("GET", True)],
)
def test_invalid_values_rejected(method, timeout):
    builder = HttpRequestBuilder().method(method).url("https://example.com")
    if timeout is not None:
        builder.timeout(timeout)
    with pytest.raises(InvalidOperationError):
        builder.build()


def test_built_request_is_immutable():
    request = HttpRequestBuilder().method("GET").url("https://example.com").build()
    with pytest.raises(Exception):
        request.url = "https://other.example.com"


class TestDirectors:
    def test_json_post_director(self):
        request = JsonPostDirector().construct(
            HttpRequestBuilder(), url="https://api.example.com/items", body={"id": 1}
        )

        assert request.method == "POST"
        assert request.headers == {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        assert request.body == {"id": 1}

    def test_json_post_director_missing_leaf(self):
        with pytest.raises(InvalidOperationError, match="body"):
            JsonPostDirector().construct(HttpRequestBuilder(), url="https://example.com")

    def test_recipe_director(self):
        recipe = json_get_recipe(timeout=5)
        assert recipe.leaves == ["url"]

        request = recipe.construct(HttpRequestBuilder(), url="https://example.com/status")
        assert request.to_dict() == {
            "method": "GET",
            "url": "https://example.com/status",
            "headers": {"Accept": "application/json"},
            "timeout": 5,
        }

    def test_same_recipe_reused_with_fresh_builders(self):
        recipe = json_get_recipe()
        urls = ["https://a.example.com", "https://b.example.com"]

        requests = [recipe.construct(HttpRequestBuilder(), url=url) for url in urls]

        assert [r.url for r in requests] == urls

    def test_missing_leaf_does_not_touch_builder(self):
        builder = HttpRequestBuilder()
        with pytest.raises(InvalidOperationError, match="missing leaf"):
            json_get_recipe().construct(builder)
        assert builder.status is BuildStatus.EMPTY

    def test_unexpected_leaf_rejected(self):
        with pytest.raises(InvalidOperationError, match="unexpected"):
            json_get_recipe().construct(HttpRequestBuilder(), url="https://x", body="{}")

    def test_unknown_setter_does_not_touch_builder(self):
        recipe = RecipeDirector([("method", "GET"), ("cookie", Leaf("cookie"))], name="cookies")
        builder = HttpRequestBuilder()

        with pytest.raises(InvalidOperationError, match="no setter 'cookie'"):
            recipe.construct(builder, cookie="a=b")
        assert builder.status is BuildStatus.EMPTY

    def test_invalid_step_rejected(self):
        with pytest.raises(InvalidOperationError):
            RecipeDirector([()])
        with pytest.raises(InvalidOperationError):
            RecipeDirector([(42, "GET")])

    def test_custom_director_subclass(self):
        class HealthCheck(Director):
            def _steps(self, builder, host):
                builder.method("HEAD").url(f"https://{host}/health").timeout(2)

        request = HealthCheck().construct(HttpRequestBuilder(), host="svc.local")
        assert request.to_dict() == {
            "method": "HEAD",
            "url": "https://svc.local/health",
            "timeout": 2,
        }
