"""
HTTP request description assembled with a builder.

HttpRequest only describes a request; nothing here sends it.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from protoforge.builder import Builder, Director, Leaf, RecipeDirector
from protoforge.exceptions import InvalidOperationError

HTTP_METHODS = ("GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS")


class HttpRequest(BaseModel):
    """Immutable request description."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    method: str
    url: str
    headers: Optional[Dict[str, str]] = None
    body: Optional[Any] = None
    timeout: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return only the fields that were configured."""
        return self.model_dump(exclude_none=True)


class HttpRequestBuilder(Builder[HttpRequest]):
    """Fluent builder for HttpRequest.

    Example:
        >>> request = (
        ...     HttpRequestBuilder()
        ...     .method("POST")
        ...     .url("https://api.example.com/data")
        ...     .header("Content-Type", "application/json")
        ...     .body({"name": "Uzair"})
        ...     .build()
        ... )
    """

    def method(self, method: str) -> "HttpRequestBuilder":
        return self._set("method", method)

    def url(self, url: str) -> "HttpRequestBuilder":
        return self._set("url", url)

    def header(self, name: str, value: str) -> "HttpRequestBuilder":
        return self._set_item("headers", name, value)

    def body(self, body: Any) -> "HttpRequestBuilder":
        return self._set("body", body)

    def timeout(self, seconds: float) -> "HttpRequestBuilder":
        return self._set("timeout", seconds)

    def _assemble(self, fields: Dict[str, Any]) -> HttpRequest:
        missing = [name for name in ("method", "url") if name not in fields]
        if missing:
            raise InvalidOperationError(f"HTTP request is missing {missing}")

        method = str(fields["method"]).upper()
        if method not in HTTP_METHODS:
            raise InvalidOperationError(f"Unsupported HTTP method: {fields['method']!r}")
        fields["method"] = method

        timeout = fields.get("timeout")
        if timeout is not None and (
            isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0
        ):
            raise InvalidOperationError(f"Timeout must be a positive number, got {timeout!r}")

        try:
            return HttpRequest(**fields)
        except ValidationError as e:
            raise InvalidOperationError(f"Invalid HTTP request: {e}") from e


class JsonPostDirector(Director[HttpRequest]):
    """Recipe for a JSON POST: only the url and body vary."""

    def _steps(self, builder: HttpRequestBuilder, **leaf: Any) -> None:
        try:
            url, body = leaf["url"], leaf["body"]
        except KeyError as e:
            raise InvalidOperationError(f"JSON POST recipe needs {e.args[0]!r}") from e
        (
            builder.method("POST")
            .url(url)
            .header("Content-Type", "application/json")
            .header("Accept", "application/json")
            .body(body)
        )


def json_get_recipe(timeout: float = 30.0) -> RecipeDirector:
    """Return a recipe for a JSON GET with a fixed timeout; only the url varies."""
    return RecipeDirector(
        [
            ("method", "GET"),
            ("url", Leaf("url")),
            ("header", "Accept", "application/json"),
            ("timeout", timeout),
        ],
        name="json_get",
    )
