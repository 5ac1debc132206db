"""Common pieces shared by the data providers."""

from __future__ import annotations

from typing import Any, TypeVar

import pydantic

from kaspabot.errors import UpstreamError
from kaspabot.providers.http import JsonHttpClient

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


def parse_model(model: type[ModelT], data: Any, endpoint: str) -> ModelT:
    """Validate an upstream JSON document into a model.

    Args:
        model: Target pydantic model.
        data: Decoded JSON.
        endpoint: Endpoint the document came from, for error context.

    Returns:
        The validated model instance.

    Raises:
        UpstreamError: If a field is missing, mistyped or non-finite.
    """
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise UpstreamError(
            f"invalid {model.__name__} payload ({fields or 'root'})",
            endpoint=endpoint,
            body=str(data)[:300],
        ) from e


class BaseProvider:
    """A data provider bound to one JSON API.

    Args:
        http: Client for the provider's API root.
    """

    def __init__(self, http: JsonHttpClient) -> None:
        self._http = http

    @property
    def http(self) -> JsonHttpClient:
        return self._http

    async def fetch(self, model: type[ModelT], path: str, params: dict[str, str] | None = None) -> ModelT:
        """GET ``path`` and validate the body into ``model``."""
        data = await self._http.get_json(path, params=params)
        return parse_model(model, data, self._http.url_for(path))

    async def close(self) -> None:
        """Release the underlying HTTP session."""
        await self._http.close()
