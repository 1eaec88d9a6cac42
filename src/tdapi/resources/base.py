"""Common behaviour for API-backed resource models."""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel, ConfigDict, PrivateAttr

if TYPE_CHECKING:
    from ..client import TDAPIClient

R = TypeVar("R", bound="Resource")


class UnboundResourceError(Exception):
    """Raised when a resource operation is used without a client."""


class Resource(BaseModel):
    """A record returned by the TeamDynamix API.

    Fields are declared explicitly on each subclass with the API's
    PascalCase names as aliases. Fields the model does not declare are
    dropped. Instances created through :meth:`bind` carry a reference to the
    client that fetched them and can issue their own requests.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    _client: Any = PrivateAttr(default=None)

    @classmethod
    def bind(cls: type[R], client: "TDAPIClient", data: Mapping[str, Any]) -> R:
        """Validate API data into a resource attached to ``client``."""
        resource = cls.model_validate(data)
        resource._client = client
        return resource

    @classmethod
    def bind_all(cls: type[R], client: "TDAPIClient", data: Any) -> list[R] | Any:
        """Bind each item of a JSON array; other responses pass through."""
        if not isinstance(data, list):
            return data
        return [cls.bind(client, item) for item in data]

    @property
    def client(self) -> "TDAPIClient":
        if self._client is None:
            msg = f"{type(self).__name__} is not bound to a client"
            raise UnboundResourceError(msg)
        return self._client

    def to_payload(self) -> dict[str, Any]:
        """Serialize the fields that were set, keyed by their API names."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


def as_payload(body: "Resource | Mapping[str, Any] | list[Any] | None") -> Any:
    """Turn a request body argument into JSON-ready data."""
    if body is None:
        return {}
    if isinstance(body, Resource):
        return body.to_payload()
    if isinstance(body, Mapping):
        return dict(body)
    return body
