"""Base class shared by every ghkit model."""

from __future__ import annotations

from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict

from ghkit.utils import codec

M = TypeVar("M", bound="GitHubModel")


class GitHubModel(BaseModel):
    """Base for all API models.

    Subclasses register themselves in the codec's schema registry. Optional
    fields are declared as ``Maybe[...] = ABSENT`` so that "not sent" stays
    distinguishable from ``null``.

    Class Attributes:
        path_attribute: Attribute used to build a URL path segment when an
            instance is passed as a resource reference.

    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        arbitrary_types_allowed=True,
        extra="ignore",
    )

    path_attribute: ClassVar[str] = "id"

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        codec.registry.register(cls)

    @classmethod
    def from_wire(cls: type[M], tree: Any) -> M:
        """Decode a parsed JSON object into this model."""
        return codec.decode(codec.schema_for(cls), tree)  # type: ignore[no-any-return]

    def to_wire(self) -> dict[str, Any]:
        """Encode this model into a JSON-ready dict, omitting absent fields."""
        return codec.encode(self)  # type: ignore[no-any-return]
