"""Resolution of resource references into URL path segments.

A reference may be a raw identifier (``"octocat/Hello-World"``), a numeric
id, or an already-decoded model. Equivalent references always produce the
same path string, so resolved paths are safe to use as cache keys.

Example:
    >>> resolve_path("octocat/Hello-World", "repos")
    'repos/octocat/Hello-World'
    >>> resolve_path(1296269, "repositories")
    'repositories/1296269'

"""

from __future__ import annotations

from typing import Union

from pydantic import BaseModel

from ghkit.exceptions import InvalidReferenceError
from ghkit.utils.codec import ABSENT

ResourceRef = Union[str, int, BaseModel]


def resolve_path(ref: ResourceRef, base: str) -> str:
    """Return ``<base>/<segment>`` for a resource reference.

    Strings are used verbatim. Integers are written in decimal. Models
    contribute their ``path_attribute`` (``full_name``, ``login``...),
    falling back to ``id``.

    Args:
        ref: The reference to resolve.
        base: Leading path segment, e.g. ``"repos"`` or ``"users"``.

    Raises:
        InvalidReferenceError: If the reference has no usable identifier.

    """
    return f"{base.strip('/')}/{path_segment(ref)}"


def path_segment(ref: ResourceRef) -> str:
    """Return the identifier part of a reference, without any base."""
    if isinstance(ref, bool):
        raise InvalidReferenceError(f"Cannot use {ref!r} as a resource reference")

    if isinstance(ref, str):
        if not ref:
            raise InvalidReferenceError("Resource reference cannot be empty")
        return ref

    if isinstance(ref, int):
        if ref < 0:
            raise InvalidReferenceError(f"Resource id must not be negative, got {ref}")
        return str(ref)

    if isinstance(ref, BaseModel):
        return _entity_segment(ref)

    raise InvalidReferenceError(f"Unsupported resource reference type: {type(ref).__name__}")


def _entity_segment(entity: BaseModel) -> str:
    attribute = getattr(type(entity), "path_attribute", "id")
    for name in dict.fromkeys((attribute, "id")):
        value = getattr(entity, name, ABSENT)
        if value is ABSENT or value is None or value == "":
            continue
        return path_segment(value)

    raise InvalidReferenceError(
        f"{type(entity).__name__} has no '{attribute}' or 'id' to build a path from"
    )
