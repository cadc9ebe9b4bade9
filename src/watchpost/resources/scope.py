"""Construct tree nodes that own resources and their alarms."""

from __future__ import annotations

from typing import Any

from watchpost.common.errors import ConfigurationError


class Scope:
    """A node in the construct tree. Child ids are unique per node."""

    def __init__(self, scope_id: str, parent: Scope | None = None) -> None:
        if not scope_id or "/" in scope_id:
            raise ConfigurationError(f"invalid scope id {scope_id!r}")
        self._id = scope_id
        self._parent = parent
        self._children: dict[str, Any] = {}
        if parent is not None:
            parent.add_child(scope_id, self)

    @property
    def id(self) -> str:
        return self._id

    @property
    def parent(self) -> Scope | None:
        return self._parent

    @property
    def path(self) -> str:
        if self._parent is None:
            return self._id
        return f"{self._parent.path}/{self._id}"

    @property
    def children(self) -> dict[str, Any]:
        return dict(self._children)

    def add_child(self, child_id: str, child: Any) -> None:
        if child_id in self._children:
            raise ConfigurationError(f"{self.path} already has a child named {child_id!r}")
        self._children[child_id] = child

    def find_child(self, child_id: str) -> Any | None:
        return self._children.get(child_id)

    def __repr__(self) -> str:
        return f"Scope({self.path!r})"


__all__ = ["Scope"]
