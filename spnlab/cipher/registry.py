from __future__ import annotations

from typing import Dict, List

from .components_builtin import Component, builtins


class ComponentRegistry:
    def __init__(self):
        self._components: Dict[str, Component] = builtins()

    def get(self, component_id: str) -> Component:
        if component_id not in self._components:
            raise KeyError(f"Unknown component_id: {component_id}")
        return self._components[component_id]

    def list(self) -> List[Component]:
        return list(self._components.values())

    def list_by_kind(self, kind: str) -> List[Component]:
        kind = kind.upper()
        out = [c for c in self._components.values() if c.kind == kind]
        out.sort(key=lambda c: c.component_id)
        return out

    def exists(self, component_id: str) -> bool:
        return component_id in self._components

    def register(self, component: Component) -> None:
        """Register a custom component, replacing any with the same id."""
        self._components[component.component_id] = component
