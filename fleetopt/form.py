"""Editable workload form state.

``WorkloadForm`` is an immutable snapshot of the Apps being described.
Every operation returns a new form; Apps and Components that are not the
target of an operation are carried over as the same objects.

Example:
    form = WorkloadForm()
    form = form.update_component(0, 0, Component(name="web", vcpus=2, memory=4))
    form = form.add_app()
    form = form.remove_app(1)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace

from fleetopt.types import App, Component


def blank_component() -> Component:
    return Component()


def new_app(position: int) -> App:
    """Fresh App named after its 1-based position, holding one blank Component."""
    return App(app=f"App{position}", share=True, components=(blank_component(),))


def _replace_at[T](items: tuple[T, ...], index: int, item: T) -> tuple[T, ...]:
    index = range(len(items))[index]  # IndexError for out-of-range targets
    return (*items[:index], item, *items[index + 1 :])


def _remove_at[T](items: tuple[T, ...], index: int) -> tuple[T, ...]:
    index = range(len(items))[index]
    return (*items[:index], *items[index + 1 :])


@dataclass(frozen=True, slots=True)
class WorkloadForm:
    """Apps under edit. Never empty, and no App is ever left without Components."""

    apps: tuple[App, ...] = (new_app(1),)

    @classmethod
    def from_apps(cls, apps: Iterable[App]) -> WorkloadForm:
        loaded = tuple(
            app if app.components else replace(app, components=(blank_component(),))
            for app in apps
        )
        return cls(apps=loaded) if loaded else cls()

    def add_app(self) -> WorkloadForm:
        return WorkloadForm(apps=(*self.apps, new_app(len(self.apps) + 1)))

    def remove_app(self, index: int) -> WorkloadForm:
        if len(self.apps) <= 1:
            return self
        return WorkloadForm(apps=_remove_at(self.apps, index))

    def update_app(self, index: int, app: App) -> WorkloadForm:
        return WorkloadForm(apps=_replace_at(self.apps, index, app))

    def add_component(self, app_index: int) -> WorkloadForm:
        app = self.apps[app_index]
        updated = replace(app, components=(*app.components, blank_component()))
        return self.update_app(app_index, updated)

    def remove_component(self, app_index: int, comp_index: int) -> WorkloadForm:
        app = self.apps[app_index]
        if len(app.components) <= 1:
            return self
        updated = replace(app, components=_remove_at(app.components, comp_index))
        return self.update_app(app_index, updated)

    def update_component(
        self, app_index: int, comp_index: int, component: Component
    ) -> WorkloadForm:
        app = self.apps[app_index]
        updated = replace(app, components=_replace_at(app.components, comp_index, component))
        return self.update_app(app_index, updated)
