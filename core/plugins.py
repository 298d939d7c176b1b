from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from django.core.exceptions import ImproperlyConfigured


@dataclass(frozen=True)
class WidgetDescriptor:
    """Static metadata a widget variant declares about itself."""

    description: str
    default_config: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.description, str) or not self.description.strip():
            raise ImproperlyConfigured("Widget descriptors require a non-empty description.")
        object.__setattr__(
            self, "default_config", MappingProxyType(copy.deepcopy(dict(self.default_config)))
        )

    def initial_config(self) -> dict:
        return copy.deepcopy(dict(self.default_config))


class BaseWidget(ABC):
    slug: str = ""
    descriptor: WidgetDescriptor | None = None
    config_schema: dict = {}
    template_name: str = ""

    def __init__(self, blog_id=None):
        self.blog_id = blog_id

    def parse_request(self, contents, request_params) -> dict:
        """Derive transient render state from the current request.

        ``contents`` holds the records displayed on the page and
        ``request_params`` is a read-only mapping of query parameters.
        The returned dict is passed to :meth:`render` as ``state``.
        """
        return {}

    @abstractmethod
    def render(self, config: dict, state: dict, request=None) -> str: ...


class BasePlugin:
    name: str = ""
    label: str = ""
    version: str = "1.0.0"
    description: str = ""

    def get_widget_types(self) -> list[type[BaseWidget]]:
        return []


class PluginRegistry:
    def __init__(self):
        self._plugins: dict[str, BasePlugin] = {}
        self._widget_types: dict[str, type[BaseWidget]] = {}

    def register(self, plugin: BasePlugin) -> None:
        plugins = dict(self._plugins)
        plugins[plugin.name] = plugin
        self._widget_types = self._index_widget_types(plugins.values())
        self._plugins = plugins

    def all_plugins(self) -> list[BasePlugin]:
        return list(self._plugins.values())

    def get_plugin(self, name: str) -> BasePlugin | None:
        return self._plugins.get(name)

    def get_all_widget_types(self) -> list[type[BaseWidget]]:
        return list(self._widget_types.values())

    def get_widget_type(self, slug: str) -> type[BaseWidget] | None:
        return self._widget_types.get(slug)

    def get_descriptor(self, slug: str) -> WidgetDescriptor | None:
        cls = self.get_widget_type(slug)
        return cls.descriptor if cls else None

    def widget_choices(self) -> list[tuple[str, str]]:
        return [(cls.slug, cls.descriptor.description) for cls in self.get_all_widget_types()]

    @staticmethod
    def _index_widget_types(plugins) -> dict[str, type[BaseWidget]]:
        index: dict[str, type[BaseWidget]] = {}
        for plugin in plugins:
            for cls in plugin.get_widget_types():
                if not cls.slug:
                    raise ImproperlyConfigured(f"Widget type {cls.__name__} has no slug.")
                if not isinstance(cls.descriptor, WidgetDescriptor):
                    raise ImproperlyConfigured(
                        f"Widget type '{cls.slug}' must declare a WidgetDescriptor."
                    )
                existing = index.get(cls.slug)
                if existing is not None and existing is not cls:
                    raise ImproperlyConfigured(
                        f"Widget type '{cls.slug}' is registered by both "
                        f"{existing.__module__}.{existing.__name__} and {cls.__module__}.{cls.__name__}."
                    )
                index[cls.slug] = cls
        return index


registry = PluginRegistry()
