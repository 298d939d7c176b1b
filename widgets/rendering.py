"""Sidebar rendering pipeline.

:class:`WidgetRenderer` is the fault isolation boundary: anything a widget
variant raises while parsing the request or rendering is turned into a
:class:`RenderFailure`. :class:`SidebarPipeline` renders a blog's widgets in
position order, logs each failure through the logger it was built with and
substitutes a placeholder for the broken widget's output.
"""
from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping

PLACEHOLDER_HTML = (
    '<div class="sidebar-widget sidebar-widget--broken">'
    "<p>It seems something went wrong. Maybe some of your sidebars are actually "
    "missing and you should either reinstall them or remove them manually.</p>"
    "</div>"
)


class UnknownWidgetType(LookupError):
    """A persisted widget references a kind no plugin has registered."""


@dataclass(frozen=True)
class RequestContext:
    query_params: Mapping[str, str] = field(default_factory=dict)
    page_identity: str = ""
    contents: tuple = ()
    request: Any = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "query_params", MappingProxyType(dict(self.query_params)))
        object.__setattr__(self, "contents", tuple(self.contents))

    @classmethod
    def from_request(cls, request, *, page_identity: str | None = None, contents=()):
        params = {key: request.GET.get(key) for key in request.GET.keys()}
        return cls(
            query_params=params,
            page_identity=page_identity if page_identity is not None else request.path,
            contents=contents,
            request=request,
        )


@dataclass(frozen=True)
class RenderSuccess:
    widget_id: Any
    fragment: str


@dataclass(frozen=True)
class RenderFailure:
    widget_id: Any
    cause: Exception


RenderOutcome = RenderSuccess | RenderFailure


class WidgetRenderer:
    def __init__(self, registry=None):
        if registry is None:
            from core.plugins import registry
        self.registry = registry

    def render(self, instance, ctx: RequestContext) -> RenderOutcome:
        try:
            fragment = self._render(instance, ctx)
        except Exception as exc:
            return RenderFailure(widget_id=instance.pk, cause=exc)
        return RenderSuccess(widget_id=instance.pk, fragment=fragment)

    def _render(self, instance, ctx: RequestContext) -> str:
        cls = self.registry.get_widget_type(instance.widget_type)
        if cls is None:
            raise UnknownWidgetType(f"No widget type registered for '{instance.widget_type}'.")

        config = cls.descriptor.initial_config()
        config.update(copy.deepcopy(instance.config or {}))

        widget = cls(blog_id=instance.blog_id)
        state = widget.parse_request(ctx.contents, ctx.query_params) or {}
        fragment = widget.render(config, state, request=ctx.request)
        if not isinstance(fragment, str):
            raise TypeError(
                f"Widget '{instance.widget_type}' returned {type(fragment).__name__}, expected str."
            )
        return fragment


def _position_key(instance):
    return (instance.position, instance.pk is None, instance.pk or 0)


class SidebarPipeline:
    def __init__(
        self,
        logger: logging.Logger,
        *,
        renderer: WidgetRenderer | None = None,
        placeholder: str = PLACEHOLDER_HTML,
    ):
        self.logger = logger
        self.renderer = renderer or WidgetRenderer()
        self.placeholder = placeholder

    def render_all(self, instances: Iterable, ctx: RequestContext) -> str:
        snapshot = tuple(sorted(instances, key=_position_key))
        parts = []
        for instance in snapshot:
            outcome = self.renderer.render(instance, ctx)
            if isinstance(outcome, RenderSuccess):
                parts.append(outcome.fragment)
                continue
            self.logger.error(
                "Widget %s pk=%s failed to render: %r",
                instance.widget_type,
                outcome.widget_id,
                outcome.cause,
                exc_info=outcome.cause,
                extra={
                    "widget_id": outcome.widget_id,
                    "widget_type": instance.widget_type,
                    "cause": outcome.cause,
                    "page_identity": ctx.page_identity,
                },
            )
            parts.append(self.placeholder)
        return "".join(parts)
