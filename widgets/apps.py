import logging

from django.apps import AppConfig
from django.conf import settings


class WidgetsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "widgets"

    pipeline = None

    def ready(self):
        from core.plugins import registry
        from .plugin import WidgetsPlugin
        from .rendering import PLACEHOLDER_HTML, SidebarPipeline, WidgetRenderer

        registry.register(WidgetsPlugin())
        self.pipeline = SidebarPipeline(
            logging.getLogger(getattr(settings, "WIDGETS_LOGGER", "widgets.sidebar")),
            renderer=WidgetRenderer(registry),
            placeholder=getattr(settings, "WIDGETS_BROKEN_PLACEHOLDER", PLACEHOLDER_HTML),
        )
