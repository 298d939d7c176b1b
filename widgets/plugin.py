from core.plugins import BasePlugin


class WidgetsPlugin(BasePlugin):
    name = "widgets"
    label = "Widgets"
    description = "Built-in sidebar widgets."

    def get_widget_types(self):
        from .widget_types import ArchivesWidget, RecentArticlesWidget, SearchWidget, TextWidget
        return [TextWidget, RecentArticlesWidget, ArchivesWidget, SearchWidget]
