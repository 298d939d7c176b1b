"""Tests for the {% render_sidebars %} template tag."""
from unittest.mock import patch

from django.apps import apps
from django.template import Context, Template
from django.test import RequestFactory, TestCase

from blog.models import Blog
from widgets.models import WidgetInstance
from widgets.rendering import PLACEHOLDER_HTML, SidebarPipeline

SIDEBAR_LOGGER = "widgets.sidebar"


def _render(context):
    return Template("{% load widgets %}{% render_sidebars %}").render(Context(context))


class RenderSidebarsTests(TestCase):
    def setUp(self):
        self.blog = Blog.objects.create(title="Test blog", base_url="https://myblog.net")
        self.request = RequestFactory().get("/", {"q": "django"})

    def test_no_blog_renders_nothing(self):
        self.assertEqual(_render({}), "")

    def test_valid_sidebar_renders(self):
        WidgetInstance.objects.create(
            blog=self.blog, widget_type="text", config={"title": "Links", "body": "Rendered"}
        )
        output = _render({"blog": self.blog, "request": self.request})
        self.assertIn("Rendered", output)
        self.assertNotIn("It seems something went wrong", output)

    def test_broken_sidebar_returns_friendly_message(self):
        WidgetInstance.objects.create(blog=self.blog, widget_type="text")
        with patch(
            "widgets.widget_types.TextWidget.parse_request",
            side_effect=RuntimeError("I'm b0rked!"),
        ):
            with self.assertLogs(SIDEBAR_LOGGER, level="ERROR") as logs:
                output = _render({"blog": self.blog, "request": self.request})
        self.assertRegex(output, r"It seems something went wrong")
        self.assertEqual(len(logs.records), 1)

    def test_missing_widget_type_returns_friendly_message(self):
        widget = WidgetInstance.objects.create(blog=self.blog, widget_type="uninstalled")
        with self.assertLogs(SIDEBAR_LOGGER, level="ERROR") as logs:
            output = _render({"blog": self.blog})
        self.assertEqual(output, PLACEHOLDER_HTML)
        self.assertEqual(logs.records[0].widget_id, widget.pk)

    def test_broken_widget_does_not_hide_others(self):
        WidgetInstance.objects.create(blog=self.blog, widget_type="uninstalled", position=0)
        WidgetInstance.objects.create(
            blog=self.blog, widget_type="text", position=1, config={"body": "Still here"}
        )
        with self.assertLogs(SIDEBAR_LOGGER, level="ERROR"):
            output = _render({"blog": self.blog, "request": self.request})
        self.assertTrue(output.startswith(PLACEHOLDER_HTML))
        self.assertIn("Still here", output)

    def test_inactive_widgets_skipped(self):
        WidgetInstance.objects.create(
            blog=self.blog, widget_type="text", is_active=False, config={"body": "Hidden"}
        )
        self.assertEqual(_render({"blog": self.blog}), "")

    def test_explicit_blog_argument(self):
        WidgetInstance.objects.create(blog=self.blog, widget_type="text", config={"body": "Mine"})
        output = Template("{% load widgets %}{% render_sidebars target %}").render(
            Context({"target": self.blog})
        )
        self.assertIn("Mine", output)

    def test_request_params_reach_widgets(self):
        WidgetInstance.objects.create(blog=self.blog, widget_type="search")
        output = _render({"blog": self.blog, "request": self.request})
        self.assertIn('value="django"', output)

    def test_app_pipeline_built_at_startup(self):
        pipeline = apps.get_app_config("widgets").pipeline
        self.assertIsInstance(pipeline, SidebarPipeline)
        self.assertEqual(pipeline.logger.name, SIDEBAR_LOGGER)
