import json
from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase

from blog.models import Blog
from widgets.models import WidgetInstance


class WidgetListCommandTests(TestCase):
    def setUp(self):
        self.blog = Blog.objects.create(title="Test blog", base_url="https://myblog.net")
        self.text = WidgetInstance.objects.create(blog=self.blog, widget_type="text", position=0)
        self.missing = WidgetInstance.objects.create(blog=self.blog, widget_type="gone", position=1)

    def _call(self, *args):
        out = StringIO()
        call_command("widget_list", *args, stdout=out)
        return out.getvalue()

    def test_json_output_reports_status(self):
        rows = json.loads(self._call("--json"))
        self.assertEqual([row["id"] for row in rows], [self.text.pk, self.missing.pk])
        self.assertEqual(rows[0]["status"], "ok")
        self.assertEqual(rows[1]["status"], "unknown type")

    def test_table_output(self):
        output = self._call()
        lines = output.strip().splitlines()
        self.assertTrue(lines[0].startswith("ID"))
        self.assertIn("STATUS", lines[0])
        self.assertEqual(len(lines), 3)
        self.assertIn("unknown type", lines[2])

    def test_filter_by_blog(self):
        other = Blog.objects.create(title="Other", base_url="https://other.net")
        WidgetInstance.objects.create(blog=other, widget_type="search")
        rows = json.loads(self._call("--blog", str(other.pk), "--json"))
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]["widget_type"], "search")

    def test_unknown_blog_raises(self):
        with self.assertRaises(CommandError):
            self._call("--blog", "9999")

    def test_no_widgets_message(self):
        WidgetInstance.objects.all().delete()
        self.assertIn("No widgets found.", self._call())
