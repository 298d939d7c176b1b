import json
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from blog.models import Blog
from widgets.models import WidgetInstance


class Command(BaseCommand):
    help = "List sidebar widgets and whether their widget type is installed."

    def add_arguments(self, parser):
        parser.add_argument("--blog", type=int, help="Limit output to a single blog id.")
        parser.add_argument("--json", action="store_true", help="Emit JSON output.")

    def handle(self, *args, **options):
        blog_id = options.get("blog")
        as_json = options.get("json", False)

        instances = WidgetInstance.objects.all()
        if blog_id is not None:
            if not Blog.objects.filter(pk=blog_id).exists():
                raise CommandError(f"No blog found with id {blog_id}.")
            instances = instances.filter(blog_id=blog_id)

        rows = [self._serialize_instance(instance) for instance in instances.order_by("blog", "position", "pk")]

        if as_json:
            self.stdout.write(json.dumps(rows))
            return

        if not rows:
            self.stdout.write("No widgets found.")
            return

        headers = ["ID", "BLOG", "POSITION", "TYPE", "ACTIVE", "STATUS"]
        keys = {
            "ID": "id",
            "BLOG": "blog",
            "POSITION": "position",
            "TYPE": "widget_type",
            "ACTIVE": "is_active",
            "STATUS": "status",
        }
        widths = {header: len(header) for header in headers}
        for row in rows:
            for header in headers:
                widths[header] = max(widths[header], len(str(row[keys[header]])))

        format_str = "  ".join(f"{{{header}:<{widths[header]}}}" for header in headers)
        self.stdout.write(format_str.format(**{header: header for header in headers}))
        for row in rows:
            self.stdout.write(
                format_str.format(**{header: str(row[keys[header]]) for header in headers})
            )

    def _serialize_instance(self, instance: WidgetInstance) -> dict[str, Any]:
        return {
            "id": instance.pk,
            "blog": instance.blog_id,
            "position": instance.position,
            "widget_type": instance.widget_type,
            "is_active": instance.is_active,
            "status": "ok" if instance.widget_class else "unknown type",
        }
