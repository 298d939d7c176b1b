from __future__ import annotations

import markdown
from django.db.models import Count
from django.db.models.functions import TruncMonth
from django.template.loader import render_to_string
from django.utils.safestring import mark_safe

from core.plugins import BaseWidget, WidgetDescriptor


def _int_param(params, name):
    value = params.get(name)
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class TextWidget(BaseWidget):
    slug = "text"
    descriptor = WidgetDescriptor(
        description="Text / Markdown block",
        default_config={"title": "Links", "body": ""},
    )
    template_name = "widgets/text_widget.html"
    config_schema = {
        "fields": {
            "title": {"type": "string", "label": "Title"},
            "body": {"type": "text", "label": "Body (Markdown)"},
        }
    }

    def render(self, config: dict, state: dict, request=None) -> str:
        md = markdown.Markdown(extensions=["fenced_code"])
        body_html = mark_safe(md.convert(config.get("body") or ""))
        return render_to_string(
            self.template_name,
            {"title": config.get("title", ""), "body_html": body_html},
            request=request,
        )


class RecentArticlesWidget(BaseWidget):
    slug = "recent_articles"
    descriptor = WidgetDescriptor(
        description="Recent articles",
        default_config={"title": "Recent articles", "count": 5},
    )
    template_name = "widgets/recent_articles_widget.html"
    config_schema = {
        "fields": {
            "title": {"type": "string", "label": "Title"},
            "count": {"type": "number", "label": "Count", "default": 5},
        }
    }

    def parse_request(self, contents, request_params) -> dict:
        # Articles already shown in the main column are left out.
        return {"exclude_ids": [item.pk for item in contents if getattr(item, "pk", None)]}

    def render(self, config: dict, state: dict, request=None) -> str:
        from blog.models import Article

        count = int(config.get("count") or 5)
        articles = (
            Article.objects.published()
            .filter(blog_id=self.blog_id)
            .exclude(pk__in=state.get("exclude_ids", []))
            .select_related("blog")[:count]
        )
        return render_to_string(
            self.template_name,
            {"title": config.get("title", ""), "articles": list(articles)},
            request=request,
        )


class ArchivesWidget(BaseWidget):
    slug = "archives"
    descriptor = WidgetDescriptor(
        description="Monthly archives",
        default_config={"title": "Archives", "months": 12, "show_count": True},
    )
    template_name = "widgets/archives_widget.html"
    config_schema = {
        "fields": {
            "title": {"type": "string", "label": "Title"},
            "months": {"type": "number", "label": "Months to list", "default": 12},
            "show_count": {"type": "boolean", "label": "Show article count", "default": True},
        }
    }

    def parse_request(self, contents, request_params) -> dict:
        return {
            "current_year": _int_param(request_params, "year"),
            "current_month": _int_param(request_params, "month"),
        }

    def render(self, config: dict, state: dict, request=None) -> str:
        from blog.models import Article

        months = int(config.get("months") or 12)
        rows = (
            Article.objects.published()
            .filter(blog_id=self.blog_id)
            .annotate(month=TruncMonth("published_at"))
            .values("month")
            .annotate(article_count=Count("pk"))
            .order_by("-month")[:months]
        )
        archives = [
            {
                "month": row["month"],
                "count": row["article_count"],
                "current": (
                    row["month"].year == state.get("current_year")
                    and row["month"].month == state.get("current_month")
                ),
            }
            for row in rows
        ]
        return render_to_string(
            self.template_name,
            {
                "title": config.get("title", ""),
                "archives": archives,
                "show_count": config.get("show_count", True),
            },
            request=request,
        )


class SearchWidget(BaseWidget):
    slug = "search"
    descriptor = WidgetDescriptor(
        description="Search box",
        default_config={"title": "Search", "placeholder": "Search..."},
    )
    template_name = "widgets/search_widget.html"
    config_schema = {
        "fields": {
            "title": {"type": "string", "label": "Title"},
            "placeholder": {"type": "string", "label": "Placeholder"},
        }
    }

    def parse_request(self, contents, request_params) -> dict:
        return {"query": (request_params.get("q") or "").strip()}

    def render(self, config: dict, state: dict, request=None) -> str:
        return render_to_string(
            self.template_name,
            {
                "title": config.get("title", ""),
                "placeholder": config.get("placeholder", ""),
                "query": state.get("query", ""),
            },
            request=request,
        )
