from datetime import datetime, timezone as dt_timezone

from django.template import Context, Template
from django.test import RequestFactory, TestCase
from django.utils import timezone

from blog.models import Article, Blog


def _render(source, context):
    return Template("{% load blog_helpers %}" + source).render(Context(context))


class RobotsMetaTagTests(TestCase):
    def setUp(self):
        self.blog = Blog.objects.create(title="Test blog", base_url="https://myblog.net")
        self.factory = RequestFactory()

    def test_no_meta_by_default(self):
        output = _render("{% robots_meta %}", {"blog": self.blog, "request": self.factory.get("/")})
        self.assertEqual(output, "")

    def test_meta_for_paginated_listing(self):
        request = self.factory.get("/", {"page": "2"})
        output = _render("{% robots_meta %}", {"blog": self.blog, "request": request})
        self.assertEqual(output, '<meta name="robots" content="noindex, follow">')

    def test_meta_for_unindexed_tag_listing(self):
        self.blog.unindex_tags = True
        context = {"blog": self.blog, "request": self.factory.get("/"), "listing": "tags"}
        self.assertIn("noindex", _render("{% robots_meta %}", context))

    def test_no_request_renders_nothing(self):
        self.assertEqual(_render("{% robots_meta %}", {"blog": self.blog}), "")


class FormattingTagTests(TestCase):
    def setUp(self):
        self.blog = Blog.objects.create(
            title="Test blog",
            base_url="https://myblog.net",
            date_format="%d %b %Y",
            time_format="%H:%M",
        )
        self.published_at = datetime(2004, 6, 1, 9, 30, tzinfo=dt_timezone.utc)

    def test_display_date_uses_context_blog(self):
        output = _render("{% display_date value %}", {"blog": self.blog, "value": self.published_at})
        self.assertEqual(output, "01 Jun 2004")

    def test_display_date_falls_back_to_default_blog(self):
        output = _render("{% display_date value %}", {"value": self.published_at})
        self.assertEqual(output, "01 Jun 2004")

    def test_display_time(self):
        output = _render("{% display_time value %}", {"blog": self.blog, "value": self.published_at})
        self.assertEqual(output, "09:30")

    def test_display_date_matches_permalink_in_active_time_zone(self):
        article = Article.objects.create(
            blog=self.blog,
            title="Late post",
            published_at=datetime(2014, 1, 23, 20, 47, tzinfo=dt_timezone.utc),
        )
        self.blog.date_format = "%d/%m/%Y"
        self.blog.time_format = "%Hh%M"
        context = {"blog": self.blog, "value": article.published_at}
        with timezone.override("Asia/Tokyo"):
            output = _render("{% display_date value %} {% display_time value %}", context)
            url = article.get_absolute_url()
        self.assertEqual(output, "24/01/2014 05h47")
        self.assertEqual(url, "/2014/01/24/late-post/")

    def test_link_to_permalink(self):
        article = Article.objects.create(blog=self.blog, title="Hello", published_at=self.published_at)
        output = _render("{% link_to_permalink article 'Read' %}", {"article": article})
        self.assertEqual(output, '<a href="https://myblog.net/2004/06/01/hello/">Read</a>')

    def test_nofollowify_follows_blog_setting(self):
        html = '<a href="http://myblog.net">my blog</a>'
        output = _render("{% nofollowify html %}", {"blog": self.blog, "html": html})
        self.assertEqual(output, '<a href="http://myblog.net" rel="nofollow">my blog</a>')

        self.blog.dofollowify = True
        output = _render("{% nofollowify html %}", {"blog": self.blog, "html": html})
        self.assertEqual(output, html)

    def test_reply_context_url(self):
        reply = {"user": {"name": "truc", "entities": {}}}
        output = _render("{% reply_context_url reply %}", {"reply": reply})
        self.assertEqual(output, '<a href="https://twitter.com/truc">truc</a>')

    def test_twitter_link_uses_active_time_zone(self):
        reply = {
            "id_str": "123456789",
            "created_at": "Thu Jan 23 13:47:00 +0000 2014",
            "user": {"screen_name": "a_screen_name"},
        }
        with timezone.override("Asia/Tokyo"):
            output = _render("{% reply_context_twitter_link reply %}", {"reply": reply})
        self.assertIn("23/01/2014 at 22h47", output)
