from datetime import timedelta

from django.test import TestCase
from django.utils import timezone

from blog.models import Article, Blog


class BlogModelTests(TestCase):
    def test_str_returns_title(self):
        self.assertEqual(str(Blog(title="My blog")), "My blog")

    def test_defaults(self):
        blog = Blog.objects.create(title="My blog", base_url="https://myblog.net")
        self.assertEqual(blog.date_format, "%d/%m/%Y")
        self.assertEqual(blog.time_format, "%Hh%M")
        self.assertFalse(blog.dofollowify)
        self.assertFalse(blog.unindex_tags)
        self.assertFalse(blog.unindex_categories)

    def test_default_is_first_blog(self):
        self.assertIsNone(Blog.objects.default())
        first = Blog.objects.create(title="First", base_url="https://one.net")
        Blog.objects.create(title="Second", base_url="https://two.net")
        self.assertEqual(Blog.objects.default(), first)

    def test_url_for_joins_slashes(self):
        blog = Blog(base_url="https://myblog.net/")
        self.assertEqual(blog.url_for("/2004/06/01/x/"), "https://myblog.net/2004/06/01/x/")
        blog.base_url = "https://myblog.net"
        self.assertEqual(blog.url_for("about/"), "https://myblog.net/about/")


class ArticleModelTests(TestCase):
    def setUp(self):
        self.blog = Blog.objects.create(title="My blog", base_url="https://myblog.net")

    def test_permalink_derived_from_title(self):
        article = Article.objects.create(blog=self.blog, title="Ça marche bien")
        self.assertEqual(article.permalink, "ça-marche-bien")

    def test_explicit_permalink_kept(self):
        article = Article.objects.create(blog=self.blog, title="Title", permalink="custom")
        self.assertEqual(article.permalink, "custom")

    def test_published_excludes_future_articles(self):
        live = Article.objects.create(blog=self.blog, title="Live")
        Article.objects.create(
            blog=self.blog, title="Later", published_at=timezone.now() + timedelta(hours=1)
        )
        self.assertEqual(list(Article.objects.published()), [live])

    def test_cascade_delete_with_blog(self):
        Article.objects.create(blog=self.blog, title="Gone soon")
        self.blog.delete()
        self.assertEqual(Article.objects.count(), 0)
