from django.db import models
from django.urls import reverse
from django.utils import timezone
from django.utils.text import slugify


class BlogQuerySet(models.QuerySet):
    def default(self):
        return self.order_by("pk").first()


class Blog(models.Model):
    title = models.CharField(max_length=255)
    base_url = models.URLField(max_length=2000)
    date_format = models.CharField(max_length=64, default="%d/%m/%Y")
    time_format = models.CharField(max_length=64, default="%Hh%M")
    dofollowify = models.BooleanField(default=False)
    unindex_tags = models.BooleanField(default=False)
    unindex_categories = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = BlogQuerySet.as_manager()

    class Meta:
        ordering = ["pk"]

    def __str__(self):
        return self.title

    def url_for(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"


class ArticleQuerySet(models.QuerySet):
    def published(self):
        return self.filter(published_at__lte=timezone.now())


class Article(models.Model):
    blog = models.ForeignKey(Blog, on_delete=models.CASCADE, related_name="articles")
    title = models.CharField(max_length=255)
    permalink = models.SlugField(max_length=255, allow_unicode=True, blank=True)
    body = models.TextField(blank=True)
    published_at = models.DateTimeField(default=timezone.now)

    objects = ArticleQuerySet.as_manager()

    class Meta:
        ordering = ["-published_at", "-pk"]

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        if not self.permalink:
            self.permalink = slugify(self.title, allow_unicode=True)
        super().save(*args, **kwargs)

    def get_absolute_url(self):
        published = self.published_at
        if timezone.is_aware(published):
            published = timezone.localtime(published)
        return reverse(
            "blog:article",
            kwargs={
                "year": f"{published.year:04d}",
                "month": f"{published.month:02d}",
                "day": f"{published.day:02d}",
                "permalink": self.permalink or slugify(self.title, allow_unicode=True),
            },
        )

    @property
    def permalink_url(self) -> str:
        return self.blog.url_for(self.get_absolute_url())
