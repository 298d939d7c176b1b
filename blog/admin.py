from django.contrib import admin

from .models import Article, Blog


@admin.register(Blog)
class BlogAdmin(admin.ModelAdmin):
    list_display = ("title", "base_url", "date_format", "dofollowify")


@admin.register(Article)
class ArticleAdmin(admin.ModelAdmin):
    list_display = ("title", "blog", "published_at")
    list_filter = ("blog",)
    search_fields = ("title", "permalink")
