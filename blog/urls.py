from django.urls import path, re_path

from . import views

app_name = "blog"

urlpatterns = [
    path("", views.articles, name="articles"),
    re_path(
        r"^(?P<year>\d{4})/(?P<month>\d{2})/(?P<day>\d{2})/(?P<permalink>[^/]+)/$",
        views.article,
        name="article",
    ),
]
