from django.core.paginator import EmptyPage, PageNotAnInteger, Paginator
from django.http import Http404
from django.shortcuts import get_object_or_404, render

from .models import Article, Blog


def _current_blog():
    blog = Blog.objects.default()
    if blog is None:
        raise Http404("No blog has been configured.")
    return blog


def articles(request):
    blog = _current_blog()
    query_set = Article.objects.published().filter(blog=blog)

    year = request.GET.get("year")
    if year and year.isdigit():
        query_set = query_set.filter(published_at__year=int(year))
        month = request.GET.get("month")
        if month and month.isdigit():
            query_set = query_set.filter(published_at__month=int(month))

    query = (request.GET.get("q") or "").strip()
    if query:
        query_set = query_set.filter(title__icontains=query)

    paginator = Paginator(query_set, 10)
    page_number = request.GET.get("page")

    try:
        page = paginator.page(page_number)
    except PageNotAnInteger:
        page = paginator.page(1)
    except EmptyPage:
        page = paginator.page(paginator.num_pages)

    return render(
        request,
        "blog/articles.html",
        {
            "blog": blog,
            "articles": page,
            "contents": tuple(page.object_list),
            "listing": "articles",
        },
    )


def article(request, year, month, day, permalink):
    blog = _current_blog()
    article = get_object_or_404(
        Article.objects.published().filter(blog=blog),
        permalink=permalink,
        published_at__year=int(year),
        published_at__month=int(month),
        published_at__day=int(day),
    )

    return render(
        request,
        "blog/article.html",
        {
            "blog": blog,
            "article": article,
            "contents": (article,),
            "listing": "articles",
        },
    )
