from .models import Blog


def current_blog(request):
    return {"blog": Blog.objects.default()}
