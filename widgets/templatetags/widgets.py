from django import template
from django.apps import apps
from django.utils.safestring import mark_safe

register = template.Library()


@register.simple_tag(takes_context=True)
def render_sidebars(context, blog=None) -> str:
    from widgets.models import WidgetInstance
    from widgets.rendering import RequestContext

    blog = blog or context.get("blog")
    if blog is None:
        return ""

    request = context.get("request")
    contents = context.get("contents") or ()
    if request is not None:
        ctx = RequestContext.from_request(request, contents=contents)
    else:
        ctx = RequestContext(contents=contents)

    instances = list(WidgetInstance.objects.for_blog(blog).active())
    pipeline = apps.get_app_config("widgets").pipeline
    return mark_safe(pipeline.render_all(instances, ctx))
