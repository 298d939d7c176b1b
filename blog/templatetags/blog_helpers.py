from django import template
from django.utils import timezone
from django.utils.safestring import mark_safe

from blog import helpers

register = template.Library()


def _context_blog(context):
    blog = context.get("blog")
    if blog is None:
        from blog.models import Blog

        blog = Blog.objects.default()
    return blog


@register.simple_tag(takes_context=True)
def robots_meta(context) -> str:
    blog = _context_blog(context)
    request = context.get("request")
    if blog is None or request is None:
        return ""
    if not helpers.should_noindex(blog, request.GET, context.get("listing", "")):
        return ""
    return mark_safe('<meta name="robots" content="noindex, follow">')


@register.simple_tag
def link_to_permalink(item, title, anchor=None, css_class=None, nofollow=False):
    return helpers.link_to_permalink(
        item, title, anchor=anchor, css_class=css_class, nofollow=nofollow
    )


@register.simple_tag(takes_context=True)
def display_date(context, value) -> str:
    return helpers.display_date(
        value, _context_blog(context), timezone.get_current_timezone()
    )


@register.simple_tag(takes_context=True)
def display_time(context, value) -> str:
    return helpers.display_time(
        value, _context_blog(context), timezone.get_current_timezone()
    )


@register.simple_tag(takes_context=True)
def nofollowify(context, html) -> str:
    blog = _context_blog(context)
    dofollow = bool(blog and blog.dofollowify)
    return mark_safe(helpers.apply_nofollow(str(html), dofollow))


@register.simple_tag
def reply_context_url(reply):
    return helpers.reply_context_url(reply)


@register.simple_tag
def reply_context_twitter_link(reply):
    return helpers.reply_context_twitter_link(reply, timezone.get_current_timezone())
