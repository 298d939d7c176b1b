from django.contrib import admin

from .forms import WidgetInstanceForm
from .models import WidgetInstance


@admin.register(WidgetInstance)
class WidgetInstanceAdmin(admin.ModelAdmin):
    form = WidgetInstanceForm
    list_display = ("widget_type", "description", "blog", "position", "is_active")
    list_editable = ("position", "is_active")
    list_filter = ("blog", "is_active")
    ordering = ("blog", "position", "pk")
