from django.db import models, transaction


class WidgetInstanceQuerySet(models.QuerySet):
    def for_blog(self, blog):
        return self.filter(blog=blog)

    def active(self):
        return self.filter(is_active=True)

    def reorder(self, blog, ordered_pks) -> None:
        """Rewrite positions of ``blog``'s widgets to follow ``ordered_pks``."""
        ordered_pks = [int(pk) for pk in ordered_pks]
        if len(set(ordered_pks)) != len(ordered_pks):
            raise ValueError(f"Widget ids {ordered_pks} contain duplicates.")
        with transaction.atomic():
            instances = {
                inst.pk: inst
                for inst in self.select_for_update().filter(blog=blog, pk__in=ordered_pks)
            }
            missing = [pk for pk in ordered_pks if pk not in instances]
            if missing:
                raise ValueError(f"Widgets {missing} do not belong to blog {blog.pk}.")
            for position, pk in enumerate(ordered_pks):
                instances[pk].position = position
            self.model.objects.bulk_update(instances.values(), ["position"])


class WidgetInstance(models.Model):
    blog = models.ForeignKey("blog.Blog", on_delete=models.CASCADE, related_name="widgets")
    widget_type = models.CharField(max_length=64)
    position = models.PositiveIntegerField(default=0)
    config = models.JSONField(default=dict, blank=True)
    is_active = models.BooleanField(default=True)

    objects = WidgetInstanceQuerySet.as_manager()

    class Meta:
        ordering = ["blog", "position", "pk"]

    def __str__(self):
        return f"{self.widget_type} on blog {self.blog_id} (position={self.position})"

    @property
    def widget_class(self):
        from core.plugins import registry

        return registry.get_widget_type(self.widget_type)

    @property
    def description(self) -> str:
        cls = self.widget_class
        return cls.descriptor.description if cls else self.widget_type

    def save(self, *args, **kwargs):
        if self._state.adding and not self.config:
            cls = self.widget_class
            if cls is not None:
                self.config = cls.descriptor.initial_config()
        super().save(*args, **kwargs)
