from django import forms
from django.core.exceptions import ValidationError

from core.plugins import registry

from .models import WidgetInstance


class WidgetConfigForm(forms.Form):
    """Validates a widget's ``config`` against its variant's ``config_schema``."""

    def __init__(self, schema: dict, *args, **kwargs):
        self.schema = schema or {}
        super().__init__(*args, **kwargs)
        fields = self.schema.get("fields")
        if not isinstance(fields, dict):
            return
        for name, definition in fields.items():
            if not isinstance(definition, dict):
                continue
            field_type = definition.get("type", "string")
            label = definition.get("label") or name.replace("_", " ").title()
            self.fields[name] = _widget_config_field(
                field_type,
                label=label,
                required=bool(definition.get("required")),
                help_text=definition.get("help") or "",
            )


def _widget_config_field(field_type, *, label, required, help_text):
    if field_type == "text":
        return forms.CharField(
            required=required,
            label=label,
            help_text=help_text,
            widget=forms.Textarea(attrs={"rows": 4}),
        )
    if field_type == "boolean":
        return forms.BooleanField(required=False, label=label, help_text=help_text)
    if field_type == "number":
        return forms.IntegerField(required=required, label=label, help_text=help_text, min_value=0)
    return forms.CharField(required=required, label=label, help_text=help_text)


class WidgetInstanceForm(forms.ModelForm):
    widget_type = forms.ChoiceField(label="Widget type")

    class Meta:
        model = WidgetInstance
        fields = ["blog", "widget_type", "position", "config", "is_active"]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        choices = registry.widget_choices()
        current = self.instance.widget_type if self.instance.pk else ""
        if current and current not in dict(choices):
            choices.append((current, f"{current} (not installed)"))
        self.fields["widget_type"].choices = choices
        self.fields["config"].required = False

    def clean(self):
        cleaned_data = super().clean()
        widget_type = cleaned_data.get("widget_type")
        config = cleaned_data.get("config") or {}
        if not isinstance(config, dict):
            self.add_error("config", "Widget configuration must be a JSON object.")
            return cleaned_data

        cls = registry.get_widget_type(widget_type) if widget_type else None
        if cls is None:
            return cleaned_data

        merged = {**cls.descriptor.initial_config(), **config}
        schema_fields = (cls.config_schema or {}).get("fields") or {}
        unknown = sorted(set(config) - set(schema_fields))
        if unknown:
            self.add_error("config", f"Unknown settings for {cls.slug}: {', '.join(unknown)}.")
            return cleaned_data

        config_form = WidgetConfigForm(cls.config_schema, data=merged)
        if not config_form.is_valid():
            errors = "; ".join(
                f"{name}: {' '.join(messages)}" for name, messages in config_form.errors.items()
            )
            raise ValidationError({"config": errors})
        cleaned_data["config"] = {**merged, **config_form.cleaned_data}
        return cleaned_data
