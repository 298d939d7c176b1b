from django.core.exceptions import ImproperlyConfigured
from django.test import SimpleTestCase

from core.plugins import BasePlugin, BaseWidget, PluginRegistry, WidgetDescriptor, registry


class _Widget(BaseWidget):
    def render(self, config, state, request=None):
        return ""


def _widget_type(slug, description="A widget", **attrs):
    attrs.setdefault("descriptor", WidgetDescriptor(description=description) if description else None)
    return type(f"{slug.title()}Widget", (_Widget,), {"slug": slug, **attrs})


def _plugin(name, widget_types):
    return type(
        f"{name.title()}Plugin",
        (BasePlugin,),
        {"name": name, "get_widget_types": lambda self: list(widget_types)},
    )()


class WidgetDescriptorTests(SimpleTestCase):
    def test_empty_description_rejected(self):
        with self.assertRaises(ImproperlyConfigured):
            WidgetDescriptor(description="")

    def test_blank_description_rejected(self):
        with self.assertRaises(ImproperlyConfigured):
            WidgetDescriptor(description="   ")

    def test_default_config_is_read_only(self):
        descriptor = WidgetDescriptor(description="Text", default_config={"title": "Links"})
        with self.assertRaises(TypeError):
            descriptor.default_config["title"] = "Other"

    def test_default_config_is_copied_from_caller(self):
        defaults = {"title": "Links"}
        descriptor = WidgetDescriptor(description="Text", default_config=defaults)
        defaults["title"] = "Changed"
        self.assertEqual(descriptor.default_config["title"], "Links")

    def test_initial_config_is_an_independent_dict(self):
        descriptor = WidgetDescriptor(description="Tags", default_config={"tags": ["a"]})
        config = descriptor.initial_config()
        config["tags"].append("b")
        self.assertEqual(descriptor.initial_config(), {"tags": ["a"]})
        self.assertIsInstance(config, dict)


class PluginRegistryTests(SimpleTestCase):
    def test_get_widget_type_by_slug(self):
        text = _widget_type("text")
        reg = PluginRegistry()
        reg.register(_plugin("one", [text]))
        self.assertIs(reg.get_widget_type("text"), text)
        self.assertIsNone(reg.get_widget_type("missing"))

    def test_get_descriptor(self):
        text = _widget_type("text", description="Text block")
        reg = PluginRegistry()
        reg.register(_plugin("one", [text]))
        self.assertEqual(reg.get_descriptor("text").description, "Text block")
        self.assertIsNone(reg.get_descriptor("missing"))

    def test_widget_choices_use_descriptions(self):
        reg = PluginRegistry()
        reg.register(_plugin("one", [_widget_type("text", "Text block"), _widget_type("search", "Search box")]))
        self.assertEqual(reg.widget_choices(), [("text", "Text block"), ("search", "Search box")])

    def test_duplicate_slug_across_plugins_rejected(self):
        reg = PluginRegistry()
        reg.register(_plugin("one", [_widget_type("text")]))
        with self.assertRaises(ImproperlyConfigured):
            reg.register(_plugin("two", [_widget_type("text")]))
        self.assertIsNone(reg.get_plugin("two"))

    def test_reregistering_same_plugin_replaces_it(self):
        text = _widget_type("text")
        reg = PluginRegistry()
        reg.register(_plugin("one", [text]))
        reg.register(_plugin("one", [text]))
        self.assertEqual(len(reg.all_plugins()), 1)
        self.assertEqual(reg.get_all_widget_types(), [text])

    def test_missing_descriptor_rejected(self):
        reg = PluginRegistry()
        with self.assertRaises(ImproperlyConfigured):
            reg.register(_plugin("one", [_widget_type("bare", description=None)]))

    def test_missing_slug_rejected(self):
        reg = PluginRegistry()
        with self.assertRaises(ImproperlyConfigured):
            reg.register(_plugin("one", [_widget_type("")]))

    def test_builtin_widgets_registered_at_startup(self):
        slugs = {slug for slug, _ in registry.widget_choices()}
        self.assertEqual(slugs, {"text", "recent_articles", "archives", "search"})
        self.assertIsNotNone(registry.get_plugin("widgets"))
