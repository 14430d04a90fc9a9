from __future__ import annotations

import unittest

from support import CONFIG as FOO_CONFIG

from gir_bindgen.config import Config
from gir_bindgen.errors import MalformedIdentifierError, UnregisteredNamespaceError
from gir_bindgen.ir import QualifiedName
from gir_bindgen.names import NameSupply, Style, escape_reserved, lower_name, resolve, upper_name

CONFIG = FOO_CONFIG.merged(Config(prefixes={"Gtk": "GTK"}))


class ResolveTests(unittest.TestCase):
    def test_value_and_type_style(self) -> None:
        name = QualifiedName("Foo", "bar_baz")
        self.assertEqual(resolve(name, Style.VALUE, CONFIG), "fooBarBaz")
        self.assertEqual(resolve(name, Style.TYPE, CONFIG), "FooBarBaz")
        self.assertEqual(lower_name(name, CONFIG), "fooBarBaz")
        self.assertEqual(upper_name(name, CONFIG), "FooBarBaz")

    def test_resolution_is_deterministic(self) -> None:
        name = QualifiedName("Foo", "get_widget_path")
        first = [resolve(name, style, CONFIG) for style in Style]
        second = [resolve(name, style, CONFIG) for style in Style]
        self.assertEqual(first, second)

    def test_only_first_letter_of_tokens_changes(self) -> None:
        name = QualifiedName("Gtk", "get_HTML_view")
        self.assertEqual(lower_name(name, CONFIG), "gtkGetHTMLView")
        self.assertEqual(upper_name(name, CONFIG), "GTKGetHTMLView")

    def test_override_wins_without_prefix(self) -> None:
        config = Config(prefixes={}, names={"bar_baz": "customName"})
        name = QualifiedName("Unregistered", "bar_baz")
        self.assertEqual(resolve(name, Style.VALUE, config), "customName")
        self.assertEqual(resolve(name, Style.TYPE, config), "customName")

    def test_empty_token_becomes_placeholder(self) -> None:
        name = QualifiedName("Foo", "bar__baz")
        self.assertEqual(lower_name(name, CONFIG), "fooBar_Baz")
        self.assertEqual(upper_name(name, CONFIG), "FooBar_Baz")

    def test_reserved_local_name_is_escaped_before_derivation(self) -> None:
        self.assertEqual(lower_name(QualifiedName("Foo", "in"), CONFIG), "fooIn_")

    def test_empty_prefix_adds_no_token(self) -> None:
        config = Config(prefixes={"Foo": ""})
        name = QualifiedName("Foo", "bar_baz")
        self.assertEqual(lower_name(name, config), "barBaz")
        self.assertEqual(upper_name(name, config), "BarBaz")

    def test_unregistered_namespace_is_fatal(self) -> None:
        with self.assertRaises(UnregisteredNamespaceError) as ctx:
            lower_name(QualifiedName("Nope", "thing"), CONFIG)
        self.assertEqual(ctx.exception.namespace, "Nope")
        self.assertIn("Nope", str(ctx.exception))

    def test_empty_local_name_is_fatal(self) -> None:
        with self.assertRaises(MalformedIdentifierError):
            upper_name(QualifiedName("Foo", ""), CONFIG)


class EscapeTests(unittest.TestCase):
    def test_keywords_and_wrapper_locals(self) -> None:
        self.assertEqual(escape_reserved("class"), "class_")
        self.assertEqual(escape_reserved("in"), "in_")
        self.assertEqual(escape_reserved("result"), "result_")
        self.assertEqual(escape_reserved("type"), "type_")
        self.assertEqual(escape_reserved("count"), "count")


class NameSupplyTests(unittest.TestCase):
    def test_fresh_names_never_repeat(self) -> None:
        supply = NameSupply(taken=["x"])
        self.assertEqual(supply.fresh("x"), "x_")
        self.assertEqual(supply.fresh("x"), "x__")

    def test_fresh_skips_taken_names(self) -> None:
        supply = NameSupply(taken=["x", "x_"])
        self.assertEqual(supply.fresh("x"), "x__")


if __name__ == "__main__":
    unittest.main()
