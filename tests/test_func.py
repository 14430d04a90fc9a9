from __future__ import annotations

import unittest

from support import BOOLEAN, CONFIG, DOUBLE, INT32, POINT, UTF8, iface, make_registry

from gir_bindgen.codegen import CodeGen
from gir_bindgen.convert import Marshaller
from gir_bindgen.errors import UnknownConversionError
from gir_bindgen.func import UNMANAGED_NOTE, FuncGenerator
from gir_bindgen.ir import VOID, Arg, ArrayType, Callable, Direction, QualifiedName
from gir_bindgen.types import TypeMapper, TypeRep

BAR_BAZ = QualifiedName("Foo", "bar_baz")


def out(name, t):
    return Arg(name, t, Direction.OUT)


class FuncGeneratorTests(unittest.TestCase):
    def setUp(self) -> None:
        mapper = TypeMapper(make_registry(), CONFIG)
        self.gen = FuncGenerator(mapper, Marshaller(mapper), CONFIG)

    def build(self, *args, ret=VOID, nullable=False):
        return self.gen.build(BAR_BAZ, "foo_bar_baz", Callable(tuple(args), ret, nullable))

    def test_boolean_in_int_out_scenario(self) -> None:
        binding = self.build(Arg("flag", BOOLEAN), out("count", INT32))
        wrapper = binding.wrapper

        self.assertEqual(wrapper.name, "fooBarBaz")
        self.assertEqual(wrapper.params, [("flag", TypeRep("bool"))])
        self.assertEqual([s.render() for s in wrapper.in_steps], ["flag_ = int(flag)"])
        self.assertEqual(len(wrapper.storage), 1)
        self.assertEqual(wrapper.storage[0].render(), "count_ = ctypes.c_int32()")
        self.assertEqual(wrapper.result, TypeRep("tuple", (TypeRep("int"),)))
        self.assertEqual(str(wrapper.result), "tuple[int]")

        gen = CodeGen()
        wrapper.render(gen)
        self.assertEqual(gen.output(), "\n".join([
            "def fooBarBaz(flag: bool) -> tuple[int]:",
            "    flag_ = int(flag)",
            "    count_ = ctypes.c_int32()",
            "    result = _foo_bar_baz(flag_, ctypes.byref(count_))",
            "    result_ = result",
            "    count__ = count_.value",
            "    count___ = count__",
            "    return (count___,)",
        ]))

    def test_native_declaration(self) -> None:
        decl = self.build(Arg("flag", BOOLEAN), out("count", INT32)).declaration
        self.assertEqual([rep.ctype for _, rep in decl.args],
                         ["ctypes.c_int", "ctypes.POINTER(ctypes.c_int32)"])
        self.assertEqual(str(decl.restype), "Foreign[None]")

        gen = CodeGen()
        decl.render(gen)
        self.assertEqual(gen.output(), "\n".join([
            "_foo_bar_baz = _foreign('foo_bar_baz', None, [",
            "    " + "ctypes.c_int,".ljust(40) + "# flag",
            "    " + "ctypes.POINTER(ctypes.c_int32),".ljust(40) + "# count",
            "])",
        ]))

    def test_declaration_without_arguments(self) -> None:
        gen = CodeGen()
        self.build(ret=DOUBLE).declaration.render(gen)
        self.assertEqual(gen.output(), "_foo_bar_baz = _foreign('foo_bar_baz', ctypes.c_double, [])")

    def test_aggregation_unit_without_outputs(self) -> None:
        wrapper = self.build(Arg("x", INT32)).wrapper
        self.assertEqual(wrapper.result, TypeRep("None"))
        self.assertIsNone(wrapper.returns)

    def test_aggregation_unit_with_two_outputs(self) -> None:
        wrapper = self.build(out("a", INT32), out("b", DOUBLE)).wrapper
        self.assertEqual(str(wrapper.result), "tuple[int, float]")
        self.assertEqual(wrapper.returns, "(a___, b___)")
        self.assertEqual(wrapper.params, [])

    def test_aggregation_value_without_outputs(self) -> None:
        wrapper = self.build(Arg("x", INT32), ret=INT32).wrapper
        self.assertEqual(wrapper.result, TypeRep("int"))
        self.assertEqual(wrapper.returns, "result_")

    def test_aggregation_value_with_one_output(self) -> None:
        wrapper = self.build(out("n", INT32), ret=INT32).wrapper
        self.assertEqual(str(wrapper.result), "tuple[int, int]")
        self.assertEqual(wrapper.returns, "(result_, n___)")

    def test_nullable_result_is_optional(self) -> None:
        wrapper = self.build(ret=INT32, nullable=True).wrapper
        self.assertEqual(str(wrapper.result), "Optional[int]")
        self.assertNotEqual(wrapper.result, TypeRep("int"))

        gen = CodeGen()
        wrapper.render(gen)
        self.assertIn("    if result is None:\n        return None", gen.output())

    def test_nullable_tuple_is_optional(self) -> None:
        wrapper = self.build(out("n", INT32), ret=UTF8, nullable=True).wrapper
        self.assertEqual(str(wrapper.result), "Optional[tuple[str, int]]")

    def test_nullable_void_return_keeps_outputs(self) -> None:
        wrapper = self.build(Arg("x", DOUBLE), out("s", DOUBLE), out("c", DOUBLE),
                             nullable=True).wrapper
        self.assertEqual(str(wrapper.result), "tuple[float, float]")
        self.assertFalse(wrapper.null_check)
        self.assertEqual(wrapper.returns, "(s___, c___)")

        gen = CodeGen()
        wrapper.render(gen)
        self.assertNotIn("if result is None", gen.output())

    def test_void_arguments_are_untyped_pointers(self) -> None:
        binding = self.build(Arg("data", VOID), out("handle", VOID))
        self.assertEqual([rep.ctype for _, rep in binding.declaration.args],
                         ["ctypes.c_void_p", "ctypes.POINTER(ctypes.c_void_p)"])

        wrapper = binding.wrapper
        self.assertEqual(wrapper.params, [("data", TypeRep("int"))])
        self.assertEqual([s.render() for s in wrapper.in_steps], ["data_ = data"])
        self.assertEqual(wrapper.storage[0].render(), "handle_ = ctypes.c_void_p()")
        self.assertEqual(str(wrapper.result), "tuple[int]")
        self.assertEqual(wrapper.doc, UNMANAGED_NOTE)

    def test_inout_writes_initial_value_and_returns_update(self) -> None:
        wrapper = self.build(Arg("value", INT32, Direction.INOUT)).wrapper
        self.assertEqual(wrapper.params, [("value", TypeRep("int"))])
        self.assertEqual([s.render() for s in wrapper.in_steps], ["value_ = value"])
        self.assertEqual(wrapper.storage[0].render(), "value__ = ctypes.c_int32(value_)")
        self.assertEqual(wrapper.call, "result = _foo_bar_baz(ctypes.byref(value__))")
        self.assertEqual(wrapper.returns, "(value____,)")

    def test_pointer_results_are_flagged_unmanaged(self) -> None:
        wrapper = self.build(ret=iface(POINT)).wrapper
        self.assertEqual(wrapper.doc, UNMANAGED_NOTE)
        self.assertEqual([s.render() for s in wrapper.out_steps], ["result_ = FooPoint(result)"])
        self.assertIsNone(self.build(ret=INT32).wrapper.doc)

    def test_parameter_order_and_reserved_names(self) -> None:
        wrapper = self.build(out("first", INT32), Arg("type", UTF8), Arg("in", BOOLEAN)).wrapper
        self.assertEqual([n for n, _ in wrapper.params], ["type_", "in_"])
        self.assertEqual(wrapper.call,
                         "result = _foo_bar_baz(ctypes.byref(first_), type__, in__)")
        self.assertTrue(wrapper.in_steps[0].allocates)

    def test_unknown_pairing_aborts(self) -> None:
        with self.assertRaises(UnknownConversionError):
            self.build(Arg("xs", ArrayType(INT32)))

    def test_generate_splits_declaration_and_wrapper(self) -> None:
        from gir_bindgen.ir import Function

        decls, body = CodeGen(), CodeGen()
        func = Function("foo_bar_baz", Callable((Arg("x", INT32),), INT32))
        self.gen.generate(BAR_BAZ, func, decls, body)
        self.assertTrue(decls.output().startswith("# function foo_bar_baz\n_foo_bar_baz = _foreign("))
        self.assertTrue(body.output().startswith("# function foo_bar_baz\ndef fooBarBaz(x: int) -> int:"))


if __name__ == "__main__":
    unittest.main()
