"""Unit tests for class-method classification."""

import unittest

from thread_safety_linter.domain.classifier import is_class_method_definition, method_name
from thread_safety_linter.domain.nodes import s
from thread_safety_linter.domain.scope import EMPTY_STACK, ModuleFunctionMode, ScopeKind


class TestMethodName(unittest.TestCase):

    def test_def_and_defs(self) -> None:
        self.assertEqual(method_name(s("def", "foo", s("args"), None)), "foo")
        self.assertEqual(method_name(s("defs", s("self"), "bar", s("args"), None)), "bar")

    def test_malformed_def(self) -> None:
        self.assertIsNone(method_name(s("def")))


class TestIsClassMethodDefinition(unittest.TestCase):

    def setUp(self) -> None:
        self.instance_def = s("def", "some_method", s("args"), None)

    def test_defs_is_always_class_method(self) -> None:
        node = s("defs", s("self"), "x", s("args"), None)
        self.assertTrue(is_class_method_definition(EMPTY_STACK, node))

    def test_non_definition_is_not(self) -> None:
        self.assertFalse(is_class_method_definition(EMPTY_STACK, s("send", None, "puts")))

    def test_plain_def_in_class(self) -> None:
        stack = EMPTY_STACK.enter(ScopeKind.CLASS_BODY, "Test")
        self.assertFalse(is_class_method_definition(stack, self.instance_def))

    def test_singleton_class_and_class_methods_block(self) -> None:
        for kind in (ScopeKind.SINGLETON_CLASS_BODY, ScopeKind.CLASS_METHODS_BLOCK):
            with self.subTest(kind=kind):
                stack = EMPTY_STACK.enter(kind)
                self.assertTrue(is_class_method_definition(stack, self.instance_def))

    def test_class_methods_module_matches_exact_name(self) -> None:
        stack = EMPTY_STACK.enter(ScopeKind.MODULE_BODY, "ClassMethods")
        self.assertTrue(is_class_method_definition(stack, self.instance_def))
        other = EMPTY_STACK.enter(ScopeKind.MODULE_BODY, "MyClassMethods")
        self.assertFalse(is_class_method_definition(other, self.instance_def))

    def test_class_named_class_methods_does_not_count(self) -> None:
        stack = EMPTY_STACK.enter(ScopeKind.CLASS_BODY, "ClassMethods")
        self.assertFalse(is_class_method_definition(stack, self.instance_def))

    def test_module_function_mode_on_top_frame(self) -> None:
        mode = ModuleFunctionMode(names=frozenset({"some_method"}))
        stack = EMPTY_STACK.enter(ScopeKind.MODULE_BODY, "Test").with_module_function_mode(mode)
        self.assertTrue(is_class_method_definition(stack, self.instance_def))
        other = s("def", "other", s("args"), None)
        self.assertFalse(is_class_method_definition(stack, other))

    def test_def_nested_in_singleton_method_body(self) -> None:
        stack = (
            EMPTY_STACK.enter(ScopeKind.SINGLETON_CLASS_BODY)
            .enter(ScopeKind.METHOD_DEF, "outer", class_method=True)
        )
        self.assertTrue(is_class_method_definition(stack, self.instance_def))
