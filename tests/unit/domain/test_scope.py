"""Unit tests for the immutable scope stack."""

import unittest

from thread_safety_linter.domain.scope import (
    EMPTY_STACK,
    NO_MODULE_FUNCTION,
    ModuleFunctionMode,
    ScopeKind,
)


class TestScopeStack(unittest.TestCase):

    def test_empty_stack_has_root_only(self) -> None:
        self.assertEqual(EMPTY_STACK.depth, 1)
        self.assertEqual(EMPTY_STACK.top.kind, ScopeKind.ROOT)
        self.assertIsNone(EMPTY_STACK.innermost_method())

    def test_enter_leaves_original_untouched(self) -> None:
        inner = EMPTY_STACK.enter(ScopeKind.CLASS_BODY, "Test")
        self.assertEqual(inner.depth, 2)
        self.assertEqual(inner.top.declared_name, "Test")
        self.assertEqual(EMPTY_STACK.depth, 1)

    def test_exit_never_pops_root(self) -> None:
        self.assertEqual(EMPTY_STACK.exit(), EMPTY_STACK)
        inner = EMPTY_STACK.enter(ScopeKind.MODULE_BODY, "M")
        self.assertEqual(inner.exit(), EMPTY_STACK)

    def test_innermost_non_method_skips_method_frames(self) -> None:
        stack = (
            EMPTY_STACK.enter(ScopeKind.SINGLETON_CLASS_BODY)
            .enter(ScopeKind.METHOD_DEF, "a", class_method=True)
            .enter(ScopeKind.DYNAMIC_METHOD_BODY, "b")
        )
        self.assertEqual(stack.innermost_non_method().kind, ScopeKind.SINGLETON_CLASS_BODY)
        self.assertEqual(stack.innermost_method().declared_name, "b")

    def test_innermost_non_method_falls_back_to_root(self) -> None:
        stack = EMPTY_STACK.enter(ScopeKind.METHOD_DEF, "a")
        self.assertEqual(stack.innermost_non_method().kind, ScopeKind.ROOT)

    def test_new_frames_do_not_inherit_module_function_mode(self) -> None:
        mode = ModuleFunctionMode(all_subsequent=True)
        stack = EMPTY_STACK.enter(ScopeKind.MODULE_BODY, "M").with_module_function_mode(mode)
        self.assertIs(stack.top.module_function_mode, mode)
        inner = stack.enter(ScopeKind.MODULE_BODY, "N")
        self.assertEqual(inner.top.module_function_mode, NO_MODULE_FUNCTION)

    def test_with_same_mode_returns_same_stack(self) -> None:
        stack = EMPTY_STACK.enter(ScopeKind.MODULE_BODY, "M")
        self.assertIs(stack.with_module_function_mode(NO_MODULE_FUNCTION), stack)


class TestModuleFunctionMode(unittest.TestCase):

    def test_empty_mode_covers_nothing(self) -> None:
        self.assertTrue(NO_MODULE_FUNCTION.is_empty)
        self.assertFalse(NO_MODULE_FUNCTION.covers("anything"))

    def test_bare_directive_covers_everything(self) -> None:
        mode = ModuleFunctionMode(all_subsequent=True)
        self.assertTrue(mode.covers("x"))
        self.assertTrue(mode.covers(None))

    def test_named_directive_covers_listed_names(self) -> None:
        mode = ModuleFunctionMode(names=frozenset({"a"}))
        self.assertFalse(mode.is_empty)
        self.assertTrue(mode.covers("a"))
        self.assertFalse(mode.covers("b"))
        self.assertFalse(mode.covers(None))
