"""Unit tests for instance-variable access detection."""

import unittest

from thread_safety_linter.domain.detector import (
    is_direct_ivar_access,
    is_ivar_access,
    is_ivar_name_literal,
    is_reflective_ivar_access,
    offense_anchor,
)
from thread_safety_linter.domain.nodes import Node, SourceRange, s


class TestIvarNameLiteral(unittest.TestCase):

    def test_symbol_and_string(self) -> None:
        self.assertTrue(is_ivar_name_literal(s("sym", "@params")))
        self.assertTrue(is_ivar_name_literal(s("str", "@params")))

    def test_class_variable_and_plain_names(self) -> None:
        self.assertFalse(is_ivar_name_literal(s("sym", "@@count")))
        self.assertFalse(is_ivar_name_literal(s("sym", "params")))
        self.assertFalse(is_ivar_name_literal(s("lvar", "name")))
        self.assertFalse(is_ivar_name_literal("@params"))

    def test_interpolated(self) -> None:
        dsym = s("dsym", s("str", "@"), s("begin", s("lvar", "name")))
        self.assertTrue(is_ivar_name_literal(dsym))
        leading_interpolation = s("dstr", s("begin", s("lvar", "name")), s("str", "@"))
        self.assertFalse(is_ivar_name_literal(leading_interpolation))


class TestAccessDetection(unittest.TestCase):

    def test_direct(self) -> None:
        self.assertTrue(is_direct_ivar_access(s("ivar", "@x")))
        self.assertTrue(is_direct_ivar_access(s("ivasgn", "@x", s("int", 1))))
        self.assertFalse(is_direct_ivar_access(s("cvar", "@@x")))

    def test_reflective_on_implicit_and_explicit_self(self) -> None:
        self.assertTrue(is_reflective_ivar_access(s("send", None, "instance_variable_get", s("sym", "@x"))))
        self.assertTrue(
            is_reflective_ivar_access(
                s("send", s("self"), "instance_variable_set", s("sym", "@x"), s("int", 1))
            )
        )

    def test_reflective_on_other_receiver(self) -> None:
        node = s("send", s("lvar", "obj"), "instance_variable_get", s("sym", "@x"))
        self.assertFalse(is_reflective_ivar_access(node))

    def test_safe_navigation_is_not_reflective(self) -> None:
        node = s("csend", None, "instance_variable_get", s("sym", "@x"))
        self.assertFalse(is_reflective_ivar_access(node))

    def test_other_calls(self) -> None:
        self.assertFalse(is_ivar_access(s("send", None, "puts", s("sym", "@x"))))
        self.assertFalse(is_ivar_access(s("send", None, "instance_variable_get", s("lvar", "name"))))


class TestOffenseAnchor(unittest.TestCase):

    def test_direct_access_prefers_name(self) -> None:
        whole = SourceRange(3, 4, 3, 20)
        name = SourceRange(3, 4, 3, 11)
        node = Node("ivasgn", ("@params", s("lvar", "params")), location=whole, name_location=name)
        self.assertEqual(offense_anchor(node), name)

    def test_direct_access_without_name_range(self) -> None:
        whole = SourceRange(1, 0, 1, 2)
        self.assertEqual(offense_anchor(Node("ivar", ("@x",), location=whole)), whole)

    def test_reflective_access_uses_call(self) -> None:
        whole = SourceRange(2, 2, 2, 40)
        node = Node("send", (None, "instance_variable_get", s("sym", "@x")), location=whole)
        self.assertEqual(offense_anchor(node), whole)
