"""Unit tests for TreeLoaderGateway dispatch."""

import unittest
from unittest.mock import MagicMock

from thread_safety_linter.domain.errors import TreeFormatError
from thread_safety_linter.infrastructure.gateways.tree_loader_gateway import TreeLoaderGateway


class TestTreeLoaderGateway(unittest.TestCase):

    def setUp(self) -> None:
        self.filesystem = MagicMock()
        self.sexp_gateway = MagicMock()
        self.json_gateway = MagicMock()
        self.loader = TreeLoaderGateway(
            self.filesystem, sexp_gateway=self.sexp_gateway, json_gateway=self.json_gateway
        )

    def test_supports_known_suffixes(self) -> None:
        for path in ("a.sexp", "a.ast", "a.txt", "a.json", "A.JSON"):
            with self.subTest(path=path):
                self.assertTrue(self.loader.supports(path))
        self.assertFalse(self.loader.supports("a.rb"))

    def test_json_suffix_uses_json_reader(self) -> None:
        self.filesystem.read_text.return_value = "[\"int\", 1]"
        result = self.loader.load("dumps/a.json")
        self.filesystem.read_text.assert_called_once_with("dumps/a.json")
        self.json_gateway.read.assert_called_once_with("[\"int\", 1]")
        self.sexp_gateway.read.assert_not_called()
        self.assertIs(result, self.json_gateway.read.return_value)

    def test_sexp_suffix_uses_sexp_reader(self) -> None:
        self.filesystem.read_text.return_value = "(int 1)"
        result = self.loader.load("dumps/a.sexp")
        self.sexp_gateway.read.assert_called_once_with("(int 1)")
        self.assertIs(result, self.sexp_gateway.read.return_value)

    def test_unsupported_suffix_raises(self) -> None:
        with self.assertRaises(TreeFormatError):
            self.loader.load("a.rb")
        self.filesystem.read_text.assert_not_called()

    def test_read_errors_propagate(self) -> None:
        self.filesystem.read_text.side_effect = OSError("denied")
        with self.assertRaises(OSError):
            self.loader.load("a.sexp")
