import unittest

import attr

from spintax.tree.node import (
    Choice,
    Option,
    Root,
    Text,
    can_hold,
    node_from_json,
    node_kind,
    node_to_json,
)
from spintax.tree.parse import parse


class TestNodes(unittest.TestCase):
    def test_immutable(self):
        root = Root([Text("a")])
        self.assertIsInstance(root.children, tuple)
        with self.assertRaises(attr.exceptions.FrozenInstanceError):
            root.children = ()  # type: ignore

    def test_structural_equality(self):
        self.assertEqual(parse("{a|b} c"), parse("{a|b} c"))
        self.assertNotEqual(parse("{a|b} c"), parse("{b|a} c"))
        self.assertEqual(Option("x", [Text("y")]), Option("x", (Text("y"),)))

    def test_can_hold(self):
        self.assertTrue(can_hold(Choice(), Option()))
        self.assertFalse(can_hold(Choice(), Text()))
        self.assertFalse(can_hold(Choice(), Choice()))
        for parent in [Root(), Option()]:
            self.assertTrue(can_hold(parent, Text()))
            self.assertTrue(can_hold(parent, Choice()))
            self.assertFalse(can_hold(parent, Option()))
            self.assertFalse(can_hold(parent, Root()))
        self.assertFalse(can_hold(Text(), Text()))

    def test_kind(self):
        self.assertEqual(
            [node_kind(n) for n in [Text(), Option(), Choice(), Root()]],
            ["text", "option", "choice", "root"],
        )


class TestJson(unittest.TestCase):
    def test_to_json(self):
        self.assertEqual(
            node_to_json(parse("Hi {a|b}")),
            {
                "type": "root",
                "children": [
                    {"type": "text", "content": "Hi "},
                    {
                        "type": "choice",
                        "children": [
                            {"type": "option", "content": "a", "children": []},
                            {"type": "option", "content": "b", "children": []},
                        ],
                    },
                ],
            },
        )

    def test_round_trip(self):
        tree = parse("x {a {b|c} d|e} y {}")
        self.assertEqual(node_from_json(node_to_json(tree)), tree)

    def test_defaults(self):
        self.assertEqual(node_from_json({"type": "option"}), Option())
        self.assertEqual(node_from_json({"type": "text"}), Text())

    def test_errors(self):
        for obj in [
            {},
            {"type": "leaf"},
            {"type": "text", "content": 3},
            {"type": "choice", "children": [{"type": "text", "content": "x"}]},
            {"type": "root", "children": [{"type": "option"}]},
            {"type": "root", "children": ["x"]},
            {"type": "root", "children": {}},
        ]:
            with self.assertRaises(ValueError, msg=obj):
                node_from_json(obj)


if __name__ == "__main__":
    unittest.main()
