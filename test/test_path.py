import unittest

from spintax.tree.node import Option, Text
from spintax.tree.parse import parse
from spintax.tree.path import child_path, format_path, parse_path, resolve


class TestResolve(unittest.TestCase):
    def setUp(self):
        self.tree = parse("Hello {world|the {big|small} one}!")

    def test_root(self):
        self.assertIs(resolve(self.tree, ()), self.tree)
        self.assertIs(resolve(self.tree, []), self.tree)

    def test_descend(self):
        self.assertEqual(resolve(self.tree, ("children", 0)), Text("Hello "))
        self.assertEqual(
            resolve(self.tree, ["children", 1, "children", 0]), Option("world")
        )
        self.assertEqual(
            resolve(self.tree, ("children", 1, "children", 1, "children", 0, "children", 1)),
            Option("small"),
        )

    def test_not_found(self):
        for path in [
            ("children", 3),
            ("children", -1),
            ("children", 1, "children", 2),
            ("options", 0),
            ("children",),
            ("children", "0"),
            ("children", True),
            ("children", 0, "children", 0),
            ("children", 1.0),
        ]:
            self.assertIsNone(resolve(self.tree, path), path)


class TestPathStrings(unittest.TestCase):
    def test_parse(self):
        self.assertEqual(parse_path(""), ())
        self.assertEqual(parse_path("/"), ())
        self.assertEqual(parse_path("children.0"), ("children", 0))
        self.assertEqual(
            parse_path(" children.1.children.2 "), ("children", 1, "children", 2)
        )

    def test_parse_errors(self):
        for text in ["children", "children.x", "kids.0", "children.0.children"]:
            with self.assertRaises(ValueError):
                parse_path(text)

    def test_format(self):
        self.assertEqual(format_path(()), "/")
        self.assertEqual(format_path(("children", 1, "children", 2)), "children.1.children.2")
        self.assertEqual(format_path(child_path((), 3)), "children.3")


if __name__ == "__main__":
    unittest.main()
