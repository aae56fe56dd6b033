from contextlib import redirect_stderr, redirect_stdout
import io
import json
import os
import tempfile
import unittest
from unittest import mock

from spintax.main import main


class TestMain(unittest.TestCase):
    def setUp(self):
        self.dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.dir.cleanup()

    def write(self, name: str, contents: str) -> str:
        path = os.path.join(self.dir.name, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(contents)
        return path

    def run_main(self, args, stdin: str = "") -> str:
        out = io.StringIO()
        with mock.patch("sys.stdin", io.StringIO(stdin)), redirect_stdout(out):
            main(args)
        return out.getvalue()

    def test_format(self):
        path = self.write("in.txt", "  Hello {\n world | there }!\n")
        self.assertEqual(self.run_main(["format", path]), "Hello {world|there}!\n")

    def test_stdin(self):
        self.assertEqual(self.run_main(["count"], stdin="{a|b} {c|d|e}"), "6\n")
        self.assertEqual(self.run_main(["count", "-"], stdin="{a|b}"), "2\n")

    def test_count_overflow(self):
        self.assertEqual(
            self.run_main(["count"], stdin="{a|b}" * 20), "more than 1000000\n"
        )

    def test_random(self):
        out = self.run_main(["random", "-n", "50", "--seed", "1"], stdin="{A|B|C}")
        lines = out.splitlines()
        self.assertEqual(len(lines), 50)
        self.assertTrue(set(lines) <= {"A", "B", "C"})
        again = self.run_main(["random", "-n", "50", "--seed", "1"], stdin="{A|B|C}")
        self.assertEqual(out, again)

    def test_enumerate(self):
        out = self.run_main(["enumerate"], stdin="{a|b}{c|d}")
        self.assertEqual(out.splitlines(), ["ac", "bc", "ad", "bd"])
        out = self.run_main(["enumerate", "--max", "2"], stdin="{a|b}{c|d}")
        self.assertEqual(out.splitlines(), ["ac", "bc"])
        out = self.run_main(["enumerate", "--shuffle", "--seed", "5"], stdin="{a|b}{c|d}")
        self.assertEqual(sorted(out.splitlines()), ["ac", "ad", "bc", "bd"])

    def test_enumerate_overflow(self):
        with redirect_stderr(io.StringIO()), self.assertRaises(SystemExit) as cm:
            self.run_main(["enumerate"], stdin="{a|b}" * 20)
        self.assertEqual(cm.exception.code, 1)

    def test_show(self):
        out = self.run_main(["show"], stdin="Hi {a|b}")
        self.assertEqual(
            out.splitlines(),
            [
                "/: root",
                '  children.0: text "Hi "',
                "  children.1: choice",
                '    children.1.children.0: option "a"',
                '    children.1.children.1: option "b"',
            ],
        )
        out = self.run_main(["show", "--json"], stdin="Hi")
        self.assertEqual(
            json.loads(out),
            {"type": "root", "children": [{"type": "text", "content": "Hi"}]},
        )

    def test_config(self):
        config = self.write("settings.toml", "max_variations = 3\n")
        out = self.run_main(["--config", config, "count"], stdin="{a|b}{c|d}")
        self.assertEqual(out, "more than 3\n")

    def test_bad_config(self):
        missing = os.path.join(self.dir.name, "missing.toml")
        err = io.StringIO()
        with redirect_stderr(err), self.assertRaises(SystemExit) as cm:
            self.run_main(["--config", missing, "count"])
        self.assertEqual(cm.exception.code, 1)
        self.assertIn("does not exist", err.getvalue())

    def test_edit(self):
        path = self.write("in.txt", "Hello {world|there}!")
        commands = "\n".join(
            [
                "text",
                "delete children.2",
                'insert children.1.children.2 {"type": "option", "content": "you"}',
                "down children.1.children.0",
                "count",
                "undo",
                "undo",
                "redo",
                'update children.0 {"type": "text", "content": "Hi "}',
                "delete /",
                "bogus",
                "clear",
                "undo",
                "quit",
                "text",
            ]
        )
        err = io.StringIO()
        with redirect_stderr(err):
            out = self.run_main(["edit", path], stdin=commands + "\n")
        self.assertEqual(
            out.splitlines(),
            [
                "Hello {world|there}!",
                "Hello {world|there}",
                "Hello {world|there|you}",
                "Hello {there|world|you}",
                "3",
                "Hello {world|there|you}",
                "Hello {world|there}",
                "Hello {world|there|you}",
                "Hi {world|there|you}",
                "",
                "Hi {world|there|you}",
            ],
        )
        errors = err.getvalue().splitlines()
        self.assertEqual(len(errors), 2)
        self.assertIn("root", errors[0])
        self.assertIn("unknown command", errors[1])

    def test_edit_bad_input(self):
        err = io.StringIO()
        commands = "\n".join(
            [
                "set {a|b",
                "insert children.0 not json",
                "insert kids.0 {}",
                'insert children.0.children.0 {"type": "text"}',
                "redo",
            ]
        )
        with redirect_stderr(err):
            out = self.run_main(["edit"], stdin=commands)
        self.assertEqual(out.splitlines(), ["{a|b}"])
        errors = err.getvalue().splitlines()
        self.assertEqual(len(errors), 5)
        self.assertTrue(errors[0].startswith("warning:"))
        self.assertIn("nothing to redo", errors[4])


if __name__ == "__main__":
    unittest.main()
