import contextlib
import io
import os
import tempfile
import unittest
from unittest import mock

from monkey.core.values import NULL, Integer
from monkey.lang.error import ErrorHandler, EvaluationError, GenericException, ParseError
from monkey.lang.session import Session


class PreprocessTestCase(unittest.TestCase):

    def test_continuation(self):
        should_continue = ["let f = fn(x) {", "add(1,", "if (x) { if (y) {", "((("]
        for case in should_continue:
            __, add_to_prev = Session.preprocess_line(case, 1, False)
            self.assertTrue(add_to_prev, case)

        should_not_continue = ["let x = 5;", "fn(x) { x }", "", "   ", "(1))"]
        for case in should_not_continue:
            __, add_to_prev = Session.preprocess_line(case, 1, False)
            self.assertFalse(add_to_prev, case)

    def test_strips_trailing_whitespace(self):
        self.assertEqual(("let x = 5;", False), Session.preprocess_line("let x = 5;   \n", 1, False))

    def test_joins_file_lines(self):
        lines = ["let add = fn(x, y) {\n", "    x + y\n", "};\n", "\n", "add(1, 2)\n"]
        exprs = []
        add_to_prev = False
        for line_num, line in enumerate(lines):
            __, add_to_prev = Session.preprocess_line(line, line_num + 1, add_to_prev, exprs)

        self.assertEqual([("let add = fn(x, y) { x + y };", 1), ("add(1, 2)", 5)], exprs)


class SessionTestCase(unittest.TestCase):

    def setUp(self):
        self.sess = Session(ErrorHandler(), Session.SH_FILE, cmd_line=True)

    def test_cmd_line_is_not_fatal(self):
        self.assertFalse(self.sess.error_handler.fatal)

    def test_reserved_filename(self):
        with self.assertRaises(GenericException):
            Session(ErrorHandler(), Session.SH_FILE, cmd_line=False)

    def test_bindings_persist(self):
        self.sess.add("let x = 5;", 1)
        self.sess.run()
        self.sess.add("let double = fn(n) { n * 2 };", 2)
        self.sess.run()
        self.sess.add("double(x)", 3)
        self.sess.run()

        self.assertEqual(["NULL", "NULL", "INTEGER<10>"], [self.sess.pop() for __ in range(3)])
        self.assertEqual([], self.sess.results)

    def test_run_evaluates_in_order(self):
        self.sess.add("let x = 1;", 1)
        self.sess.add("x + 1", 2)
        self.assertEqual([], self.sess.results)

        self.sess.run()
        self.assertEqual([NULL, Integer(2)], self.sess.results)
        self.assertEqual({}, self.sess.to_exec)

    def test_empty_input(self):
        with self.assertRaises(ValueError):
            self.sess.add("   ", 1)

    def test_parse_error(self):
        with self.assertRaises(ParseError):
            self.sess.add("let = 5;", 1)
        self.assertEqual({}, self.sess.to_exec)
        self.assertEqual(("let = 5;", 1), self.sess.error_handler.traceback[Session.SH_FILE])

    def test_failed_unit_is_not_rerun(self):
        self.sess.add("y", 1)
        with self.assertRaises(EvaluationError):
            self.sess.run()
        self.assertEqual({}, self.sess.to_exec)

        self.sess.add("let y = 2; y", 2)
        self.sess.run()
        self.assertEqual("INTEGER<2>", self.sess.pop())

    def test_show_tree(self):
        sess = Session(ErrorHandler(), Session.SH_FILE, cmd_line=True, show_tree=True)
        output = io.StringIO()
        with contextlib.redirect_stdout(output):
            sess.add("x", 1)
        self.assertEqual("Program(nodes=[\n    ExpressionStatement(nodes=[\n        Identifier(name='x')\n    ])\n])\n",
                         output.getvalue())


class FileSessionTestCase(unittest.TestCase):

    def write(self, source):
        handle, path = tempfile.mkstemp(suffix=".monkey")
        with os.fdopen(handle, "w") as file:
            file.write(source)
        self.addCleanup(os.remove, path)
        return path

    def test_file(self):
        path = self.write("let fibonacci = fn(x) {\n"
                          "    if (x < 2) { return x; }\n"
                          "    fibonacci(x - 1) + fibonacci(x - 2)\n"
                          "};\n"
                          "\n"
                          "fibonacci(15)\n")
        sess = Session(ErrorHandler(), path, cmd_line=False)
        self.assertEqual([1, 6], list(sess.to_exec))
        self.assertTrue(sess.error_handler.fatal)

        sess.run()
        self.assertEqual(["NULL", "INTEGER<610>"], [sess.pop(), sess.pop()])

    def test_missing_file(self):
        with self.assertRaises(GenericException) as context:
            Session(ErrorHandler(), "/nonexistent/file.monkey", cmd_line=False)
        self.assertEqual("/nonexistent/file.monkey", context.exception.expr)

    @mock.patch.dict(os.environ, {"ANSI_COLORS_DISABLED": "1"})
    def test_file_parse_error_is_fatal(self):
        path = self.write("let x = 1;\nlet = 2;\n")

        def load():
            with ErrorHandler() as error_handler:
                Session(error_handler, path, cmd_line=False)

        output = io.StringIO()
        with self.assertRaises(SystemExit), contextlib.redirect_stdout(output):
            load()
        self.assertIn(f"File '{path}', line 2:", output.getvalue())
        self.assertIn("error: expected next token to be IDENT, got = instead", output.getvalue())


if __name__ == '__main__':
    unittest.main()
