"""
Test suite for the loxc command line driver.
"""

import io
import logging
import unittest
import sys
import os
import tempfile
from unittest import mock

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from loxc import cli
from loxc.logging_config import setup_logging


class TestRun(unittest.TestCase):

    def setUp(self):
        self.out = io.StringIO()
        self.err = io.StringIO()

    def test_valid_expression_prints_graph(self):
        ok = cli.run("1 + 2", out=self.out, err=self.err)
        self.assertTrue(ok)
        self.assertTrue(self.out.getvalue().startswith("digraph G {"))
        self.assertEqual(self.err.getvalue(), "")

    def test_syntax_error_reports_and_still_prints_graph(self):
        ok = cli.run("(1 + 2", out=self.out, err=self.err)
        self.assertFalse(ok)
        self.assertIn("ERROR", self.out.getvalue())
        self.assertEqual(self.err.getvalue(),
                         "[1] Error at end: expected ')' after expression\n")

    def test_lexical_error_prints_nothing_to_stdout(self):
        ok = cli.run('"abc', out=self.out, err=self.err)
        self.assertFalse(ok)
        self.assertEqual(self.out.getvalue(), "")
        self.assertEqual(self.err.getvalue(), "[1] Error : unterminated string\n")

    def test_show_tokens(self):
        ok = cli.run("1 <= 2", show_tokens=True, out=self.out, err=self.err)
        self.assertTrue(ok)
        self.assertEqual(self.out.getvalue().splitlines(),
                         ["NUMBER '1' 1.0", "LESS_EQUAL '<='", "NUMBER '2' 2.0", "EOF ''"])

    def test_long_chain_renders(self):
        ok = cli.run(" + ".join(["1"] * 2000), out=self.out, err=self.err)
        self.assertTrue(ok)
        self.assertEqual(self.out.getvalue().count(" -> "), 3998)

    def test_deep_nesting_is_reported_not_raised(self):
        ok = cli.run("(" * 500 + "1" + ")" * 500, out=self.out, err=self.err)
        self.assertFalse(ok)
        self.assertEqual(self.err.getvalue(),
                         "[1] Error at '(': expression nesting too deep\n")
        self.assertIn('[label="ERROR"]', self.out.getvalue())


class TestRunFile(unittest.TestCase):

    def setUp(self):
        self.out = io.StringIO()
        self.err = io.StringIO()
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def _write(self, text: str) -> str:
        path = os.path.join(self.tmp.name, "expr.lox")
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        return path

    def test_success(self):
        status = cli.run_file(self._write("!true"), out=self.out, err=self.err)
        self.assertEqual(status, cli.EXIT_OK)
        self.assertIn('[label="!"]', self.out.getvalue())

    def test_source_error_exit_status(self):
        status = cli.run_file(self._write("1 # 2"), out=self.out, err=self.err)
        self.assertEqual(status, cli.EXIT_FAILURE)
        self.assertIn("unknown character: #", self.err.getvalue())

    def test_missing_file(self):
        status = cli.run_file(os.path.join(self.tmp.name, "nope.lox"), out=self.out, err=self.err)
        self.assertEqual(status, cli.EXIT_FAILURE)
        self.assertIn("IO error: FileNotFoundError", self.err.getvalue())

    def test_undecodable_file(self):
        path = os.path.join(self.tmp.name, "latin1.lox")
        with open(path, "wb") as f:
            f.write(b"1 + \xff")
        status = cli.run_file(path, out=self.out, err=self.err)
        self.assertEqual(status, cli.EXIT_FAILURE)
        self.assertEqual(self.err.getvalue(), f"IO error: UnicodeDecodeError ({path})\n")
        self.assertEqual(self.out.getvalue(), "")


class TestRunPrompt(unittest.TestCase):

    def test_loop_continues_after_errors(self):
        stdin = io.StringIO('"open\n1 + 2\n')
        out, err = io.StringIO(), io.StringIO()
        status = cli.run_prompt(stdin=stdin, out=out, err=err)
        self.assertEqual(status, cli.EXIT_OK)
        self.assertIn("unterminated string", err.getvalue())
        self.assertEqual(out.getvalue().count(cli.PROMPT), 3)
        self.assertIn('[label="+"]', out.getvalue())

    def test_blank_lines_are_skipped(self):
        stdin = io.StringIO("\n   \n1\n")
        out, err = io.StringIO(), io.StringIO()
        cli.run_prompt(stdin=stdin, out=out, err=err)
        self.assertEqual(err.getvalue(), "")
        self.assertEqual(out.getvalue().count(cli.PROMPT), 4)
        self.assertEqual(out.getvalue().count("digraph G"), 1)

    def test_keyboard_interrupt_ends_session(self):
        stdin = mock.Mock()
        stdin.readline.side_effect = KeyboardInterrupt
        out = io.StringIO()
        self.assertEqual(cli.run_prompt(stdin=stdin, out=out, err=io.StringIO()), cli.EXIT_OK)


class TestMain(unittest.TestCase):

    def setUp(self):
        patcher = mock.patch.object(cli, "setup_logging")
        self.setup_logging = patcher.start()
        self.addCleanup(patcher.stop)

    def test_too_many_arguments(self):
        with mock.patch("sys.stderr", new_callable=io.StringIO) as err:
            status = cli.main(["a.lox", "b.lox"])
        self.assertEqual(status, cli.EXIT_USAGE)
        self.assertIn("usage: loxc", err.getvalue())

    def test_runs_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "expr.lox")
            with open(path, "w", encoding="utf-8") as f:
                f.write("1 == 1")
            with mock.patch("sys.stdout", new_callable=io.StringIO) as out:
                status = cli.main([path])
        self.assertEqual(status, cli.EXIT_OK)
        self.assertIn('[label="=="]', out.getvalue())
        self.setup_logging.assert_called_once_with(logging.WARNING, None)

    def test_verbose_enables_debug_logging(self):
        with mock.patch.object(cli, "run_prompt", return_value=cli.EXIT_OK):
            cli.main(["-v", "--log-file", "loxc.log"])
        self.setup_logging.assert_called_once_with(logging.DEBUG, "loxc.log")

    def test_prompt_without_arguments(self):
        with mock.patch.object(cli, "run_prompt", return_value=cli.EXIT_OK) as run_prompt:
            self.assertEqual(cli.main([]), cli.EXIT_OK)
        run_prompt.assert_called_once_with(False)


class TestSetupLogging(unittest.TestCase):

    def setUp(self):
        self.logger = logging.getLogger("loxc")
        self.addCleanup(self._restore, self.logger.level, self.logger.handlers[:])

    def _restore(self, level, handlers):
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)
            handler.close()
        for handler in handlers:
            self.logger.addHandler(handler)
        self.logger.setLevel(level)

    def test_repeated_setup_replaces_handlers(self):
        with mock.patch("sys.stderr", new_callable=io.StringIO):
            setup_logging(logging.DEBUG)
            setup_logging(logging.DEBUG)
        self.assertEqual(len(self.logger.handlers), 1)
        self.assertEqual(self.logger.level, logging.DEBUG)

    def test_log_file_receives_child_records(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "loxc.log")
            with mock.patch("sys.stderr", new_callable=io.StringIO) as err:
                setup_logging(logging.INFO, path)
                logging.getLogger("loxc.cli").info("Reading expr.lox")
            for handler in self.logger.handlers[:]:
                self.logger.removeHandler(handler)
                handler.close()
            with open(path, encoding="utf-8") as f:
                logged = f.read()
        self.assertIn("INFO    loxc.cli: Reading expr.lox", logged)
        self.assertIn("Reading expr.lox", err.getvalue())


if __name__ == '__main__':
    unittest.main()
