import unittest

import pytest

from stampy.args import Args, _parse_args


class ArgumentParsingTester(unittest.TestCase):
    """Test command line argument parsing functionality."""

    @pytest.mark.unit
    def test_basic_argument_parsing(self):
        """Test default arguments."""
        args = _parse_args([])

        self.assertIsNone(args.input, "Default input should be None (stdin)")
        self.assertIsNone(args.output, "Default output should be None (stdout)")
        self.assertIsNone(args.template, "Default template should be None")
        self.assertIsNone(args.json_key, "Default json_key should be None")
        self.assertFalse(args.log, "Default log should be False")
        self.assertFalse(args.verbose, "Default verbose should be False")

    @pytest.mark.unit
    def test_flag_arguments(self):
        """Test flag argument parsing."""
        args = _parse_args(["--log", "--verbose"])

        self.assertTrue(args.log, "log flag should be True")
        self.assertTrue(args.verbose, "verbose flag should be True")

    @pytest.mark.unit
    def test_positional_files(self):
        """Test input and output positional arguments."""
        args = _parse_args(["in.txt"])
        self.assertEqual(args.input, "in.txt")
        self.assertIsNone(args.output)

        args = _parse_args(["in.txt", "out.txt"])
        self.assertEqual(args.input, "in.txt")
        self.assertEqual(args.output, "out.txt")

    @pytest.mark.unit
    def test_template_and_json_arguments(self):
        """Test -t/--template and -j/--json."""
        args = _parse_args(["-t", "{line} {}", "-j", "ts"])
        self.assertEqual(args.template, "{line} {}")
        self.assertEqual(args.json_key, "ts")

        args = _parse_args(["--template", "{iso}", "--json", "stamp"])
        self.assertEqual(args.template, "{iso}")
        self.assertEqual(args.json_key, "stamp")

    @pytest.mark.unit
    def test_empty_template_is_kept(self):
        """An explicit empty template is passed through as an empty string."""
        args = _parse_args(["--template", ""])
        self.assertEqual(args.template, "")

    @pytest.mark.unit
    def test_parse_args_static_method(self):
        """Args.parse_args returns an Args instance."""
        args = Args.parse_args(["-v", "in.txt"])
        self.assertIsInstance(args, Args)
        self.assertTrue(args.verbose)
        self.assertEqual(args.input, "in.txt")

    @pytest.mark.unit
    def test_too_many_positionals(self):
        """A third positional argument is rejected."""
        with self.assertRaises(SystemExit):
            _parse_args(["a", "b", "c"])

    @pytest.mark.unit
    def test_args_type_checks(self):
        """Args rejects values of the wrong type."""
        with self.assertRaises(AssertionError):
            Args(
                input=1,  # type: ignore[arg-type]
                output=None,
                template=None,
                json_key=None,
                log=False,
                verbose=False,
            )


if __name__ == "__main__":
    unittest.main()
