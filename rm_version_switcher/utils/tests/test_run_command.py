import unittest

from rm_version_switcher.models.command_result import CommandResult
from rm_version_switcher.models.runcommand_error import RunCommandError
from rm_version_switcher.utils.general import run_command


class TestRunCommand(unittest.TestCase):

    def test_run_command_success(self):
        # Test a successful command execution
        result = run_command(["echo", "test"])
        self.assertEqual(result.stdout, "test\n")
        self.assertEqual(result.stderr, "")
        self.assertEqual(result.return_code, 0)
        self.assertTrue(result.success)

    def test_arguments_are_not_shell_expanded(self):
        result = run_command(["echo", "$HOME;", "active_partition=3"])
        self.assertEqual(result.stdout, "$HOME; active_partition=3\n")

    def test_run_command_failure(self):
        # Test a failing command execution
        with self.assertRaises(RunCommandError) as context:
            run_command(["ls", "nonexistent_file"])
        self.assertIn("No such file or directory", str(context.exception))
        self.assertNotEqual(context.exception.return_code, 0)

    def test_run_command_failure_exit_code(self):
        with self.assertRaises(RunCommandError) as context:
            run_command(["false"])
        self.assertEqual(context.exception.return_code, 1)

    def test_run_command_missing_program(self):
        with self.assertRaises(FileNotFoundError):
            run_command(["definitely-not-a-real-program-xyz"])

    def test_undecodable_output(self):
        result = run_command(["printf", "\\377active_partition=2"])
        self.assertTrue(result.stdout.endswith("active_partition=2"))

    def test_command_result(self):
        result = CommandResult("active_partition=2\nbootcount=0\n", "", 0)
        self.assertEqual(result.stdout, "active_partition=2\nbootcount=0\n")
        self.assertEqual(
            result.grep_stdout_for_string("active_partition"), "active_partition=2"
        )
        self.assertEqual(
            result.grep_stdout_for_string("bootcount", split=True), ["bootcount=0"]
        )
        self.assertFalse(CommandResult("", "error", 1).success)


if __name__ == "__main__":
    unittest.main()
