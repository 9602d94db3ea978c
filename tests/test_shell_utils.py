"""
Tests for `hub_deploy/utils/shell_utils.py`.

Checks dry-run echo, exit-status handling and missing-binary handling.
"""

import subprocess
import unittest
from unittest import mock

from hub_deploy.api.exceptions import ExternalCommandError
from hub_deploy.utils.shell_utils import CommandRunner, format_command


def completed(args, returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(args, returncode, stdout=stdout, stderr=stderr)


class FormatCommandTests(unittest.TestCase):
    def test_quotes_arguments_with_spaces(self) -> None:
        line = format_command(["gcloud", "run", "services", "describe", "--format=value(status.url)"])
        self.assertEqual(line, "gcloud run services describe '--format=value(status.url)'")


class CommandRunnerTests(unittest.TestCase):
    def test_dry_run_echoes_and_does_not_execute(self) -> None:
        echoed = []
        runner = CommandRunner(dry_run=True, echo=echoed.append)
        with mock.patch("hub_deploy.utils.shell_utils.subprocess.run") as run:
            runner.run(["docker", "buildx", "build", "--push", "."])
        run.assert_not_called()
        self.assertEqual(echoed, ["docker buildx build --push ."])

    def test_run_raises_on_non_zero_exit(self) -> None:
        runner = CommandRunner()
        with mock.patch("hub_deploy.utils.shell_utils.subprocess.run",
                        return_value=completed(["gcloud"], returncode=2)):
            with self.assertRaises(ExternalCommandError) as ctx:
                runner.run(["gcloud", "run", "deploy", "openwebui"])
        self.assertEqual(ctx.exception.returncode, 2)
        self.assertEqual(ctx.exception.command, ["gcloud", "run", "deploy", "openwebui"])
        self.assertEqual(ctx.exception.error_code, "HD004")

    def test_run_missing_binary_raises(self) -> None:
        runner = CommandRunner()
        with mock.patch("hub_deploy.utils.shell_utils.subprocess.run",
                        side_effect=FileNotFoundError("docker")):
            with self.assertRaises(ExternalCommandError):
                runner.run(["docker", "buildx", "build", "."])

    def test_probe_reports_exit_status(self) -> None:
        runner = CommandRunner(dry_run=True)
        with mock.patch("hub_deploy.utils.shell_utils.subprocess.run",
                        side_effect=[completed([], 0), completed([], 1)]) as run:
            self.assertTrue(runner.probe(["gcloud", "auth", "print-identity-token"]))
            self.assertFalse(runner.probe(["gcloud", "auth", "print-identity-token"]))
        self.assertEqual(run.call_count, 2)

    def test_probe_missing_binary_is_false(self) -> None:
        with mock.patch("hub_deploy.utils.shell_utils.subprocess.run",
                        side_effect=FileNotFoundError("gcloud")):
            self.assertFalse(CommandRunner().probe(["gcloud", "version"]))

    def test_capture_returns_stripped_stdout(self) -> None:
        with mock.patch("hub_deploy.utils.shell_utils.subprocess.run",
                        return_value=completed([], 0, stdout="https://svc.a.run.app\n")):
            self.assertEqual(CommandRunner().capture(["gcloud"]), "https://svc.a.run.app")

    def test_capture_failure_includes_stderr(self) -> None:
        with mock.patch("hub_deploy.utils.shell_utils.subprocess.run",
                        return_value=completed([], 1, stderr="service not found\n")):
            with self.assertRaises(ExternalCommandError) as ctx:
                CommandRunner().capture(["gcloud", "run", "services", "describe", "x"])
        self.assertEqual(ctx.exception.details, "service not found")


if __name__ == "__main__":
    unittest.main()
