"""
Tests for the `hub-deploy` command in `hub_deploy/cli/main.py`.

Runs the click command end to end with git, subprocess and the HTTP probe
mocked, and checks exit codes and which external commands ran.
"""

import subprocess
import unittest
from unittest import mock

from click.testing import CliRunner

from hub_deploy.__version__ import __version__, __version_info__
from hub_deploy.cli.main import cli
from hub_deploy.models import ProbeResult
from hub_deploy.services import HealthService

SERVICE_URL = "https://openwebui-xyz.a.run.app"
REGISTRY = "us-central1-docker.pkg.dev/hub-chat-prod/containers/open-webui"


class FakeTools:
    """Records every subprocess call and answers like docker/gcloud would"""

    def __init__(self, image_present: bool = True):
        self.image_present = image_present
        self.calls = []

    def __call__(self, args, **kwargs):
        args = list(args)
        self.calls.append(args)
        returncode, stdout = 0, ""
        if args[:2] == ["docker-credential-gcloud", "list"]:
            stdout = '{"https://us-central1-docker.pkg.dev": "gcloud"}'
        elif args[:2] == ["gcloud", "artifacts"]:
            returncode = 0 if self.image_present else 1
        elif args[:3] == ["gcloud", "run", "services"]:
            stdout = SERVICE_URL + "\n"
        return subprocess.CompletedProcess(args, returncode, stdout=stdout, stderr="")

    def commands_starting_with(self, *prefix):
        return [c for c in self.calls if c[:len(prefix)] == list(prefix)]


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tools = FakeTools()
        self.probe_result = ProbeResult(url=SERVICE_URL, status_code=200)
        patches = [
            mock.patch("hub_deploy.services.config_service.get_short_commit",
                       return_value="abc1234"),
            mock.patch("hub_deploy.utils.shell_utils.subprocess.run", side_effect=self.tools),
            mock.patch("hub_deploy.utils.shell_utils.shutil.which",
                       side_effect=lambda name: f"/usr/bin/{name}"),
            mock.patch.object(HealthService, "probe", side_effect=lambda url: self.probe_result),
        ]
        self.mocks = [p.start() for p in patches]
        for p in patches:
            self.addCleanup(p.stop)
        self.get_short_commit = self.mocks[0]
        self.probe = self.mocks[3]
        self.runner = CliRunner()

    def invoke(self, *args, config_text=None):
        with self.runner.isolated_filesystem():
            if config_text is not None:
                with open(".hub-deploy.yaml", "w", encoding="utf-8") as fp:
                    fp.write(config_text)
            return self.runner.invoke(cli, list(args))

    def test_version_option(self) -> None:
        result = self.invoke("--version")
        self.assertEqual(result.exit_code, 0)
        self.assertIn(__version__, result.output)
        self.assertEqual(__version_info__, (1, 0, 0))
        self.assertEqual(self.tools.calls, [])

    def test_numeric_project_id_from_config_file(self) -> None:
        result = self.invoke("--dry-run", config_text="project_id: 123456789012\n")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("--project=123456789012", result.output)
        self.assertIn("[DRY RUN] No changes were made", result.output)

    def test_null_config_value_exits_one(self) -> None:
        result = self.invoke("--dry-run", config_text="platform: null\n")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("platform", result.output)
        self.assertEqual(self.tools.calls, [])

    def test_help_exits_zero_without_side_effects(self) -> None:
        for flag in ("--help", "-h"):
            result = self.invoke(flag)
            self.assertEqual(result.exit_code, 0)
            self.assertIn("--skip-build", result.output)
        self.assertEqual(self.tools.calls, [])
        self.get_short_commit.assert_not_called()

    def test_unknown_flag_is_rejected(self) -> None:
        result = self.invoke("--bogus")
        self.assertEqual(result.exit_code, 2)
        self.assertEqual(self.tools.calls, [])

    def test_default_run_builds_and_deploys_default_tag(self) -> None:
        result = self.invoke()
        self.assertEqual(result.exit_code, 0, result.output)

        image = f"{REGISTRY}:hub-chat-abc1234"
        builds = self.tools.commands_starting_with("docker", "buildx", "build")
        self.assertEqual(len(builds), 1)
        self.assertIn(image, builds[0])
        self.assertNotIn("--no-cache", builds[0])
        deploys = self.tools.commands_starting_with("gcloud", "run", "deploy")
        self.assertEqual(len(deploys), 1)
        self.assertIn(f"--image={image}", deploys[0])
        self.assertIn("Service is responding", result.output)

    def test_flag_shaped_positional_uses_default_tag(self) -> None:
        result = self.invoke("--", "--weird")
        self.assertEqual(result.exit_code, 0, result.output)
        deploy = self.tools.commands_starting_with("gcloud", "run", "deploy")[0]
        self.assertIn(f"--image={REGISTRY}:hub-chat-abc1234", deploy)

    def test_no_cache_reaches_buildx(self) -> None:
        result = self.invoke("--no-cache")
        self.assertEqual(result.exit_code, 0, result.output)
        build = self.tools.commands_starting_with("docker", "buildx", "build")[0]
        self.assertIn("--no-cache", build)

    def test_dry_run_never_mutates(self) -> None:
        result = self.invoke("--dry-run")
        self.assertEqual(result.exit_code, 0, result.output)

        self.assertEqual(self.tools.commands_starting_with("docker", "buildx"), [])
        self.assertEqual(self.tools.commands_starting_with("gcloud", "run"), [])
        self.assertEqual(self.tools.commands_starting_with("gcloud", "builds"), [])
        self.probe.assert_not_called()
        self.assertIn("docker buildx build --platform=linux/amd64", result.output)
        self.assertIn("gcloud run deploy openwebui", result.output)
        self.assertIn("gcloud run services describe openwebui", result.output)
        self.assertIn("GET <service URL>", result.output)
        self.assertIn("[DRY RUN] No changes were made", result.output)

    def test_skip_build_with_missing_image_exits_one(self) -> None:
        self.tools.image_present = False
        result = self.invoke("v9.9.9", "--skip-build")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("does not exist in registry", result.output)
        self.assertEqual(self.tools.commands_starting_with("gcloud", "run", "deploy"), [])

    def test_skip_build_with_existing_image(self) -> None:
        result = self.invoke("v2.3.1", "--skip-build")
        self.assertEqual(result.exit_code, 0, result.output)

        self.assertEqual(self.tools.commands_starting_with("docker", "buildx"), [])
        checks = self.tools.commands_starting_with("gcloud", "artifacts", "docker", "images", "describe")
        self.assertEqual(len(checks), 1)
        self.assertIn(f"{REGISTRY}:v2.3.1", checks[0])
        deploy = self.tools.commands_starting_with("gcloud", "run", "deploy")[0]
        self.assertIn(f"--image={REGISTRY}:v2.3.1", deploy)
        self.probe.assert_called_once_with(SERVICE_URL)

    def test_probe_404_warns_and_exits_zero(self) -> None:
        self.probe_result = ProbeResult(url=SERVICE_URL, status_code=404)
        result = self.invoke()
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Service may still be starting up", result.output)
        self.assertNotIn("Error", result.output)

    def test_remote_build_submits_to_cloud_build_and_skips_deploy(self) -> None:
        result = self.invoke("--remote")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(len(self.tools.commands_starting_with("gcloud", "builds", "submit")), 1)
        self.assertEqual(self.tools.commands_starting_with("docker", "buildx"), [])
        self.assertEqual(self.tools.commands_starting_with("gcloud", "run", "deploy"), [])
        self.probe.assert_called_once_with(SERVICE_URL)

    def test_missing_docker_exits_one(self) -> None:
        with mock.patch("hub_deploy.utils.shell_utils.shutil.which",
                        side_effect=lambda name: None if name == "docker" else f"/usr/bin/{name}"):
            result = self.invoke()
        self.assertEqual(result.exit_code, 1)
        self.assertIn("docker is not installed", result.output)
        self.assertEqual(self.tools.calls, [])

    def test_missing_git_hash_exits_one(self) -> None:
        self.get_short_commit.return_value = None
        result = self.invoke()
        self.assertEqual(result.exit_code, 1)
        self.assertIn("git commit hash", result.output)
        self.assertEqual(self.tools.calls, [])

    def test_build_failure_exits_one(self) -> None:
        def failing_build(args, **kwargs):
            if list(args[:2]) == ["docker", "buildx"]:
                return subprocess.CompletedProcess(args, 1, stdout="", stderr="")
            return self.tools(args, **kwargs)

        with mock.patch("hub_deploy.utils.shell_utils.subprocess.run", side_effect=failing_build):
            result = self.invoke()
        self.assertEqual(result.exit_code, 1)
        self.assertEqual(self.tools.commands_starting_with("gcloud", "run", "deploy"), [])


if __name__ == "__main__":
    unittest.main()
