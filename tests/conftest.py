import json
import shutil
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from k8s_dev.core.config import Settings

REPO_ROOT = Path(__file__).resolve().parents[1]

READY_NODES = json.dumps(
    {
        "items": [
            {
                "metadata": {"name": "node-1"},
                "status": {
                    "conditions": [{"type": "Ready", "status": "True"}],
                    "addresses": [{"type": "InternalIP", "address": "10.0.0.5"}],
                },
            }
        ]
    }
)

NOT_READY_NODES = json.dumps(
    {
        "items": [
            {"metadata": {"name": "node-1"}, "status": {"conditions": [{"type": "Ready", "status": "True"}]}},
            {"metadata": {"name": "node-2"}, "status": {"conditions": [{"type": "Ready", "status": "False"}]}},
        ]
    }
)

DEPLOYED_RELEASE = json.dumps({"name": "crowdsec", "info": {"status": "deployed"}})
FAILED_RELEASE = json.dumps({"name": "crowdsec", "info": {"status": "failed"}})


class FakeRunner:
    """Records command lines and answers them from prefix rules; the latest matching rule wins."""

    def __init__(self):
        self.calls: list[list[str]] = []
        self.rules: list[tuple[tuple[str, ...], int, str, str]] = []

    def on(self, *prefix: str, returncode: int = 0, stdout: str = "", stderr: str = "") -> "FakeRunner":
        self.rules.insert(0, (prefix, returncode, stdout, stderr))
        return self

    def __call__(self, args) -> subprocess.CompletedProcess:
        args = [str(a) for a in args]
        self.calls.append(args)
        for prefix, returncode, stdout, stderr in self.rules:
            if tuple(args[: len(prefix)]) == prefix:
                return subprocess.CompletedProcess(args, returncode, stdout, stderr)
        return subprocess.CompletedProcess(args, 0, "", "")

    def called(self, *prefix: str) -> list[list[str]]:
        return [c for c in self.calls if tuple(c[: len(prefix)]) == prefix]


@pytest.fixture
def fresh_cluster() -> FakeRunner:
    """Reachable cluster with Ready nodes and none of the applications installed."""
    runner = FakeRunner()
    runner.on("kubectl", "get", returncode=1, stderr="NotFound")
    runner.on("helm", "status", returncode=1, stderr="release: not found")
    runner.on("kubectl", "get", "nodes", "-o", "json", stdout=READY_NODES)
    runner.on("kubectl", "get", "pods,services", stdout=json.dumps({"items": []}))
    return runner


@pytest.fixture
def project_root(tmp_path) -> Path:
    root = tmp_path / "project"
    shutil.copytree(REPO_ROOT / "manifests", root / "manifests")
    shutil.copytree(REPO_ROOT / "values", root / "values")
    return root


@pytest.fixture
def settings(tmp_path, project_root) -> Settings:
    storage_root = tmp_path / "apps"
    storage_root.mkdir()
    s = Settings(
        _env_file=None,
        PROJECT_ROOT=project_root,
        STORAGE_ROOT=storage_root,
        INTERACTIVE=False,
        REQUIRE_ROOT=False,
        LOG_JSON_FORMAT=False,
    )
    # already provisioned, so no chown is attempted
    for path in s.STORAGE_PATHS:
        path.mkdir()
    return s


@pytest.fixture
def tools_present():
    with patch("k8s_dev.preflight.command_exists", return_value=True) as mock_exists:
        yield mock_exists
