"""Runs the installer itself as a pyinfra operation."""

from pyinfra.operations import server


def install_apps():
    """Deploy every application without prompting."""
    server.shell(
        name="Deploy k8s-dev applications",
        commands=["python3 -m k8s_dev"],
        _env={"INTERACTIVE": "false", "REQUIRE_ROOT": "false"},
    )
