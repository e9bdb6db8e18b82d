from unittest.mock import patch

import click
import pytest
from click.testing import CliRunner

from k8s_dev.apps import default_units
from k8s_dev.kube import ClusterClient
from k8s_dev.models import DeploymentUnit, UnitKind, UnitStatus
from k8s_dev.sequencer import DeploymentSequencer, confirm
from tests.conftest import DEPLOYED_RELEASE, FAILED_RELEASE


def make_sequencer(settings, runner, answers=None):
    asked = []

    def prompt(question, default):
        asked.append((question, default))
        if answers is None:
            return default
        return answers.get(question, default)

    sequencer = DeploymentSequencer(ClusterClient(settings, runner=runner), settings, prompt=prompt)
    return sequencer, asked


def test_fresh_cluster_deploys_everything_in_order(settings, fresh_cluster):
    sequencer, asked = make_sequencer(settings, fresh_cluster)
    report = sequencer.run(default_units(settings))

    assert asked == []
    assert [u.status for u in report.units] == [UnitStatus.DEPLOYED] * 7
    applied = [c[3] for c in fresh_cluster.called("kubectl", "apply", "-f")]
    assert applied == [u.location for u in report.units if u.kind == UnitKind.MANIFEST]
    assert len(fresh_cluster.called("helm", "upgrade", "--install", "crowdsec")) == 1


def test_helm_release_command_line(settings, fresh_cluster):
    sequencer, _ = make_sequencer(settings, fresh_cluster)
    crowdsec = [u for u in default_units(settings) if u.name == "crowdsec"]
    sequencer.run(crowdsec)

    assert fresh_cluster.called("helm", "repo", "add", "--force-update", "crowdsec")
    assert fresh_cluster.called("helm", "repo", "update", "crowdsec")
    (upgrade,) = fresh_cluster.called("helm", "upgrade")
    assert upgrade[upgrade.index("-n") + 1] == "crowdsec"
    assert "--create-namespace" in upgrade
    assert upgrade[upgrade.index("-f") + 1] == str(settings.VALUES_DIR / "crowdsec-values.yaml")
    assert upgrade[-3:] == ["--wait", "--timeout", "5m"]


def test_negative_answer_skips_without_touching_cluster(settings, fresh_cluster):
    settings.INTERACTIVE = True
    sequencer, asked = make_sequencer(settings, fresh_cluster, answers={"Deploy portainer?": False})
    report = sequencer.run(default_units(settings))

    portainer = report.units[0]
    assert portainer.status == UnitStatus.SKIPPED
    assert not any("portainer" in " ".join(call) for call in fresh_cluster.calls)
    assert len(asked) == 7
    # default answers: crowdsec and adguard are opt-in
    assert {u.name for u in report.skipped} == {"portainer", "crowdsec", "adguard"}


def test_present_unit_is_not_reapplied(settings, fresh_cluster):
    fresh_cluster.on("kubectl", "get", "deployment", "portainer", "-n", "portainer")
    sequencer, _ = make_sequencer(settings, fresh_cluster)
    report = sequencer.run(default_units(settings))

    assert report.units[0].status == UnitStatus.DEPLOYED
    applied = [c[3] for c in fresh_cluster.called("kubectl", "apply", "-f")]
    assert report.units[0].location not in applied
    assert len(applied) == 5


def test_failure_is_recorded_and_run_continues(settings, fresh_cluster):
    units = default_units(settings)
    fresh_cluster.on("kubectl", "apply", "-f", units[1].location, returncode=1, stderr="boom")
    sequencer, _ = make_sequencer(settings, fresh_cluster)
    report = sequencer.run(units)

    assert [u.name for u in report.failed] == ["heimdall"]
    assert len(report.deployed) == 6
    assert report.counts() == {"pending": 0, "skipped": 0, "deployed": 6, "failed": 1}


def test_missing_manifest_fails_without_apply(settings, fresh_cluster, tmp_path):
    unit = DeploymentUnit(name="ghost", kind=UnitKind.MANIFEST, location=str(tmp_path / "ghost.yaml"), default_port=1)
    sequencer, _ = make_sequencer(settings, fresh_cluster)
    report = sequencer.run([unit])

    assert report.units[0].status == UnitStatus.FAILED
    assert fresh_cluster.called("kubectl", "apply") == []


def test_helm_repo_failure_fails_unit(settings, fresh_cluster):
    fresh_cluster.on("helm", "repo", "add", returncode=1, stderr="network down")
    sequencer, _ = make_sequencer(settings, fresh_cluster)
    report = sequencer.run([u for u in default_units(settings) if u.name == "crowdsec"])

    assert report.units[0].status == UnitStatus.FAILED
    assert fresh_cluster.called("helm", "upgrade") == []


@pytest.mark.parametrize(
    "typed, default, expected",
    [("\n", True, True), ("\n", False, False), ("y\n", False, True), ("NO\n", True, False), ("maybe\nn\n", True, False)],
)
def test_confirm(typed, default, expected):
    with CliRunner().isolation(input=typed):
        assert confirm("Deploy x?", default) is expected


def test_confirm_eof_uses_default():
    with CliRunner().isolation(input=""):
        assert confirm("Deploy x?", False) is False
        assert confirm("Deploy x?", True) is True


def test_confirm_ctrl_c_still_interrupts():
    def interrupted(*args, **kwargs):
        try:
            raise KeyboardInterrupt
        except KeyboardInterrupt:
            raise click.Abort() from None

    with patch("k8s_dev.sequencer.click.confirm", side_effect=interrupted):
        with pytest.raises(KeyboardInterrupt):
            confirm("Deploy x?", True)


def test_failed_helm_release_is_reinstalled(settings, fresh_cluster):
    fresh_cluster.on("helm", "status", "crowdsec", returncode=0, stdout=FAILED_RELEASE)
    sequencer, _ = make_sequencer(settings, fresh_cluster)
    report = sequencer.run([u for u in default_units(settings) if u.name == "crowdsec"])

    assert report.units[0].status == UnitStatus.DEPLOYED
    assert len(fresh_cluster.called("helm", "upgrade", "--install", "crowdsec")) == 1


def test_deployed_helm_release_is_not_reinstalled(settings, fresh_cluster):
    fresh_cluster.on("helm", "status", "crowdsec", returncode=0, stdout=DEPLOYED_RELEASE)
    sequencer, _ = make_sequencer(settings, fresh_cluster)
    report = sequencer.run([u for u in default_units(settings) if u.name == "crowdsec"])

    assert report.units[0].status == UnitStatus.DEPLOYED
    assert fresh_cluster.called("helm", "status", "crowdsec", "-n", "crowdsec", "-o", "json")
    assert fresh_cluster.called("helm", "upgrade") == []
