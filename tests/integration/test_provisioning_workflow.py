"""End-to-end provisioning scenarios through the CLI entry point."""

import json

import pytest

from sqlmi_broker.bootstrap import Application
from sqlmi_broker.cli import main as cli_main
from sqlmi_broker.domain.managed_instance.exceptions import ResourceAlreadyExistsError
from sqlmi_broker.domain.managed_instance.provisioning import ProvisioningState
from sqlmi_broker.domain.managed_instance.value_objects import ResourceIdentity
from tests.fixtures.commands import make_command

CREATE_ARGS = [
    "managed-instance",
    "create",
    "-g",
    "rg1",
    "-n",
    "sqlmi1",
    "-l",
    "westeurope",
    "--subnet-id",
    "/subscriptions/0000/subnets/mi",
    "--license-type",
    "LicenseIncluded",
    "--storage-size-gb",
    "32",
    "--vcores",
    "4",
    "--sku",
    "GeneralPurpose-Gen5",
    "--admin-login",
    "sqladmin",
    "--tag",
    "env=prod",
]


@pytest.fixture
def cli_app(monkeypatch, tmp_path, fake_gateway):
    """Route the CLI onto the in-memory gateway."""
    monkeypatch.setenv("SQLMI_CONFIG_DIR", str(tmp_path))
    monkeypatch.setenv("SQLMI_ADMIN_PASSWORD", "S3cret-Passw0rd!")
    monkeypatch.setenv("SQLMI_CONSOLE_ENABLED", "false")
    monkeypatch.delenv("SQLMI_CONFIG_FILE", raising=False)
    monkeypatch.setattr(
        cli_main, "Application", lambda config: Application(config, gateway=fake_gateway)
    )
    return fake_gateway


@pytest.mark.integration
class TestProvisioningWorkflow:
    def test_create_end_to_end(self, orchestrator_factory, fake_gateway):
        outcome = orchestrator_factory(fake_gateway).provision(
            make_command(
                storage_size_gb=32,
                vcores=4,
                sku_name="GeneralPurpose-Gen5",
                license_type="LicenseIncluded",
            )
        )

        assert outcome.state is ProvisioningState.DONE
        assert outcome.instance.identity == ResourceIdentity(resource_group="rg1", name="sqlmi1")
        assert outcome.instance.storage_size_gb == 32
        assert outcome.instance.vcores == 4
        assert outcome.instance.sku_name == "GP_Gen5"
        assert outcome.instance.license_type == "LicenseIncluded"

    def test_second_run_reports_conflict(self, orchestrator_factory, fake_gateway):
        orchestrator = orchestrator_factory(fake_gateway)
        orchestrator.provision(make_command())

        with pytest.raises(ResourceAlreadyExistsError) as exc_info:
            orchestrator.provision(make_command())

        assert exc_info.value.error_code == "RESOURCE_ALREADY_EXISTS"
        assert fake_gateway.create_calls == 1

    async def test_cli_create(self, cli_app, capsys):
        exit_code = await cli_main.main(["--log-level", "ERROR", *CREATE_ARGS])

        output = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert output["success"] is True
        assert output["managed_instance"]["identity"]["name"] == "sqlmi1"
        assert output["managed_instance"]["storage_size_gb"] == 32
        assert cli_app.create_calls == 1

    async def test_cli_conflict_exits_non_zero(self, cli_app, capsys):
        cli_app.seed(ResourceIdentity(resource_group="rg1", name="sqlmi1"))

        exit_code = await cli_main.main(CREATE_ARGS)

        output = json.loads(capsys.readouterr().out)
        assert exit_code == 1
        assert output["error"] == "RESOURCE_ALREADY_EXISTS"
        assert cli_app.create_calls == 0

    async def test_cli_what_if(self, cli_app, capsys):
        exit_code = await cli_main.main([*CREATE_ARGS, "--what-if", "--as-job"])

        output = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert output["dry_run"] is True
        assert output["desired_state"]["sku"]["name"] == "GP_Gen5"
        assert cli_app.create_calls == 0
