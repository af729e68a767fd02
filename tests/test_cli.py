import json

import pytest
from typer.testing import CliRunner

from cli import doctor
from cli import main as cli_main
from core.services.client_factory import ZendeskClient
from core.services.resource_client import ResourceClient

from conftest import ENDPOINT, FakeTransport, json_response

runner = CliRunner()


@pytest.fixture
def fake_transport(monkeypatch):
    transport = FakeTransport()

    def _create_client(settings=None):
        return ZendeskClient(ResourceClient(transport, endpoint_uri=ENDPOINT), transport)

    monkeypatch.setattr(cli_main, "create_client", _create_client)
    monkeypatch.setattr(cli_main, "setup_logger", lambda level: None)
    return transport


def test_tags_list_as_json(fake_transport):
    fake_transport.queue(json_response({"tags": [{"id": 1, "name": "vip"}]}))

    result = runner.invoke(cli_main.app, ["--json", "tags", "list"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == [{"id": 1, "name": "vip"}]


def test_tags_list_table(fake_transport):
    fake_transport.queue(json_response({"tags": [{"id": 1, "name": "vip"}]}))

    result = runner.invoke(cli_main.app, ["tags", "list"])

    assert result.exit_code == 0, result.output
    assert "vip" in result.output


def test_output_file(fake_transport, tmp_path):
    fake_transport.queue(json_response({"ticket_field": {"id": 3, "title": "Age"}}))
    target = tmp_path / "field.json"

    result = runner.invoke(cli_main.app, ["--output", str(target), "ticket-fields", "show", "3"])

    assert result.exit_code == 0, result.output
    assert json.loads(target.read_text(encoding="utf-8")) == {"id": 3, "title": "Age"}
    assert fake_transport.calls[0].url == f"{ENDPOINT}/ticket_fields/3"


def test_http_error_exits_with_code_1(fake_transport):
    fake_transport.queue(json_response({"error": "RecordNotFound"}, status=404))

    result = runner.invoke(cli_main.app, ["tags", "show", "404"])

    assert result.exit_code == 1
    assert "HttpError" in result.output


def test_create_sends_payload(fake_transport):
    fake_transport.queue(json_response({"tag": {"id": 2, "name": "new"}}))

    result = runner.invoke(cli_main.app, ["--json", "tags", "create", "--data", '{"name": "new"}'])

    assert result.exit_code == 0, result.output
    assert fake_transport.calls[0].method == "POST"
    assert fake_transport.calls[0].json() == {"name": "new"}


def test_invalid_json_payload(fake_transport):
    result = runner.invoke(cli_main.app, ["tags", "create", "--data", "not json"])

    assert result.exit_code == 2
    assert fake_transport.calls == []


def test_delete_option(fake_transport):
    fake_transport.queue(json_response({}, status=200))

    result = runner.invoke(cli_main.app, ["ticket-fields", "delete-option", "9", "10"])

    assert result.exit_code == 0, result.output
    assert fake_transport.calls[0].url == f"{ENDPOINT}/ticket_fields/9/options/10"


def test_doctor_setup_stores_credentials(monkeypatch, tmp_path):
    stored = {}

    def _write(values):
        stored.update(values)
        return tmp_path / ".env"

    monkeypatch.setattr(doctor, "write_user_env_vars", _write)

    result = runner.invoke(doctor.app, ["setup"], input="acme\nagent@acme.test\nsecret\n")

    assert result.exit_code == 0, result.output
    assert stored == {
        "ZENDESK_SUBDOMAIN": "acme",
        "ZENDESK_USERNAME": "agent@acme.test",
        "ZENDESK_TOKEN": "secret",
    }
