import argparse
import json

import pytest
from fastapi.testclient import TestClient

from conftest import BASE_URL, UBUNTU_SNAP_ID, make_settings
from terminalcom.api import TerminalAPI
from terminalcom.cli import EXIT_OK, EXIT_REMOTE, EXIT_USAGE, main, parse_option, parse_value
from terminalcom.service_client import TerminalServiceClient


def _make_api(fake_service, settings) -> TerminalAPI:
    http = TestClient(fake_service.app, base_url=BASE_URL)
    return TerminalAPI(TerminalServiceClient(settings, http_client=http))


def _run(fake_service, argv, **settings_overrides) -> int:
    settings = make_settings(**settings_overrides)
    return main(argv, settings=settings, api=_make_api(fake_service, settings))


def test_parse_option_decodes_json_values():
    assert parse_option("cpu=200") == ("cpu", 200)
    assert parse_option("autopause=false") == ("autopause", False)
    assert parse_option("cpu=2 (max)") == ("cpu", "2 (max)")
    assert parse_option("name=QA box") == ("name", "QA box")


def test_parse_option_requires_key_and_value():
    with pytest.raises(argparse.ArgumentTypeError):
        parse_option("cpu")
    with pytest.raises(argparse.ArgumentTypeError):
        parse_option("=200")


def test_list_prints_every_operation(capsys):
    assert main(["--list"], settings=make_settings()) == EXIT_OK

    out = capsys.readouterr().out
    assert "start_snapshot(user_token, access_token, snapshot_id, **options)" in out
    assert "request_progress(request_id)" in out


def test_public_operation_prints_json(fake_service, capsys):
    fake_service.respond("get_snapshot", {"snapshot": {"title": "Official Ubuntu 14.04"}})

    assert _run(fake_service, ["get_snapshot", UBUNTU_SNAP_ID]) == EXIT_OK

    assert json.loads(capsys.readouterr().out) == {"snapshot": {"title": "Official Ubuntu 14.04"}}
    assert fake_service.last["json"] == {"snapshot_id": UBUNTU_SNAP_ID}


def test_timestamps_are_printed_as_iso_strings(fake_service, capsys):
    fake_service.respond("who_am_i", {"user": {"joined": "2014-12-01T16:46:52.482Z"}})

    assert _run(fake_service, ["who_am_i"], user_token="u", access_token="a") == EXIT_OK

    assert json.loads(capsys.readouterr().out) == {"user": {"joined": "2014-12-01T16:46:52.482000+00:00"}}


def test_tokens_come_from_settings_or_flags(fake_service):
    assert _run(fake_service, ["list_terminals"], user_token="u", access_token="a") == EXIT_OK
    assert fake_service.last["json"] == {"user_token": "u", "access_token": "a"}

    argv = ["list_terminals", "--user-token", "flag-u", "--access-token", "flag-a"]
    assert _run(fake_service, argv, user_token="u", access_token="a") == EXIT_OK
    assert fake_service.last["json"] == {"user_token": "flag-u", "access_token": "flag-a"}


def test_authenticated_operation_without_tokens_fails(fake_service, capsys):
    assert _run(fake_service, ["balance"]) == EXIT_USAGE
    assert "needs a user token" in capsys.readouterr().err
    assert fake_service.requests == []


def test_instance_flag_expands_to_cpu_and_ram(fake_service):
    argv = ["start_snapshot", UBUNTU_SNAP_ID, "--instance", "micro", "-o", "name=QA box"]

    assert _run(fake_service, argv, user_token="u", access_token="a") == EXIT_OK

    assert fake_service.last["json"] == {
        "user_token": "u",
        "access_token": "a",
        "snapshot_id": UBUNTU_SNAP_ID,
        "name": "QA box",
        "cpu": "2 (max)",
        "ram": 256,
    }


def test_invalid_option_is_a_usage_error(fake_service, capsys):
    assert _run(fake_service, ["count_public_snapshots", "-o", "sortby=date"]) == EXIT_USAGE
    assert "Unrecognised options: 'sortby'" in capsys.readouterr().err
    assert fake_service.requests == []


def test_remote_error_exit_code(fake_service, capsys):
    fake_service.respond("get_profile", {"error": "no such user"}, status_code=404)

    assert _run(fake_service, ["get_profile", "nobody"]) == EXIT_REMOTE
    assert "Unexpected status 404" in capsys.readouterr().err


def test_unknown_operation(fake_service, capsys):
    assert _run(fake_service, ["launch_rocket"]) == EXIT_USAGE
    assert "unknown operation" in capsys.readouterr().err


def test_missing_operation(capsys):
    assert main([], settings=make_settings()) == EXIT_USAGE
    assert "an operation is required" in capsys.readouterr().err


def test_parse_value_keeps_non_json_strings():
    assert parse_value("8080") == 8080
    assert parse_value('"8080"') == "8080"
    assert parse_value(UBUNTU_SNAP_ID) == UBUNTU_SNAP_ID
    assert parse_value("d6e9e1ee-d334-4027-b365-5d7eebe5a1d7") == "d6e9e1ee-d334-4027-b365-5d7eebe5a1d7"


def test_positional_numbers_are_sent_as_numbers(fake_service):
    assert _run(fake_service, ["gift", "friend@example.com", "500"], user_token="u", access_token="a") == EXIT_OK
    assert fake_service.last["json"]["cents"] == 500

    argv = ["add_cname_record", "example.com", "botanicus117", "8080"]
    assert _run(fake_service, argv, user_token="u", access_token="a") == EXIT_OK
    assert fake_service.last["json"]["port"] == 8080
    assert fake_service.last["json"]["subdomain"] == "botanicus117"


def test_injected_api_is_left_open(fake_service):
    settings = make_settings()
    api = _make_api(fake_service, settings)

    assert main(["get_profile", "botanicus"], settings=settings, api=api) == EXIT_OK
    assert not api.client.http.is_closed

    api.get_profile("botanicus")
    assert len(fake_service.requests) == 2
    api.close()
