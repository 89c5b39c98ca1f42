# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json
import logging

import pytest

from statusprobe import StatusProbe, check_url, check_urls
from statusprobe.cli import main as cli_main
from statusprobe.http import HttpResponse, StubHttpClient
from statusprobe.models.batch import BatchSpec, ProbeSpec

UP = "https://up.example/health"
DOWN = "https://down.example/health"


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def stub(monkeypatch):
    client = StubHttpClient({UP: HttpResponse(ok=True, status_code=200, headers={"server": "nginx"}, text="ok")})
    captured = {}

    def factory(settings):
        captured["settings"] = settings
        return client

    monkeypatch.setattr(cli_main, "create_default_http_client", factory)
    client.captured = captured
    return client


def write_config(tmp_path, urls):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"urls": urls}), encoding="utf-8")
    return path


def test_parse_header_and_success_args():
    assert cli_main.parse_header_args(["X-Token: abc", "broken", "Accept:a:b"]) == {"X-Token": "abc", "Accept": "a:b"}
    assert cli_main.parse_success_args(["200", "x", "301"]) == (200, 301)


def test_main_without_target_fails(stub):
    assert cli_main.main([]) == 1
    assert stub.requests == []


def test_main_rejects_invalid_url(stub):
    assert cli_main.main(["--url", "not a url"]) == 1
    assert stub.requests == []


def test_main_missing_config_fails(stub, tmp_path):
    assert cli_main.main([str(tmp_path / "nope.json")]) == 1


def test_main_single_url_success(stub):
    argv = ["--url", UP, "--header", "X-Token:abc", "--success", "200", "--timeout", "1500", "--sync", "--quiet"]
    assert cli_main.main(argv) == 0
    (request,) = stub.requests
    assert request.headers == {"X-Token": "abc"}
    assert request.timeout == 1.5
    assert stub.captured["settings"].verify_ssl is True


def test_main_single_url_failing_status(stub):
    assert cli_main.main(["--url", UP, "--success", "204", "--quiet"]) == 1


def test_main_ignore_ssl_errors(stub):
    assert cli_main.main(["--url", UP, "--ignore-ssl-errors", "--quiet"]) == 0
    assert stub.captured["settings"].verify_ssl is False


def test_main_config_json_output(stub, tmp_path, capsys):
    path = write_config(
        tmp_path,
        [
            {"url": UP, "name": "Up", "checks": [{"type": "header", "name": "Server", "operator": "equals", "value": "nginx"}]},
            {"url": DOWN, "name": "Down"},
        ],
    )
    assert cli_main.main([str(path), "--json", "--quiet"]) == 1
    payload = json.loads(capsys.readouterr().out)
    assert [item["name"] for item in payload] == ["Up", "Down"]
    assert payload[0]["success"] is True
    assert payload[0]["checkResults"][0]["description"] == "Header Server equals nginx"
    assert payload[1]["success"] is False
    assert "checkResults" not in payload[1]


def test_main_keeps_running_when_log_file_is_unwritable(stub, tmp_path, capsys):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"urls": [{"url": UP}], "logFile": str(blocker / "sub" / "out.log")}), encoding="utf-8")

    assert cli_main.main([str(path), "--quiet"]) == 0
    assert [request.url for request in stub.requests] == [UP]
    assert "Cannot write log file" in capsys.readouterr().err


def test_main_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli_main.main(["--version"])
    assert excinfo.value.code == 0
    assert "StatusProbe v" in capsys.readouterr().out


def test_check_url_uses_success_codes():
    client = StubHttpClient({UP: HttpResponse(ok=True, status_code=200)})
    assert check_url(UP, http_client=client).success is True
    result = check_url(UP, success_codes=(404,), http_client=client)
    assert result.success is False
    assert result.error == "Status code equals 404 - Expected: 404, Actual: 200"


def test_check_urls_runs_config_file(tmp_path):
    path = write_config(tmp_path, [{"url": UP}, {"url": DOWN}])
    client = StubHttpClient({UP: HttpResponse(ok=True, status_code=200)})
    results = check_urls(path, concurrent=False, emit_log=False, http_client=client)
    assert [r.success for r in results] == [True, False]
    assert [r.name for r in results] == ["URL 1", "URL 2"]


def test_status_probe_closes_client():
    class ClosingClient(StubHttpClient):
        closed = False

        def close(self):
            self.closed = True

    client = ClosingClient({UP: HttpResponse(ok=True, status_code=200)})
    with StatusProbe(http_client=client) as probe:
        result = probe.run_probe(ProbeSpec(url=UP), BatchSpec(probes=()))
    assert result.success
    assert client.closed is True
