# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json

import pytest

from statusprobe.errors import CheckDefinitionError, ConfigError
from statusprobe.loader import load_batch_spec, parse_batch_spec
from statusprobe.models.batch import DEFAULT_TIMEOUT_MS, BatchSpec, ProbeSpec
from statusprobe.models.checks import JsonPathCheck, UnknownCheck


def write_config(tmp_path, data):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_load_batch_spec_applies_defaults(tmp_path):
    path = write_config(
        tmp_path,
        {
            "urls": [
                {"url": "https://example.com", "name": "Example", "timeout": 2500},
                {
                    "url": "https://api.example.com/users",
                    "method": "post",
                    "body": {"name": "x"},
                    "contentType": "application/json",
                    "checks": [{"type": "jsonpath", "path": "$.id", "operator": "exists"}],
                },
            ],
            "globalSuccessCodes": [200, 204],
            "logLevel": "DEBUG",
        },
    )
    batch = load_batch_spec(path)

    assert batch.global_timeout_ms == DEFAULT_TIMEOUT_MS
    assert batch.global_success_codes == (200, 204)
    assert batch.log_level == "debug"
    first, second = batch.probes
    assert first.name == "Example"
    assert first.effective_timeout_ms(batch) == 2500
    assert first.checks is None
    assert second.name == "URL 2"
    assert second.method == "POST"
    assert second.body == '{"name": "x"}'
    assert isinstance(second.checks[0], JsonPathCheck)


def test_probes_key_is_accepted_as_alias():
    batch = parse_batch_spec({"probes": [{"url": "http://localhost:8080/health"}]})
    assert batch.probes[0].url == "http://localhost:8080/health"


def test_missing_file_is_config_error(tmp_path):
    with pytest.raises(ConfigError, match="Configuration file not found"):
        load_batch_spec(tmp_path / "missing.json")


def test_invalid_json_is_config_error(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid JSON"):
        load_batch_spec(path)


@pytest.mark.parametrize(
    ("data", "message"),
    [
        ({}, 'must contain a "urls" array'),
        ({"urls": []}, "at least one URL"),
        ({"urls": [{"name": "no url"}]}, 'URL at index 0 is missing the "url" property'),
        ({"urls": [{"url": "not-a-url"}]}, "URL at index 0 is invalid: not-a-url"),
        ({"urls": [{"url": "ftp://example.com"}]}, "is invalid"),
        ({"urls": [{"url": "https://example.com"}], "logLevel": "loud"}, "Invalid logLevel"),
        ({"urls": [{"url": "https://example.com", "successCodes": "200"}]}, "success codes must be an array"),
    ],
)
def test_validation_messages(data, message):
    with pytest.raises(ConfigError, match=message):
        parse_batch_spec(data)


def test_illegal_operator_names_probe_and_check():
    data = {
        "urls": [
            {"url": "https://example.com", "checks": [{"type": "status_code", "operator": "contains", "value": "2"}]}
        ]
    }
    with pytest.raises(CheckDefinitionError, match="URL at index 0, check 0"):
        parse_batch_spec(data)


def test_unknown_check_type_is_accepted():
    batch = parse_batch_spec({"urls": [{"url": "https://example.com", "checks": [{"type": "ping"}]}]})
    assert isinstance(batch.probes[0].checks[0], UnknownCheck)


def test_effective_settings_fall_through_levels():
    batch = BatchSpec(probes=(), global_timeout_ms=8000, global_success_codes=(201,))
    assert ProbeSpec(url="http://a").effective_timeout_ms(batch) == 8000
    assert ProbeSpec(url="http://a", timeout_ms=0).effective_timeout_ms(batch) == 8000
    assert ProbeSpec(url="http://a").effective_timeout_ms() == DEFAULT_TIMEOUT_MS
    assert ProbeSpec(url="http://a").effective_success_codes(batch) == (201,)
    assert ProbeSpec(url="http://a", success_codes=[404]).effective_success_codes(batch) == (404,)
    assert ProbeSpec(url="http://a").effective_success_codes() == (200,)
