from __future__ import annotations

import logging

import pytest

from proto2tmpl.config import GenerationMode, PluginParameters, parse_parameters


def test_parse_parameters_defaults() -> None:
    for parameter in (None, ""):
        params, diagnostics = parse_parameters(parameter)
        assert params == PluginParameters()
        assert diagnostics == []
    assert params.mode is GenerationMode.SERVICE


def test_parse_parameters_reads_every_key() -> None:
    params, diagnostics = parse_parameters(
        "template_dir=./tmpl,destination_dir=out/gen,single-package-mode=true,"
        "debug=T,all=t,file-mode=TRUE"
    )

    assert diagnostics == []
    assert params == PluginParameters(
        template_dir="./tmpl",
        destination_dir="out/gen",
        debug=True,
        all=True,
        single_package_mode=True,
        file_mode=True,
    )


def test_parse_parameters_is_idempotent() -> None:
    parameter = "template_dir=templates,debug=false,file-mode=f"

    assert parse_parameters(parameter) == parse_parameters(parameter)


def test_parse_parameters_reports_one_diagnostic_per_bad_token() -> None:
    params, diagnostics = parse_parameters(
        "template_dir=templates,destination_dir,debug=true,file-mode=true"
    )

    assert params.template_dir == "templates"
    assert params.debug is True
    assert params.file_mode is True
    assert params.destination_dir == ""
    assert diagnostics == ["invalid parameter: 'destination_dir'"]


@pytest.mark.parametrize(
    ("parameter", "diagnostic"),
    [
        ("debug=yes", "invalid value for debug: 'yes'"),
        ("all=1", "invalid value for all: '1'"),
        ("file-mode=", "invalid value for file-mode: ''"),
        ("single-package-mode=on", "invalid value for single-package-mode: 'on'"),
        ("template_dir=a=b", "invalid parameter: 'template_dir=a=b'"),
        ("bogus=1", "unknown parameter: 'bogus=1'"),
        ("Debug=true", "unknown parameter: 'Debug=true'"),
    ],
)
def test_parse_parameters_diagnostics(parameter: str, diagnostic: str) -> None:
    params, diagnostics = parse_parameters(parameter)

    assert params == PluginParameters()
    assert diagnostics == [diagnostic]


def test_invalid_boolean_keeps_previous_value() -> None:
    params, diagnostics = parse_parameters("debug=true,debug=maybe")

    assert params.debug is True
    assert len(diagnostics) == 1


def test_later_false_resets_an_earlier_true() -> None:
    params, diagnostics = parse_parameters("debug=true,all=t,debug=false,all=f")

    assert params.debug is False
    assert params.all is False
    assert diagnostics == []


def test_trailing_comma_is_reported() -> None:
    params, diagnostics = parse_parameters("all=true,")

    assert params.all is True
    assert diagnostics == ["invalid parameter: ''"]


def test_mode_priority() -> None:
    assert PluginParameters(all=True, file_mode=True).mode is GenerationMode.ALL
    assert PluginParameters(all=True).mode is GenerationMode.ALL
    assert PluginParameters(file_mode=True).mode is GenerationMode.FILE
    assert PluginParameters().mode is GenerationMode.SERVICE


def test_from_parameter_string_logs_diagnostics(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="proto2tmpl.config"):
        params = PluginParameters.from_parameter_string("bogus=1,debug=true")

    assert params.debug is True
    messages = [record.getMessage() for record in caplog.records]
    assert messages == ["unknown parameter: 'bogus=1'"]
