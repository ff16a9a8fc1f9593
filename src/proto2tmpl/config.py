"""Plugin parameter parsing for proto2tmpl code generation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Tuple

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"true", "t"}
_FALSE_VALUES = {"false", "f"}

# Parameter key -> PluginParameters attribute.
_STRING_KEYS = {
    "template_dir": "template_dir",
    "destination_dir": "destination_dir",
}
_BOOL_KEYS = {
    "single-package-mode": "single_package_mode",
    "debug": "debug",
    "all": "all",
    "file-mode": "file_mode",
}


class GenerationMode(str, Enum):
    """Descriptor scope handed to the template encoder."""

    ALL = "all"
    FILE = "file"
    SERVICE = "service"


def _to_bool(value: str) -> bool | None:
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    return None


@dataclass(frozen=True, slots=True)
class PluginParameters:
    """Settings parsed from the ``--tmpl_opt`` parameter string."""

    template_dir: str = ""
    destination_dir: str = ""
    debug: bool = False
    all: bool = False
    single_package_mode: bool = False
    file_mode: bool = False

    @property
    def mode(self) -> GenerationMode:
        if self.all:
            return GenerationMode.ALL
        if self.file_mode:
            return GenerationMode.FILE
        return GenerationMode.SERVICE

    @classmethod
    def from_parameter_string(cls, parameter: str | None) -> "PluginParameters":
        """Parse *parameter*, logging a warning for every rejected token."""

        params, diagnostics = parse_parameters(parameter)
        for diagnostic in diagnostics:
            logger.warning("%s", diagnostic)
        return params


def parse_parameters(parameter: str | None) -> Tuple[PluginParameters, List[str]]:
    """Parse a ``key=value,key=value`` string.

    Bad tokens never abort parsing. Each one produces a diagnostic and leaves
    the affected setting at its previous value; the remaining tokens are still
    consumed. Returns the parameters together with the diagnostics.
    """

    params = PluginParameters()
    diagnostics: List[str] = []
    if not parameter:
        return params, diagnostics

    for token in parameter.split(","):
        parts = token.split("=")
        if len(parts) != 2:
            diagnostics.append(f"invalid parameter: {token!r}")
            continue
        key, value = parts
        if key in _STRING_KEYS:
            params = replace(params, **{_STRING_KEYS[key]: value})
        elif key in _BOOL_KEYS:
            flag = _to_bool(value)
            if flag is None:
                diagnostics.append(f"invalid value for {key}: {value!r}")
                continue
            params = replace(params, **{_BOOL_KEYS[key]: flag})
        else:
            diagnostics.append(f"unknown parameter: {token!r}")

    return params, diagnostics


__all__ = ["GenerationMode", "PluginParameters", "parse_parameters"]
