"""proto2tmpl package initialization."""

from __future__ import annotations

__all__ = [
    "ExtensionNotFound",
    "ExtensionRegistry",
    "ExtensionResolver",
    "GeneratedFile",
    "GenerationError",
    "GenerationMode",
    "GenericTemplateBasedEncoder",
    "ITemplateEncoder",
    "OptionKind",
    "OptionValue",
    "OutputSet",
    "PluginParameters",
    "generate_code",
    "parse_parameters",
]


def __getattr__(name: str):
    if name == "ExtensionRegistry":
        from .registry import ExtensionRegistry

        return ExtensionRegistry

    if name in {"ExtensionNotFound", "ExtensionResolver", "OptionKind", "OptionValue"}:
        from .extensions import ExtensionNotFound, ExtensionResolver, OptionKind, OptionValue

        mapping = {
            "ExtensionNotFound": ExtensionNotFound,
            "ExtensionResolver": ExtensionResolver,
            "OptionKind": OptionKind,
            "OptionValue": OptionValue,
        }
        return mapping[name]

    if name in {"GeneratedFile", "GenericTemplateBasedEncoder", "ITemplateEncoder"}:
        from .codegen import GeneratedFile, GenericTemplateBasedEncoder, ITemplateEncoder

        mapping = {
            "GeneratedFile": GeneratedFile,
            "GenericTemplateBasedEncoder": GenericTemplateBasedEncoder,
            "ITemplateEncoder": ITemplateEncoder,
        }
        return mapping[name]

    if name in {"GenerationMode", "PluginParameters", "parse_parameters"}:
        from .config import GenerationMode, PluginParameters, parse_parameters

        mapping = {
            "GenerationMode": GenerationMode,
            "PluginParameters": PluginParameters,
            "parse_parameters": parse_parameters,
        }
        return mapping[name]

    if name == "GenerationError":
        from .dispatch import GenerationError

        return GenerationError

    if name == "OutputSet":
        from .output import OutputSet

        return OutputSet

    if name == "generate_code":
        from .plugin import generate_code

        return generate_code

    raise AttributeError(name)
