"""Typed accessors for custom options on descriptors.

To define your own options see
https://protobuf.dev/programming-guides/proto2/#customoptions. Private
extensions usually take field numbers in the 50000-99999 range.

Options are advisory: every accessor returns the zero value of its type
(``""``, ``False`` or ``0``) when the descriptor has no options, when the
extension is not registered or not set, or when it holds a different type.
The per-scope accessors also return the zero value when handed a descriptor
of another kind, or something that is not a descriptor at all.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, Dict, Optional, Tuple, Type

from google.protobuf import descriptor_pb2
from google.protobuf.message import Message

from .extensions import ExtensionNotFound, ExtensionResolver, OptionValue, default_resolver

logger = logging.getLogger(__name__)

# Descriptor class and options message accepted by each accessor scope.
_SCOPES: Dict[str, Tuple[Type[Message], str]] = {
    "file": (descriptor_pb2.FileDescriptorProto, "google.protobuf.FileOptions"),
    "message": (descriptor_pb2.DescriptorProto, "google.protobuf.MessageOptions"),
    "field": (descriptor_pb2.FieldDescriptorProto, "google.protobuf.FieldOptions"),
    "method": (descriptor_pb2.MethodDescriptorProto, "google.protobuf.MethodOptions"),
}


def _has_options(descriptor: Any) -> bool:
    if not isinstance(descriptor, Message):
        return False
    if "options" not in descriptor.DESCRIPTOR.fields_by_name:
        return False
    return descriptor.HasField("options")


def option_value(
    field_id: int,
    descriptor: Any,
    *,
    resolver: Optional[ExtensionResolver] = None,
    type_name: Optional[str] = None,
) -> OptionValue:
    """Resolve extension *field_id* on the options of *descriptor*.

    ``type_name`` names the options message the extension must extend; it
    defaults to the type of ``descriptor.options``.
    """

    if not _has_options(descriptor):
        return OptionValue.absent()
    options = descriptor.options
    if type_name is not None and options.DESCRIPTOR.full_name != type_name:
        return OptionValue.absent()
    resolver = resolver or default_resolver()
    try:
        return resolver.resolve(options, field_id, type_name=type_name)
    except ExtensionNotFound as exc:
        logger.debug("%s on %s", exc, exc.type_name)
        return OptionValue.absent()


def _scoped_value(
    scope: str, field_id: int, descriptor: Any, resolver: Optional[ExtensionResolver]
) -> OptionValue:
    descriptor_class, type_name = _SCOPES[scope]
    if not isinstance(descriptor, descriptor_class):
        if descriptor is not None:
            logger.debug(
                "%s option %d requested on %s", scope, field_id, type(descriptor).__name__
            )
        return OptionValue.absent()
    return option_value(field_id, descriptor, resolver=resolver, type_name=type_name)


def string_option(
    field_id: int, descriptor: Any, *, resolver: Optional[ExtensionResolver] = None
) -> str:
    return option_value(field_id, descriptor, resolver=resolver).as_string()


def bool_option(
    field_id: int, descriptor: Any, *, resolver: Optional[ExtensionResolver] = None
) -> bool:
    return option_value(field_id, descriptor, resolver=resolver).as_bool()


def int64_option(
    field_id: int, descriptor: Any, *, resolver: Optional[ExtensionResolver] = None
) -> int:
    return option_value(field_id, descriptor, resolver=resolver).as_int64()


# File options ----------------------------------------------------------
def string_file_option(
    field_id: int,
    file: Optional[descriptor_pb2.FileDescriptorProto],
    *,
    resolver: Optional[ExtensionResolver] = None,
) -> str:
    return _scoped_value("file", field_id, file, resolver).as_string()


def bool_file_option(
    field_id: int,
    file: Optional[descriptor_pb2.FileDescriptorProto],
    *,
    resolver: Optional[ExtensionResolver] = None,
) -> bool:
    return _scoped_value("file", field_id, file, resolver).as_bool()


def int64_file_option(
    field_id: int,
    file: Optional[descriptor_pb2.FileDescriptorProto],
    *,
    resolver: Optional[ExtensionResolver] = None,
) -> int:
    return _scoped_value("file", field_id, file, resolver).as_int64()


# Message options -------------------------------------------------------
def string_message_option(
    field_id: int,
    message: Optional[descriptor_pb2.DescriptorProto],
    *,
    resolver: Optional[ExtensionResolver] = None,
) -> str:
    return _scoped_value("message", field_id, message, resolver).as_string()


def bool_message_option(
    field_id: int,
    message: Optional[descriptor_pb2.DescriptorProto],
    *,
    resolver: Optional[ExtensionResolver] = None,
) -> bool:
    return _scoped_value("message", field_id, message, resolver).as_bool()


def int64_message_option(
    field_id: int,
    message: Optional[descriptor_pb2.DescriptorProto],
    *,
    resolver: Optional[ExtensionResolver] = None,
) -> int:
    return _scoped_value("message", field_id, message, resolver).as_int64()


# Field options ---------------------------------------------------------
def string_field_option(
    field_id: int,
    field: Optional[descriptor_pb2.FieldDescriptorProto],
    *,
    resolver: Optional[ExtensionResolver] = None,
) -> str:
    return _scoped_value("field", field_id, field, resolver).as_string()


def bool_field_option(
    field_id: int,
    field: Optional[descriptor_pb2.FieldDescriptorProto],
    *,
    resolver: Optional[ExtensionResolver] = None,
) -> bool:
    return _scoped_value("field", field_id, field, resolver).as_bool()


def int64_field_option(
    field_id: int,
    field: Optional[descriptor_pb2.FieldDescriptorProto],
    *,
    resolver: Optional[ExtensionResolver] = None,
) -> int:
    return _scoped_value("field", field_id, field, resolver).as_int64()


# Method options --------------------------------------------------------
def string_method_option(
    field_id: int,
    method: Optional[descriptor_pb2.MethodDescriptorProto],
    *,
    resolver: Optional[ExtensionResolver] = None,
) -> str:
    return _scoped_value("method", field_id, method, resolver).as_string()


def bool_method_option(
    field_id: int,
    method: Optional[descriptor_pb2.MethodDescriptorProto],
    *,
    resolver: Optional[ExtensionResolver] = None,
) -> bool:
    return _scoped_value("method", field_id, method, resolver).as_bool()


def int64_method_option(
    field_id: int,
    method: Optional[descriptor_pb2.MethodDescriptorProto],
    *,
    resolver: Optional[ExtensionResolver] = None,
) -> int:
    return _scoped_value("method", field_id, method, resolver).as_int64()


_ACCESSORS: Dict[str, Callable[..., Any]] = {
    "string_file_option": string_file_option,
    "bool_file_option": bool_file_option,
    "int64_file_option": int64_file_option,
    "string_message_option": string_message_option,
    "bool_message_option": bool_message_option,
    "int64_message_option": int64_message_option,
    "string_field_option": string_field_option,
    "bool_field_option": bool_field_option,
    "int64_field_option": int64_field_option,
    "string_method_option": string_method_option,
    "bool_method_option": bool_method_option,
    "int64_method_option": int64_method_option,
}

# Helper names used by existing gotemplate-style templates.
_LEGACY_ALIASES: Dict[str, str] = {
    "stringFileOptionsExtension": "string_file_option",
    "stringMethodOptionsExtension": "string_method_option",
    "boolMethodOptionsExtension": "bool_method_option",
    "stringMessageExtension": "string_message_option",
    "boolMessageExtension": "bool_message_option",
    "int64MessageExtension": "int64_message_option",
    "stringFieldExtension": "string_field_option",
    "boolFieldExtension": "bool_field_option",
    "int64FieldExtension": "int64_field_option",
}


def template_functions(resolver: Optional[ExtensionResolver] = None) -> Dict[str, Callable[..., Any]]:
    """Return the option accessors keyed by the names templates call them by.

    When *resolver* is given every accessor is bound to it; otherwise the
    accessors use :func:`~proto2tmpl.extensions.default_resolver`.
    """

    functions: Dict[str, Callable[..., Any]] = {}
    for name, accessor in _ACCESSORS.items():
        if resolver is not None:
            accessor = functools.partial(accessor, resolver=resolver)
        functions[name] = accessor
    for alias, name in _LEGACY_ALIASES.items():
        functions[alias] = functions[name]
    return functions


__all__ = [
    "bool_field_option",
    "bool_file_option",
    "bool_message_option",
    "bool_method_option",
    "bool_option",
    "int64_field_option",
    "int64_file_option",
    "int64_message_option",
    "int64_method_option",
    "int64_option",
    "option_value",
    "string_field_option",
    "string_file_option",
    "string_message_option",
    "string_method_option",
    "string_option",
    "template_functions",
]
