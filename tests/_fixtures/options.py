"""Builders for a custom options file and options messages that use it."""

from __future__ import annotations

from typing import Dict

from google.protobuf import descriptor_pb2
from google.protobuf.message import Message

from proto2tmpl.registry import ExtensionRegistry

OPTIONS_FILE = "custom/options.proto"

_FieldType = descriptor_pb2.FieldDescriptorProto

# name -> (number, type, extendee, repeated)
_EXTENSIONS = {
    "method_path": (50001, _FieldType.TYPE_STRING, ".google.protobuf.MethodOptions", False),
    "method_public": (50002, _FieldType.TYPE_BOOL, ".google.protobuf.MethodOptions", False),
    "method_timeout": (50003, _FieldType.TYPE_INT64, ".google.protobuf.MethodOptions", False),
    "method_tags": (50004, _FieldType.TYPE_STRING, ".google.protobuf.MethodOptions", True),
    "file_header": (50010, _FieldType.TYPE_STRING, ".google.protobuf.FileOptions", False),
    "file_strict": (50011, _FieldType.TYPE_BOOL, ".google.protobuf.FileOptions", False),
    "message_table": (50020, _FieldType.TYPE_STRING, ".google.protobuf.MessageOptions", False),
    "message_version": (50021, _FieldType.TYPE_INT64, ".google.protobuf.MessageOptions", False),
    "message_cached": (50022, _FieldType.TYPE_BOOL, ".google.protobuf.MessageOptions", False),
    "field_column": (50030, _FieldType.TYPE_STRING, ".google.protobuf.FieldOptions", False),
    "field_max": (50031, _FieldType.TYPE_INT64, ".google.protobuf.FieldOptions", False),
    "field_indexed": (50032, _FieldType.TYPE_BOOL, ".google.protobuf.FieldOptions", False),
    "field_width": (50033, _FieldType.TYPE_INT32, ".google.protobuf.FieldOptions", False),
    "field_blob": (50034, _FieldType.TYPE_BYTES, ".google.protobuf.FieldOptions", False),
}


def build_options_file(
    name: str = OPTIONS_FILE, package: str = "custom"
) -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto()
    file_proto.name = name
    file_proto.package = package
    file_proto.syntax = "proto2"
    file_proto.dependency.append("google/protobuf/descriptor.proto")

    for ext_name, (number, field_type, extendee, repeated) in _EXTENSIONS.items():
        extension = file_proto.extension.add()
        extension.name = ext_name
        extension.number = number
        extension.type = field_type
        extension.extendee = extendee
        extension.label = (
            _FieldType.LABEL_REPEATED if repeated else _FieldType.LABEL_OPTIONAL
        )

    return file_proto


def encode_options(
    registry: ExtensionRegistry,
    options_type: type[Message],
    values: Dict[str, object],
    *,
    package: str = "custom",
) -> bytes:
    """Serialize an options message carrying *values* keyed by extension name."""

    dynamic_class = registry.message_class(options_type.DESCRIPTOR.full_name)
    message = dynamic_class()
    for ext_name, value in values.items():
        extension = registry.pool.FindExtensionByName(f"{package}.{ext_name}")
        if isinstance(value, (list, tuple)):
            message.Extensions[extension].extend(value)
        else:
            message.Extensions[extension] = value
    return message.SerializeToString()


