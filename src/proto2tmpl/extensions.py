"""Resolution of custom extension options against the extension registry."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from google.protobuf.descriptor import FieldDescriptor
from google.protobuf.message import Message

from .registry import ExtensionRegistry, default_registry


class OptionKind(str, Enum):
    """Value categories an extension option can decode to."""

    STRING = "string"
    BOOL = "bool"
    INT64 = "int64"
    OTHER = "other"
    ABSENT = "absent"


@dataclass(frozen=True, slots=True)
class OptionValue:
    """Decoded extension value tagged with its kind."""

    kind: OptionKind
    value: Any = None

    @classmethod
    def absent(cls) -> "OptionValue":
        return cls(OptionKind.ABSENT)

    @property
    def is_set(self) -> bool:
        return self.kind is not OptionKind.ABSENT

    def as_string(self) -> str:
        if self.kind is OptionKind.STRING:
            return self.value
        return ""

    def as_bool(self) -> bool:
        if self.kind is OptionKind.BOOL:
            return self.value
        return False

    def as_int64(self) -> int:
        if self.kind is OptionKind.INT64:
            return self.value
        return 0


class ExtensionNotFound(LookupError):
    """Raised when no extension with a field number is registered for a type."""

    def __init__(self, type_name: str, field_number: int) -> None:
        super().__init__(f"extension {field_number} not found")
        self.type_name = type_name
        self.field_number = field_number


def _is_repeated(field: FieldDescriptor) -> bool:
    try:
        return field.is_repeated
    except AttributeError:
        return field.label == FieldDescriptor.LABEL_REPEATED


def _classify(extension: FieldDescriptor, value: Any) -> OptionValue:
    if extension.cpp_type == FieldDescriptor.CPPTYPE_STRING:
        if extension.type == FieldDescriptor.TYPE_BYTES:
            return OptionValue(OptionKind.OTHER, value)
        return OptionValue(OptionKind.STRING, value)
    if extension.cpp_type == FieldDescriptor.CPPTYPE_BOOL:
        return OptionValue(OptionKind.BOOL, value)
    if extension.cpp_type == FieldDescriptor.CPPTYPE_INT64:
        return OptionValue(OptionKind.INT64, value)
    return OptionValue(OptionKind.OTHER, value)


class ExtensionResolver:
    """Look up registered extensions and decode their values from options messages."""

    def __init__(self, registry: Optional[ExtensionRegistry] = None) -> None:
        self._registry = registry if registry is not None else default_registry()

    @property
    def registry(self) -> ExtensionRegistry:
        return self._registry

    def resolve(
        self,
        options: Message,
        field_number: int,
        *,
        type_name: Optional[str] = None,
    ) -> OptionValue:
        """Return the value of extension *field_number* set on *options*.

        ``type_name`` scopes the lookup and defaults to the options message's
        full name. Raises :class:`ExtensionNotFound` when no such extension is
        registered; an extension that is registered but unset decodes to
        :meth:`OptionValue.absent`.
        """

        type_name = type_name or options.DESCRIPTOR.full_name
        with self._registry.lock:
            extension = self._registry.find_extension(type_name, field_number)
            if extension is None:
                raise ExtensionNotFound(type_name, field_number)
            # Options parsed before the extension was registered hold it as an
            # unknown field until they are parsed again.
            message_class = self._registry.message_class(type_name)
            decoded = message_class.FromString(options.SerializeToString())
            if _is_repeated(extension):
                values = tuple(decoded.Extensions[extension])
                if not values:
                    return OptionValue.absent()
                return OptionValue(OptionKind.OTHER, values)
            if not decoded.HasExtension(extension):
                return OptionValue.absent()
            value = decoded.Extensions[extension]
        return _classify(extension, value)


_default_resolver: Optional[ExtensionResolver] = None
_default_resolver_lock = threading.Lock()


def default_resolver() -> ExtensionResolver:
    """Return the resolver bound to :func:`~proto2tmpl.registry.default_registry`."""

    global _default_resolver
    with _default_resolver_lock:
        if _default_resolver is None:
            _default_resolver = ExtensionResolver(default_registry())
        return _default_resolver


__all__ = [
    "ExtensionNotFound",
    "ExtensionResolver",
    "OptionKind",
    "OptionValue",
    "default_resolver",
]
