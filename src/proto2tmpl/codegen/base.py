"""Interfaces shared by template encoders."""

from __future__ import annotations

import abc
import posixpath
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence

from google.protobuf import descriptor_pb2


@dataclass(frozen=True, slots=True)
class GeneratedFile:
    """One rendered output: a destination name and its content."""

    name: str
    content: str


class TemplateRenderError(RuntimeError):
    """Raised when a template cannot be loaded or rendered."""

    def __init__(self, message: str, *, template: Optional[str] = None) -> None:
        super().__init__(message)
        self.template = template


class ITemplateEncoder(abc.ABC):
    """Renders one descriptor scope into generated files."""

    @abc.abstractmethod
    def files(self) -> List[GeneratedFile]:
        """Render the scope and return the produced files."""


class EncoderFactory(Protocol):
    def __call__(
        self,
        template_dir: str,
        file: descriptor_pb2.FileDescriptorProto,
        debug: bool,
        destination_dir: str,
        *,
        service: Optional[descriptor_pb2.ServiceDescriptorProto] = None,
        package_files: Optional[Sequence[descriptor_pb2.FileDescriptorProto]] = None,
    ) -> ITemplateEncoder:
        ...


def sanitize_generated_filename(name: str) -> str:
    """Normalize *name* into a relative POSIX path protoc accepts.

    Raises :class:`ValueError` for empty names, absolute paths and paths that
    climb out of the output directory.
    """

    normalized = name.replace("\\", "/")
    if normalized.startswith("/"):
        raise ValueError(f"Generated file name must be relative: {name!r}")
    collapsed = posixpath.normpath(normalized) if normalized else ""
    if not collapsed or collapsed == ".":
        raise ValueError(f"Generated file name is empty: {name!r}")
    if collapsed == ".." or collapsed.startswith("../"):
        raise ValueError(f"Generated file name escapes the output directory: {name!r}")
    return collapsed


__all__ = [
    "EncoderFactory",
    "GeneratedFile",
    "ITemplateEncoder",
    "TemplateRenderError",
    "sanitize_generated_filename",
]
