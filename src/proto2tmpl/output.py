"""Aggregation of generated fragments into the files committed to protoc."""

from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Iterator, Optional

from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2

from .codegen import GeneratedFile

logger = logging.getLogger(__name__)

OutputSink = Callable[[str, str, str], None]


def import_identity(file_proto: descriptor_pb2.FileDescriptorProto) -> str:
    """Return the import path generated code for *file_proto* belongs to.

    The ``go_package`` import path wins when set, then the protobuf package,
    then the directory holding the file.
    """

    go_package = file_proto.options.go_package
    if go_package:
        return go_package.split(";", 1)[0]
    if file_proto.package:
        return file_proto.package
    return posixpath.dirname(file_proto.name)


@dataclass(slots=True)
class OutputEntry:
    """Merged content for one destination name."""

    name: str
    content: str
    import_identity: str


class OutputSet:
    """Destination name -> merged content, in first-seen order.

    Content from every fragment targeting a name is concatenated in the
    order it is added. The import identity is the one recorded by the first
    fragment; later fragments only contribute content.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, OutputEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[OutputEntry]:
        return iter(list(self._entries.values()))

    def get(self, name: str) -> Optional[OutputEntry]:
        return self._entries.get(name)

    def add(self, fragment: GeneratedFile, identity: str) -> None:
        entry = self._entries.get(fragment.name)
        if entry is None:
            self._entries[fragment.name] = OutputEntry(
                name=fragment.name,
                content=fragment.content,
                import_identity=identity,
            )
            return
        if entry.import_identity != identity:
            logger.debug(
                "Merging %s from %s into output owned by %s",
                fragment.name,
                identity,
                entry.import_identity,
            )
        entry.content += fragment.content

    def extend(self, fragments: Iterable[GeneratedFile], identity: str) -> None:
        for fragment in fragments:
            self.add(fragment, identity)

    def commit(self, sink: OutputSink) -> int:
        """Emit every entry once through *sink* and empty the set.

        Returns the number of committed entries.
        """

        entries = list(self._entries.values())
        self._entries.clear()
        for entry in entries:
            sink(entry.name, entry.content, entry.import_identity)
        return len(entries)


def response_sink(response: plugin_pb2.CodeGeneratorResponse) -> OutputSink:
    """Return a sink appending committed entries to *response*."""

    def emit(name: str, content: str, identity: str) -> None:
        logger.debug("Writing %s (import path %s)", name, identity)
        response_file = response.file.add()
        response_file.name = name
        response_file.content = content

    return emit


__all__ = ["OutputEntry", "OutputSet", "OutputSink", "import_identity", "response_sink"]
