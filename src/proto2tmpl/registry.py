"""Process-wide store of extension types known to the plugin."""

from __future__ import annotations

import logging
import threading
from typing import Iterable, Optional

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf.descriptor import FieldDescriptor
from google.protobuf.message import Message

logger = logging.getLogger(__name__)

_DESCRIPTOR_PROTO = "google/protobuf/descriptor.proto"


class ExtensionRegistry:
    """Index of extension fields keyed by the options message they extend.

    The registry wraps a :class:`~google.protobuf.descriptor_pool.DescriptorPool`.
    Every scan and every registration holds :attr:`lock`, so a lookup never
    observes a pool that is halfway through adding a file. Pass a private
    ``DescriptorPool()`` to keep tests away from the process-wide default pool.
    """

    def __init__(self, pool: Optional[descriptor_pool.DescriptorPool] = None) -> None:
        self._pool = pool if pool is not None else descriptor_pool.Default()
        self.lock = threading.RLock()
        with self.lock:
            self._ensure_descriptor_proto()

    @property
    def pool(self) -> descriptor_pool.DescriptorPool:
        return self._pool

    def has_file(self, name: str) -> bool:
        with self.lock:
            try:
                self._pool.FindFileByName(name)
            except KeyError:
                return False
            return True

    def register_file(self, file_proto: descriptor_pb2.FileDescriptorProto) -> bool:
        """Add *file_proto* to the pool unless a file of that name is already known.

        Returns ``True`` when the file was added. Dependencies must have been
        registered first.
        """

        with self.lock:
            if self.has_file(file_proto.name):
                return False
            self._pool.AddSerializedFile(file_proto.SerializeToString())
            # Binds the new extensions to the concrete options classes.
            message_factory.GetMessageClassesForFiles([file_proto.name], self._pool)
            logger.debug("Registered %s with the extension registry", file_proto.name)
            return True

    def register_files(self, file_protos: Iterable[descriptor_pb2.FileDescriptorProto]) -> int:
        """Register files in order, skipping those the pool cannot build.

        protoc lists a request's files in dependency order, so registering a
        request's ``proto_file`` sequence front to back always satisfies
        imports. Returns the number of newly added files.
        """

        added = 0
        with self.lock:
            for file_proto in file_protos:
                try:
                    if self.register_file(file_proto):
                        added += 1
                except (TypeError, ValueError, KeyError) as exc:
                    logger.warning(
                        "Unable to register %s with the extension registry: %s",
                        file_proto.name,
                        exc,
                    )
        return added

    def find_extension(self, type_name: str, number: int) -> Optional[FieldDescriptor]:
        """Return the extension of *type_name* numbered *number*, if registered."""

        with self.lock:
            try:
                message_descriptor = self._pool.FindMessageTypeByName(type_name)
            except KeyError:
                return None
            for extension in self._pool.FindAllExtensions(message_descriptor):
                if extension.number == number:
                    return extension
            return None

    def message_class(self, type_name: str) -> type[Message]:
        """Return the pool's concrete message class for *type_name*."""

        with self.lock:
            message_descriptor = self._pool.FindMessageTypeByName(type_name)
            return message_factory.GetMessageClass(message_descriptor)

    def _ensure_descriptor_proto(self) -> None:
        # Private pools start empty; options types live in descriptor.proto.
        if self.has_file(_DESCRIPTOR_PROTO):
            return
        self._pool.AddSerializedFile(descriptor_pb2.DESCRIPTOR.serialized_pb)


_default_registry: Optional[ExtensionRegistry] = None
_default_registry_lock = threading.Lock()


def default_registry() -> ExtensionRegistry:
    """Return the registry bound to the process-wide descriptor pool."""

    global _default_registry
    with _default_registry_lock:
        if _default_registry is None:
            _default_registry = ExtensionRegistry()
        return _default_registry


__all__ = ["ExtensionRegistry", "default_registry"]
