from __future__ import annotations

import logging
from typing import Callable, Dict

import pytest

pytest.importorskip("google.protobuf")

from google.protobuf import descriptor_pool
from google.protobuf.message import Message

from proto2tmpl.extensions import ExtensionResolver
from proto2tmpl.registry import ExtensionRegistry
from tests._fixtures.options import build_options_file, encode_options


@pytest.fixture
def registry() -> ExtensionRegistry:
    private = ExtensionRegistry(descriptor_pool.DescriptorPool())
    private.register_file(build_options_file())
    return private


@pytest.fixture
def resolver(registry: ExtensionRegistry) -> ExtensionResolver:
    return ExtensionResolver(registry)


@pytest.fixture
def with_options(registry: ExtensionRegistry) -> Callable[[Message, Dict[str, object]], Message]:
    """Return a helper that sets custom options on a descriptor proto.

    The options arrive as unknown fields on the descriptor, exactly as they
    do when protoc hands over a request whose extensions are not yet known.
    """

    def apply(descriptor: Message, values: Dict[str, object]) -> Message:
        options_type = type(descriptor.options)
        descriptor.options.MergeFromString(encode_options(registry, options_type, values))
        descriptor.options.SetInParent()
        return descriptor

    return apply


@pytest.fixture(autouse=True)
def _restore_package_log_level():
    package_logger = logging.getLogger("proto2tmpl")
    level = package_logger.level
    yield
    package_logger.setLevel(level)
