"""Protocol Buffers compiler plugin entry point for proto2tmpl."""
from __future__ import annotations

import functools
import logging
import sys
from typing import Optional

from google.protobuf.compiler import plugin_pb2

from .codegen import EncoderFactory, GenericTemplateBasedEncoder
from .config import PluginParameters
from .dispatch import GenerationError, files_to_generate, generate_file
from .extensions import ExtensionResolver
from .output import OutputSet, import_identity, response_sink
from .registry import ExtensionRegistry, default_registry

logger = logging.getLogger(__name__)

_PACKAGE_LOGGER = "proto2tmpl"


def generate_code(
    request: plugin_pb2.CodeGeneratorRequest,
    *,
    encoder_factory: Optional[EncoderFactory] = None,
    registry: Optional[ExtensionRegistry] = None,
) -> plugin_pb2.CodeGeneratorResponse:
    """Run the proto2tmpl pipeline and return a populated response message.

    Generation is all-or-nothing: when any file fails the response carries
    the error and no files.
    """

    params = PluginParameters.from_parameter_string(request.parameter)
    if params.debug:
        logging.getLogger(_PACKAGE_LOGGER).setLevel(logging.DEBUG)

    registry = registry if registry is not None else default_registry()
    # Option definitions travel with the request; make their extensions
    # resolvable before any template asks for them.
    registry.register_files(request.proto_file)

    if encoder_factory is None:
        encoder_factory = functools.partial(
            GenericTemplateBasedEncoder, resolver=ExtensionResolver(registry)
        )

    response = plugin_pb2.CodeGeneratorResponse()
    response.supported_features = plugin_pb2.CodeGeneratorResponse.FEATURE_PROTO3_OPTIONAL

    request_files = list(request.proto_file)
    output = OutputSet()
    for file_proto in files_to_generate(request):
        try:
            fragments = generate_file(
                file_proto,
                params,
                encoder_factory=encoder_factory,
                request_files=request_files,
            )
        except GenerationError as exc:
            logger.error("%s", exc)
            response.error = str(exc)
            return response
        output.extend(fragments, import_identity(file_proto))

    committed = output.commit(response_sink(response))
    logger.debug("Committed %d generated file(s)", committed)
    return response


def main() -> None:
    """Execute the protoc plugin workflow."""

    # stdout carries the response; diagnostics go to stderr.
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    request_payload = sys.stdin.buffer.read()

    request = plugin_pb2.CodeGeneratorRequest()
    if request_payload:
        request.ParseFromString(request_payload)

    response = generate_code(request)
    sys.stdout.buffer.write(response.SerializeToString())


if __name__ == "__main__":  # pragma: no cover - convenience execution entry.
    main()
