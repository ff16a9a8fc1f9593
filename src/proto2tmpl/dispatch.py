"""Per-file dispatch of descriptor scopes to a template encoder."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2

from .codegen import EncoderFactory, GeneratedFile, GenericTemplateBasedEncoder
from .config import GenerationMode, PluginParameters

logger = logging.getLogger(__name__)


class GenerationError(RuntimeError):
    """Raised when generating any scope of an input file fails."""

    def __init__(self, file_name: str, cause: BaseException) -> None:
        super().__init__(f"{file_name}: {cause}")
        self.file_name = file_name
        self.cause = cause


def files_to_generate(
    request: plugin_pb2.CodeGeneratorRequest,
) -> List[descriptor_pb2.FileDescriptorProto]:
    """Return the request's files flagged for generation, in request order."""

    wanted = set(request.file_to_generate)
    return [file_proto for file_proto in request.proto_file if file_proto.name in wanted]


def _scopes(
    file_proto: descriptor_pb2.FileDescriptorProto, mode: GenerationMode
) -> List[Optional[descriptor_pb2.ServiceDescriptorProto]]:
    # ``None`` stands for the whole-file scope.
    if mode is GenerationMode.ALL:
        return [None]
    if mode is GenerationMode.FILE:
        return [None] if file_proto.service else []
    return list(file_proto.service)


def _package_files(
    file_proto: descriptor_pb2.FileDescriptorProto,
    request_files: Optional[Sequence[descriptor_pb2.FileDescriptorProto]],
) -> Optional[List[descriptor_pb2.FileDescriptorProto]]:
    if request_files is None:
        return None
    return [candidate for candidate in request_files if candidate.package == file_proto.package]


def generate_file(
    file_proto: descriptor_pb2.FileDescriptorProto,
    params: PluginParameters,
    *,
    encoder_factory: Optional[EncoderFactory] = None,
    request_files: Optional[Sequence[descriptor_pb2.FileDescriptorProto]] = None,
) -> List[GeneratedFile]:
    """Render every scope of *file_proto* selected by ``params.mode``.

    In single-package mode the encoder also sees every file of
    *request_files* that shares the file's protobuf package. Any encoder
    failure is raised as :class:`GenerationError` naming the file.
    """

    factory = encoder_factory or GenericTemplateBasedEncoder
    package_files = _package_files(file_proto, request_files) if params.single_package_mode else None

    generated: List[GeneratedFile] = []
    for service in _scopes(file_proto, params.mode):
        logger.debug(
            "Generating %s (%s)",
            file_proto.name,
            f"service {service.name}" if service is not None else params.mode.value,
        )
        try:
            encoder = factory(
                params.template_dir,
                file_proto,
                params.debug,
                params.destination_dir,
                service=service,
                package_files=package_files,
            )
            generated.extend(encoder.files())
        except Exception as exc:
            raise GenerationError(file_proto.name, exc) from exc
    return generated


__all__ = ["GenerationError", "files_to_generate", "generate_file"]
