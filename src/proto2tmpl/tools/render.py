from __future__ import annotations

"""Command-line helper rendering templates from a serialized descriptor set."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Sequence

from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2

from proto2tmpl.plugin import generate_code


class RenderError(RuntimeError):
    """Raised when the plugin pipeline reports an error for a descriptor set."""


def _build_request(
    descriptor_set: descriptor_pb2.FileDescriptorSet,
    targets: Sequence[str] | None,
    parameter: str,
) -> plugin_pb2.CodeGeneratorRequest:
    request = plugin_pb2.CodeGeneratorRequest()
    request.proto_file.extend(descriptor_set.file)
    request.parameter = parameter

    if targets:
        request.file_to_generate.extend(targets)
    else:
        request.file_to_generate.extend(file_proto.name for file_proto in descriptor_set.file)

    return request


def render_descriptor_set(
    descriptor_set_path: Path | str,
    targets: Sequence[str] | None,
    output_dir: Path | str,
    parameter: str = "",
) -> List[Path]:
    """Render templates for the given targets and write the results.

    Parameters
    ----------
    descriptor_set_path:
        Path to a serialized :class:`~google.protobuf.descriptor_pb2.FileDescriptorSet`,
        as written by ``protoc --include_imports --descriptor_set_out``.
    targets:
        Proto filenames (as understood by ``protoc``) to generate. ``None`` means "all".
    output_dir:
        Directory that receives the generated files.
    parameter:
        Plugin parameter string, e.g. ``"template_dir=templates,all=true"``.
    """

    descriptor_set_path = Path(descriptor_set_path)
    output_dir = Path(output_dir)

    descriptor_set = descriptor_pb2.FileDescriptorSet()
    descriptor_set.ParseFromString(descriptor_set_path.read_bytes())

    request = _build_request(descriptor_set, targets, parameter)
    response = generate_code(request)
    if response.error:
        raise RenderError(response.error)

    written: List[Path] = []
    for generated in response.file:
        path = output_dir / Path(generated.name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(generated.content, encoding="utf-8")
        written.append(path)

    return written


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render proto2tmpl templates from a descriptor set produced by protoc."
    )
    parser.add_argument(
        "descriptor_set",
        type=Path,
        help="Path to a serialized FileDescriptorSet (output of protoc --descriptor_set_out)",
    )
    parser.add_argument(
        "--proto",
        dest="protos",
        action="append",
        help=(
            "Proto file to generate (relative to the descriptor). Repeat for multiple files. "
            "Defaults to all entries in the descriptor set."
        ),
    )
    parser.add_argument(
        "--out",
        dest="output",
        required=True,
        type=Path,
        help="Directory to write the generated files to",
    )
    parser.add_argument(
        "--parameter",
        default="",
        help="Plugin parameter string, e.g. 'template_dir=templates,file-mode=true'",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point used by ``python -m proto2tmpl.tools.render``."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(stream=sys.stderr, level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    try:
        written = render_descriptor_set(args.descriptor_set, args.protos, args.output, args.parameter)
    except RenderError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    for path in written:
        print(path)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
