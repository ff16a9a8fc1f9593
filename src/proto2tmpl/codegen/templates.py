"""Jinja2 template encoder rendering a directory of ``.tmpl`` files."""

from __future__ import annotations

import logging
import posixpath
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import jinja2
from google.protobuf import descriptor_pb2

from ..extensions import ExtensionResolver
from ..options import template_functions
from .base import GeneratedFile, ITemplateEncoder, TemplateRenderError, sanitize_generated_filename

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_DIR = "./templates"
TEMPLATE_SUFFIX = ".tmpl"


class GenericTemplateBasedEncoder(ITemplateEncoder):
    """Render every ``*.tmpl`` file under a template directory for one scope.

    The scope is either a whole file (``service`` is ``None``) or a single
    service together with its owning file. A template's path relative to the
    template directory, minus the ``.tmpl`` suffix, is rendered with the same
    context to produce the destination name, so ``{{ service.name }}.py.tmpl``
    yields one output per service.
    """

    def __init__(
        self,
        template_dir: str,
        file: descriptor_pb2.FileDescriptorProto,
        debug: bool,
        destination_dir: str,
        *,
        service: Optional[descriptor_pb2.ServiceDescriptorProto] = None,
        package_files: Optional[Sequence[descriptor_pb2.FileDescriptorProto]] = None,
        resolver: Optional[ExtensionResolver] = None,
    ) -> None:
        self._template_dir = template_dir or DEFAULT_TEMPLATE_DIR
        self._file = file
        self._debug = debug
        self._destination_dir = destination_dir
        self._service = service
        self._package_files = list(package_files) if package_files is not None else [file]
        self._resolver = resolver

    def files(self) -> List[GeneratedFile]:
        root = Path(self._template_dir)
        if not root.is_dir():
            raise TemplateRenderError(
                f"Template directory not found: {self._template_dir}",
                template=self._template_dir,
            )

        environment = self._build_environment(root)
        context = self._build_context()
        generated: List[GeneratedFile] = []
        for template_path in sorted(root.rglob(f"*{TEMPLATE_SUFFIX}")):
            if not template_path.is_file():
                continue
            relative = template_path.relative_to(root).as_posix()
            generated.append(self._render(environment, relative, context))
        return generated

    def _build_environment(self, root: Path) -> jinja2.Environment:
        environment = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(root)),
            undefined=jinja2.StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            autoescape=False,
        )
        environment.globals.update(template_functions(self._resolver))
        return environment

    def _build_context(self) -> Dict[str, Any]:
        return {
            "file": self._file,
            "service": self._service,
            "files": self._package_files,
            "template_dir": self._template_dir,
            "destination_dir": self._destination_dir,
            "debug": self._debug,
        }

    def _render(
        self,
        environment: jinja2.Environment,
        relative: str,
        context: Dict[str, Any],
    ) -> GeneratedFile:
        try:
            content = environment.get_template(relative).render(context)
            destination = environment.from_string(relative[: -len(TEMPLATE_SUFFIX)]).render(context)
            if self._destination_dir:
                destination = posixpath.join(self._destination_dir, destination)
            name = sanitize_generated_filename(destination)
        except (jinja2.TemplateError, ValueError) as exc:
            raise TemplateRenderError(f"{relative}: {exc}", template=relative) from exc

        if self._debug:
            scope = self._service.name if self._service is not None else self._file.name
            logger.debug("Rendered %s for %s into %s", relative, scope, name)
        return GeneratedFile(name=name, content=content)


__all__ = ["DEFAULT_TEMPLATE_DIR", "GenericTemplateBasedEncoder", "TEMPLATE_SUFFIX"]
