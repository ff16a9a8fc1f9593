"""Template encoders turning descriptor scopes into generated files."""

from __future__ import annotations

from .base import (
    EncoderFactory,
    GeneratedFile,
    ITemplateEncoder,
    TemplateRenderError,
    sanitize_generated_filename,
)
from .templates import DEFAULT_TEMPLATE_DIR, TEMPLATE_SUFFIX, GenericTemplateBasedEncoder

__all__ = [
    "DEFAULT_TEMPLATE_DIR",
    "EncoderFactory",
    "GeneratedFile",
    "GenericTemplateBasedEncoder",
    "ITemplateEncoder",
    "TEMPLATE_SUFFIX",
    "TemplateRenderError",
    "sanitize_generated_filename",
]
