"""Utilities for segment rendering, page assembly, and page templates."""

from .assembler import ExampleAssembler, ExampleBuildError
from .models import ExampleFile, ExampleModel, RenderedSegment
from .renderer import HtmlContentRenderer, SourceKind
from .templates import TemplateLoadError, TemplateRenderer

__all__ = [
    "ExampleAssembler",
    "ExampleBuildError",
    "ExampleFile",
    "ExampleModel",
    "HtmlContentRenderer",
    "RenderedSegment",
    "SourceKind",
    "TemplateLoadError",
    "TemplateRenderer",
]
