"""Component tag compiler."""

from minicomponents.compiler.components import (
    Arg,
    Component,
    ComponentDef,
    ComponentRegistry,
    RenderMethod,
    scan_template,
)
from minicomponents.compiler.exceptions import ComponentSyntaxError
from minicomponents.compiler.interpolation import compile_interpolation
from minicomponents.compiler.rewriter import Rewriter, rewrite, wrap_template

__all__ = [
    "Arg",
    "Component",
    "ComponentDef",
    "ComponentRegistry",
    "ComponentSyntaxError",
    "RenderMethod",
    "Rewriter",
    "compile_interpolation",
    "rewrite",
    "scan_template",
    "wrap_template",
]
