from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("minicomponents")
except PackageNotFoundError:
    __version__ = "unknown"

from minicomponents.compiler import (
    ComponentDef,
    ComponentRegistry,
    ComponentSyntaxError,
    RenderMethod,
    Rewriter,
    rewrite,
    scan_template,
    wrap_template,
)

__all__ = [
    "ComponentDef",
    "ComponentRegistry",
    "ComponentSyntaxError",
    "RenderMethod",
    "Rewriter",
    "rewrite",
    "scan_template",
    "wrap_template",
]
