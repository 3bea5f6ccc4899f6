"""Build system for component-based template trees."""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from minicomponents.compiler.components import SLOT_PREFIX, ComponentRegistry
from minicomponents.compiler.escape import quote_string
from minicomponents.compiler.exceptions import ComponentSyntaxError
from minicomponents.compiler.rewriter import Rewriter, wrap_template

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".html"
COMPONENT_GLOB = f"c-*{TEMPLATE_SUFFIX}"
PAGE_PREFIX = "{{with .Data}}"
PAGE_SUFFIX = "{{end}}"


@dataclass
class BuildSummary:
    pages: int
    components: int
    out_dir: Path
    errors: List[ComponentSyntaxError] = field(default_factory=list)


def load_components(components_dir: Path) -> ComponentRegistry:
    """Register every ``c-*.html`` file under ``components_dir`` as a template component."""
    registry = ComponentRegistry()
    for path in sorted(components_dir.rglob(COMPONENT_GLOB)):
        name = path.stem
        if name.startswith(SLOT_PREFIX):
            logger.warning("Skipping %s: %r is reserved for slots", path, SLOT_PREFIX)
            continue
        if name in registry:
            raise ValueError(f"Duplicate component {name}: {path}")
        registry.register_template(name, path.read_text(encoding="utf-8"))
        logger.debug("Registered component %s from %s", name, path)
    return registry


class ArtifactBuilder:
    def __init__(
        self, pages_dir: Path, out_dir: Path, components_dir: Optional[Path] = None
    ) -> None:
        self.pages_dir = pages_dir.resolve()
        self.out_dir = out_dir.resolve()
        self.components_dir = components_dir.resolve() if components_dir else None
        self.registry = (
            load_components(self.components_dir)
            if self.components_dir
            else ComponentRegistry()
        )
        self.rewriter = Rewriter(self.registry)
        self.errors: List[ComponentSyntaxError] = []
        self._page_count = 0
        self._component_count = 0

    def build(self) -> BuildSummary:
        if self.out_dir.exists():
            shutil.rmtree(self.out_dir)

        (self.out_dir / "pages").mkdir(parents=True, exist_ok=True)
        (self.out_dir / "components").mkdir(parents=True, exist_ok=True)

        if self.components_dir:
            for path in sorted(self.components_dir.rglob(COMPONENT_GLOB)):
                if path.stem in self.registry:
                    self._compile_component(path)

        for path in sorted(self.pages_dir.rglob(f"*{TEMPLATE_SUFFIX}")):
            if path.name.startswith(("_", ".")):
                continue
            self._compile_page(path)

        return BuildSummary(
            pages=self._page_count,
            components=self._component_count,
            out_dir=self.out_dir,
            errors=self.errors,
        )

    def _compile_component(self, path: Path) -> None:
        name = path.stem
        code = self._rewrite(path, name)
        # Component templates are defined under their own tag name.
        code = wrap_template(code, "{{define " + quote_string(name) + "}}", "{{end}}")
        self._write(self.out_dir / "components" / path.name, code)
        self._component_count += 1

    def _compile_page(self, path: Path) -> None:
        rel = path.relative_to(self.pages_dir)
        base_name = rel.with_suffix("").as_posix()
        code = wrap_template(self._rewrite(path, base_name), PAGE_PREFIX, PAGE_SUFFIX)
        self._write(self.out_dir / "pages" / rel, code)
        self._page_count += 1

    def _rewrite(self, path: Path, base_name: str) -> str:
        code, err = self.rewriter.rewrite(path.read_text(encoding="utf-8"), base_name)
        if err is not None:
            err.file_path = str(path)
            logger.debug("Rewrite failed: %s", err)
            self.errors.append(err)
        return code

    def _write(self, target: Path, code: str) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(code, encoding="utf-8")


def build_project(
    pages_dir: Optional[Path] = None,
    components_dir: Optional[Path] = None,
    out_dir: Optional[Path] = None,
) -> BuildSummary:
    """Rewrite all pages and components into ``out_dir``."""
    if pages_dir is None:
        pages_dir = Path("pages")
    if out_dir is None:
        out_dir = Path("build")
    if components_dir is None and Path("components").is_dir():
        components_dir = Path("components")

    return ArtifactBuilder(pages_dir, out_dir, components_dir=components_dir).build()
