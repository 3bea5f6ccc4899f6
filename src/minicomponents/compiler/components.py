"""Component definitions and per-occurrence component data."""

import enum
from dataclasses import dataclass, field
from typing import Dict, List, Optional

SLOT_PREFIX = "c-slot-"


class RenderMethod(enum.Enum):
    """How a component tag is turned into a template action."""

    TEMPLATE = "template"
    FUNC = "func"
    FUNC_THEN_TEMPLATE = "func_then_template"
    # Synthesized for <c-slot-*> tags, never registered.
    SLOT = "slot"


@dataclass(frozen=True)
class ComponentDef:
    """Registration metadata for one component tag name."""

    render_method: RenderMethod = RenderMethod.TEMPLATE
    impl_name: Optional[str] = None
    template_name: Optional[str] = None
    has_slots: bool = False
    slot_name: str = ""

    def func_name(self, tag: str) -> str:
        """Name of the function rendering ``tag`` (FUNC and FUNC_THEN_TEMPLATE)."""
        if self.impl_name:
            return self.impl_name
        return tag.replace("-", "_")

    def templ_name(self, tag: str) -> str:
        """Name of the template rendering ``tag``."""
        if self.template_name:
            return self.template_name
        if self.render_method == RenderMethod.TEMPLATE and self.impl_name:
            return self.impl_name
        return tag

    @classmethod
    def slot(cls, slot_name: str) -> "ComponentDef":
        return cls(render_method=RenderMethod.SLOT, slot_name=slot_name)


@dataclass
class Arg:
    name: str
    value: str


@dataclass
class Component:
    """One matched tag occurrence."""

    name: str
    body: str = ""
    args: List[Arg] = field(default_factory=list)

    def find_arg(self, name: str) -> int:
        for i, arg in enumerate(self.args):
            if arg.name == name:
                return i
        return -1


class ComponentRegistry(Dict[str, ComponentDef]):
    """Tag name -> ComponentDef. Any mapping works for the rewriter."""

    def register(self, name: str, definition: ComponentDef) -> None:
        if not name.startswith("c-"):
            raise ValueError(f"Component name must start with 'c-': {name!r}")
        if name.startswith(SLOT_PREFIX):
            raise ValueError(f"Names starting with {SLOT_PREFIX!r} are reserved for slots")
        self[name] = definition

    def register_template(self, name: str, source: str) -> ComponentDef:
        """Register a template component whose template text is ``source``."""
        definition = scan_template(source)
        self.register(name, definition)
        return definition


def scan_template(source: str) -> ComponentDef:
    """Derive a template component definition from its template source."""
    return ComponentDef(
        render_method=RenderMethod.TEMPLATE,
        has_slots=SLOT_PREFIX in source,
    )
