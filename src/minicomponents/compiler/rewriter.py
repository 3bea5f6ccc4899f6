"""Rewrite component tags into template actions.

A document like::

    foo <c-button kind="primary">{{if .Good}}ok{{end}}</c-button> bar

becomes::

    foo {{template "c-button" ($.Bind . "kind" "primary" "body" (eval "page___c-button__body__1" ($.Bind .)))}} bar{{define "page___c-button__body__1"}}{{with .Data}}{{if .Good}}ok{{end}}{{end}}{{end}}

Bodies that can be expressed as a single value are passed inline; the rest
are moved into their own ``{{define}}`` blocks ("trailers") which are appended
after the main output.
"""

import logging
from dataclasses import dataclass
from typing import List, Mapping, Optional, Tuple

from minicomponents.compiler.attributes import AttributeParser, skip_space
from minicomponents.compiler.components import (
    Arg,
    Component,
    ComponentDef,
    RenderMethod,
)
from minicomponents.compiler.escape import quote_string
from minicomponents.compiler.exceptions import ComponentSyntaxError
from minicomponents.compiler.interpolation import (
    compile_interpolation,
    expand_args_shorthand,
)
from minicomponents.compiler.scanner import (
    closing_tag,
    contains_tag,
    extract_body,
    find_tag_start,
    slot_name,
)

logger = logging.getLogger(__name__)

BIND_FUNC = "$.Bind"
EVAL_FUNC = "eval"
SCOPE_SEPARATOR = "___"
BODY_INFIX = "__body__"
DEFINE_START = "{{define"
DEFINE_CLOSE = "{{end}}{{end}}"

DATA_ARG = "data"
BODY_ARG = "body"
BODY_TEMPLATE_ARG = "bodyTemplate"

NULL_DATA = "nil"
CURRENT_DATA = "."
CALLER_DATA = "$.Data"


@dataclass
class _Scope:
    """A document or extracted body being rewritten."""

    name: str
    # Offset of this scope's text in the top-level document.
    offset: int
    next_index: int = 1

    def next_template_name(self, tag: str) -> str:
        name = f"{self.name}{SCOPE_SEPARATOR}{tag}{BODY_INFIX}{self.next_index}"
        self.next_index += 1
        return name


class _RewriteContext:
    """State of a single rewrite() call, shared by all nested scopes."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.trailers: List[str] = []
        self.error: Optional[ComponentSyntaxError] = None

    def fail(self, err: ComponentSyntaxError) -> None:
        if self.error is None:
            self.error = err


class Rewriter:
    """Rewrites component tags using a registry of component definitions."""

    def __init__(self, components: Mapping[str, ComponentDef]) -> None:
        self.components = components

    def rewrite(
        self, text: str, base_name: str
    ) -> Tuple[str, Optional[ComponentSyntaxError]]:
        """
        Rewrite all component tags in ``text``.

        ``base_name`` prefixes the names of generated body templates. The
        rewritten text is always returned; the second item is the first error
        found, or None.
        """
        ctx = _RewriteContext(text)
        output: List[str] = []
        self._rewrite_scope(ctx, output, text, _Scope(base_name, 0))
        output.extend(ctx.trailers)

        if ctx.error is not None:
            logger.debug("Rewrite of %s failed: %s", base_name, ctx.error)
        return "".join(output), ctx.error

    def lookup(self, name: str) -> Optional[ComponentDef]:
        slot = slot_name(name)
        if slot is not None:
            return ComponentDef.slot(slot)
        return self.components.get(name)

    def _rewrite_scope(
        self, ctx: _RewriteContext, output: List[str], text: str, scope: _Scope
    ) -> None:
        pos = 0
        while True:
            match = find_tag_start(text, pos)
            if match is None:
                output.append(expand_args_shorthand(text[pos:]))
                break
            output.append(expand_args_shorthand(text[pos : match.start()]))

            name = match.group(1)
            pos, preceded_by_space = skip_space(text, match.end())
            tag_error: Optional[ComponentSyntaxError] = None

            definition = self.lookup(name)
            if definition is None:
                tag_error = self._error(ctx, scope, name, pos, f"unknown component <{name}>")

            attrs = AttributeParser(text).parse(pos, preceded_by_space)
            if tag_error is None and attrs.error is not None:
                tag_error = self._error(ctx, scope, name, *attrs.error)
            pos = attrs.end

            component = Component(name=name, args=attrs.args)
            body_offset = pos
            if not attrs.self_closed:
                found = extract_body(text, pos, name)
                if found is not None:
                    component.body, pos = found
                elif tag_error is None:
                    tag_error = self._error(
                        ctx, scope, name, pos, f"missing {closing_tag(name)}"
                    )

            if tag_error is not None:
                ctx.fail(tag_error)
                output.append("{{error " + quote_string(tag_error.message) + "}}")
                continue
            assert definition is not None

            self._emit(ctx, output, scope, component, definition, scope.offset + body_offset)

    def _emit(
        self,
        ctx: _RewriteContext,
        output: List[str],
        scope: _Scope,
        component: Component,
        definition: ComponentDef,
        body_offset: int,
    ) -> None:
        deferred = definition.has_slots
        if not deferred and component.body:
            body_expr = None
            if not contains_tag(component.body):
                body_expr = compile_interpolation(
                    expand_args_shorthand(component.body.strip())
                )
            if body_expr is None:
                deferred = True
            else:
                component.args.append(Arg(BODY_ARG, body_expr))

        if deferred:
            template_name = scope.next_template_name(component.name)
            self._defer_body(ctx, component.body, template_name, body_offset)
            if definition.has_slots:
                component.args.append(Arg(BODY_TEMPLATE_ARG, quote_string(template_name)))
            else:
                component.args.append(
                    Arg(
                        BODY_ARG,
                        f"({EVAL_FUNC} {quote_string(template_name)} ({BIND_FUNC} {CURRENT_DATA}))",
                    )
                )

        method = definition.render_method
        if method == RenderMethod.SLOT:
            output.append(
                "{{" + EVAL_FUNC + " $.Args." + definition.slot_name + "Template"
                + bind_args(component, CALLER_DATA)
                + "}}"
            )
            return

        bound = bind_args(component, CURRENT_DATA if deferred else NULL_DATA)
        if method == RenderMethod.TEMPLATE:
            output.append(
                "{{template " + quote_string(definition.templ_name(component.name)) + bound + "}}"
            )
        elif method == RenderMethod.FUNC:
            output.append("{{" + definition.func_name(component.name) + bound + "}}")
        elif method == RenderMethod.FUNC_THEN_TEMPLATE:
            output.append(
                "{{template "
                + quote_string(definition.templ_name(component.name))
                + f" ({BIND_FUNC} ("
                + definition.func_name(component.name)
                + bound
                + "))}}"
            )
        else:
            raise ValueError(f"Unsupported render method {method!r}")

    def _defer_body(
        self, ctx: _RewriteContext, body: str, template_name: str, offset: int
    ) -> None:
        logger.debug("Moving body into template %s", template_name)
        sub: List[str] = [
            DEFINE_START + " " + quote_string(template_name) + "}}{{with .Data}}"
        ]
        self._rewrite_scope(ctx, sub, body, _Scope(template_name, offset))
        sub.append(DEFINE_CLOSE)
        ctx.trailers.append("".join(sub))

    def _error(
        self, ctx: _RewriteContext, scope: _Scope, tag: str, pos: int, message: str
    ) -> ComponentSyntaxError:
        return ComponentSyntaxError.at(ctx.source, scope.offset + pos, message, tag=tag)


def bind_args(component: Component, data_expr: str) -> str:
    """Render `` ($.Bind DATA "k" v ...)``; a ``data`` arg overrides DATA."""
    data_idx = component.find_arg(DATA_ARG)
    if data_idx >= 0:
        data_expr = component.args[data_idx].value

    parts = [f" ({BIND_FUNC} {data_expr}"]
    for i, arg in enumerate(component.args):
        if i == data_idx:
            continue
        parts.append(f" {quote_string(arg.name)} {arg.value}")
    parts.append(")")
    return "".join(parts)


def rewrite(
    text: str, base_name: str, components: Mapping[str, ComponentDef]
) -> Tuple[str, Optional[ComponentSyntaxError]]:
    """Rewrite component tags in ``text``. See Rewriter.rewrite."""
    return Rewriter(components).rewrite(text, base_name)


def wrap_template(code: str, prefix: str, suffix: str) -> str:
    """Wrap rewritten code in prefix/suffix, keeping trailers at the very end."""
    defines = ""
    idx = code.find(DEFINE_START)
    if idx >= 0:
        code, defines = code[:idx], code[idx:]
    return prefix + code + suffix + defines
