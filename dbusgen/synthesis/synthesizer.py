"""Renders the interface model into a Python bindings module."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from operator import attrgetter
import re
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .. import naming
from ..errors import EmptyInput, InvalidConfiguration, NameCollision
from ..logging import get_logger
from ..models import Annotation, Arg, Interface, Method, Property, Signal
from ..postproc.validate import SourceValidator
from .constants import CLASS_MEMBER_NAMES, DEFAULT_PACKAGE_NAME, MODULE_NAMES, TEMPLATE_NAME
from .types import annotation, runtime_check, zero_value

_PACKAGE_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9_]*$")


@dataclass(frozen=True)
class SynthesisOptions:
    """Settings that shape the generated module."""

    package_name: str = DEFAULT_PACKAGE_NAME
    format: bool = True
    prefixes: Tuple[str, ...] = ()


@dataclass
class ArgView:
    raw: str
    name: str
    index: int
    annotation: str
    check: Optional[str]
    zero: str


@dataclass
class MethodView:
    raw: str
    name: str
    in_args: List[ArgView]
    out_args: List[ArgView]
    returns: str
    annotations: Sequence[Annotation]

    @property
    def assign(self) -> str:
        """Unpacking target for the reply body, empty when nothing is returned."""
        names = [arg.name for arg in self.out_args]
        if not names:
            return ""
        if len(names) == 1:
            return f"({names[0]},) = "
        return ", ".join(names) + " = "

    @property
    def returned(self) -> str:
        return ", ".join(arg.name for arg in self.out_args)


@dataclass
class PropertyView:
    raw: str
    annotation: str
    param: str
    getter: Optional[str]
    setter: Optional[str]
    annotations: Sequence[Annotation]


@dataclass
class SignalView:
    raw: str
    class_name: str
    body_name: str
    decoder: str
    fields: List[ArgView]
    annotations: Sequence[Annotation]


@dataclass
class InterfaceView:
    raw: str
    type_name: str
    constant: str
    constructor: str
    annotations: Sequence[Annotation]
    methods: List[MethodView] = field(default_factory=list)
    properties: List[PropertyView] = field(default_factory=list)
    signals: List[SignalView] = field(default_factory=list)


class _Scope:
    """Tracks identifiers claimed within one namespace of the generated module."""

    def __init__(self, label: str, taken: Sequence[str] = ()) -> None:
        self.label = label
        self._owners: Dict[str, str] = {name: f"<generated {name}>" for name in taken}

    def claim(self, identifier: str, raw: str) -> str:
        owner = self._owners.setdefault(identifier, raw)
        if owner != raw:
            raise NameCollision(self.label, identifier, owner, raw)
        return identifier

    def owner(self, identifier: str) -> Optional[str]:
        return self._owners.get(identifier)


def sort_interfaces(interfaces: Sequence[Interface]) -> List[Interface]:
    """Return copies ordered by name, with members ordered by name too."""
    by_name = attrgetter("name")
    return [
        replace(
            iface,
            methods=tuple(sorted(iface.methods, key=by_name)),
            properties=tuple(sorted(iface.properties, key=by_name)),
            signals=tuple(sorted(iface.signals, key=by_name)),
        )
        for iface in sorted(interfaces, key=by_name)
    ]


def _docstring(value: object) -> str:
    return str(value).replace("\\", "\\\\").replace('"', '\\"')


class Synthesizer:
    """Builds binding source text from interfaces using a Jinja template."""

    def __init__(
        self,
        options: SynthesisOptions | None = None,
        *,
        validator: SourceValidator | None = None,
        templates_dir: Path | None = None,
    ) -> None:
        self.options = options or SynthesisOptions()
        self.validator = validator or SourceValidator()
        self.templates_dir = templates_dir or Path(__file__).with_name("templates")
        self.logger = get_logger("synthesis")
        self._env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        self._env.filters["pystr"] = repr
        self._env.filters["doc"] = _docstring

    def synthesize(self, interfaces: Sequence[Interface]) -> str:
        """Render and validate bindings for ``interfaces``."""
        text = self.render(interfaces)
        return self.validator.validate(text, format=self.options.format)

    def check_options(self) -> None:
        if not _PACKAGE_PATTERN.match(self.options.package_name):
            raise InvalidConfiguration(f"package name {self.options.package_name!r} is not valid")

    def render(self, interfaces: Sequence[Interface]) -> str:
        """Render bindings without validating them."""
        self.check_options()
        if not interfaces:
            raise EmptyInput("no interfaces given")

        views = self._plan(sort_interfaces(interfaces))
        template = self._env.get_template(TEMPLATE_NAME)
        text = template.render(package_name=self.options.package_name, interfaces=views)
        self.logger.debug("Rendered %d interfaces into %d characters", len(views), len(text))
        return text

    def _plan(self, interfaces: Sequence[Interface]) -> List[InterfaceView]:
        module = _Scope("module", MODULE_NAMES)
        views: List[InterfaceView] = []
        for iface in interfaces:
            type_name = naming.interface_type(iface.name, self.options.prefixes)
            if type_name in MODULE_NAMES:
                self.logger.debug("Interface %s renamed to %s_: name used by the module", iface.name, type_name)
                type_name += "_"
            view = InterfaceView(
                raw=iface.name,
                type_name=module.claim(type_name, iface.name),
                constant=module.claim(naming.interface_constant(type_name), iface.name),
                constructor=module.claim(naming.constructor_name(type_name), iface.name),
                annotations=iface.annotations,
            )
            members = _Scope(f"class {type_name}", CLASS_MEMBER_NAMES)
            for method in iface.methods:
                view.methods.append(self._plan_method(iface, method, members))
            for prop in iface.properties:
                view.properties.append(self._plan_property(iface, prop, members))
            for signal in iface.signals:
                view.signals.append(self._plan_signal(iface, type_name, signal, module))
            views.append(view)
        return views

    def _plan_method(self, iface: Interface, method: Method, members: _Scope) -> MethodView:
        name = members.claim(naming.member_name(method.name, "Method"), f"method {method.name}")
        scope = f"{iface.name}.{method.name}"
        in_args = _plan_args(method.in_args, "in", False, _Scope(f"{scope} arguments", ("self",)))
        out_args = _plan_args(method.out_args, "out", False, _Scope(f"{scope} results"))
        if not out_args:
            returns = "None"
        elif len(out_args) == 1:
            returns = out_args[0].annotation
        else:
            returns = "Tuple[" + ", ".join(arg.annotation for arg in out_args) + "]"
        return MethodView(
            raw=method.name,
            name=name,
            in_args=in_args,
            out_args=out_args,
            returns=returns,
            annotations=method.annotations,
        )

    def _plan_property(self, iface: Interface, prop: Property, members: _Scope) -> PropertyView:
        getter = setter = None
        accessors = []
        if prop.readable:
            accessors.append(("getter", naming.property_getter(prop.name)))
        if prop.writable:
            accessors.append(("setter", naming.property_setter(prop.name)))
        for kind, accessor in accessors:
            owner = members.owner(accessor)
            if owner is not None and owner.startswith("method "):
                self.logger.debug(
                    "Skipping %s %s for %s.%s: a method has the same name",
                    kind,
                    accessor,
                    iface.name,
                    prop.name,
                )
                continue
            members.claim(accessor, f"property {prop.name}")
            if kind == "getter":
                getter = accessor
            else:
                setter = accessor
        return PropertyView(
            raw=prop.name,
            annotation=annotation(prop.signature),
            param=naming.derive(prop.name, "v", 0),
            getter=getter,
            setter=setter,
            annotations=prop.annotations,
        )

    def _plan_signal(self, iface: Interface, type_name: str, signal: Signal, module: _Scope) -> SignalView:
        raw = f"{iface.name}.{signal.name}"
        fields = _plan_args(signal.args, "v", True, _Scope(f"{raw} body"))
        return SignalView(
            raw=signal.name,
            class_name=module.claim(naming.signal_type(type_name, signal.name), raw),
            body_name=module.claim(naming.signal_body_type(type_name, signal.name), raw),
            decoder=module.claim(naming.decoder_name(type_name, signal.name), raw),
            fields=fields,
            annotations=signal.annotations,
        )


def _plan_args(args: Sequence[Arg], prefix: str, exported: bool, scope: _Scope) -> List[ArgView]:
    views = []
    for index, arg in enumerate(args):
        name = naming.derive(arg.name, prefix, index, exported)
        views.append(
            ArgView(
                raw=arg.name,
                name=scope.claim(name, arg.name or f"#{index}"),
                index=index,
                annotation=annotation(arg.signature),
                check=runtime_check(arg.signature),
                zero=zero_value(arg.signature),
            )
        )
    return views


def synthesize(interfaces: Sequence[Interface], options: SynthesisOptions | None = None) -> str:
    """Return validated binding source for ``interfaces``."""
    return Synthesizer(options).synthesize(interfaces)


__all__ = ["SynthesisOptions", "Synthesizer", "sort_interfaces", "synthesize"]
