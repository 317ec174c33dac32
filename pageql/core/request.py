from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Mapping, Optional, Tuple, Union


@dataclass(frozen=True)
class Argument:
    name: str
    value: Any = None


@dataclass(frozen=True)
class Selection:
    name: str
    children: Tuple["Selection", ...] = ()

    def child(self, name: str) -> Optional["Selection"]:
        for sel in self.children:
            if sel.name == name:
                return sel
        return None

    @classmethod
    def of(cls, spec: Union[str, "Selection"]) -> "Selection":
        if isinstance(spec, Selection):
            return spec
        if isinstance(spec, str):
            return cls(spec)
        raise TypeError(f"Unsupported selection form: {spec!r}")


@dataclass(frozen=True)
class Request:
    """The requested page field: its arguments and direct selections.

    Instances are immutable; every transformation returns a derived copy so
    the incoming request stays intact for the caller.
    """
    name: str
    arguments: Tuple[Argument, ...] = ()
    selections: Tuple[Selection, ...] = field(default_factory=tuple)

    @classmethod
    def of(
        cls,
        name: str,
        arguments: Optional[Mapping[str, Any]] = None,
        selections: Iterable[Union[str, Selection]] = (),
    ) -> "Request":
        args = tuple(Argument(k, v) for k, v in (arguments or {}).items())
        return cls(name=name, arguments=args, selections=tuple(Selection.of(s) for s in selections))

    def selection(self, name: str) -> Optional[Selection]:
        # direct children only
        for sel in self.selections:
            if sel.name == name:
                return sel
        return None

    def argument(self, name: str) -> Optional[Argument]:
        for arg in self.arguments:
            if arg.name == name:
                return arg
        return None

    def argument_names(self) -> Tuple[str, ...]:
        return tuple(a.name for a in self.arguments)

    def without_argument(self, name: str) -> "Request":
        if self.argument(name) is None:
            return self
        return replace(self, arguments=tuple(a for a in self.arguments if a.name != name))

    def with_arguments(self, arguments: Iterable[Argument]) -> "Request":
        return replace(self, arguments=tuple(arguments))

    def for_selection(self, selection: Selection) -> "Request":
        """Re-scope to a child selection, keeping this request's arguments."""
        return Request(name=selection.name, arguments=self.arguments, selections=selection.children)
