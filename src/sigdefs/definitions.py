"""sigdefs.definitions.

Walk a parsed Python module and yield the definitions it declares.

What is reported
----------------
- class-like items: the module itself and every class (nested classes too).
- def-like items: functions and methods. Methods decorated with
  `staticmethod`/`classmethod` are reported as `defs` (not bound to an
  instance). Function bodies are not walked.
- constant assignments: upper-case names assigned at module or class level.
- attributes: `@property` readers and `@<name>.setter` writers. A reader and a
  writer for the same name in one class collapse into a single accessor.
- props: annotated fields of `@dataclass` classes; `frozen=True` makes them
  `const`, otherwise `prop`.

Signatures are read from annotations. A def carries a `Sig` only when at least
one of its parameters or its return value is annotated.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from .errors import raise_invalid_source, raise_parameter_error

if TYPE_CHECKING:
    from collections.abc import Iterator

# -----------------------------------------------------------------------------
# Item model
# -----------------------------------------------------------------------------


class ItemKind(StrEnum):
    """Kinds of named items reported by `Definitions`."""

    MODULE = "module"
    CLASS = "class"
    DEF = "def"
    DEFS = "defs"
    CASGN = "casgn"
    ATTR = "attr"
    PROP = "prop"


class AttrType(StrEnum):
    """How an attribute is exposed."""

    READER = "reader"
    WRITER = "writer"
    ACCESSOR = "accessor"


class PropType(StrEnum):
    """Whether a declared field may change after construction."""

    PROP = "prop"
    CONST = "const"


class ParamKind(StrEnum):
    """Where a parameter sits in a def's argument list."""

    POSONLY = "posonly"
    POSITIONAL = "positional"
    VARARG = "vararg"
    KEYWORD = "keyword"
    VARKW = "varkw"


@dataclass(frozen=True, slots=True)
class Type:
    """Annotation rendered back to source text."""

    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class Param:
    """One parameter of a def."""

    name: str
    type: Type | None = None
    kind: ParamKind = ParamKind.POSITIONAL

    def __str__(self) -> str:
        prefix = {ParamKind.VARARG: "*", ParamKind.VARKW: "**"}.get(self.kind, "")
        if self.type is None:
            return f"{prefix}{self.name}"
        return f"{prefix}{self.name}: {self.type}"


@dataclass(frozen=True, slots=True)
class Sig:
    """Parameters and return type of a def."""

    params: tuple[Param, ...] = ()
    returns: Type | None = None

    def render(self) -> str:
        """Render as `(a: int, /, b: str, *, c: bool) -> bool`."""
        parts: list[str] = []
        star_written = False
        for i, p in enumerate(self.params):
            if p.kind is ParamKind.VARARG:
                star_written = True
            elif p.kind is ParamKind.KEYWORD and not star_written:
                parts.append("*")
                star_written = True
            parts.append(str(p))
            if p.kind is ParamKind.POSONLY and (
                i + 1 == len(self.params)
                or self.params[i + 1].kind is not ParamKind.POSONLY
            ):
                parts.append("/")
        out = f"({', '.join(parts)})"
        if self.returns is not None:
            out = f"{out} -> {self.returns}"
        return out


@dataclass(frozen=True, slots=True)
class NamedItem:
    """A single definition found in a module.

    Attributes:
        kind: What was defined.
        name: Bare name.
        qualname: Dotted name relative to the module (the module item uses the
            module name itself).
        lineno: First line of the definition, decorators included. 0 for the
            module item.
        sig: Signature, for annotated defs.
        params: Parameter names as written, for defs (receiver excluded).
        attr_type: For attributes.
        prop_type: For props.
        type: Declared type, for props, annotated constants and attributes.
    """

    kind: ItemKind
    name: str
    qualname: str
    lineno: int
    sig: Sig | None = None
    params: tuple[Param, ...] = ()
    attr_type: AttrType | None = None
    prop_type: PropType | None = None
    type: Type | None = None

    @property
    def is_private(self) -> bool:
        """True when any component of the qualname is `_private` (not dunder)."""
        if self.kind is ItemKind.MODULE:
            return False
        return any(_is_private_name(part) for part in self.qualname.split("."))

    def __str__(self) -> str:
        if self.kind in {ItemKind.MODULE, ItemKind.CLASS}:
            return f"{self.kind} {self.qualname}"
        if self.kind in {ItemKind.DEF, ItemKind.DEFS}:
            sig = self.sig.render() if self.sig else Sig(self.params).render()
            return f"{self.kind} {self.qualname}{sig}"
        if self.kind is ItemKind.CASGN:
            suffix = f": {self.type}" if self.type else ""
            return f"constant {self.qualname}{suffix}"
        if self.kind is ItemKind.ATTR:
            suffix = f" -> {self.type}" if self.type else ""
            return f"attr_{self.attr_type} {self.qualname}{suffix}"
        return f"{self.prop_type} {self.qualname}: {self.type}"


def _is_private_name(name: str) -> bool:
    if name.startswith("__") and name.endswith("__"):
        return False
    return name.startswith("_")


# -----------------------------------------------------------------------------
# AST helpers
# -----------------------------------------------------------------------------


def _type_of(node: ast.expr | None) -> Type | None:
    if node is None:
        return None
    return Type(ast.unparse(node))


def _decorator_name(node: ast.expr) -> str:
    """Return the trailing dotted name of a decorator (`a.b(...)` -> `b`)."""
    if isinstance(node, ast.Call):
        node = node.func
    if isinstance(node, ast.Attribute):
        return node.attr
    if isinstance(node, ast.Name):
        return node.id
    return ""


def _property_companion(node: ast.expr) -> tuple[str, str] | None:
    """Return `("foo", "setter")` for `@foo.setter`, likewise getter/deleter."""
    if (
        isinstance(node, ast.Attribute)
        and node.attr in {"setter", "getter", "deleter"}
        and isinstance(node.value, ast.Name)
    ):
        return node.value.id, node.attr
    return None


def _is_classvar(annotation: ast.expr) -> bool:
    if isinstance(annotation, ast.Subscript):
        annotation = annotation.value
    return _decorator_name(annotation) == "ClassVar"


def _is_constant_name(name: str) -> bool:
    return name.isupper()


def _first_line(node: ast.ClassDef | ast.FunctionDef | ast.AsyncFunctionDef) -> int:
    return min([node.lineno, *(d.lineno for d in node.decorator_list)])


def _dataclass_flavour(node: ast.ClassDef) -> PropType | None:
    """Return the prop type for a `@dataclass` class, or None if it is not one."""
    for deco in node.decorator_list:
        if _decorator_name(deco) != "dataclass":
            continue
        if isinstance(deco, ast.Call):
            for kw in deco.keywords:
                if (
                    kw.arg == "frozen"
                    and isinstance(kw.value, ast.Constant)
                    and kw.value.value is True
                ):
                    return PropType.CONST
        return PropType.PROP
    return None


def _params(args: ast.arguments, *, drop_receiver: bool) -> tuple[Param, ...]:
    positional = [
        *((a, ParamKind.POSONLY) for a in args.posonlyargs),
        *((a, ParamKind.POSITIONAL) for a in args.args),
    ]
    if drop_receiver and positional:
        positional = positional[1:]
    out: list[Param] = [
        Param(a.arg, _type_of(a.annotation), kind=kind) for a, kind in positional
    ]
    if args.vararg is not None:
        out.append(
            Param(
                args.vararg.arg,
                _type_of(args.vararg.annotation),
                kind=ParamKind.VARARG,
            )
        )
    out.extend(
        Param(a.arg, _type_of(a.annotation), kind=ParamKind.KEYWORD)
        for a in args.kwonlyargs
    )
    if args.kwarg is not None:
        out.append(
            Param(args.kwarg.arg, _type_of(args.kwarg.annotation), kind=ParamKind.VARKW)
        )
    return tuple(out)


# -----------------------------------------------------------------------------
# Scope tracking
# -----------------------------------------------------------------------------


@dataclass(slots=True)
class _Scope:
    """What we know about the body currently being walked."""

    prefix: str = ""
    in_class: bool = False
    prop_type: PropType | None = None
    setters: set[str] = field(default_factory=set)
    readers: set[str] = field(default_factory=set)

    def qualify(self, name: str) -> str:
        return f"{self.prefix}.{name}" if self.prefix else name

    @classmethod
    def for_class(cls, node: ast.ClassDef, *, parent: _Scope) -> _Scope:
        scope = cls(
            prefix=parent.qualify(node.name),
            in_class=True,
            prop_type=_dataclass_flavour(node),
        )
        for stmt in node.body:
            if not isinstance(stmt, (ast.FunctionDef, ast.AsyncFunctionDef)):
                continue
            for deco in stmt.decorator_list:
                if _decorator_name(deco) in {"property", "cached_property"}:
                    scope.readers.add(stmt.name)
                    continue
                companion = _property_companion(deco)
                if companion is not None and companion[1] == "setter":
                    scope.setters.add(stmt.name)
        return scope


# -----------------------------------------------------------------------------
# Iterator
# -----------------------------------------------------------------------------


class Definitions:
    """Iterator over the `NamedItem`s of a parsed module.

    Keeps a stack of nodes still to look at. Popping a class-like item pushes
    its body, so items come out in source order with parents first.
    """

    def __init__(self, tree: ast.Module, *, module_name: str) -> None:
        """
        Create the iterator.

        Args:
            tree: Parsed module.
            module_name: Name reported for the module item.
        """
        if not isinstance(tree, ast.Module):
            raise_parameter_error(
                detail=f"expected an ast.Module, got {type(tree).__name__}"
            )
        self._module_name = module_name
        self._stack: list[tuple[ast.AST, _Scope]] = [(tree, _Scope())]
        self._pending: list[NamedItem] = []

    def __iter__(self) -> Iterator[NamedItem]:
        return self

    def __next__(self) -> NamedItem:
        while True:
            if self._pending:
                return self._pending.pop(0)
            if not self._stack:
                raise StopIteration
            node, scope = self._stack.pop()
            self._pending.extend(self._decode(node, scope))

    def _push_body(self, body: list[ast.stmt], scope: _Scope) -> None:
        self._stack.extend((stmt, scope) for stmt in reversed(body))

    def _decode(self, node: ast.AST, scope: _Scope) -> list[NamedItem]:
        """Turn one node into zero or more items, pushing children as needed."""
        if isinstance(node, ast.Module):
            self._push_body(node.body, scope)
            return [NamedItem(ItemKind.MODULE, self._module_name, self._module_name, 0)]

        if isinstance(node, ast.ClassDef):
            inner = _Scope.for_class(node, parent=scope)
            self._push_body(node.body, inner)
            return [
                NamedItem(
                    ItemKind.CLASS, node.name, inner.prefix, _first_line(node)
                )
            ]

        if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
            return self._decode_def(node, scope)

        if isinstance(node, ast.Assign):
            return [
                NamedItem(ItemKind.CASGN, t.id, scope.qualify(t.id), node.lineno)
                for t in node.targets
                if isinstance(t, ast.Name) and _is_constant_name(t.id)
            ]

        if isinstance(node, ast.AnnAssign) and isinstance(node.target, ast.Name):
            return self._decode_annassign(node, node.target.id, scope)

        return []

    def _decode_annassign(
        self, node: ast.AnnAssign, name: str, scope: _Scope
    ) -> list[NamedItem]:
        classvar = _is_classvar(node.annotation)
        if scope.prop_type is not None and not classvar:
            return [
                NamedItem(
                    ItemKind.PROP,
                    name,
                    scope.qualify(name),
                    node.lineno,
                    prop_type=scope.prop_type,
                    type=_type_of(node.annotation),
                )
            ]
        if _is_constant_name(name):
            return [
                NamedItem(
                    ItemKind.CASGN,
                    name,
                    scope.qualify(name),
                    node.lineno,
                    type=_type_of(node.annotation),
                )
            ]
        return []

    def _decode_def(
        self, node: ast.FunctionDef | ast.AsyncFunctionDef, scope: _Scope
    ) -> list[NamedItem]:
        names = {_decorator_name(d) for d in node.decorator_list}
        companions = [
            c for c in map(_property_companion, node.decorator_list) if c is not None
        ]
        qualname = scope.qualify(node.name)
        lineno = _first_line(node)

        if scope.in_class and names & {"property", "cached_property"}:
            attr_type = (
                AttrType.ACCESSOR if node.name in scope.setters else AttrType.READER
            )
            return [
                NamedItem(
                    ItemKind.ATTR,
                    node.name,
                    qualname,
                    lineno,
                    attr_type=attr_type,
                    type=_type_of(node.returns),
                )
            ]

        if scope.in_class and companions:
            target, role = companions[0]
            if target in scope.readers or role != "setter":
                # folded into the reader's item
                return []
            value = _params(node.args, drop_receiver=True)
            return [
                NamedItem(
                    ItemKind.ATTR,
                    node.name,
                    qualname,
                    lineno,
                    attr_type=AttrType.WRITER,
                    type=value[0].type if value else None,
                )
            ]

        static = scope.in_class and "staticmethod" in names
        bound_to_class = scope.in_class and "classmethod" in names
        kind = ItemKind.DEFS if static or bound_to_class else ItemKind.DEF
        params = _params(node.args, drop_receiver=scope.in_class and not static)

        sig: Sig | None = None
        if node.returns is not None or any(p.type is not None for p in params):
            sig = Sig(params=params, returns=_type_of(node.returns))

        return [NamedItem(kind, node.name, qualname, lineno, sig=sig, params=params)]


# -----------------------------------------------------------------------------
# Convenience entrypoints
# -----------------------------------------------------------------------------


def parse_source(source: str, *, filename: str = "<sigdefs>") -> ast.Module:
    """
    Parse module source text.

    Args:
        source: Python source.
        filename: Name used in syntax error diagnostics.

    Returns:
        Parsed module.

    Raises:
        ValueError: If the source does not parse.
    """
    if not isinstance(source, str):
        raise_parameter_error(
            detail=f"source must be a str, got {type(source).__name__}"
        )
    try:
        return ast.parse(source, filename=filename)
    except SyntaxError as exc:
        raise_invalid_source(detail=f"{filename}:{exc.lineno}: {exc.msg}")
    raise AssertionError("unreachable")  # pragma: no cover


def definitions(source: str, *, module_name: str = "<string>") -> list[NamedItem]:
    """
    Parse source text and return all of its definitions.

    Args:
        source: Python source.
        module_name: Name reported for the module item.

    Returns:
        Items in source order, parents before children.
    """
    tree = parse_source(source, filename=module_name)
    return list(Definitions(tree, module_name=module_name))
