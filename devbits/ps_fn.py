"""Functional core representation of compiled modules: declarations, expressions, binders, literals."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from devbits.ps_core import (
    CoreAnnotation,
    CoreAnnotationMeta,
    CoreComment,
    CoreModuleRef,
    NotImplError,
)

_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
}


def _quote(text: str, quote: str) -> str:
    out = [quote]
    for ch in text:
        if ch == quote:
            out.append("\\" + ch)
        elif ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif ch.isprintable():
            out.append(ch)
        else:
            cp = ord(ch)
            if cp < 0x80:
                out.append(f"\\x{cp:02x}")
            elif cp < 0x10000:
                out.append(f"\\u{cp:04x}")
            else:
                out.append(f"\\U{cp:08x}")
    out.append(quote)
    return "".join(out)


def _as_dict(value: Any) -> dict:
    if not isinstance(value, dict):
        raise TypeError(f"expected a JSON object, got {type(value).__name__}")
    return value


def _as_list(value: Any) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"expected a JSON array, got {type(value).__name__}")
    return value


def _as_number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected a JSON number, got {type(value).__name__}")
    return float(value)


def _as_str(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected a JSON string, got {type(value).__name__}")
    return value


def _annotation(data: dict[str, Any]) -> CoreAnnotation:
    raw = data.get("annotation")
    return CoreAnnotation.from_json(raw) if raw is not None else CoreAnnotation()


@dataclass
class CoreFnIdent(CoreModuleRef):
    """A possibly module-qualified identifier."""

    identifier: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "CoreFnIdent":
        data = _as_dict(data)
        return cls(
            module_name=list(data.get("moduleName") or []),
            identifier=data.get("identifier") or "",
        )

    def __str__(self) -> str:
        return ".".join([*self.module_name, self.identifier])


def _ident(value: Any) -> Optional[CoreFnIdent]:
    return CoreFnIdent.from_json(value) if value is not None else None


@dataclass(kw_only=True)
class CoreFnExpr:
    """Base of all expression kinds; each carries an annotation."""

    annotation: CoreAnnotation = field(default_factory=CoreAnnotation)

    @property
    def meta(self) -> Optional[CoreAnnotationMeta]:
        return self.annotation.meta

    def prep(self) -> None:
        """Prepare the annotation and all sub-expressions."""
        self.annotation.prep()


def parse_expr(data: dict[str, Any]) -> CoreFnExpr:
    """Decode one expression object, dispatching on its `type` field."""
    data = _as_dict(data)
    expr_type = data.get("type") or ""
    kind = _EXPR_KINDS.get(expr_type)
    if kind is None:
        raise NotImplError("CoreFnExpr.Type", expr_type, data)
    return kind._parse(data)


@dataclass(kw_only=True)
class CoreFnExprAbs(CoreFnExpr):
    argument: str = ""
    body: CoreFnExpr

    @classmethod
    def _parse(cls, data: dict[str, Any]) -> "CoreFnExprAbs":
        return cls(
            annotation=_annotation(data),
            argument=data.get("argument") or "",
            body=parse_expr(data.get("body")),
        )

    def prep(self) -> None:
        super().prep()
        self.body.prep()

    def __str__(self) -> str:
        return "ABS:\\" + self.argument + "-> " + str(self.body)


@dataclass(kw_only=True)
class CoreFnExprAcc(CoreFnExpr):
    field_name: str = ""
    expression: CoreFnExpr

    @classmethod
    def _parse(cls, data: dict[str, Any]) -> "CoreFnExprAcc":
        return cls(
            annotation=_annotation(data),
            field_name=data.get("fieldName") or "",
            expression=parse_expr(data.get("expression")),
        )

    def prep(self) -> None:
        super().prep()
        self.expression.prep()

    def __str__(self) -> str:
        return "ACC:" + str(self.expression) + "@" + self.field_name


@dataclass(kw_only=True)
class CoreFnExprApp(CoreFnExpr):
    abstraction: CoreFnExpr
    argument: CoreFnExpr

    @classmethod
    def _parse(cls, data: dict[str, Any]) -> "CoreFnExprApp":
        return cls(
            annotation=_annotation(data),
            abstraction=parse_expr(data.get("abstraction")),
            argument=parse_expr(data.get("argument")),
        )

    def prep(self) -> None:
        super().prep()
        self.abstraction.prep()
        self.argument.prep()

    def __str__(self) -> str:
        return "ABS:" + str(self.abstraction) + "(" + str(self.argument) + ")"


@dataclass
class CoreFnExprCaseAlt:
    """One alternative of a case expression, either plain or guarded."""

    binders: list["CoreFnBinder"] = field(default_factory=list)
    is_guarded: bool = False
    expression: Optional[CoreFnExpr] = None
    expressions: list[tuple[CoreFnExpr, CoreFnExpr]] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "CoreFnExprCaseAlt":
        data = _as_dict(data)
        expr = data.get("expression")
        guarded = []
        for item in _as_list(data.get("expressions")):
            item = _as_dict(item)
            guarded.append((parse_expr(item.get("guard")), parse_expr(item.get("expression"))))
        return cls(
            binders=[CoreFnBinder.from_json(b) for b in _as_list(data.get("binders"))],
            is_guarded=bool(data.get("isGuarded")),
            expression=parse_expr(expr) if expr is not None else None,
            expressions=guarded,
        )

    def prep(self) -> None:
        for binder in self.binders:
            binder.prep()
        if self.expression is not None:
            self.expression.prep()
        for guard, expr in self.expressions:
            guard.prep()
            expr.prep()

    def __str__(self) -> str:
        s = f" ❬C:{'true' if self.is_guarded else 'false'}| "
        s += "".join("B:" + str(b) + " " for b in self.binders)
        if self.expression is not None:
            s += str(self.expression)
        else:
            s += "EXPRS["
            s += "".join(f"X:{guard} |?| {expr} " for guard, expr in self.expressions)
            s += "]"
        return s + " |C:❭"


@dataclass(kw_only=True)
class CoreFnExprCase(CoreFnExpr):
    expressions: list[CoreFnExpr] = field(default_factory=list)
    alternatives: list[CoreFnExprCaseAlt] = field(default_factory=list)

    @classmethod
    def _parse(cls, data: dict[str, Any]) -> "CoreFnExprCase":
        return cls(
            annotation=_annotation(data),
            expressions=[parse_expr(e) for e in _as_list(data.get("caseExpressions"))],
            alternatives=[
                CoreFnExprCaseAlt.from_json(a) for a in _as_list(data.get("caseAlternatives"))
            ],
        )

    def prep(self) -> None:
        super().prep()
        for expr in self.expressions:
            expr.prep()
        for alt in self.alternatives:
            alt.prep()

    def __str__(self) -> str:
        return (
            "CASE:"
            + ", ".join(str(e) for e in self.expressions)
            + ":OF:"
            + "".join(str(a) for a in self.alternatives)
        )


@dataclass(kw_only=True)
class CoreFnExprCtor(CoreFnExpr):
    constructor_name: str = ""
    type_name: str = ""
    field_names: list[str] = field(default_factory=list)

    @classmethod
    def _parse(cls, data: dict[str, Any]) -> "CoreFnExprCtor":
        return cls(
            annotation=_annotation(data),
            constructor_name=data.get("constructorName") or "",
            type_name=data.get("typeName") or "",
            field_names=list(data.get("fieldNames") or []),
        )

    def __str__(self) -> str:
        return self.type_name + "::" + self.constructor_name + "<" + ", ".join(self.field_names) + ">"


@dataclass(kw_only=True)
class CoreFnExprLet(CoreFnExpr):
    binds: list["CoreFnDecl"] = field(default_factory=list)
    expression: CoreFnExpr

    @classmethod
    def _parse(cls, data: dict[str, Any]) -> "CoreFnExprLet":
        return cls(
            annotation=_annotation(data),
            binds=[CoreFnDecl.from_json(b) for b in _as_list(data.get("binds"))],
            expression=parse_expr(data.get("expression")),
        )

    def prep(self) -> None:
        super().prep()
        self.expression.prep()
        for bind in self.binds:
            bind.prep()

    def __str__(self) -> str:
        return "LET:" + ", ".join(str(b) for b in self.binds) + ":IN:" + str(self.expression)


@dataclass
class CoreFnExprLitObjFld:
    """A named field of an object literal, holding either an expression or a binder."""

    name: str = ""
    val: Optional[CoreFnExpr] = None
    binder: Optional["CoreFnBinder"] = None

    @classmethod
    def from_json(cls, data: Any) -> "CoreFnExprLitObjFld":
        """Decode a `[name, {...}]` pair; anything of another shape gives an empty field."""
        if not (
            isinstance(data, list)
            and len(data) == 2
            and isinstance(data[0], str)
            and isinstance(data[1], dict)
        ):
            return cls()
        name, obj = data
        try:
            return cls(name=name, val=parse_expr(obj))
        except (NotImplError, TypeError):
            return cls(name=name, binder=CoreFnBinder.from_json(obj))

    def prep(self) -> None:
        if self.val is not None:
            self.val.prep()
        elif self.binder is not None:
            self.binder.prep()

    def __str__(self) -> str:
        s = self.name + ":"
        if self.val is not None:
            s += str(self.val)
        elif self.binder is not None:
            s += str(self.binder)
        return s


@dataclass
class CoreFnExprLitVal:
    """A literal value: number, int, char, string, boolean, array or object."""

    type: str = ""
    number: float = 0.0
    int_val: int = 0
    boolean: bool = False
    char: str = ""
    string: str = ""
    array: list[CoreFnExpr] = field(default_factory=list)
    array_of_binders: list["CoreFnBinder"] = field(default_factory=list)
    obj: list[CoreFnExprLitObjFld] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "CoreFnExprLitVal":
        data = _as_dict(data)
        lit = cls(type=data.get("literalType") or "")
        value = data.get("value")
        if lit.type == "ArrayLiteral":
            items = _as_list(value)
            try:
                lit.array = [parse_expr(item) for item in items]
            except (NotImplError, TypeError, ValueError, KeyError):
                lit.array_of_binders = [CoreFnBinder.from_json(item) for item in items]
        elif lit.type == "ObjectLiteral":
            lit.obj = [CoreFnExprLitObjFld.from_json(f) for f in _as_list(value)]
        elif lit.type == "IntLiteral":
            lit.int_val = int(_as_number(value))
        elif lit.type == "NumberLiteral":
            lit.number = _as_number(value)
        elif lit.type == "CharLiteral":
            lit.char = _as_str(value)[:1]
        elif lit.type == "StringLiteral":
            lit.string = _as_str(value)
        elif lit.type == "BooleanLiteral":
            if not isinstance(value, bool):
                raise TypeError(f"expected a JSON boolean, got {type(value).__name__}")
            lit.boolean = value
        else:
            raise NotImplError("CoreFnExprLit.Type", lit.type, data)
        return lit

    def prep(self) -> None:
        for expr in self.array:
            expr.prep()
        for binder in self.array_of_binders:
            binder.prep()
        for fld in self.obj:
            fld.prep()

    def __str__(self) -> str:
        if self.type == "ArrayLiteral":
            return (
                "La:["
                + ", ".join(str(e) for e in self.array)
                + ", ".join(str(b) for b in self.array_of_binders)
                + "]"
            )
        if self.type == "ObjectLiteral":
            return "Lo:{" + ", ".join(str(f) for f in self.obj) + "}"
        if self.type == "IntLiteral":
            return f"Li:{self.int_val}"
        if self.type == "NumberLiteral":
            return f"Ln:{self.number:.6f}"
        if self.type == "CharLiteral":
            return "Lc:" + _quote(self.char or "\x00", "'")
        if self.type == "StringLiteral":
            return "Ls:" + _quote(self.string, '"')
        if self.type == "BooleanLiteral":
            return "Lb:" + ("true" if self.boolean else "false")
        raise NotImplError("CoreFnExprLit.Type", self.type, self)


@dataclass(kw_only=True)
class CoreFnExprLit(CoreFnExpr):
    val: CoreFnExprLitVal = field(default_factory=CoreFnExprLitVal)

    @classmethod
    def _parse(cls, data: dict[str, Any]) -> "CoreFnExprLit":
        return cls(annotation=_annotation(data), val=CoreFnExprLitVal.from_json(data.get("value")))

    def prep(self) -> None:
        self.val.prep()

    def __str__(self) -> str:
        return str(self.val)


@dataclass(kw_only=True)
class CoreFnExprObjUpd(CoreFnExpr):
    expression: CoreFnExpr
    updates: list[CoreFnExprLitObjFld] = field(default_factory=list)

    @classmethod
    def _parse(cls, data: dict[str, Any]) -> "CoreFnExprObjUpd":
        return cls(
            annotation=_annotation(data),
            expression=parse_expr(data.get("expression")),
            updates=[CoreFnExprLitObjFld.from_json(u) for u in _as_list(data.get("updates"))],
        )

    def prep(self) -> None:
        super().prep()
        self.expression.prep()
        for upd in self.updates:
            upd.prep()

    def __str__(self) -> str:
        return "UPDOBJ:" + str(self.expression) + "{" + ", ".join(str(u) for u in self.updates) + "}"


@dataclass(kw_only=True)
class CoreFnExprVar(CoreFnExpr):
    value: CoreFnIdent = field(default_factory=CoreFnIdent)

    @classmethod
    def _parse(cls, data: dict[str, Any]) -> "CoreFnExprVar":
        return cls(annotation=_annotation(data), value=CoreFnIdent.from_json(data.get("value") or {}))

    def __str__(self) -> str:
        return "V:" + str(self.value)


_EXPR_KINDS: dict[str, Any] = {
    "Abs": CoreFnExprAbs,
    "Accessor": CoreFnExprAcc,
    "App": CoreFnExprApp,
    "Case": CoreFnExprCase,
    "Constructor": CoreFnExprCtor,
    "Let": CoreFnExprLet,
    "Literal": CoreFnExprLit,
    "ObjectUpdate": CoreFnExprObjUpd,
    "Var": CoreFnExprVar,
}


@dataclass
class CoreFnBinder:
    """A pattern binder used in case alternatives and literal patterns."""

    annotation: CoreAnnotation = field(default_factory=CoreAnnotation)
    binder_type: str = ""
    identifier: str = ""
    literal: Optional[CoreFnExprLitVal] = None
    ctor_name: Optional[CoreFnIdent] = None
    ctor_type: Optional[CoreFnIdent] = None
    ctor_binders: list["CoreFnBinder"] = field(default_factory=list)
    named: Optional["CoreFnBinder"] = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "CoreFnBinder":
        data = _as_dict(data)
        literal, named = data.get("literal"), data.get("binder")
        return cls(
            annotation=_annotation(data),
            binder_type=data.get("binderType") or "",
            identifier=data.get("identifier") or "",
            literal=CoreFnExprLitVal.from_json(literal) if literal is not None else None,
            ctor_name=_ident(data.get("constructorName")),
            ctor_type=_ident(data.get("typeName")),
            ctor_binders=[cls.from_json(b) for b in _as_list(data.get("binders"))],
            named=cls.from_json(named) if named is not None else None,
        )

    def prep(self) -> None:
        if self.literal is not None:
            self.literal.prep()
        for binder in self.ctor_binders:
            binder.prep()
        if self.named is not None:
            self.named.prep()

    def __str__(self) -> str:
        s = f"❬B:{self.binder_type}`{self.identifier}`"
        if self.literal is not None:
            s += f" L:{self.literal}"
        if self.ctor_name is not None:
            s += f" Cn:{self.ctor_name}"
        if self.ctor_type is not None:
            s += f" Ct:{self.ctor_type}"
        if self.ctor_binders:
            s += " Cb:[" + "".join(", " + str(b) for b in self.ctor_binders) + "]"
        if self.named is not None:
            s += f" N:{self.named}"
        return s + " B:" + self.binder_type + "❭"


@dataclass(kw_only=True)
class CoreFnDeclBind:
    """One named binding: identifier = expression."""

    annotation: CoreAnnotation = field(default_factory=CoreAnnotation)
    identifier: str = ""
    expression: CoreFnExpr

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "CoreFnDeclBind":
        data = _as_dict(data)
        return cls(
            annotation=_annotation(data),
            identifier=data.get("identifier") or "",
            expression=parse_expr(data.get("expression")),
        )

    def prep(self) -> None:
        self.annotation.prep()
        self.expression.prep()

    def __str__(self) -> str:
        return f"{self.identifier}{{ {self.expression} }}"


_BIND_KEYS = ("annotation", "identifier", "expression")


@dataclass
class CoreFnDecl:
    """A declaration: a single binding, or a group of (recursive) bindings.

    After `prep`, the single binding has moved into `binds` and `bind` is None.
    """

    bind: Optional[CoreFnDeclBind] = None
    binds: list[CoreFnDeclBind] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "CoreFnDecl":
        data = _as_dict(data)
        bind = CoreFnDeclBind.from_json(data) if any(k in data for k in _BIND_KEYS) else None
        return cls(
            bind=bind,
            binds=[CoreFnDeclBind.from_json(b) for b in _as_list(data.get("binds"))],
        )

    def is_recursive(self) -> bool:
        return self.bind is None

    def is_non_recursive(self) -> bool:
        return self.bind is not None

    def prep(self) -> None:
        if self.bind is not None:
            self.binds = [self.bind]
            self.bind = None
        for bind in self.binds:
            bind.prep()

    def __str__(self) -> str:
        if self.bind is not None:
            return str(self.bind)
        return "[" + "".join(", " + str(b) for b in self.binds) + "]"


@dataclass
class CoreFn(CoreModuleRef):
    """A whole module in functional core form."""

    imports: list[tuple[list[str], CoreAnnotation]] = field(default_factory=list)
    module_path: str = ""
    exports: list[str] = field(default_factory=list)
    decls: list[CoreFnDecl] = field(default_factory=list)
    comments: list[CoreComment] = field(default_factory=list)
    foreign: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "CoreFn":
        data = _as_dict(data)
        imports = []
        for imp in _as_list(data.get("imports")):
            imp = _as_dict(imp)
            imports.append((list(imp.get("moduleName") or []), _annotation(imp)))
        return cls(
            module_name=list(data.get("moduleName") or []),
            imports=imports,
            module_path=data.get("modulePath") or "",
            exports=list(data.get("exports") or []),
            decls=[CoreFnDecl.from_json(d) for d in _as_list(data.get("decls"))],
            comments=[CoreComment.from_json(c) for c in _as_list(data.get("comments"))],
            foreign=list(data.get("foreign") or []),
        )

    def prep(self) -> None:
        """Prepare import annotations and all declarations."""
        for _, annotation in self.imports:
            annotation.prep()
        for decl in self.decls:
            decl.prep()

    def remove_at(self, i: int) -> None:
        """Remove the declaration at index `i`."""
        if not 0 <= i < len(self.decls):
            raise IndexError(f"declaration index {i} out of range")
        del self.decls[i]