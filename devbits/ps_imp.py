"""Imperative core dumps and extern export lists of compiled modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from devbits.ps_core import CoreComment, CoreSourceSpan, NotImplError, unsanitize
from devbits.ps_env import CoreEnv


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


@dataclass
class CoreExtRefs:
    """The kinds of references a module exports."""

    type_ref: list[Any] = field(default_factory=list)
    type_class_ref: list[Any] = field(default_factory=list)
    type_instance_ref: list[Any] = field(default_factory=list)
    value_ref: list[Any] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "CoreExtRefs":
        data = _as_dict(data)
        return cls(
            type_ref=list(_as_list(data.get("TypeRef"))),
            type_class_ref=list(_as_list(data.get("TypeClassRef"))),
            type_instance_ref=list(_as_list(data.get("TypeInstanceRef"))),
            value_ref=list(_as_list(data.get("ValueRef"))),
        )


@dataclass
class CoreExt:
    """The parts of an externs dump that are used: its exports."""

    exports: list[CoreExtRefs] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "CoreExt":
        data = _as_dict(data)
        return cls(exports=[CoreExtRefs.from_json(e) for e in _as_list(data.get("efExports"))])


_SINGLE_CHILDREN = {
    "ast_body": "body",
    "ast_right": "rhs",
    "ast_comment_decl": "decl",
    "ast_for1": "for1",
    "ast_for2": "for2",
    "ast_then": "then",
    "ast_else": "else",
    "while_": "While",
    "app": "App",
    "unary": "Unary",
    "binary": "Binary",
    "if_else": "IfElse",
    "return_": "Return",
    "throw": "Throw",
    "assignment": "Assignment",
    "indexer": "Indexer",
    "accessor": "Accessor",
    "instance_of": "InstanceOf",
}

_LIST_CHILDREN = {
    "ast_appl_args": "args",
    "block": "Block",
    "array_literal": "ArrayLiteral",
}

_NAME_FIELDS = ("for_", "for_in", "function", "var", "variable_introduction")


@dataclass(eq=False)
class CoreImpAst:
    """One node of the imperative (JavaScript-like) syntax tree."""

    source_span: Optional[CoreSourceSpan] = None
    ast_tag: str = ""
    ast_body: Optional["CoreImpAst"] = None
    ast_right: Optional["CoreImpAst"] = None
    ast_comment_decl: Optional["CoreImpAst"] = None
    ast_appl_args: list[Optional["CoreImpAst"]] = field(default_factory=list)
    ast_op: str = ""
    ast_func_params: list[str] = field(default_factory=list)
    ast_for1: Optional["CoreImpAst"] = None
    ast_for2: Optional["CoreImpAst"] = None
    ast_then: Optional["CoreImpAst"] = None
    ast_else: Optional["CoreImpAst"] = None

    function: str = ""
    string_literal: str = ""
    boolean_literal: bool = False
    integer_literal: int = 0
    number_literal: float = 0.0
    block: list[Optional["CoreImpAst"]] = field(default_factory=list)
    var: str = ""
    variable_introduction: str = ""
    while_: Optional["CoreImpAst"] = None
    app: Optional["CoreImpAst"] = None
    unary: Optional["CoreImpAst"] = None
    comment: list[CoreComment] = field(default_factory=list)
    binary: Optional["CoreImpAst"] = None
    for_in: str = ""
    for_: str = ""
    if_else: Optional["CoreImpAst"] = None
    object_literal: list[dict[str, Optional["CoreImpAst"]]] = field(default_factory=list)
    return_: Optional["CoreImpAst"] = None
    throw: Optional["CoreImpAst"] = None
    array_literal: list[Optional["CoreImpAst"]] = field(default_factory=list)
    assignment: Optional["CoreImpAst"] = None
    indexer: Optional["CoreImpAst"] = None
    accessor: Optional["CoreImpAst"] = None
    instance_of: Optional["CoreImpAst"] = None

    parent: Optional["CoreImpAst"] = field(default=None, repr=False)
    root: Optional["CoreImp"] = field(default=None, repr=False)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "CoreImpAst":
        data = _as_dict(data)

        def node(value: Any) -> Optional[CoreImpAst]:
            return cls.from_json(value) if value is not None else None

        span = data.get("sourceSpan")
        kwargs: dict[str, Any] = {
            "source_span": CoreSourceSpan.from_json(span) if span is not None else None,
            "ast_tag": data.get("tag") or "",
            "ast_op": data.get("op") or "",
            "ast_func_params": [str(p) for p in _as_list(data.get("params"))],
            "function": data.get("Function") or "",
            "string_literal": data.get("StringLiteral") or "",
            "boolean_literal": bool(data.get("BooleanLiteral")),
            "integer_literal": int(data.get("IntegerLiteral") or 0),
            "number_literal": float(data.get("NumberLiteral") or 0.0),
            "var": data.get("Var") or "",
            "variable_introduction": data.get("VariableIntroduction") or "",
            "comment": [CoreComment.from_json(c) for c in _as_list(data.get("Comment"))],
            "for_in": data.get("ForIn") or "",
            "for_": data.get("For") or "",
            "object_literal": [
                {key: node(val) for key, val in _as_dict(m).items()}
                for m in _as_list(data.get("ObjectLiteral"))
            ],
        }
        for attr, key in _SINGLE_CHILDREN.items():
            kwargs[attr] = node(data.get(key))
        for attr, key in _LIST_CHILDREN.items():
            kwargs[attr] = [node(v) for v in _as_list(data.get(key))]
        return cls(**kwargs)


@dataclass
class CoreImp:
    """An imperative core dump; only its declaration environment is decoded."""

    decl_env: CoreEnv = field(default_factory=CoreEnv)
    imp_file_path: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "CoreImp":
        data = _as_dict(data)
        env = data.get("declEnv")
        return cls(decl_env=CoreEnv.from_json(env) if env is not None else CoreEnv())

    def prep(self) -> None:
        """Prepare the declaration environment."""
        self.decl_env.prep()

    def init_ast_on_loaded(self, file_path: str) -> None:
        """Remember the file the dump came from, for error messages."""
        self.imp_file_path = file_path

    def init_sub_asts(
        self, parent: Optional[CoreImpAst], *asts: Optional[CoreImpAst]
    ) -> list[Optional[CoreImpAst]]:
        """Normalize the given nodes (and their subtrees) under `parent` and return them.

        Comment wrappers are replaced by the declaration they annotate, named inner
        functions are bound to a variable, `!true`/`!false` is folded, names are
        unsanitized, and every node gets its parent and root set.
        """
        if parent is not None:
            parent.root = self
        result = list(asts)
        for i, a in enumerate(result):
            if a is None:
                continue
            if a.ast_tag == "Comment" and a.ast_comment_decl is not None:
                decl = a.ast_comment_decl
                if decl.ast_tag == "Comment":
                    raise NotImplError("comments", "nesting", self.imp_file_path)
                a.ast_comment_decl = None
                decl.comment, decl.parent = a.comment, parent
                a = result[i] = decl
            if parent is not None and a.ast_tag == "Function" and a.function:
                nuvar = CoreImpAst(
                    ast_tag="VariableIntroduction",
                    variable_introduction=a.function,
                    ast_right=a,
                    parent=parent,
                )
                a.parent, a.function = nuvar, ""
                a = result[i] = nuvar
            if (
                a.ast_tag == "Unary"
                and a.ast_op == "Not"
                and a.unary is not None
                and a.unary.ast_tag == "BooleanLiteral"
            ):
                operand = a.unary
                operand.parent, operand.boolean_literal = parent, not operand.boolean_literal
                a = result[i] = operand

            for name in _NAME_FIELDS:
                setattr(a, name, unsanitize(getattr(a, name)))
            a.object_literal = [
                {unsanitize(key): val for key, val in m.items()} for m in a.object_literal
            ]
            a.ast_func_params = [unsanitize(p) for p in a.ast_func_params]

            a.root, a.parent = self, parent
            for attr in _SINGLE_CHILDREN:
                setattr(a, attr, self.init_sub_asts(a, getattr(a, attr))[0])
            for attr in _LIST_CHILDREN:
                setattr(a, attr, self.init_sub_asts(a, *getattr(a, attr)))
            for m in a.object_literal:
                for key, expr in m.items():
                    m[key] = self.init_sub_asts(a, expr)[0]
        return result