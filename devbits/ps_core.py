"""Core building blocks of compiler JSON dumps: tagged kinds and types, constraints, annotations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

_REPLACEMENTS: list[tuple[str, str]] = []


class NotImplError(Exception):
    """Raised when a dump contains a construct that is not handled."""

    def __init__(self, what: str, name: str, context: Any = None) -> None:
        self.what = what
        self.name = name
        self.context = context
        super().__init__(f"{what}: {name!r} not implemented (in {context!r})")


def set_unsanitize_replacements(pairs: Iterable[tuple[str, str]]) -> None:
    """Set the (old, new) pairs used by `unsanitize`; earlier pairs take precedence."""
    _REPLACEMENTS[:] = [(str(old), str(new)) for old, new in pairs]


def unsanitize(text: str) -> str:
    """Replace, left to right and without overlaps, every occurrence of the configured old strings."""
    if not _REPLACEMENTS:
        return text
    out: list[str] = []
    i, n = 0, len(text)
    while i <= n:
        match = next(((o, nw) for o, nw in _REPLACEMENTS if text.startswith(o, i)), None)
        if match is None:
            if i < n:
                out.append(text[i])
            i += 1
        elif match[0]:
            out.append(match[1])
            i += len(match[0])
        else:
            out.append(match[1])
            if i < n:
                out.append(text[i])
            i += 1
    return "".join(out)


def _as_list(value: Any) -> list:
    if not isinstance(value, list):
        raise TypeError(f"expected a JSON array, got {type(value).__name__}")
    return value


def _as_dict(value: Any) -> dict:
    if not isinstance(value, dict):
        raise TypeError(f"expected a JSON object, got {type(value).__name__}")
    return value


def _as_str(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected a JSON string, got {type(value).__name__}")
    return value


def _as_int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected a JSON number, got {type(value).__name__}")
    return int(value)


def _ident_to_qname(identtuple: Any) -> str:
    items = _as_list(identtuple)
    prefix = "".join(_as_str(m) + "." for m in _as_list(items[0]))
    ident = items[1]
    if isinstance(ident, dict):
        return prefix + _as_str(ident["Ident"])
    return prefix + _as_str(ident)


def _tag_from(tc: Any) -> tuple[str, Any]:
    tc = _as_dict(tc)
    return _as_str(tc["tag"]), tc.get("contents")


@dataclass
class CoreTag:
    tag: str = ""
    contents: Any = None


@dataclass
class CoreTagKind(CoreTag):
    """A tagged kind."""

    num: int = -1
    text: str = ""
    kind0: Optional["CoreTagKind"] = None
    kind1: Optional["CoreTagKind"] = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "CoreTagKind":
        data = _as_dict(data)
        return cls(
            tag=data.get("tag") or "",
            contents=data.get("contents"),
            num=data.get("n", 0),
            text=data.get("t") or "",
            kind0=cls.from_json(data["k0"]) if data.get("k0") is not None else None,
            kind1=cls.from_json(data["k1"]) if data.get("k1") is not None else None,
        )

    @staticmethod
    def _new(tc: Any) -> "CoreTagKind":
        tag, contents = _tag_from(tc)
        return CoreTagKind(tag=tag, contents=contents, num=-1)

    def is_row(self) -> bool:
        return self.tag == "Row"

    def is_kunknown(self) -> bool:
        return self.tag == "KUnknown"

    def is_fun_kind(self) -> bool:
        return self.tag == "FunKind"

    def is_named_kind(self) -> bool:
        return self.tag == "NamedKind"

    def prep(self) -> None:
        """Interpret `contents` according to `tag`."""
        self.num = -1
        if self.is_kunknown():
            self.num = _as_int(self.contents)
        elif self.is_row():
            self.kind0 = self._new(self.contents)
            self.kind0.prep()
        elif self.is_fun_kind():
            items = _as_list(self.contents)
            self.kind0 = self._new(items[0])
            self.kind0.prep()
            self.kind1 = self._new(items[1])
            self.kind1.prep()
        elif self.is_named_kind():
            self.text = _ident_to_qname(self.contents)
        else:
            raise NotImplError("tagged-kind", self.tag, self.contents)


@dataclass
class CoreTagType(CoreTag):
    """A tagged type."""

    num: int = -1
    skolem: int = -1
    text: str = ""
    type0: Optional["CoreTagType"] = None
    type1: Optional["CoreTagType"] = None
    constr: Optional["CoreConstr"] = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "CoreTagType":
        data = _as_dict(data)
        return cls(
            tag=data.get("tag") or "",
            contents=data.get("contents"),
            num=data.get("n", 0),
            skolem=data.get("s", 0),
            text=data.get("t") or "",
            type0=cls.from_json(data["t0"]) if data.get("t0") is not None else None,
            type1=cls.from_json(data["t1"]) if data.get("t1") is not None else None,
            constr=CoreConstr.from_json(data["c"]) if data.get("c") is not None else None,
        )

    @staticmethod
    def _new(tc: Any) -> "CoreTagType":
        tag, contents = _tag_from(tc)
        return CoreTagType(tag=tag, contents=contents, num=-1, skolem=-1)

    def prep(self) -> None:
        """Interpret `contents` according to `tag`."""
        self.skolem, self.num = -1, -1
        tag = self.tag
        if tag == "TypeVar":
            self.text = _as_str(self.contents)
        elif tag == "ForAll":
            items = _as_list(self.contents)
            self.text = _as_str(items[0])
            self.type0 = self._new(items[1])
            self.type0.prep()
            if items[2] is not None:
                self.skolem = _as_int(items[2])
        elif tag == "TypeApp":
            items = _as_list(self.contents)
            self.type0 = self._new(items[0])
            self.type0.prep()
            self.type1 = self._new(items[1])
            self.type1.prep()
        elif tag == "TypeConstructor":
            self.text = _ident_to_qname(self.contents)
        elif tag == "ConstrainedType":
            items = _as_list(self.contents)
            self.type0 = self._new(items[1])
            self.type0.prep()
            constr = _as_dict(items[0])
            self.constr = CoreConstr(
                class_=constr.get("constraintClass"),
                data=constr.get("constraintData"),
                cls=_ident_to_qname(constr.get("constraintClass")),
                args=[self._new(ca) for ca in _as_list(constr.get("constraintArgs"))],
            )
            self.constr.prep()
        elif tag == "Skolem":
            items = _as_list(self.contents)
            self.text = _as_str(items[0])
            self.num = _as_int(items[1])
            self.skolem = _as_int(items[2])
        elif tag == "RCons":
            items = _as_list(self.contents)
            self.text = _as_str(items[0])
            self.type0 = self._new(items[1])
            self.type0.prep()
            self.type1 = self._new(items[2])
            self.type1.prep()
        elif tag == "REmpty" and self.contents is None:
            pass
        elif tag == "TypeLevelString":
            self.text = _as_str(self.contents)
        elif tag == "TUnknown":
            pass
        else:
            raise NotImplError("tagged-type", tag, self.contents)


@dataclass
class CoreConstr:
    """A type-class constraint."""

    class_: Any = None
    args: list[CoreTagType] = field(default_factory=list)
    data: Any = None
    cls: str = ""
    data_strs: list[list[str]] = field(default_factory=list)
    data_bool: bool = False

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "CoreConstr":
        data = _as_dict(data)
        return cls(
            class_=data.get("constraintClass"),
            args=[CoreTagType.from_json(a) for a in data.get("constraintArgs") or []],
            data=data.get("constraintData"),
        )

    def prep(self) -> None:
        """Resolve the class name and constraint data, then prepare the arguments."""
        if not self.cls:
            self.cls = _as_str(self.class_)
        if self.data is not None:
            items = _as_list(self.data)
            flag = items[1]
            if not isinstance(flag, bool):
                raise TypeError("expected a JSON boolean in constraint data")
            self.data_bool = flag
            self.data_strs = [
                [_as_str(s) for s in _as_list(sub)] for sub in _as_list(items[0])
            ]
        for arg in self.args:
            arg.prep()


@dataclass
class CoreAnnotationMeta:
    meta_type: str = ""
    constructor_type: str = ""
    constructor_idents: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "CoreAnnotationMeta":
        data = _as_dict(data)
        return cls(
            meta_type=data.get("metaType") or "",
            constructor_type=data.get("constructorType") or "",
            constructor_idents=list(data.get("identifiers") or []),
        )

    def is_constructor(self) -> bool:
        return self.meta_type == "IsConstructor"

    def is_foreign(self) -> bool:
        return self.meta_type == "IsForeign"

    def is_newtype(self) -> bool:
        return self.meta_type == "IsNewtype"

    def is_type_class_ctor(self) -> bool:
        return self.meta_type == "IsTypeClassConstructor"

    def is_ctor_sum_type(self) -> bool:
        return self.constructor_type == "SumType"

    def is_ctor_product_type(self) -> bool:
        return self.constructor_type == "ProductType"

    def prep(self) -> None:
        """Check that the meta type (and constructor type) is a known one."""
        is_ctor = self.is_constructor()
        if not (is_ctor or self.is_foreign() or self.is_newtype() or self.is_type_class_ctor()):
            raise NotImplError("CoreFn Annotation.MetaType", self.meta_type, self)
        if is_ctor and not (self.is_ctor_sum_type() or self.is_ctor_product_type()):
            raise NotImplError("CoreFn Annotation.ConstructorType", self.constructor_type, self)

    def __str__(self) -> str:
        return (
            self.meta_type + "::" + self.constructor_type + "❭" + "❬".join(self.constructor_idents)
        )


@dataclass
class CoreSourceSpan:
    name: str = ""
    start: list[int] = field(default_factory=list)
    end: list[int] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "CoreSourceSpan":
        data = _as_dict(data)
        return cls(
            name=data.get("name") or "",
            start=list(data.get("start") or []),
            end=list(data.get("end") or []),
        )


@dataclass
class CoreComment:
    line_comment: str = ""
    block_comment: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "CoreComment":
        data = _as_dict(data)
        return cls(
            line_comment=data.get("LineComment") or "",
            block_comment=data.get("BlockComment") or "",
        )


@dataclass
class CoreAnnotation:
    source_span: Optional[CoreSourceSpan] = None
    type: Optional[CoreTagType] = None
    comments: list[CoreComment] = field(default_factory=list)
    meta: Optional[CoreAnnotationMeta] = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "CoreAnnotation":
        data = _as_dict(data)
        span, typ, meta = data.get("sourceSpan"), data.get("type"), data.get("meta")
        return cls(
            source_span=CoreSourceSpan.from_json(span) if span is not None else None,
            type=CoreTagType.from_json(typ) if typ is not None else None,
            comments=[CoreComment.from_json(c) for c in data.get("comments") or []],
            meta=CoreAnnotationMeta.from_json(meta) if meta is not None else None,
        )

    def prep(self) -> None:
        if self.type is not None:
            self.type.prep()
        if self.meta is not None:
            self.meta.prep()


@dataclass
class CoreModuleRef:
    module_name: list[str] = field(default_factory=list)

    def is_module_name_nil(self) -> bool:
        return len(self.module_name) == 0