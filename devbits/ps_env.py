"""Top-level declarations of a compiled module: type synonyms, data types, classes, instances, names."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, TypeVar

from devbits.ps_core import CoreConstr, CoreTagKind, CoreTagType, NotImplError

T = TypeVar("T")


def _opt(parser: Callable[[Any], T], value: Any) -> Optional[T]:
    return parser(value) if value is not None else None


def _kind(value: Any) -> Optional[CoreTagKind]:
    return _opt(CoreTagKind.from_json, value)


def _type(value: Any) -> Optional[CoreTagType]:
    return _opt(CoreTagType.from_json, value)


def _types(values: Any) -> list[CoreTagType]:
    return [CoreTagType.from_json(v) for v in values or []]


def _constrs(values: Any) -> list[CoreConstr]:
    return [CoreConstr.from_json(v) for v in values or []]


def _prep_all(*items: Any) -> None:
    for item in items:
        if item is not None:
            item.prep()


@dataclass
class CoreEnvClassArg:
    name: str = ""
    kind: Optional[CoreTagKind] = None

    def prep(self) -> None:
        _prep_all(self.kind)


@dataclass
class CoreEnvClassMember:
    ident: str = ""
    type: Optional[CoreTagType] = None

    def prep(self) -> None:
        _prep_all(self.type)


@dataclass
class CoreEnvClass:
    """A type class: arguments, members, superclasses and functional dependencies."""

    covering_sets: list[list[int]] = field(default_factory=list)
    determined_args: list[int] = field(default_factory=list)
    args: list[CoreEnvClassArg] = field(default_factory=list)
    members: list[CoreEnvClassMember] = field(default_factory=list)
    superclasses: list[CoreConstr] = field(default_factory=list)
    dependencies: list[tuple[list[int], list[int]]] = field(default_factory=list)

    def prep(self) -> None:
        _prep_all(*self.args, *self.members, *self.superclasses)


@dataclass
class CoreEnvInst:
    """A type-class instance dictionary."""

    chain: list[str] = field(default_factory=list)
    index: int = 0
    value: str = ""
    path: list[tuple[str, int]] = field(default_factory=list)
    class_name: str = ""
    instance_types: list[CoreTagType] = field(default_factory=list)
    dependencies: list[CoreConstr] = field(default_factory=list)

    def prep(self) -> None:
        if self.path:
            raise NotImplError("tcdPath", self.path[0][0], "'typeClassDictionaries'")
        if self.index != 0:
            raise NotImplError("tcdIndex", str(self.index), "'typeClassDictionaries'")
        _prep_all(*self.instance_types, *self.dependencies)


@dataclass
class CoreEnvTypeSyn:
    """A type alias: its (name, kind) arguments and the aliased type."""

    args: list[tuple[str, Optional[CoreTagKind]]] = field(default_factory=list)
    type: Optional[CoreTagType] = None

    def prep(self) -> None:
        _prep_all(self.type)
        _prep_all(*(kind for _, kind in self.args))


@dataclass
class CoreEnvTypeCtor:
    """A data constructor."""

    decl: str = ""
    type: str = ""
    ctor: Optional[CoreTagType] = None
    args: list[str] = field(default_factory=list)

    def is_decl_data(self) -> bool:
        return self.decl == "data"

    def is_decl_newtype(self) -> bool:
        return self.decl == "newtype"

    def prep(self) -> None:
        if not (self.is_decl_data() or self.is_decl_newtype()):
            raise NotImplError("cDecl", self.decl, "'dataConstructors'")
        _prep_all(self.ctor)


@dataclass
class CoreEnvTypeData:
    """A data type: its (name, kind) arguments and its (name, field types) constructors."""

    args: list[tuple[str, Optional[CoreTagKind]]] = field(default_factory=list)
    ctors: list[tuple[str, list[CoreTagType]]] = field(default_factory=list)

    def prep(self) -> None:
        _prep_all(*(kind for _, kind in self.args))
        for _, types in self.ctors:
            _prep_all(*types)


@dataclass
class CoreEnvTypeDecl:
    type_synonym: bool = False
    extern_data: bool = False
    local_type_variable: bool = False
    scoped_type_var: bool = False
    data_type: Optional[CoreEnvTypeData] = None

    def prep(self) -> None:
        if self.local_type_variable:
            raise NotImplError("tDecl", "LocalTypeVariable", "'types'")
        if self.scoped_type_var:
            raise NotImplError("tDecl", "ScopedTypeVar", "'types'")
        _prep_all(self.data_type)


@dataclass
class CoreEnvTypeDef:
    kind: Optional[CoreTagKind] = None
    decl: Optional[CoreEnvTypeDecl] = None

    def prep(self) -> None:
        _prep_all(self.kind, self.decl)


@dataclass
class CoreEnvName:
    """The signature of a top-level value."""

    vis: str = ""
    kind: str = ""
    type: Optional[CoreTagType] = None

    def is_vis_defined(self) -> bool:
        return self.vis == "Defined"

    def is_vis_undefined(self) -> bool:
        return self.vis == "Undefined"

    def is_kind_private(self) -> bool:
        return self.kind == "Private"

    def is_kind_public(self) -> bool:
        return self.kind == "Public"

    def is_kind_external(self) -> bool:
        return self.kind == "External"

    def prep(self) -> None:
        if not (self.is_vis_defined() or self.is_vis_undefined()):
            raise NotImplError("nVis", self.vis, "'names'")
        if not (self.is_kind_public() or self.is_kind_private() or self.is_kind_external()):
            raise NotImplError("nKind", self.kind, "'names'")
        _prep_all(self.type)


def _named_args(values: Any, name_key: str, kind_key: str) -> list[tuple[str, Optional[CoreTagKind]]]:
    return [(v.get(name_key) or "", _kind(v.get(kind_key))) for v in values or []]


def _parse_class(d: dict[str, Any]) -> CoreEnvClass:
    return CoreEnvClass(
        covering_sets=[list(s) for s in d.get("tcCoveringSets") or []],
        determined_args=list(d.get("tcDeterminedArgs") or []),
        args=[
            CoreEnvClassArg(name=a.get("tcaName") or "", kind=_kind(a.get("tcaKind")))
            for a in d.get("tcArgs") or []
        ],
        members=[
            CoreEnvClassMember(ident=m.get("tcmIdent") or "", type=_type(m.get("tcmType")))
            for m in d.get("tcMembers") or []
        ],
        superclasses=_constrs(d.get("tcSuperclasses")),
        dependencies=[
            (list(dep.get("determiners") or []), list(dep.get("determined") or []))
            for dep in d.get("tcDependencies") or []
        ],
    )


def _parse_inst(d: dict[str, Any]) -> CoreEnvInst:
    return CoreEnvInst(
        chain=list(d.get("tcdChain") or []),
        index=d.get("tcdIndex") or 0,
        value=d.get("tcdValue") or "",
        path=[(p.get("tcdpClass") or "", p.get("tcdpInt") or 0) for p in d.get("tcdPath") or []],
        class_name=d.get("tcdClassName") or "",
        instance_types=_types(d.get("tcdInstanceTypes")),
        dependencies=_constrs(d.get("tcdDependencies")),
    )


def _parse_type_syn(d: dict[str, Any]) -> CoreEnvTypeSyn:
    return CoreEnvTypeSyn(
        args=_named_args(d.get("tsArgs"), "tsaName", "tsaKind"),
        type=_type(d.get("tsType")),
    )


def _parse_type_data(d: dict[str, Any]) -> CoreEnvTypeData:
    return CoreEnvTypeData(
        args=_named_args(d.get("dtArgs"), "dtaName", "dtaKind"),
        ctors=[(c.get("dtcName") or "", _types(c.get("dtcTypes"))) for c in d.get("dtCtors") or []],
    )


def _parse_type_decl(d: dict[str, Any]) -> CoreEnvTypeDecl:
    return CoreEnvTypeDecl(
        type_synonym=bool(d.get("TypeSynonym")),
        extern_data=bool(d.get("ExternData")),
        local_type_variable=bool(d.get("LocalTypeVariable")),
        scoped_type_var=bool(d.get("ScopedTypeVar")),
        data_type=_opt(_parse_type_data, d.get("DataType")),
    )


def _parse_type_def(d: dict[str, Any]) -> CoreEnvTypeDef:
    return CoreEnvTypeDef(kind=_kind(d.get("tKind")), decl=_opt(_parse_type_decl, d.get("tDecl")))


def _parse_ctor(d: dict[str, Any]) -> CoreEnvTypeCtor:
    return CoreEnvTypeCtor(
        decl=d.get("cDecl") or "",
        type=d.get("cType") or "",
        ctor=_type(d.get("cCtor")),
        args=list(d.get("cArgs") or []),
    )


def _parse_name(d: dict[str, Any]) -> CoreEnvName:
    return CoreEnvName(vis=d.get("nVis") or "", kind=d.get("nKind") or "", type=_type(d.get("nType")))


def _parse_map(parser: Callable[[Any], T], values: Any) -> dict[str, T]:
    return {key: parser(val) for key, val in (values or {}).items()}


@dataclass
class CoreEnv:
    """All top-level declarations of a module."""

    type_syns: dict[str, CoreEnvTypeSyn] = field(default_factory=dict)
    type_defs: dict[str, CoreEnvTypeDef] = field(default_factory=dict)
    data_ctors: dict[str, CoreEnvTypeCtor] = field(default_factory=dict)
    classes: dict[str, CoreEnvClass] = field(default_factory=dict)
    class_dicts: list[dict[str, dict[str, CoreEnvInst]]] = field(default_factory=list)
    functions: dict[str, CoreEnvName] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "CoreEnv":
        if not isinstance(data, dict):
            raise TypeError("declaration environment must be a JSON object")
        return cls(
            type_syns=_parse_map(_parse_type_syn, data.get("typeSynonyms")),
            type_defs=_parse_map(_parse_type_def, data.get("types")),
            data_ctors=_parse_map(_parse_ctor, data.get("dataConstructors")),
            classes=_parse_map(_parse_class, data.get("typeClasses")),
            class_dicts=[
                {cls_name: _parse_map(_parse_inst, insts) for cls_name, insts in (m or {}).items()}
                for m in data.get("typeClassDictionaries") or []
            ],
            functions=_parse_map(_parse_name, data.get("names")),
        )

    def prep(self) -> None:
        """Prepare every declaration, raising NotImplError on unhandled constructs."""
        _prep_all(*self.type_syns.values())
        _prep_all(*self.type_defs.values())
        _prep_all(*self.data_ctors.values())
        _prep_all(*self.classes.values())
        for tcdmap in self.class_dicts:
            for submap in tcdmap.values():
                _prep_all(*submap.values())
        _prep_all(*self.functions.values())