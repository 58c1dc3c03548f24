import pytest

from devbits.ps_core import NotImplError, set_unsanitize_replacements
from devbits.ps_imp import CoreExt, CoreImp, CoreImpAst


@pytest.fixture(autouse=True)
def _reset_replacements():
    set_unsanitize_replacements([])
    yield
    set_unsanitize_replacements([])


def test_core_ext_exports():
    ext = CoreExt.from_json(
        {"efExports": [{"ValueRef": ["a", "b"]}, {"TypeRef": ["T"], "TypeClassRef": ["C"]}]}
    )
    assert len(ext.exports) == 2
    assert ext.exports[0].value_ref == ["a", "b"]
    assert ext.exports[0].type_ref == []
    assert ext.exports[1].type_ref == ["T"]
    assert ext.exports[1].type_class_ref == ["C"]


def test_core_ext_rejects_non_object():
    with pytest.raises(TypeError):
        CoreExt.from_json([1, 2])


def test_ast_from_json_nested():
    ast = CoreImpAst.from_json(
        {
            "tag": "App",
            "App": {"tag": "Var", "Var": "f"},
            "args": [{"tag": "StringLiteral", "StringLiteral": "x"}, None],
            "params": ["p"],
            "ObjectLiteral": [{"k": {"tag": "Var", "Var": "v"}}],
        }
    )
    assert ast.ast_tag == "App"
    assert ast.app.var == "f"
    assert ast.ast_appl_args[0].string_literal == "x"
    assert ast.ast_appl_args[1] is None
    assert ast.ast_func_params == ["p"]
    assert ast.object_literal[0]["k"].var == "v"


def test_init_sets_parent_and_root():
    imp = CoreImp()
    top = CoreImpAst.from_json({"tag": "Return", "Return": {"tag": "Var", "Var": "y"}})
    (out,) = imp.init_sub_asts(None, top)
    assert out is top
    assert out.parent is None
    assert out.root is imp
    assert out.return_.parent is top
    assert out.return_.root is imp


def test_comment_lifted_onto_decl():
    imp = CoreImp()
    ast = CoreImpAst.from_json(
        {
            "tag": "Comment",
            "Comment": [{"LineComment": "hello"}],
            "decl": {"tag": "VariableIntroduction", "VariableIntroduction": "x"},
        }
    )
    (out,) = imp.init_sub_asts(None, ast)
    assert out.ast_tag == "VariableIntroduction"
    assert out.variable_introduction == "x"
    assert out.comment[0].line_comment == "hello"
    assert ast.ast_comment_decl is None


def test_nested_comment_raises():
    imp = CoreImp()
    imp.init_ast_on_loaded("some/file.json")
    assert imp.imp_file_path == "some/file.json"
    ast = CoreImpAst.from_json(
        {"tag": "Comment", "decl": {"tag": "Comment", "decl": {"tag": "Var"}}}
    )
    with pytest.raises(NotImplError):
        imp.init_sub_asts(None, ast)


def test_inner_named_function_bound_to_var():
    imp = CoreImp()
    outer = CoreImpAst.from_json(
        {"tag": "Function", "Function": "outer", "Block": [{"tag": "Function", "Function": "inner"}]}
    )
    (out,) = imp.init_sub_asts(None, outer)
    assert out.function == "outer"
    wrapped = out.block[0]
    assert wrapped.ast_tag == "VariableIntroduction"
    assert wrapped.variable_introduction == "inner"
    assert wrapped.parent is out
    assert wrapped.ast_right.ast_tag == "Function"
    assert wrapped.ast_right.function == ""
    assert wrapped.ast_right.parent is wrapped


def test_not_boolean_folded():
    imp = CoreImp()
    parent = CoreImpAst(ast_tag="Block")
    neg = CoreImpAst.from_json(
        {"tag": "Unary", "op": "Not", "Unary": {"tag": "BooleanLiteral", "BooleanLiteral": True}}
    )
    (out,) = imp.init_sub_asts(parent, neg)
    assert out.ast_tag == "BooleanLiteral"
    assert out.boolean_literal is False
    assert out.parent is parent
    assert parent.root is imp


def test_unsanitize_applied_to_names():
    set_unsanitize_replacements([("$prime", "'")])
    imp = CoreImp()
    ast = CoreImpAst.from_json(
        {
            "tag": "Function",
            "params": ["a$prime"],
            "Block": [{"tag": "Var", "Var": "b$prime"}],
            "ObjectLiteral": [{"c$prime": {"tag": "Var", "Var": "d"}}],
        }
    )
    (out,) = imp.init_sub_asts(None, ast)
    assert out.ast_func_params == ["a'"]
    assert out.block[0].var == "b'"
    assert list(out.object_literal[0]) == ["c'"]
    assert out.object_literal[0]["c'"].parent is out


def test_prep_valid_env():
    imp = CoreImp.from_json(
        {"declEnv": {"names": {"f": {"nVis": "Defined", "nKind": "Public", "nType": None}}}}
    )
    imp.prep()
    assert imp.decl_env.functions["f"].is_kind_public()


def test_prep_invalid_env_raises():
    imp = CoreImp.from_json({"declEnv": {"names": {"f": {"nVis": "Odd", "nKind": "Public"}}}})
    with pytest.raises(NotImplError):
        imp.prep()