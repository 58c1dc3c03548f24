# devbits

A library of helpers for building developer tools: parsing tool output into
source-located messages, running Go linters, indexing Go packages, reading
compiler core JSON dumps, and a few small 3D spatial types. It has no
dependencies outside the standard library.

## Modules

### Source messages and linters

- `devbits.srcmsg`: the `SrcMsg` dataclass (`ref`, `msg`, `pos1_ln`, `pos1_ch`,
  `pos2_ln`, `pos2_ch`, `misc`, `flag`, `data`).
  `src_msg_from_ln` parses one `file:line:col: message` line (returning `None`
  if the line has fewer than three `:`-separated parts or no file part);
  `src_msgs_from_lns` parses many, appending unparsable lines to the previous
  message. `sort_src_msgs` orders by message text, `ln_relify(ln, src_dir)` makes
  a path relative to `src_dir`. `cmd_exec_on_src` / `cmd_exec_on_src_in` run a
  command (optionally with stderr merged in, optionally rewriting each output
  line through a `reline` function) and return the parsed messages.
- `devbits.golint`: `lint_golint`, `lint_go_vet`, `lint_errcheck`, `lint_check`,
  `lint_ineff_assign`, `lint_via_pkg_imp_path`, `lint_mv_dan`, `lint_honnef`,
  `lint_go_const`, `lint_go_simple` run the respective tool and return `SrcMsg`
  lists. `golint_censored(msg)` tells whether a golint message is of an ignored kind.
- `devbits.hlint`: `hlint_command(paths)` builds the hlint command line, and
  `parse_hlint(json_output, paths)` turns hlint's JSON report into `SrcMsg`s
  (skipping severity `Error`). `Hlint.from_dict` decodes one report entry.

### Go workspaces and packages

- `devbits.goenv`: `all_go_paths` (from `GOPATH` unless set with `set_go_paths`),
  `gopath_src`, `gopath_src_github`, `dir_path_to_import_path`, and
  `go_version_short` (`"1.15.2"` → `"1.15"`).
- `devbits.gopkgs`: `Pkg` and `PackageError` records, and `PkgIndex`, built from
  the text printed by `go list -e -json all` via `PkgIndex.from_go_list_output`.
  It offers `dependants`, `importers`, `pkgs_by_name`, `pkgs_for_files`,
  `shorten_imp_paths`, `imp_paths_to_names_in_ln`, `guru_minimal_scope_for` and
  `guru_scope_exclusions`. `Pkg.count_loc` approximates non-comment lines.

### Data helpers

- `devbits.sqlcursor`: `execute(execer, is_insert, query, *args)` returns the last
  row id or the affected row count; `SqlCursor` turns DB-API rows into dicts
  keyed by column name, decoding bytes to `str`.
- `devbits.mongo`: `connect_url(host, port, direct)` and `sparse(doc)`, which
  deletes empty-key and zero/empty-valued entries (keeping `_id`).
- `devbits.bower`: `BowerFile` (with `repository_url_parsed`) and `load_from_file`.

### Compiler core JSON

- `devbits.ps_core`: tagged kinds and types (`CoreTagKind`, `CoreTagType`),
  `CoreConstr`, `CoreAnnotation`, `CoreAnnotationMeta`, `CoreComment`,
  `CoreSourceSpan`, `CoreModuleRef`, the `NotImplError` exception, and
  `set_unsanitize_replacements` / `unsanitize` for name rewriting.
- `devbits.ps_env`: `CoreEnv` and its declaration records (`CoreEnvClass`,
  `CoreEnvInst`, `CoreEnvTypeSyn`, `CoreEnvTypeDef`, `CoreEnvTypeCtor`, `CoreEnvName`, …).
- `devbits.ps_fn`: `CoreFn` modules, declarations (`CoreFnDecl`, `CoreFnDeclBind`),
  expressions (decoded by `parse_expr`), binders and literals.
- `devbits.ps_imp`: `CoreImp` (its declaration environment and AST
  normalisation via `init_sub_asts`), `CoreImpAst`, and `CoreExt` export lists.

Every model has a `from_json` (or is built from one) that takes decoded JSON, and
a `prep` method that interprets tagged contents and raises `NotImplError` on
constructs it does not handle.

### 3D

- `devbits.aabb`: immutable `Vec3` and the `AaBb` axis-aligned box.
- `devbits.bounds`: `Bounds` (sphere radius plus box).
- `devbits.perspective`: `Perspective` and `FovY` (`FovY.from_degrees`); the
  default vertical field of view is 37.8493 degrees.
- `devbits.frustum`: `Frustum` with `update_ratio`, `update_axes`,
  `update_coords`, `update_planes`, `update_planes_gh`, and the culling tests
  `has_point` and `has_sphere`.
- `devbits.mesh`, `devbits.meshes`: `MeshDescriptor` data and ready-made meshes
  `mesh_descriptor_cube`, `_plane`, `_pyramid`, `_quad`, `_tri`.

## Install

```
pip install .
```

## Examples

```python
from devbits.srcmsg import src_msgs_from_lns

msgs = src_msgs_from_lns(["main.go:12:4: unused variable x", "  more detail"])
msgs[0].ref, msgs[0].pos1_ln, msgs[0].pos1_ch  # ('main.go', 12, 4)
msgs[0].msg                                    # 'unused variable x\n  more detail'
```

```python
import sqlite3
from devbits.sqlcursor import SqlCursor, execute

conn = sqlite3.connect(":memory:")
execute(conn, False, "CREATE TABLE t (name TEXT)")
row_id = execute(conn, True, "INSERT INTO t VALUES (?)", "a")
cur = conn.execute("SELECT name FROM t")
sc = SqlCursor()
sc.prepare_columns(cur)
[sc.scan(row) for row in cur]  # [{'name': 'a'}]
```

```python
from devbits.mongo import connect_url, sparse

connect_url("localhost", 27017, True)   # 'localhost:27017?connect=direct'
sparse({"a": "", "b": 0, "c": 1})       # {'c': 1}
```

```python
from devbits.aabb import Vec3
from devbits.frustum import Frustum
from devbits.perspective import Perspective

persp = Perspective(z_near=1.0, z_far=100.0)
fr = Frustum()
fr.update_ratio(persp, 16 / 9)
fr.update_axes_coords_planes(persp, Vec3(), Vec3(0, 0, 1), Vec3(0, 1, 0), None)
fr.has_point(Vec3(), Vec3(0, 0, -5), persp.z_near, persp.z_far)
```

```python
from devbits.meshes import mesh_descriptor_cube

len(mesh_descriptor_cube().faces)  # 12
```

## What it does not do

- It does not detect which Go or Haskell tools are installed, and it does not
  run `go list` itself: `PkgIndex` is built from output you supply.
- It has no wrappers for code-navigation or refactoring tools (definition
  lookup, completion, renaming).
- `hlint` is not run by the package; `hlint_command` gives the command line and
  `parse_hlint` reads its output.
- `devbits.mongo` does not open database connections.
- There is no command-line program.

## Tests

```
pip install .[test]
pytest
```