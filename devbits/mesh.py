"""Descriptive, not yet processed mesh source data."""

from __future__ import annotations

from dataclasses import dataclass, field

VA2 = tuple[float, float]
VA3 = tuple[float, float, float]


@dataclass(frozen=True)
class MeshDescF3V:
    """An indexed vertex of a triangle face."""

    pos_index: int = 0
    tex_coord_index: int = 0
    normal_index: int = 0


@dataclass
class MeshDescF3:
    """An indexed triangle face with an ID and classification tags."""

    v: tuple[MeshDescF3V, MeshDescF3V, MeshDescF3V]
    id: str = ""
    tags: list[str] = field(default_factory=list)


def new_mesh_desc_f3(tags: str, id: str, *verts: MeshDescF3V) -> MeshDescF3:
    """Create a face from its first three vertices; `tags` is split on spaces."""
    if len(verts) < 3:
        raise ValueError(f"a triangle face needs 3 vertices, got {len(verts)}")
    return MeshDescF3(
        v=(verts[0], verts[1], verts[2]),
        id=id,
        tags=tags.split(" ") if tags else [],
    )


@dataclass
class MeshDescriptor:
    """Vertex attributes and indexed triangles of a mesh."""

    positions: list[VA3] = field(default_factory=list)
    tex_coords: list[VA2] = field(default_factory=list)
    normals: list[VA3] = field(default_factory=list)
    faces: list[MeshDescF3] = field(default_factory=list)

    def add_faces(self, *faces: MeshDescF3) -> None:
        self.faces.extend(faces)

    def add_positions(self, *positions: VA3) -> None:
        self.positions.extend(positions)

    def add_normals(self, *normals: VA3) -> None:
        self.normals.extend(normals)

    def add_tex_coords(self, *tex_coords: VA2) -> None:
        self.tex_coords.extend(tex_coords)