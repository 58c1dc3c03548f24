"""Ready-made mesh descriptors for simple shapes with extents -1 .. 1."""

from __future__ import annotations

from typing import Callable

from devbits.mesh import MeshDescF3V as V
from devbits.mesh import MeshDescriptor, new_mesh_desc_f3

MeshProvider = Callable[[], MeshDescriptor]


def mesh_descriptor_cube() -> MeshDescriptor:
    """A cube of 12 faces "t0".."t11", tagged front, back, top, bottom, right and left."""
    md = MeshDescriptor()
    md.add_normals(
        (0, 1, 0),  # top
        (1, 0, 0),  # right
        (0, 0, 1),  # back
        (-1, 0, 0),  # left
        (0, 0, -1),  # front
        (0, -1, 0),  # bottom
    )
    md.add_tex_coords((1, 0), (1, 1), (0, 0), (0, 1))
    u, d, l, r, f, b = 1, -1, -1, 1, -1, 1
    md.add_positions(
        (l, u, f), (l, u, b), (r, u, f), (r, u, b),
        (r, d, f), (r, d, b), (l, d, b), (l, d, f),
    )
    md.add_faces(
        new_mesh_desc_f3("top", "t0", V(0, 0, 0), V(1, 1, 0), V(2, 2, 0)),
        new_mesh_desc_f3("top", "t1", V(1, 1, 0), V(3, 3, 0), V(2, 2, 0)),
        new_mesh_desc_f3("right", "t2", V(2, 1, 1), V(3, 3, 1), V(4, 0, 1)),
        new_mesh_desc_f3("right", "t3", V(4, 0, 1), V(3, 3, 1), V(5, 2, 1)),
        new_mesh_desc_f3("back", "t4", V(5, 0, 2), V(3, 1, 2), V(1, 3, 2)),
        new_mesh_desc_f3("back", "t5", V(5, 0, 2), V(1, 3, 2), V(6, 2, 2)),
        new_mesh_desc_f3("left", "t6", V(6, 0, 3), V(1, 1, 3), V(0, 3, 3)),
        new_mesh_desc_f3("left", "t7", V(6, 0, 3), V(0, 3, 3), V(7, 2, 3)),
        new_mesh_desc_f3("front", "t8", V(0, 1, 4), V(2, 3, 4), V(7, 0, 4)),
        new_mesh_desc_f3("front", "t9", V(2, 3, 4), V(4, 2, 4), V(7, 0, 4)),
        new_mesh_desc_f3("bottom", "t10", V(7, 2, 5), V(4, 0, 5), V(6, 3, 5)),
        new_mesh_desc_f3("bottom", "t11", V(6, 3, 5), V(4, 0, 5), V(5, 1, 5)),
    )
    return md


def mesh_descriptor_plane() -> MeshDescriptor:
    """A flat ground plane of 2 faces "t0" and "t1", tagged "plane"."""
    md = MeshDescriptor()
    md.add_positions((-1, 0, 1), (1, 0, 1), (-1, 0, -1), (1, 0, -1))
    md.add_tex_coords((1000, 1000), (0, 1000), (1000, 0), (0, 0))
    md.add_normals((0, 1, 0))
    md.add_faces(
        new_mesh_desc_f3("plane", "t0", V(0, 0, 0), V(1, 1, 0), V(2, 2, 0)),
        new_mesh_desc_f3("plane", "t1", V(3, 3, 0), V(2, 2, 0), V(1, 1, 0)),
    )
    return md


def mesh_descriptor_pyramid() -> MeshDescriptor:
    """A pyramid of 4 faces "t0".."t3", tagged "pyr"."""
    md = MeshDescriptor()
    md.add_positions((0, 1, 0), (-1, -1, 1), (1, -1, 1), (1, -1, -1), (-1, -1, -1))
    md.add_tex_coords((0.5, 1), (0, 0), (1, 0))
    md.add_normals((0, 0, 1), (1, 0, 0), (0, 0, -1), (-1, 0, 0))
    md.add_faces(
        new_mesh_desc_f3("pyr", "t0", V(0, 0, 0), V(1, 1, 0), V(2, 2, 0)),
        new_mesh_desc_f3("pyr", "t1", V(0, 0, 1), V(2, 1, 1), V(3, 2, 1)),
        new_mesh_desc_f3("pyr", "t2", V(0, 0, 2), V(3, 1, 2), V(4, 2, 2)),
        new_mesh_desc_f3("pyr", "t3", V(0, 0, 3), V(4, 1, 3), V(1, 2, 3)),
    )
    return md


def mesh_descriptor_quad() -> MeshDescriptor:
    """A quad of 2 faces "t0" and "t1", tagged "quad"."""
    md = MeshDescriptor()
    md.add_positions((-1, -1, 0), (-1, 1, 0), (1, -1, 0), (1, 1, 0))
    md.add_tex_coords((1, 0), (1, 1), (0, 0), (0, 1))
    md.add_normals((0, 0, 1))
    md.add_faces(
        new_mesh_desc_f3("quad", "t0", V(0, 0, 0), V(1, 1, 0), V(2, 2, 0)),
        new_mesh_desc_f3("quad", "t1", V(1, 1, 0), V(3, 3, 0), V(2, 2, 0)),
    )
    return md


def mesh_descriptor_tri() -> MeshDescriptor:
    """A single triangle face "t0", tagged "tri"."""
    md = MeshDescriptor()
    md.add_positions((-1, -1, 0), (0, 1, 0), (1, -1, 0))
    md.add_tex_coords((0, 0), (0.5, 1), (1, 0))
    md.add_normals((0, 0, 1))
    md.add_faces(new_mesh_desc_f3("tri", "t0", V(0, 0, 0), V(1, 1, 0), V(2, 2, 0)))
    return md