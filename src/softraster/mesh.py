from __future__ import annotations

from collections import namedtuple
from pathlib import Path

from .linalg import Vec3

TRIANGLE = "triangle"
POLYGON = "polygon"
LINE = "line"
POINT = "point"

# vertices: indices into the object's vertex list.
# tex_coords: matching indices into its texture coordinate list, or None.
Face = namedtuple("Face", ["kind", "vertices", "tex_coords"])


class MeshParseError(ValueError):
    def __init__(self, message: str, source: str = "<string>", line_no: int | None = None):
        self.source = source
        self.line_no = line_no
        where = source if line_no is None else f"{source}:{line_no}"
        super().__init__(f"{where}: {message}")


class MeshObject:
    def __init__(self, name: str, vertices: list[Vec3], tex_coords: list[Vec3]):
        self.name = name
        self.vertices = vertices
        self.tex_coords = tex_coords
        self.faces: list[Face] = []

    def __repr__(self):
        return f"MeshObject({self.name!r}, faces={len(self.faces)})"


class Mesh:
    """Parsed mesh: objects in file order.

    OBJ indices are file-wide, so every object shares one vertex list and
    one texture coordinate list.
    """

    def __init__(self, objects: list[MeshObject] | None = None):
        self.objects = objects if objects is not None else []

    def face_count(self) -> int:
        return sum(len(o.faces) for o in self.objects)

    def __iter__(self):
        return iter(self.objects)

    def __len__(self):
        return len(self.objects)


def _floats(parts: list[str], count: int, source: str, line_no: int) -> list[float]:
    try:
        return [float(p) for p in parts[:count]]
    except ValueError:
        raise MeshParseError(f"bad number in {' '.join(parts)!r}", source, line_no) from None


def _resolve(token: str, size: int, what: str, source: str, line_no: int) -> int:
    try:
        idx = int(token)
    except ValueError:
        raise MeshParseError(f"bad {what} index {token!r}", source, line_no) from None
    # 1-based; negative counts back from the last element defined so far.
    resolved = idx - 1 if idx > 0 else size + idx
    if idx == 0 or not 0 <= resolved < size:
        raise MeshParseError(f"{what} index {idx} out of range (have {size})", source, line_no)
    return resolved


def _refs(parts, n_vertices, n_tex, source, line_no):
    verts = []
    texs = []
    for ref in parts:
        # v, v/vt, v/vt/vn, v//vn
        fields = ref.split("/")
        verts.append(_resolve(fields[0], n_vertices, "vertex", source, line_no))
        if len(fields) > 1 and fields[1]:
            texs.append(_resolve(fields[1], n_tex, "texture", source, line_no))
        else:
            texs.append(None)
    return tuple(verts), tuple(texs)


def parse_obj(text: str, source: str = "<string>", triangulate: bool = False) -> Mesh:
    """Parse Wavefront OBJ text.

    Faces with more than three corners stay as polygon faces unless
    ``triangulate`` fans them into triangles. ``l`` and ``p`` statements
    become line and point faces. ``o`` and ``g`` both start a new object.
    Unknown statements are ignored.
    """
    vertices: list[Vec3] = []
    tex_coords: list[Vec3] = []
    objects: list[MeshObject] = []
    current = MeshObject(Path(source).stem or "default", vertices, tex_coords)
    objects.append(current)

    for line_no, raw in enumerate(text.splitlines(), start=1):
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue
        parts = line.split()
        cmd, args = parts[0], parts[1:]

        if cmd == "v":
            if len(args) < 3:
                raise MeshParseError("vertex needs 3 coordinates", source, line_no)
            vertices.append(Vec3(*_floats(args, 3, source, line_no)))

        elif cmd == "vt":
            if not args:
                raise MeshParseError("texture coordinate needs a value", source, line_no)
            uvw = _floats(args, 3, source, line_no) + [0.0, 0.0]
            tex_coords.append(Vec3(*uvw[:3]))

        elif cmd in ("o", "g"):
            name = " ".join(args) or f"object{len(objects)}"
            if current.faces:
                current = MeshObject(name, vertices, tex_coords)
                objects.append(current)
            else:
                current.name = name

        elif cmd == "f":
            if len(args) < 3:
                raise MeshParseError("face needs at least 3 vertices", source, line_no)
            verts, texs = _refs(args, len(vertices), len(tex_coords), source, line_no)
            if len(verts) == 3:
                current.faces.append(Face(TRIANGLE, verts, texs))
            elif triangulate:
                for i in range(1, len(verts) - 1):
                    current.faces.append(
                        Face(
                            TRIANGLE,
                            (verts[0], verts[i], verts[i + 1]),
                            (texs[0], texs[i], texs[i + 1]),
                        )
                    )
            else:
                current.faces.append(Face(POLYGON, verts, texs))

        elif cmd == "l":
            if len(args) < 2:
                raise MeshParseError("line needs at least 2 vertices", source, line_no)
            verts, texs = _refs(args, len(vertices), len(tex_coords), source, line_no)
            current.faces.append(Face(LINE, verts, texs))

        elif cmd == "p":
            if not args:
                raise MeshParseError("point needs a vertex", source, line_no)
            verts, texs = _refs(args, len(vertices), len(tex_coords), source, line_no)
            current.faces.append(Face(POINT, verts, texs))

    return Mesh(objects)


def load_obj(path, triangulate: bool = False) -> Mesh:
    path = Path(path)
    with open(path, "r", encoding="utf-8", errors="ignore") as f:
        text = f.read()
    return parse_obj(text, source=str(path), triangulate=triangulate)
