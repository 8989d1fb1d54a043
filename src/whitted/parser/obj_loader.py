# parser/obj_loader.py
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from whitted.core.vector import Vector4, point
from whitted.geometry.group import Group
from whitted.geometry.triangle import Triangle
from whitted.materials.material import Material

logger = logging.getLogger(__name__)


class ObjParseError(ValueError):
    """A vertex or face record in an OBJ file could not be understood."""

    def __init__(self, line_num: int, line: str, reason: str):
        super().__init__(f"line {line_num}: {reason}: {line!r}")
        self.line_num = line_num
        self.line = line
        self.reason = reason


@dataclass
class ObjModel:
    """
    The result of parsing an OBJ file.

    Attributes:
        vertices: Vertex positions in file order (OBJ indices are 1-based).
        default_group: Triangles declared before any "g" statement.
        groups: Named groups, in the order they first appear.
        ignored_lines: Count of statements the parser does not handle.
    """
    vertices: List[Vector4] = field(default_factory=list)
    default_group: Group = field(default_factory=Group)
    groups: Dict[str, Group] = field(default_factory=dict)
    ignored_lines: int = 0

    def triangles(self) -> List[Triangle]:
        result = list(self.default_group.children)
        for group in self.groups.values():
            result.extend(group.children)
        return result

    def to_group(self) -> Group:
        """
        Moves every triangle and named group under a single new group.
        The model's own groups are emptied in the process.
        """
        root = Group()
        for triangle in list(self.default_group.children):
            self.default_group.remove_child(triangle)
            root.add_child(triangle)
        for group in self.groups.values():
            root.add_child(group)
        self.groups = {}
        return root


def _parse_vertex_index(token: str, vertex_count: int, line_num: int, line: str) -> int:
    # "i", "i/t", "i//n" and "i/t/n" all start with the vertex index.
    try:
        index = int(token.split("/")[0])
    except ValueError:
        raise ObjParseError(line_num, line, f"bad vertex reference {token!r}") from None
    if index < 0:
        # Negative indices count back from the latest vertex.
        index = vertex_count + index + 1
    if not 1 <= index <= vertex_count:
        raise ObjParseError(line_num, line, f"vertex {token} does not exist")
    return index - 1


def parse_obj(text: str, material: Optional[Material] = None) -> ObjModel:
    """
    Parses OBJ text into triangles.

    Faces with more than three vertices are fan triangulated. Only "v",
    "f" and "g" statements are understood; everything else is counted in
    ObjModel.ignored_lines.

    Raises:
        ObjParseError: on malformed vertices or faces.
    """
    model = ObjModel()
    current = model.default_group

    for line_num, line in enumerate(text.splitlines(), 1):
        values = line.split()
        if not values or values[0].startswith("#"):
            continue
        keyword = values[0]

        if keyword == "v":
            if len(values) < 4:
                raise ObjParseError(line_num, line, "vertex needs three coordinates")
            try:
                model.vertices.append(point(float(values[1]), float(values[2]), float(values[3])))
            except ValueError:
                raise ObjParseError(line_num, line, "vertex coordinates must be numbers") from None
        elif keyword == "f":
            if len(values) < 4:
                raise ObjParseError(line_num, line, "face needs at least three vertices")
            indices = [_parse_vertex_index(v, len(model.vertices), line_num, line)
                       for v in values[1:]]
            verts = model.vertices
            for i in range(1, len(indices) - 1):
                tri = Triangle(verts[indices[0]], verts[indices[i]], verts[indices[i + 1]])
                if material is not None:
                    tri.material = material
                current.add_child(tri)
        elif keyword == "g":
            name = " ".join(values[1:]) or "default"
            if name not in model.groups:
                model.groups[name] = Group()
            current = model.groups[name]
        else:
            model.ignored_lines += 1
            logger.debug("Ignoring OBJ line %d: %s", line_num, line.strip())

    logger.info("Parsed OBJ: %d vertices, %d triangles, %d named groups, %d ignored lines",
                len(model.vertices), len(model.triangles()), len(model.groups),
                model.ignored_lines)
    return model


def load_obj(filename: Union[str, Path], material: Optional[Material] = None) -> ObjModel:
    """Load a model from an OBJ file."""
    logger.info("Opening file: %s", filename)
    text = Path(filename).read_text(encoding="utf-8")
    return parse_obj(text, material)
