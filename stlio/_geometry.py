"""
Vector algebra on :class:`Vector` values and the computed facet normal of a
:class:`Triangle`.
"""
import numpy as np

from ._mesh import Triangle, Vector


def sub(a: Vector, b: Vector) -> Vector:
    return Vector(a.x - b.x, a.y - b.y, a.z - b.z)


def cross(a: Vector, b: Vector) -> Vector:
    return Vector(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def length(v: Vector) -> float:
    return float(np.sqrt(v.x * v.x + v.y * v.y + v.z * v.z))


def scale(v: Vector, f: float) -> Vector:
    return Vector(float(v.x * f), float(v.y * f), float(v.z * f))


def facet_normal(triangle: Triangle) -> Vector:
    """Computes the unit normal of a triangle from its vertices.

    The orientation follows the right-hand rule for the winding
    ``vertices[0] -> vertices[1] -> vertices[2]``. The result may disagree with the
    stored ``triangle.normal``.

    For degenerate triangles (coincident or collinear vertices) the cross product
    has zero length, and every component of the returned vector is NaN.
    """
    v0, v1, v2 = triangle.vertices
    n = cross(sub(v1, v0), sub(v2, v0))
    # 1/0 -> inf, 0*inf -> nan
    with np.errstate(divide="ignore", invalid="ignore"):
        return scale(n, np.float64(1.0) / np.float64(length(n)))
