"""Scene objects that a ray can hit: spheres, triangles and squares."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod

from hlabgfx.geometry import Hit, Ray, Vec2, Vec3
from hlabgfx.texture import Texture

_PARALLEL_EPSILON = 1e-2


class SceneObject(ABC):
    """Base for renderable objects, holding their Phong material."""

    def __init__(self, color: Vec3 = Vec3(1.0, 1.0, 1.0)):
        self.amb = color
        self.dif = color
        self.spec = color
        self.alpha = 10.0
        self.reflection = 0.0
        self.transparency = 0.0
        self.amb_texture: Texture | None = None
        self.dif_texture: Texture | None = None

    @abstractmethod
    def check_ray_collision(self, ray: Ray) -> Hit:
        """Return the nearest hit of ``ray`` with this object, or a miss."""


class Sphere(SceneObject):
    """A sphere given by its centre and radius."""

    def __init__(self, center: Vec3, radius: float, color: Vec3 = Vec3(1.0, 1.0, 1.0)):
        super().__init__(color)
        self.center = center
        self.radius = radius

    def check_ray_collision(self, ray: Ray) -> Hit:
        """Intersect a ray with a unit-length direction against the sphere."""
        hit = Hit()
        offset = ray.start - self.center
        b = 2.0 * ray.direction.dot(offset)
        c = offset.dot(offset) - self.radius * self.radius
        det = b * b - 4.0 * c
        if det >= 0.0:
            root = math.sqrt(det)
            d1 = (-b - root) / 2.0
            d2 = (-b + root) / 2.0
            hit.d = min(d1, d2)
            # The ray may start inside the sphere, e.g. while refracting.
            if hit.d < 0.0:
                hit.d = max(d1, d2)
            hit.point = ray.start + ray.direction * hit.d
            hit.normal = (hit.point - self.center).normalized()
        return hit


def intersect_ray_triangle(
    orig: Vec3, direction: Vec3, v0: Vec3, v1: Vec3, v2: Vec3
) -> tuple[Vec3, Vec3, float, float, float] | None:
    """Intersect a ray with a front-facing triangle.

    Returns ``(point, face_normal, t, w0, w1)`` where ``w0`` and ``w1`` are the
    barycentric weights of ``v0`` and ``v1``, or ``None`` when there is no hit.
    """
    face_normal = (v1 - v0).cross(v2 - v0).normalized()

    if (-direction).dot(face_normal) < 0.0:
        return None
    if abs(direction.dot(face_normal)) < _PARALLEL_EPSILON:
        return None

    t = (v0.dot(face_normal) - orig.dot(face_normal)) / direction.dot(face_normal)
    if t < 0.0:
        return None

    point = orig + direction * t

    cross0 = (point - v2).cross(v1 - v2)
    cross1 = (point - v0).cross(v2 - v0)
    cross2 = (v1 - v0).cross(point - v0)
    if any(c.dot(face_normal) < 0.0 for c in (cross0, cross1, cross2)):
        return None

    area0 = cross0.length() * 0.5
    area1 = cross1.length() * 0.5
    area2 = cross2.length() * 0.5
    area_sum = area0 + area1 + area2

    return point, face_normal, t, area0 / area_sum, area1 / area_sum


class Triangle(SceneObject):
    """A single-sided triangle with per-vertex texture coordinates."""

    def __init__(
        self,
        v0: Vec3 = Vec3(),
        v1: Vec3 = Vec3(),
        v2: Vec3 = Vec3(),
        uv0: Vec2 = Vec2(),
        uv1: Vec2 = Vec2(),
        uv2: Vec2 = Vec2(),
    ):
        super().__init__()
        self.v0, self.v1, self.v2 = v0, v1, v2
        self.uv0, self.uv1, self.uv2 = uv0, uv1, uv2

    def check_ray_collision(self, ray: Ray) -> Hit:
        hit = Hit()
        found = intersect_ray_triangle(
            ray.start, ray.direction, self.v0, self.v1, self.v2
        )
        if found is not None:
            point, face_normal, t, w0, w1 = found
            hit.d = t
            hit.point = point
            hit.normal = face_normal
            hit.uv = self.uv0 * w0 + self.uv1 * w1 + self.uv2 * (1.0 - w0 - w1)
        return hit


class Square(SceneObject):
    """A quadrilateral made of the triangles (v0, v1, v2) and (v0, v2, v3)."""

    def __init__(
        self,
        v0: Vec3,
        v1: Vec3,
        v2: Vec3,
        v3: Vec3,
        uv0: Vec2 = Vec2(),
        uv1: Vec2 = Vec2(),
        uv2: Vec2 = Vec2(),
        uv3: Vec2 = Vec2(),
    ):
        super().__init__()
        self.triangle1 = Triangle(v0, v1, v2, uv0, uv1, uv2)
        self.triangle2 = Triangle(v0, v2, v3, uv0, uv2, uv3)

    def check_ray_collision(self, ray: Ray) -> Hit:
        hit1 = self.triangle1.check_ray_collision(ray)
        hit2 = self.triangle2.check_ray_collision(ray)
        if hit1.d >= 0.0 and hit2.d >= 0.0:
            return hit1 if hit1.d < hit2.d else hit2
        if hit1.d >= 0.0:
            return hit1
        return hit2