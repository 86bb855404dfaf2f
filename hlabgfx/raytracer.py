"""Whitted-style ray tracer with Phong shading, shadows, reflection and refraction."""

from __future__ import annotations

import math
from collections.abc import Iterable
from pathlib import Path

import numpy as np

from hlabgfx.geometry import Hit, Light, Ray, Vec2, Vec3
from hlabgfx.shapes import SceneObject, Sphere, Square
from hlabgfx.texture import Texture, load_texture

_OFFSET = 1e-4
_INDEX_OF_REFRACTION = 1.3
_FAR_DISTANCE = 1000.0

DEFAULT_EYE = Vec3(0.0, 0.0, -1.5)
DEFAULT_LIGHT = Light(Vec3(0.0, 2.0, -1.2))
DEFAULT_DEPTH = 5

GROUND_TEXTURE = "shadertoy_abstract1.jpg"
SKYBOX_TEXTURES = tuple(
    f"../SaintPetersBasilica/{face}_blurred.jpg"
    for face in ("posz", "negz", "posy", "negy", "posx", "negx")
)


class Raytracer:
    """Renders a list of scene objects lit by one point light."""

    def __init__(
        self,
        width: int,
        height: int,
        objects: Iterable[SceneObject] = (),
        light: Light = DEFAULT_LIGHT,
        eye_pos: Vec3 = DEFAULT_EYE,
        max_depth: int = DEFAULT_DEPTH,
    ):
        if width <= 0 or height <= 0:
            raise ValueError(f"image size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.objects = list(objects)
        self.light = light
        self.eye_pos = eye_pos
        self.max_depth = max_depth

    def find_closest_collision(self, ray: Ray) -> Hit:
        """Return the nearest hit in front of the ray, with ``obj`` set, or a miss."""
        closest = Hit()
        closest_d = _FAR_DISTANCE
        for obj in self.objects:
            hit = obj.check_ray_collision(ray)
            if 0.0 <= hit.d < closest_d:
                closest_d = hit.d
                closest = hit
                closest.obj = obj
        return closest

    def trace_ray(self, ray: Ray, recurse_level: int) -> Vec3:
        """Return the colour seen along ``ray``, following up to ``recurse_level`` bounces."""
        if recurse_level < 0:
            return Vec3()

        hit = self.find_closest_collision(ray)
        if not hit.is_hit:
            return Vec3()

        obj = hit.obj
        to_light = self.light.pos - hit.point
        dir_to_light = to_light.normalized()

        shadow_ray = Ray(hit.point + dir_to_light * _OFFSET, dir_to_light)
        shadow_hit = self.find_closest_collision(shadow_ray)
        in_shadow = 0.0 < shadow_hit.d < to_light.length()

        if obj.amb_texture is not None:
            phong = obj.amb * obj.amb_texture.sample_linear(hit.uv)
        else:
            phong = obj.amb

        if not in_shadow:
            n_dot_l = hit.normal.dot(dir_to_light)
            diff = max(n_dot_l, 0.0)
            reflect_dir = hit.normal * (2.0 * n_dot_l) - dir_to_light
            specular = max((-ray.direction).dot(reflect_dir), 0.0) ** obj.alpha
            if obj.dif_texture is not None:
                phong = phong + obj.dif * obj.dif_texture.sample_linear(hit.uv) * diff
            else:
                phong = phong + obj.dif * diff
            phong = phong + obj.spec * specular

        color = phong * (1.0 - obj.reflection - obj.transparency)

        if obj.reflection:
            reflected = _reflected_ray(ray, hit)
            color = color + self.trace_ray(reflected, recurse_level - 1) * obj.reflection

        if obj.transparency:
            refracted = _refracted_ray(ray, hit)
            if refracted is not None:
                color = color + self.trace_ray(refracted, recurse_level - 1) * obj.transparency

        return color

    def render(self) -> np.ndarray:
        """Render the scene into a (height, width, 4) float32 RGBA array."""
        pixels = np.zeros((self.height, self.width, 4), dtype=np.float32)
        pixels[..., 3] = 1.0
        for j in range(self.height):
            for i in range(self.width):
                world = self.transform_screen_to_world(Vec2(i, j))
                ray = Ray(world, (world - self.eye_pos).normalized())
                color = self.trace_ray(ray, self.max_depth)
                pixels[j, i, :3] = np.clip(tuple(color), 0.0, 1.0)
        return pixels

    def transform_screen_to_world(self, pos_screen: Vec2) -> Vec3:
        """Map a pixel position to the z = 0 plane, keeping the aspect ratio."""
        x_scale = 2.0 / self.width
        y_scale = 2.0 / self.height
        aspect = self.width / self.height
        return Vec3(
            (pos_screen.x * x_scale - 1.0) * aspect,
            -pos_screen.y * y_scale + 1.0,
            0.0,
        )


def _reflected_ray(ray: Ray, hit: Hit) -> Ray:
    direction = (
        hit.normal * (2.0 * (-ray.direction).dot(hit.normal)) + ray.direction
    ).normalized()
    return Ray(hit.point + direction * _OFFSET, direction)


def _refracted_ray(ray: Ray, hit: Hit) -> Ray | None:
    """Bend the ray by Snell's law; ``None`` on total internal reflection."""
    if ray.direction.dot(hit.normal) < 0.0:
        eta = _INDEX_OF_REFRACTION
        normal = hit.normal
    else:
        eta = 1.0 / _INDEX_OF_REFRACTION
        normal = -hit.normal

    cos_theta1 = -ray.direction.dot(normal)
    sin_theta1 = math.sqrt(max(0.0, 1.0 - cos_theta1 * cos_theta1))
    sin_theta2 = sin_theta1 / eta
    cos_theta2_squared = 1.0 - sin_theta2 * sin_theta2
    if cos_theta2_squared < 0.0:
        return None
    cos_theta2 = math.sqrt(cos_theta2_squared)

    tangent = normal * (-ray.direction).dot(normal) + ray.direction
    if tangent.length() == 0.0:
        direction = -normal
    else:
        direction = (tangent.normalized() * sin_theta2 - normal * cos_theta2).normalized()
    return Ray(hit.point + direction * _OFFSET, direction)


def _material(
    obj: SceneObject,
    amb: Vec3,
    dif: Vec3,
    spec: Vec3,
    alpha: float,
    reflection: float = 0.0,
    transparency: float = 0.0,
    texture: Texture | None = None,
) -> SceneObject:
    obj.amb = amb
    obj.dif = dif
    obj.spec = spec
    obj.alpha = alpha
    obj.reflection = reflection
    obj.transparency = transparency
    obj.amb_texture = texture
    obj.dif_texture = texture
    return obj


def build_default_scene(asset_dir) -> tuple[list[SceneObject], Light]:
    """Build three spheres, a textured ground and a textured skybox.

    Texture files are looked up relative to ``asset_dir``.
    """
    base = Path(asset_dir)
    grey = lambda v: Vec3(v, v, v)  # noqa: E731

    objects: list[SceneObject] = [
        _material(
            Sphere(Vec3(0.0, -0.1, 4.0), 1.5),
            grey(0.1), Vec3(1.0, 0.0, 0.0), grey(1.0), 25.0, 0.5, 0.1,
        ),
        _material(
            Sphere(Vec3(1.3, -1.0, 2.0), 0.5),
            grey(0.2), Vec3(0.0, 0.0, 1.0), grey(1.0), 25.0, 0.2, 0.1,
        ),
        _material(
            Sphere(Vec3(-1.8, -0.5, 2.0), 0.8),
            grey(1.0), grey(1.0), grey(1.0), 25.0, 0.5, 0.5,
        ),
    ]

    ground_texture = load_texture(base / GROUND_TEXTURE)
    ground = Square(
        Vec3(-10.0, -1.5, 0.0), Vec3(-10.0, -1.5, 10.0),
        Vec3(10.0, -1.5, 10.0), Vec3(10.0, -1.5, 0.0),
        Vec2(0.0, 0.0), Vec2(5.0, 0.0), Vec2(5.0, 5.0), Vec2(0.0, 5.0),
    )
    objects.append(
        _material(ground, grey(0.2), grey(0.8), grey(1.0), 10.0, 0.5, texture=ground_texture)
    )

    top_down_uv = (Vec2(0.0, 0.0), Vec2(1.0, 0.0), Vec2(1.0, 1.0), Vec2(0.0, 1.0))
    bottom_up_uv = (Vec2(0.0, 1.0), Vec2(1.0, 1.0), Vec2(1.0, 0.0), Vec2(0.0, 0.0))
    faces = (
        ((Vec3(-60.0, 30.0, 30.0), Vec3(60.0, 30.0, 30.0),
          Vec3(60.0, -30.0, 30.0), Vec3(-60.0, -30.0, 30.0)), top_down_uv),
        ((Vec3(-60.0, -30.0, -30.0), Vec3(60.0, -30.0, -30.0),
          Vec3(60.0, 30.0, -30.0), Vec3(-60.0, 30.0, -30.0)), bottom_up_uv),
        ((Vec3(-60.0, 30.0, -30.0), Vec3(60.0, 30.0, -30.0),
          Vec3(60.0, 30.0, 30.0), Vec3(-60.0, 30.0, 30.0)), bottom_up_uv),
        ((Vec3(-60.0, -30.0, 30.0), Vec3(60.0, -30.0, 30.0),
          Vec3(60.0, -30.0, -30.0), Vec3(-60.0, -30.0, -30.0)), bottom_up_uv),
        ((Vec3(-60.0, 30.0, -30.0), Vec3(-60.0, 30.0, 30.0),
          Vec3(-60.0, -30.0, 30.0), Vec3(-60.0, -30.0, -30.0)), top_down_uv),
        ((Vec3(60.0, 30.0, 30.0), Vec3(60.0, 30.0, -30.0),
          Vec3(60.0, -30.0, -30.0), Vec3(60.0, -30.0, 30.0)), top_down_uv),
    )
    for (corners, uvs), texture_name in zip(faces, SKYBOX_TEXTURES):
        texture = load_texture(base / texture_name)
        square = Square(*corners, *uvs)
        objects.append(
            _material(square, grey(1.0), grey(0.0), grey(0.0), 50.0, 0.0, texture=texture)
        )

    return objects, DEFAULT_LIGHT