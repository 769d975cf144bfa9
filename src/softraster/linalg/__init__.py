from .vec3 import Point3f, Vec3

__all__ = ["Vec3", "Point3f"]
