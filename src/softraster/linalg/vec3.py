import math


class Vec3:
    def __init__(self, x=0.0, y=0.0, z=0.0):
        self.x, self.y, self.z = x, y, z

    @classmethod
    def from_seq(cls, seq):
        x, y, z = seq
        return cls(float(x), float(y), float(z))

    def length(self):
        return math.sqrt(self.x**2 + self.y**2 + self.z**2)

    def normalized(self):
        """Unit vector in the same direction.

        A zero-length vector is returned unchanged, so callers that need a
        real direction check `length()` first.
        """
        length = self.length()
        if length > 0:
            return Vec3(
                self.x / length,
                self.y / length,
                self.z / length,
            )
        return self

    def scale(self, k):
        return Vec3(self.x * k, self.y * k, self.z * k)

    def __add__(self, other):
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other):
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, k):
        return self.scale(k)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __eq__(self, other):
        if not isinstance(other, Vec3):
            return NotImplemented
        return (self.x, self.y, self.z) == (other.x, other.y, other.z)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def dot(self, vec3):
        return self.x * vec3.x + self.y * vec3.y + self.z * vec3.z

    def cross(self, vec3):
        return Vec3(
            self.y * vec3.z - self.z * vec3.y,
            self.z * vec3.x - self.x * vec3.z,
            self.x * vec3.y - self.y * vec3.x,
        )

    def __repr__(self):
        return (
            self.x,
            self.y,
            self.z,
        ).__repr__()

    def to_tuple(self):
        return (self.x, self.y, self.z)


# Screen-space working coordinate: x, y in pixels, z is interpolation depth.
Point3f = Vec3
