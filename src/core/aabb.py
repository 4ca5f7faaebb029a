# src/core/aabb.py
from core.vector import Vector3

class AABB:
    def __init__(self, minimum: Vector3, maximum: Vector3):
        self.minimum = minimum
        self.maximum = maximum

    def hit(self, ray, t_min: float, t_max: float) -> bool:
        # Slab method: for each axis, find intersection intervals.
        for a in ['x', 'y', 'z']:
            d = getattr(ray.direction, a)
            o = getattr(ray.origin, a)
            if d == 0.0:
                # Parallel to this slab: inside or missing for every t.
                if o < getattr(self.minimum, a) or o > getattr(self.maximum, a):
                    return False
                continue
            invD = 1.0 / d
            t0 = (getattr(self.minimum, a) - o) * invD
            t1 = (getattr(self.maximum, a) - o) * invD
            if invD < 0:
                t0, t1 = t1, t0
            t_min = t0 if t0 > t_min else t_min
            t_max = t1 if t1 < t_max else t_max
            if t_max <= t_min:
                return False
        return True

    @staticmethod
    def surrounding_box(box0: "AABB", box1: "AABB") -> "AABB":
        return AABB(box0.minimum.minimum(box1.minimum),
                    box0.maximum.maximum(box1.maximum))

    def __repr__(self) -> str:
        return f"AABB({self.minimum!r}, {self.maximum!r})"
