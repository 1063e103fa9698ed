from numba import njit

@njit(inline="always")
def clamp(x, lo, hi):
    """Limit x to [lo, hi]"""
    return min(hi, max(lo, x))

def smoothstep(lo: float, hi: float, value: float) -> float:
    """
    Hermite step from 0 at lo to 1 at hi

    lo may be greater than hi, which inverts the step.
    """
    x = max(0.0, min(1.0, (value - lo) / (hi - lo)))
    return x * x * (3 - 2 * x)

def remap(x: float,
          pre_min: float,
          pre_max: float,
          post_min: float,
          post_max: float) -> float:
    """Linearly map x from [pre_min, pre_max] onto [post_min, post_max]"""
    return (x - pre_min) / (pre_max - pre_min) * (post_max - post_min) + post_min