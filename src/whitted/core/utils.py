# core/utils.py
import math

# Tolerance used for every floating point comparison in the tracer.
EPSILON = 1e-5


def equal(a: float, b: float) -> bool:
    """
    Returns True when a and b differ by less than EPSILON.
    Infinities compare equal only to themselves.
    """
    if math.isinf(a) or math.isinf(b):
        return a == b
    return abs(a - b) < EPSILON


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
