"""A recursive (Whitted-style) ray tracer."""

__version__ = "0.1.0"
