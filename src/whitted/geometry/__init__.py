"""Shapes, groups, intersections and the illumination engine."""
