"""Wavefront OBJ loading."""
