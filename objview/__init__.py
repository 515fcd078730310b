"""Wireframe viewer for Wavefront OBJ models: loading, affine transforms, off-screen rendering and GIF export."""

__version__ = "0.1.0"
__all__ = ["model", "transform", "gifcodec", "gifimage", "scene", "viewer"]