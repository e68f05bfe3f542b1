"""Scene-file checking, XPM textures and a small windowing layer for a raycasting game."""

__version__ = "0.1.0"