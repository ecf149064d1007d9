"""
Darkroom: build a static photo gallery from a folder tree of images.
"""

__version__ = "0.3.0"
