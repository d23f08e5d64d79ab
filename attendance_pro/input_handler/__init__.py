"""
Input Handler Module for Attendance Pro.

Prepares screenshots for the extraction gateway:
    - Loading from file paths, raw bytes, PIL images or data URLs
    - Orientation correction and RGB conversion
    - Downscaling oversized screenshots
    - Base64 PNG encoding

Author: ML Engineering Team
"""

from .image_encoder import ImageEncoder

__all__ = ['ImageEncoder']
