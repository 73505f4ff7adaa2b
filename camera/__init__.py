"""
Camera module for converting captured frames into pipeline input.
"""

from .frame_processor import FrameProcessor

__all__ = ['FrameProcessor']
