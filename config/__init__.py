"""
Configuration management module for the hand tracking pipeline.
"""

from .settings import Settings

# Export Settings class as the main config interface
__all__ = ['Settings']
