"""
pysh IPC Module

Provides the anonymous pipe used between pipeline stages.
"""

from .pipe import Pipe

__all__ = [
    'Pipe',
]
