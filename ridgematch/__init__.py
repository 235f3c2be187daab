"""
ridgematch: skeleton-based fingerprint verification.

Subpackages:
- minutiae: grid primitives, thinning, minutiae extraction and matching
- utils: configuration, logging and I/O helpers
"""

__version__ = "0.1.0"
