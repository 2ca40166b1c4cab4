"""
Guideline Sync — keep shared coding guidelines mirrored and validated.
"""

__version__ = "0.1.0"
