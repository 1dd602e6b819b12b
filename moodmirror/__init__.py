"""MoodMirror - voice emotion detection demo"""

__version__ = "1.0.0"
