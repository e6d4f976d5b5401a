"""
CHUK Rankings - build, reorder and save a ranked list of songs.
"""

__version__ = "0.1.0"
