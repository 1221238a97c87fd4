"""
d2r-tools

Compiles loot filter settings for Diablo II: Resurrected into the game's
localization files:
- Rune, gem, potion and common item names
- Item base names with difficulty class markers
- Quality prefixes
- Rune highlight definitions

and reads the settings back from those files.
"""

__version__ = "0.1.0"
__all__ = ["data", "utils", "core", "cli"]
