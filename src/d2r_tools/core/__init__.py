"""
Compiler core

Settings snapshot, name generators, locale store merger, settings read-back
and the apply-all orchestrator.
"""

from .settings import AppSettings, RuneSettings, GroupSettings, LevelSettings, ItemSettings, ItemsSettings
from .merger import LocaleStore, apply_update
from .highlight import build_rune_highlight, is_highlighted_document
from .loader import load_settings, parse_rune_text, read_level
from .orchestrator import ApplyAllOrchestrator, ApplyReport

__all__ = [
    'AppSettings',
    'RuneSettings',
    'GroupSettings',
    'LevelSettings',
    'ItemSettings',
    'ItemsSettings',
    'LocaleStore',
    'apply_update',
    'build_rune_highlight',
    'is_highlighted_document',
    'load_settings',
    'parse_rune_text',
    'read_level',
    'ApplyAllOrchestrator',
    'ApplyReport',
]
