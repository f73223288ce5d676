"""
docchat Common Module

Shared infrastructure for the analyzer and responder.
"""

from .config import DocChatConfig, load_config
from .language import LanguageInfo, detect_language

__all__ = [
    "DocChatConfig",
    "load_config",
    "LanguageInfo",
    "detect_language",
]
