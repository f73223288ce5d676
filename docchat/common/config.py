"""
Configuration Management for docchat

Loads configuration from ~/.docchat/config.json and environment variables.
"""

import os
import json
from pathlib import Path
from dataclasses import dataclass, field

# Default config paths
CONFIG_DIR = Path.home() / ".docchat"
CONFIG_PATH = CONFIG_DIR / "config.json"
LOGS_DIR = CONFIG_DIR / "logs"

# Matches the upload limit of the file tools (50MB)
DEFAULT_MAX_PAYLOAD_BYTES = 50 * 1024 * 1024

_TRUTHY = ("true", "1", "yes")


@dataclass
class ExtractorConfig:
    """Text extraction limits"""
    max_payload_bytes: int = DEFAULT_MAX_PAYLOAD_BYTES
    text_encoding: str = "utf-8"


@dataclass
class AnalyzerConfig:
    """Content analysis options"""
    keyword_language: str = "english"
    detect_language: bool = True


@dataclass
class ResponderConfig:
    """Response synthesis options"""
    include_history_context: bool = False  # thread prior turns into general answers


@dataclass
class DocChatConfig:
    """Main docchat configuration"""
    extractor: ExtractorConfig = field(default_factory=ExtractorConfig)
    analyzer: AnalyzerConfig = field(default_factory=AnalyzerConfig)
    responder: ResponderConfig = field(default_factory=ResponderConfig)
    log_level: str = "INFO"
    debug: bool = False


def _parse_extractor_config(data: dict) -> ExtractorConfig:
    """Parse extractor section from config dict"""
    extractor_data = data.get("extractor", {})
    return ExtractorConfig(
        max_payload_bytes=int(extractor_data.get("max_payload_bytes", DEFAULT_MAX_PAYLOAD_BYTES)),
        text_encoding=extractor_data.get("text_encoding", "utf-8"),
    )


def _parse_analyzer_config(data: dict) -> AnalyzerConfig:
    """Parse analyzer section from config dict"""
    analyzer_data = data.get("analyzer", {})
    return AnalyzerConfig(
        keyword_language=analyzer_data.get("keyword_language", "english"),
        detect_language=analyzer_data.get("detect_language", True),
    )


def _parse_responder_config(data: dict) -> ResponderConfig:
    """Parse responder section from config dict"""
    responder_data = data.get("responder", {})
    return ResponderConfig(
        include_history_context=responder_data.get("include_history_context", False),
    )


def load_config() -> DocChatConfig:
    """
    Load configuration from file and environment variables.

    Priority (highest to lowest):
    1. Environment variables
    2. Config file (~/.docchat/config.json)
    3. Default values
    """
    config = DocChatConfig()

    # Load from config file if exists
    if CONFIG_PATH.exists():
        try:
            with open(CONFIG_PATH) as f:
                data = json.load(f)

            config.extractor = _parse_extractor_config(data)
            config.analyzer = _parse_analyzer_config(data)
            config.responder = _parse_responder_config(data)
            config.log_level = data.get("log_level", "INFO")
            config.debug = data.get("debug", False)
        except (json.JSONDecodeError, IOError, ValueError) as e:
            print(f"[Config] Warning: Failed to load config file: {e}")

    # Environment variable overrides
    if os.getenv("DOCCHAT_MAX_PAYLOAD_BYTES"):
        config.extractor.max_payload_bytes = int(os.getenv("DOCCHAT_MAX_PAYLOAD_BYTES"))
    if os.getenv("DOCCHAT_TEXT_ENCODING"):
        config.extractor.text_encoding = os.getenv("DOCCHAT_TEXT_ENCODING")

    if os.getenv("DOCCHAT_KEYWORD_LANGUAGE"):
        config.analyzer.keyword_language = os.getenv("DOCCHAT_KEYWORD_LANGUAGE")
    if os.getenv("DOCCHAT_DETECT_LANGUAGE"):
        config.analyzer.detect_language = os.getenv("DOCCHAT_DETECT_LANGUAGE").lower() in _TRUTHY

    if os.getenv("DOCCHAT_INCLUDE_HISTORY"):
        config.responder.include_history_context = os.getenv("DOCCHAT_INCLUDE_HISTORY").lower() in _TRUTHY

    if os.getenv("DOCCHAT_LOG_LEVEL"):
        config.log_level = os.getenv("DOCCHAT_LOG_LEVEL").upper()
    if os.getenv("DOCCHAT_DEBUG"):
        config.debug = os.getenv("DOCCHAT_DEBUG").lower() in _TRUTHY

    return config


def save_config(config: DocChatConfig) -> None:
    """Save configuration to file."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)

    data = {
        "extractor": {
            "max_payload_bytes": config.extractor.max_payload_bytes,
            "text_encoding": config.extractor.text_encoding,
        },
        "analyzer": {
            "keyword_language": config.analyzer.keyword_language,
            "detect_language": config.analyzer.detect_language,
        },
        "responder": {
            "include_history_context": config.responder.include_history_context,
        },
        "log_level": config.log_level,
        "debug": config.debug,
    }

    with open(CONFIG_PATH, "w") as f:
        json.dump(data, f, indent=2)


def ensure_directories() -> None:
    """Ensure required directories exist"""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    LOGS_DIR.mkdir(parents=True, exist_ok=True)
