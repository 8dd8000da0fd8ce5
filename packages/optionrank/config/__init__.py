"""Configuration for OptionRank."""

from optionrank.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
