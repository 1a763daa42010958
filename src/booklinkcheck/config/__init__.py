"""Configuration loading and header interpolation."""

from booklinkcheck.config.interpolation import interpolate_env
from booklinkcheck.config.loader import load_config, parse_config

__all__ = ["interpolate_env", "load_config", "parse_config"]
