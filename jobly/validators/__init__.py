"""Startup validators."""

from .config_validator import ConfigValidator
