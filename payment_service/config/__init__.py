"""Configuration package for the payment service."""
from .settings import get_settings, is_production_environment, Settings

__all__ = ["Settings", "get_settings", "is_production_environment"]
