"""Rate configuration loading and validation."""

from .rates import ConfigurationError, RateConfiguration, load_rate_configuration

__all__ = ["ConfigurationError", "RateConfiguration", "load_rate_configuration"]
