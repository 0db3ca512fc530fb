"""Custom exception hierarchy for re-portfolio."""


class PortfolioError(Exception):
    """Base exception for all re-portfolio errors."""


class ConfigurationError(PortfolioError):
    """Raised when configuration is invalid or missing."""


class ProviderError(PortfolioError):
    """Raised when a persistence or session provider operation fails."""
