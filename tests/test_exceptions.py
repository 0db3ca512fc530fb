"""Tests for custom exception hierarchy."""

from re_portfolio.exceptions import ConfigurationError, PortfolioError, ProviderError


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_portfolio_error_is_exception(self) -> None:
        assert isinstance(PortfolioError("test"), Exception)

    def test_configuration_error_is_portfolio_error(self) -> None:
        assert isinstance(ConfigurationError("test"), PortfolioError)

    def test_provider_error_is_portfolio_error(self) -> None:
        assert isinstance(ProviderError("test"), PortfolioError)

    def test_exception_message(self) -> None:
        err = ProviderError("Could not write re_portfolio_v1.json")
        assert str(err) == "Could not write re_portfolio_v1.json"
