"""Abstract base classes for earnings date sources."""

from __future__ import annotations

from abc import ABC, abstractmethod

import requests

from earningsdate.config import DEFAULT_USER_AGENT
from earningsdate.errors import EarningsDateError, EarningsDateErrorCode
from earningsdate.models.earnings import EarningsEstimate


def build_session(user_agent: str = DEFAULT_USER_AGENT) -> requests.Session:
    """HTTP session shared by every source for one run."""
    session = requests.Session()
    session.headers.update({
        "User-Agent": user_agent,
        "Accept": "text/html,application/json,*/*",
    })
    return session


class BaseEarningsSource(ABC):
    """Abstract base for all earnings date sources.

    A source answers one question: when does ``symbol`` next report? It
    returns None when the page was fetched fine but carries no date, and
    raises ``EarningsDateError`` on any request or extraction failure.
    """

    name: str = "base"

    @abstractmethod
    def fetch(self, symbol: str) -> EarningsEstimate | None:
        """Fetch and extract the next earnings estimate for ``symbol``."""
        ...

    def describe(self, symbol: str) -> str:
        """Request context used in log messages."""
        return self.name


class HttpEarningsSource(BaseEarningsSource):
    """Source backed by one GET request against a public quote page.

    Subclasses set ``url_template`` (with a ``{symbol}`` placeholder) and
    implement ``extract`` against the response body.
    """

    url_template: str = ""

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.session = session or build_session()
        self.timeout = timeout

    def url_for(self, symbol: str) -> str:
        return self.url_template.format(symbol=symbol.upper())

    def describe(self, symbol: str) -> str:
        return f"{self.name} ({self.url_for(symbol)})"

    @abstractmethod
    def extract(self, text: str) -> EarningsEstimate | None:
        """Parse the response body.

        Returns:
            The estimate, or None when the page has no earnings date.
        """
        ...

    def fetch(self, symbol: str) -> EarningsEstimate | None:
        url = self.url_for(symbol)
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise EarningsDateError(
                f"{self.name} request failed for {url}: {exc}",
                code=EarningsDateErrorCode.REQUEST_FAILED,
                source=self.name,
                url=url,
            ) from exc

        if not response.ok:
            raise EarningsDateError(
                f"{self.name} returned HTTP {response.status_code} for {url}",
                code=EarningsDateErrorCode.HTTP_STATUS,
                source=self.name,
                url=url,
            )

        try:
            return self.extract(response.text)
        except EarningsDateError as exc:
            exc.source = exc.source or self.name
            exc.url = exc.url or url
            raise
        except Exception as exc:
            raise EarningsDateError(
                f"{self.name} extraction failed for {url}: {exc}",
                code=EarningsDateErrorCode.EXTRACT_FAILED,
                source=self.name,
                url=url,
            ) from exc
