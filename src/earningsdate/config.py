"""Earnings date configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class SourceType(Enum):
    """Supported earnings date sources."""

    BLOOMBERG = "bloomberg"
    FINVIZ = "finviz"
    YAHOO = "yahoo"
    ZACKS = "zacks"
    NASDAQ = "nasdaq"
    FINNHUB = "finnhub"
    MOCK = "mock"


DEFAULT_SOURCES = (
    SourceType.BLOOMBERG,
    SourceType.FINVIZ,
    SourceType.YAHOO,
    SourceType.ZACKS,
)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_13_2) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/63.0.3239.132 Safari/537.36"
)


@dataclass
class EarningsDateConfig:
    """Configuration for EarningsPlanner.

    Attributes:
        sources: Sources queried concurrently for every symbol.
        cache_path: JSON file holding the last consensus per symbol.
        use_cache: Whether fresh cached consensus results are reused.
        request_timeout: Per-request timeout in seconds.
        user_agent: User-Agent header sent to every HTTP source.
        finnhub_api_key: Finnhub.io API key (only used by the Finnhub source).
        max_workers: Thread pool size; None means one worker per source.
    """

    sources: list[SourceType] = field(default_factory=lambda: list(DEFAULT_SOURCES))
    cache_path: str = "data/earnings_cache.json"
    use_cache: bool = True
    request_timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    finnhub_api_key: str | None = None
    max_workers: int | None = None
