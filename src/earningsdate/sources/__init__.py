"""Earnings date source registry."""

from __future__ import annotations

from earningsdate.config import SourceType
from earningsdate.sources.base import BaseEarningsSource, HttpEarningsSource, build_session

# Lazy registry — actual classes imported on demand so optional
# dependencies are only needed by the sources that use them.
SOURCE_CLASSES: dict[SourceType, str] = {
    SourceType.BLOOMBERG: "earningsdate.sources.bloomberg.BloombergSource",
    SourceType.FINVIZ: "earningsdate.sources.finviz.FinVizSource",
    SourceType.YAHOO: "earningsdate.sources.yahoo.YahooSource",
    SourceType.ZACKS: "earningsdate.sources.zacks.ZacksSource",
    SourceType.NASDAQ: "earningsdate.sources.nasdaq.NasdaqSource",
    SourceType.FINNHUB: "earningsdate.sources.finnhub.FinnhubSource",
    SourceType.MOCK: "earningsdate.sources.mock.MockSource",
}


def create_source(
    source_type: SourceType,
    **kwargs,
) -> BaseEarningsSource:
    """Instantiate a source by type, forwarding kwargs to its constructor."""
    import importlib

    dotted = SOURCE_CLASSES[source_type]
    module_path, cls_name = dotted.rsplit(".", 1)
    module = importlib.import_module(module_path)
    cls = getattr(module, cls_name)
    return cls(**kwargs)


__all__ = [
    "BaseEarningsSource",
    "HttpEarningsSource",
    "SOURCE_CLASSES",
    "build_session",
    "create_source",
]
