"""
News records exchanged with the feed and downstream collaborators.

NewsArticle mirrors the subset of a newsdata.io "latest" article the
pipeline reads; NewsRecord is the enriched record handed downstream.
"""

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from .errors import FeedError

logger = logging.getLogger(__name__)

SUCCESS = "success"
NEWSDATA_ORIGIN = "https://newsdata.io"


@dataclass
class NewsArticle:
    """One article of a newsdata.io response."""

    article_id: str
    title: Optional[str] = None
    link: Optional[str] = None
    keywords: Optional[List[str]] = None
    description: Optional[str] = None
    language: Optional[str] = None
    coins: Optional[List[str]] = None
    duplicate: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NewsArticle":
        if not isinstance(data, dict) or not data.get("article_id"):
            raise FeedError(f"Article without article_id: {data!r}")
        return cls(
            article_id=str(data["article_id"]),
            title=data.get("title"),
            link=data.get("link"),
            keywords=data.get("keywords"),
            description=data.get("description"),
            language=data.get("language"),
            coins=data.get("coins"),
            duplicate=bool(data.get("duplicate", False)),
        )


@dataclass
class NewsRecord:
    """An article enriched with the coins it mentions."""

    id: str
    title: str
    origin: str
    text: str
    link: str
    created_at: int
    coins: List[str] = field(default_factory=list)
    keywords: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def parse_newsdata_response(payload: Dict[str, Any]) -> List[NewsArticle]:
    """
    Parse a decoded newsdata.io response body.

    Args:
        payload: The JSON response as a dictionary

    Returns:
        List of NewsArticle objects in response order

    Raises:
        FeedError: if the status is not "success" or an article is malformed
    """
    if not isinstance(payload, dict):
        raise FeedError("Response body is not a JSON object")

    status = payload.get("status")
    if status != SUCCESS:
        raise FeedError(f"Response status: {status}")

    results = payload.get("results") or []
    articles = [NewsArticle.from_dict(item) for item in results]
    logger.info(
        "Parsed %s articles (totalResults=%s)",
        len(articles),
        payload.get("totalResults"),
    )
    return articles
