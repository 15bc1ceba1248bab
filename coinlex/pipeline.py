"""
Article filtering and enrichment.

Drops articles whose language tag is not accepted and fills the coins field
of the rest from their title and description.
"""

import logging
import time
from typing import Callable, Iterable, List, Optional

from .extractor import CoinExtractor
from .lexicon_parser import DEFAULT_LEXICON_PATH, load_file
from .records import NEWSDATA_ORIGIN, NewsArticle, NewsRecord
from .validator import LanguageValidator

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class NewsPipeline:
    """Language filter plus coin extraction over a batch of articles."""

    def __init__(
        self,
        validator: LanguageValidator,
        extractor: CoinExtractor,
        origin: str = NEWSDATA_ORIGIN,
        clock: Callable[[], int] = _now_ms,
    ):
        self.validator = validator
        self.extractor = extractor
        self.origin = origin
        self.clock = clock

    def accepts(self, article: NewsArticle) -> bool:
        # Articles without a language tag are dropped
        if not article.language:
            return False
        return self.validator.is_valid(article.language)

    def enrich(self, article: NewsArticle) -> NewsRecord:
        """
        Build the downstream record for an article.

        Title and description are scanned separately so text running across
        the join cannot form a match.
        """
        coins = set()
        for text in (article.title, article.description):
            if text:
                coins |= self.extractor.extract(text)

        return NewsRecord(
            id=article.article_id,
            title=article.title or "",
            origin=self.origin,
            text=article.description or "",
            link=article.link or "",
            created_at=self.clock(),
            coins=sorted(coins),
            keywords=list(article.keywords or []),
        )

    def process(self, articles: Iterable[NewsArticle]) -> List[NewsRecord]:
        records = []
        rejected = 0
        for article in articles:
            if not self.accepts(article):
                rejected += 1
                logger.debug(
                    "Skipping article %s with language %r",
                    article.article_id,
                    article.language,
                )
                continue
            records.append(self.enrich(article))

        logger.info("Enriched %s articles, skipped %s", len(records), rejected)
        return records


def build_pipeline(
    lexicon_path: Optional[str] = None, origin: str = NEWSDATA_ORIGIN
) -> NewsPipeline:
    """Build a pipeline from a lexicon file (the packaged default if omitted)."""
    lexicon = load_file(lexicon_path or DEFAULT_LEXICON_PATH)
    return NewsPipeline(
        lexicon.build_validator(), lexicon.build_extractor(), origin=origin
    )
