import logging

import requests
from django.conf import settings
from pydantic import ValidationError

from articles.schemas import ArticleDto

logger = logging.getLogger("quiz_portal")


class ArticleProviderError(Exception):
    """The article service could not be reached or sent back something unusable."""


def get_recent_articles(count: int = 5) -> list[ArticleDto]:
    url = f"{settings.ARTICLE_API_BASE_URL.rstrip('/')}/articles"

    try:
        response = requests.get(url, params={"limit": count}, timeout=settings.ARTICLE_API_TIMEOUT)
        response.raise_for_status()
        data = response.json()

    except requests.RequestException as e:
        logger.error(f"Error fetching articles from {url}: {e}")
        raise ArticleProviderError("Unable to fetch articles") from e

    except ValueError as e:
        # Body was not JSON
        logger.error(f"Invalid JSON from {url}: {e}")
        raise ArticleProviderError("Article service returned invalid JSON") from e

    if isinstance(data, dict):
        data = data.get("articles")

    if not isinstance(data, list):
        logger.error(f"Unexpected article payload: {data}")
        raise ArticleProviderError("Article service returned an unexpected payload")

    try:
        articles = [ArticleDto.model_validate(item) for item in data[:count]]
    except ValidationError as e:
        logger.error(e)
        raise ArticleProviderError("Article service returned malformed articles") from e

    logger.debug(f"Fetched {len(articles)} articles")

    return articles


def get_last_five_articles() -> list[ArticleDto]:
    return get_recent_articles(count=settings.ARTICLE_LIST_SIZE)
