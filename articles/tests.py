from unittest.mock import MagicMock, patch

import requests
from django.test import SimpleTestCase, override_settings

from articles.proxy import ArticleProviderError, get_last_five_articles, get_recent_articles
from articles.schemas import ARTICLE_ID_MAX_LENGTH, ArticleDto


def mock_response(payload, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status_code} Error")
    return response


ARTICLE_PAYLOAD = [
    {"id": "a-1", "title": "Title 1", "summary": "Summary 1"},
    {"id": "a-2", "title": "Title 2", "summary": "Summary 2"},
    {"id": 3, "title": "Title 3"},
    {"article_id": "a-4", "title": "Title 4", "summary": "Summary 4"},
    {"id": "a-5", "title": "Title 5", "summary": "Summary 5"},
    {"id": "a-6", "title": "Title 6", "summary": "Summary 6"},
]


@override_settings(ARTICLE_API_BASE_URL="http://articles.test/", ARTICLE_API_TIMEOUT=3, ARTICLE_LIST_SIZE=5)
class ArticleProxyTestCase(SimpleTestCase):

    @patch("articles.proxy.requests.get")
    def test_get_last_five_articles(self, requests_get):
        requests_get.return_value = mock_response(ARTICLE_PAYLOAD)

        articles = get_last_five_articles()

        requests_get.assert_called_once_with("http://articles.test/articles", params={"limit": 5}, timeout=3)
        self.assertEqual(len(articles), 5)
        self.assertIsInstance(articles[0], ArticleDto)
        self.assertEqual([a.article_id for a in articles], ["a-1", "a-2", "3", "a-4", "a-5"])
        self.assertEqual(articles[0].title, "Title 1")
        self.assertEqual(articles[2].summary, "")

    @patch("articles.proxy.requests.get")
    def test_envelope_payload_accepted(self, requests_get):
        requests_get.return_value = mock_response({"articles": ARTICLE_PAYLOAD[:2]})

        articles = get_recent_articles(count=5)

        self.assertEqual([a.article_id for a in articles], ["a-1", "a-2"])

    @patch("articles.proxy.requests.get")
    def test_connection_error_raises_provider_error(self, requests_get):
        requests_get.side_effect = requests.exceptions.ConnectionError("refused")

        with self.assertRaises(ArticleProviderError):
            get_last_five_articles()

    @patch("articles.proxy.requests.get")
    def test_http_error_raises_provider_error(self, requests_get):
        requests_get.return_value = mock_response([], status_code=503)

        with self.assertRaises(ArticleProviderError):
            get_last_five_articles()

    @patch("articles.proxy.requests.get")
    def test_invalid_json_raises_provider_error(self, requests_get):
        response = mock_response(None)
        response.json.side_effect = ValueError("Expecting value")
        requests_get.return_value = response

        with self.assertRaises(ArticleProviderError):
            get_last_five_articles()

    @patch("articles.proxy.requests.get")
    def test_unexpected_payload_raises_provider_error(self, requests_get):
        requests_get.return_value = mock_response({"detail": "nope"})

        with self.assertRaises(ArticleProviderError):
            get_last_five_articles()

    @patch("articles.proxy.requests.get")
    def test_article_without_title_raises_provider_error(self, requests_get):
        requests_get.return_value = mock_response([{"id": "a-1"}])

        with self.assertRaises(ArticleProviderError):
            get_last_five_articles()

    @patch("articles.proxy.requests.get")
    def test_null_summary_becomes_blank(self, requests_get):
        requests_get.return_value = mock_response([
            {"id": "a-1", "title": "Title 1", "summary": None},
            {"id": "a-2", "title": "Title 2", "summary": "Summary 2"},
        ])

        articles = get_last_five_articles()

        self.assertEqual([a.summary for a in articles], ["", "Summary 2"])

    @patch("articles.proxy.requests.get")
    def test_article_id_longer_than_quiz_column_raises_provider_error(self, requests_get):
        requests_get.return_value = mock_response([{"id": "x" * (ARTICLE_ID_MAX_LENGTH + 1), "title": "Too long"}])

        with self.assertRaises(ArticleProviderError):
            get_last_five_articles()

    def test_article_id_at_column_limit_accepted(self):
        article = ArticleDto(article_id="x" * ARTICLE_ID_MAX_LENGTH, title="Long")

        self.assertEqual(len(article.article_id), ARTICLE_ID_MAX_LENGTH)
