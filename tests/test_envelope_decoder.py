"""Unit tests for response envelope decoding."""

import json
import unittest

from schemas.news import Article
from services.envelope_decoder import (
    DecoderOptions,
    ResponseStatus,
    StrictScope,
    decode_collection,
    decode_envelope,
)
from services.errors import (
    ElementDecodeError,
    EnvelopeDecodeError,
    ParameterInvalidError,
    RateLimitedError,
    UnexpectedError,
)

GOOD_SOURCE = {
    "id": "abc-news",
    "name": "ABC News",
    "description": "Your trusted source for breaking news.",
    "url": "https://abcnews.go.com",
    "category": "general",
    "language": "en",
    "country": "us",
}

MALFORMED_SOURCE = {
    "id": "broken",
    "description": "Missing its name and category.",
    "language": "en",
    "country": "us",
}


def make_article(index):
    return {
        "source": {"id": None, "name": f"Site {index}"},
        "author": None,
        "title": f"Headline {index}",
        "description": None,
        "url": f"https://news.example.com/{index}",
        "urlToImage": None,
        "publishedAt": "2021-03-01T08:00:00Z",
    }


def encode(payload):
    return json.dumps(payload).encode("utf-8")


class TestStatusHandling(unittest.TestCase):
    def test_error_status_raises_mapped_error(self):
        payload = {"status": "error", "code": "rateLimited", "message": "Too many requests."}
        with self.assertRaises(RateLimitedError) as ctx:
            decode_envelope(encode(payload))
        self.assertEqual(ctx.exception.message, "Too many requests.")

    def test_error_status_ignores_result_fields(self):
        payload = {
            "status": "error",
            "code": "parameterInvalid",
            "message": "pageSize is invalid",
            "sources": [GOOD_SOURCE],
        }
        with self.assertRaises(ParameterInvalidError) as ctx:
            decode_envelope(encode(payload))
        self.assertEqual(ctx.exception.failure_reason, "pageSize is invalid")

    def test_error_status_without_code_or_message(self):
        with self.assertRaises(UnexpectedError) as ctx:
            decode_envelope(encode({"status": "error"}))
        self.assertEqual(ctx.exception.error_code, "")
        self.assertIsNone(ctx.exception.failure_reason)

    def test_unknown_status_is_a_parse_failure(self):
        with self.assertRaises(EnvelopeDecodeError):
            decode_envelope(encode({"status": "pending"}))

    def test_missing_status_is_a_parse_failure(self):
        with self.assertRaises(EnvelopeDecodeError):
            decode_envelope(encode({"totalResults": 3}))

    def test_invalid_json_is_a_parse_failure(self):
        with self.assertRaises(EnvelopeDecodeError):
            decode_envelope(b"<html>Bad gateway</html>")

    def test_non_object_is_a_parse_failure(self):
        with self.assertRaises(EnvelopeDecodeError):
            decode_envelope(encode(["ok"]))

    def test_non_string_code_is_a_parse_failure(self):
        with self.assertRaises(EnvelopeDecodeError):
            decode_envelope(encode({"status": "error", "code": 429}))


class TestSuccessfulEnvelope(unittest.TestCase):
    def test_sources_envelope(self):
        envelope = decode_envelope(encode({"status": "ok", "sources": [GOOD_SOURCE]}))
        self.assertIs(envelope.status, ResponseStatus.ok)
        self.assertIsNone(envelope.total_results)
        self.assertIsNone(envelope.articles)
        self.assertEqual([s.id for s in envelope.sources], ["abc-news"])

    def test_articles_envelope_preserves_order_and_total(self):
        payload = {"status": "ok", "totalResults": 1234, "articles": [make_article(i) for i in range(5)]}
        envelope = decode_envelope(encode(payload))
        self.assertEqual(envelope.total_results, 1234)
        self.assertIsNone(envelope.sources)
        self.assertEqual(
            [a.title for a in envelope.articles],
            [f"Headline {i}" for i in range(5)],
        )

    def test_accepts_already_parsed_payload(self):
        envelope = decode_envelope({"status": "ok", "articles": []})
        self.assertEqual(envelope.articles, [])

    def test_accepts_text_payload(self):
        envelope = decode_envelope(json.dumps({"status": "ok", "sources": []}))
        self.assertEqual(envelope.sources, [])

    def test_non_integer_total_results_is_a_parse_failure(self):
        with self.assertRaises(EnvelopeDecodeError):
            decode_envelope(encode({"status": "ok", "totalResults": "12", "articles": []}))

    def test_non_array_collection_is_a_parse_failure(self):
        with self.assertRaises(EnvelopeDecodeError):
            decode_envelope(encode({"status": "ok", "articles": {"title": "x"}}))

    def test_both_collections_decoded_when_present(self):
        payload = {"status": "ok", "sources": [GOOD_SOURCE], "articles": [make_article(1)]}
        envelope = decode_envelope(encode(payload))
        self.assertEqual(len(envelope.sources), 1)
        self.assertEqual(len(envelope.articles), 1)


class TestTolerantDecoding(unittest.TestCase):
    def test_non_strict_skips_malformed_source(self):
        payload = {"status": "ok", "sources": [GOOD_SOURCE, MALFORMED_SOURCE]}
        with self.assertLogs("services.envelope_decoder", level="WARNING") as logs:
            envelope = decode_envelope(encode(payload))
        self.assertEqual([s.id for s in envelope.sources], ["abc-news"])
        self.assertIn("Failed decoding source from JSON at index 1", logs.output[0])

    def test_strict_source_failure_aborts_envelope(self):
        payload = {"status": "ok", "sources": [GOOD_SOURCE, MALFORMED_SOURCE]}
        options = DecoderOptions(fail_on_source_failure=True)
        with self.assertRaises(ElementDecodeError) as ctx:
            decode_envelope(encode(payload), options)
        self.assertEqual(ctx.exception.index, 1)
        self.assertEqual(ctx.exception.label, "source")

    def test_strict_flags_are_independent(self):
        payload = {
            "status": "ok",
            "sources": [GOOD_SOURCE, MALFORMED_SOURCE],
            "articles": [make_article(1), {"title": "no url"}],
        }
        options = DecoderOptions(fail_on_article_failure=True)
        with self.assertRaises(ElementDecodeError) as ctx:
            decode_envelope(encode(payload), options)
        self.assertEqual(ctx.exception.label, "article")

    def test_strict_collection_scope_empties_only_that_collection(self):
        payload = {
            "status": "ok",
            "sources": [GOOD_SOURCE, MALFORMED_SOURCE],
            "articles": [make_article(1), {"title": "no url"}, make_article(2)],
        }
        options = DecoderOptions(fail_on_source_failure=True, strict_scope=StrictScope.collection)
        envelope = decode_envelope(encode(payload), options)
        self.assertEqual(envelope.sources, [])
        self.assertEqual([a.title for a in envelope.articles], ["Headline 1", "Headline 2"])

    def test_malformed_article_urls_do_not_block_others(self):
        articles = [make_article(1), make_article(2)]
        articles[0]["urlToImage"] = "not a url"
        articles[1]["url"] = "not a url"
        envelope = decode_envelope(encode({"status": "ok", "articles": articles}))
        self.assertEqual(len(envelope.articles), 1)
        self.assertIsNone(envelope.articles[0].image_url)

    def test_article_failure_log_names_the_element(self):
        payload = {"status": "ok", "articles": [{"title": "no url"}]}
        with self.assertLogs("services.envelope_decoder", level="WARNING") as logs:
            decode_envelope(encode(payload))
        self.assertIn("Failed decoding article from JSON at index 0", logs.output[0])

    def test_long_article_url_is_not_dropped(self):
        article = make_article(1)
        article["url"] = "https://news.example.com/" + "x" * 2100
        envelope = decode_envelope(encode({"status": "ok", "articles": [article]}))
        self.assertEqual(len(envelope.articles), 1)

    def test_numeric_publication_date_is_dropped(self):
        article = make_article(1)
        article["publishedAt"] = 0
        envelope = decode_envelope(encode({"status": "ok", "articles": [article]}))
        self.assertIsNone(envelope.articles[0].publication_date)

    def test_epoch_dates_are_dropped_from_articles(self):
        article = make_article(1)
        article["publishedAt"] = "1970-01-01T00:00:00Z"
        envelope = decode_envelope(encode({"status": "ok", "articles": [article]}))
        self.assertIsNone(envelope.articles[0].publication_date)


class TestDecodeCollection(unittest.TestCase):
    def test_collects_successes_and_failures_separately(self):
        items = [make_article(1), "garbage", make_article(2), {"url": "https://x.test"}]
        result = decode_collection(items, Article.model_validate, label="article")
        self.assertEqual([a.title for a in result.items], ["Headline 1", "Headline 2"])
        self.assertEqual([index for index, _ in result.failures], [1, 3])

    def test_strict_raises_on_first_failure(self):
        items = ["garbage", make_article(1)]
        with self.assertRaises(ElementDecodeError) as ctx:
            decode_collection(items, Article.model_validate, strict=True, label="article")
        self.assertEqual(ctx.exception.index, 0)
        self.assertIsInstance(ctx.exception, EnvelopeDecodeError)

    def test_empty_input(self):
        result = decode_collection([], Article.model_validate)
        self.assertEqual(result.items, [])
        self.assertEqual(result.failures, [])


if __name__ == "__main__":
    unittest.main()
