"""Test static site content helpers and event logging."""

import json
from urllib.parse import unquote

from web.company import COMPANY_PROFILE, build_quote_mailto
from web.faqs import build_product_faqs
from web.logging_utils import log_interaction, redact_text


class TestQuoteMailto:
    """Quote request links."""

    def test_prefilled_subject_and_body(self):
        link = build_quote_mailto("Cisplatin Injection")
        assert link.startswith(f"mailto:{COMPANY_PROFILE['email']}?subject=")

        subject, body = link.split("?", 1)[1].split("&")
        assert unquote(subject[len("subject="):]) == "Quote Request - Cisplatin Injection"
        assert "I would like a quotation for: Cisplatin Injection" in unquote(body[len("body="):])

    def test_default_product(self):
        assert "Product%20Inquiry" in build_quote_mailto()


class TestProductFaqs:
    """Generated FAQ entries."""

    def test_five_entries_mentioning_product(self, store):
        faqs = build_product_faqs(store.get_by_slug("cisplatin-injection-50-mg"))
        assert len(faqs) == 5
        assert "Cisplatin Injection" in faqs[0]["question"]
        assert "Oncology" in faqs[2]["question"]

    def test_without_product(self):
        assert "this product" in build_product_faqs(None)[0]["question"]


class TestEventLogging:
    """JSONL site events with contact details redacted."""

    def test_redact_text(self):
        text = "Mail sam@acme.example or call +44 20 7946 0958"
        redacted = redact_text(text)
        assert "sam@acme.example" not in redacted
        assert "[REDACTED_EMAIL]" in redacted
        assert "[REDACTED_PHONE]" in redacted

    def test_log_interaction_writes_jsonl(self, log_file):
        log_interaction("inquiry_failed", {"error": "bounce from sam@acme.example", "rows": 3})

        entry = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
        assert entry["event_type"] == "inquiry_failed"
        assert entry["error"] == "bounce from [REDACTED_EMAIL]"
        assert entry["rows"] == 3
        assert "timestamp" in entry

    def test_nested_values_are_redacted(self, log_file):
        log_interaction("csv_export", {
            "filters": {"q": "sam@acme.example", "category": "Oncology"},
            "notes": ["call +44 20 7946 0958", 7],
        })

        entry = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
        assert entry["filters"] == {"q": "[REDACTED_EMAIL]", "category": "Oncology"}
        assert entry["notes"] == ["call [REDACTED_PHONE]", 7]
        assert "sam@acme.example" not in log_file.read_text(encoding="utf-8")


class TestConfig:
    """Site settings."""

    def test_products_path_shared_with_catalog(self):
        import catalog.config
        import web.config

        assert web.config.PRODUCTS_PATH is catalog.config.PRODUCTS_PATH
