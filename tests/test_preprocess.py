from models.schemas import EmailContent
from services.preprocess import (
    dedupe_urls,
    detect_suspicious_patterns,
    extract_domains,
    mentions_any,
    parse_email,
)


def test_dedupe_urls_keeps_first_seen_order():
    assert dedupe_urls(["b", " a ", "b", "", None]) == ["b", "a"]


def test_extract_domains_skips_duplicates():
    urls = ["https://bit.ly/a", "https://bit.ly/b", "http://example.org/x"]
    assert extract_domains(urls) == ["bit.ly", "example.org"]


def test_named_patterns():
    assert detect_suspicious_patterns("hi <!-- hidden --> there") == ["hidden_text"]
    assert detect_suspicious_patterns("a" * 45) == ["base64_content"]
    assert detect_suspicious_patterns("Why???") == ["excessive_punctuation"]
    assert detect_suspicious_patterns("THIS IS A VERY LOUD MESSAGE") == ["excessive_caps"]
    assert detect_suspicious_patterns("") == []


def test_parse_email_extracts_links():
    email = EmailContent(
        subject="hello",
        body="Go to https://bit.ly/abc now. Or https://bit.ly/abc again",
        from_address="a@example.com",
    )
    signals = parse_email(email)
    assert signals.urls == ("https://bit.ly/abc",)
    assert signals.domains == ("bit.ly",)
    assert signals.suspicious_patterns == ()
    assert signals.plain_text == email.body
    assert signals.has_urgent_language is False
    assert signals.has_money_requests is False


def test_pressure_cues_are_flagged():
    email = EmailContent(
        subject="",
        body="Reply ASAP and send the Bitcoin to close the deal.",
        from_address="boss@example.com",
    )
    signals = parse_email(email)
    assert signals.has_urgent_language is True
    assert signals.has_money_requests is True
    assert signals.to_dict()["has_money_requests"] is True


def test_mentions_any_handles_empty_text():
    assert mentions_any(None, ("urgent",)) is False
    assert mentions_any("Wire Transfer needed", ("wire transfer",)) is True
