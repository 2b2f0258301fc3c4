import pytest

from models.threat import EventType, ThreatAnalysis, ThreatLevel
from services.proof_generator import ProofGenerator
from services.proof_history import InvalidSenderAddress, ProofHistoryStore, resolve_sender

WALLET = "9xQeWvG816bUx9EPjHmaT23yvVM2ZWbrrpZb9PusVFin"


def _proof():
    analysis = ThreatAnalysis(
        is_malicious=True,
        threat_level=ThreatLevel.HIGH,
        event_type=EventType.PHISHING,
        confidence=0.8,
        score=12.0,
    )
    return ProofGenerator().generate_proof("content", analysis, now=1000.0)


def test_resolve_sender_forms():
    assert resolve_sender(" Alice@Example.COM ") == "alice@example.com"
    assert resolve_sender(WALLET) == WALLET
    with pytest.raises(InvalidSenderAddress):
        resolve_sender("not-an-address")
    with pytest.raises(InvalidSenderAddress):
        resolve_sender("")


def test_record_and_query():
    store = ProofHistoryStore()
    record = store.record_proof("Alice@Example.com", _proof(), score=140)

    assert record.score == 100.0
    assert record.sender == "alice@example.com"
    assert record.proof_hash.startswith("0x")
    assert store.records_for("alice@example.com") == [record]
    assert store.proof_count("ALICE@example.com") == 1
    assert store.has_malicious_proofs("alice@example.com") is True
    assert store.records_by_event_type("alice@example.com", EventType.PHISHING) == [record]
    assert store.records_by_event_type("alice@example.com", EventType.SPAM) == []


def test_unknown_sender_has_empty_history():
    store = ProofHistoryStore()
    assert store.records_for(WALLET) == []
    assert store.has_malicious_proofs(WALLET) is False


def test_invalid_sender_raises_on_lookup():
    store = ProofHistoryStore()
    with pytest.raises(InvalidSenderAddress):
        store.records_for("nobody")


def test_clear():
    store = ProofHistoryStore()
    store.record_proof(WALLET, _proof(), score=50)
    store.clear()
    assert store.proof_count(WALLET) == 0
