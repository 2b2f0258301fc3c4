import re
import threading
from collections import defaultdict
from typing import Dict, List, Union

from models.reputation import ProofRecord
from models.threat import EventType
from services.proof_generator import ThreatProof


BASE58_RE = re.compile(r"^[1-9A-HJ-NP-Za-km-z]{32,44}$")
EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class InvalidSenderAddress(ValueError):
    pass


def resolve_sender(address: str) -> str:
    """Normalize a sender identity: a base58 wallet address or an email address."""
    candidate = (address or "").strip()
    if BASE58_RE.match(candidate):
        return candidate
    if EMAIL_RE.match(candidate):
        return candidate.lower()
    raise InvalidSenderAddress(f"Invalid sender address format: {address!r}")


class ProofHistoryStore:
    def __init__(self):
        self._records: Dict[str, List[ProofRecord]] = defaultdict(list)
        self._lock = threading.Lock()

    def add(self, record: ProofRecord) -> ProofRecord:
        sender = resolve_sender(record.sender)
        with self._lock:
            self._records[sender].append(record)
        return record

    def record_proof(self, sender: str, proof: ThreatProof, score: float, verified: bool = True) -> ProofRecord:
        record = ProofRecord(
            sender=resolve_sender(sender),
            event_type=proof.event_type,
            timestamp=proof.timestamp,
            score=min(100.0, max(0.0, float(score))),
            proof_hash="0x" + proof.content_hash,
            verified=verified,
        )
        return self.add(record)

    def records_for(self, sender: str) -> List[ProofRecord]:
        key = resolve_sender(sender)
        with self._lock:
            return list(self._records.get(key, ()))

    def records_by_event_type(self, sender: str, event_type: Union[EventType, str]) -> List[ProofRecord]:
        return [r for r in self.records_for(sender) if r.event_type == event_type]

    def proof_count(self, sender: str) -> int:
        return len(self.records_for(sender))

    def has_malicious_proofs(self, sender: str) -> bool:
        return self.proof_count(sender) > 0

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
