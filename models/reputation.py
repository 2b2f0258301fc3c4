from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Tuple, Union

from models.threat import EventType


class TrustLevel(IntEnum):
    TRUSTED = 0
    NEUTRAL = 1
    SUSPICIOUS = 2
    DANGEROUS = 3


@dataclass(frozen=True)
class ProofRecord:
    sender: str
    # EventType from local proofs, or a free-form label ("scam") from other history sources
    event_type: Union[EventType, str]
    timestamp: float
    score: float
    proof_hash: str
    verified: bool = True

    @property
    def event_name(self) -> str:
        if isinstance(self.event_type, EventType):
            return self.event_type.name.lower()
        return str(self.event_type or "spam").lower()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sender": self.sender,
            "event_type": self.event_name,
            "timestamp": self.timestamp,
            "score": self.score,
            "proof_hash": self.proof_hash,
            "verified": self.verified,
        }


@dataclass(frozen=True)
class ReputationScore:
    sender: str
    score: float
    trust_level: TrustLevel
    total_proofs: int
    proof_records: Tuple[ProofRecord, ...] = field(default_factory=tuple)
    last_updated: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sender": self.sender,
            "score": round(self.score, 2),
            "trust_level": self.trust_level.name.lower(),
            "total_proofs": self.total_proofs,
            "proof_records": [record.to_dict() for record in self.proof_records],
            "last_updated": self.last_updated,
        }
