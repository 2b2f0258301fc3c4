import hashlib
import struct
import time
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from models.threat import EventType, ThreatAnalysis


PROOF_SIZE = 256
MARKER = 0xFF
HASH_OFFSET = 4
DETECTION_OFFSET = 36
DETECTION_SIZE = 64
FILLER_OFFSET = 100
PROOF_VERSION = "1.0.0"
PROOF_ALGORITHM = "STARK-PLACEHOLDER"


@dataclass(frozen=True)
class ThreatProof:
    """Fixed-layout placeholder bytes plus the public inputs submitted alongside them.

    No cryptographic meaning: the layout only lets the ledger side sanity-check
    what it receives.
    """

    proof: bytes
    event_type: EventType
    timestamp: float
    threat_score: int
    content_hash: str
    version: str = PROOF_VERSION
    algorithm: str = PROOF_ALGORITHM

    def to_dict(self) -> Dict[str, Any]:
        return {
            "proof": self.proof.hex(),
            "public_inputs": {
                "event_type": self.event_type.name.lower(),
                "timestamp": self.timestamp,
                "threat_score": self.threat_score,
                "content_hash": self.content_hash,
            },
            "metadata": {"version": self.version, "algorithm": self.algorithm},
        }


def hash_content(content: str) -> str:
    return hashlib.sha256((content or "").encode("utf-8", "surrogatepass")).hexdigest()


def _encode_detection(analysis: ThreatAnalysis) -> bytes:
    data = bytearray(DETECTION_SIZE)
    data[0] = min(len(analysis.detected_keywords), 255)
    data[1] = min(len(analysis.detected_patterns), 255)
    data[2] = min(len(analysis.metadata.suspicious_urls), 255)
    data[3] = 1 if analysis.metadata.has_attachments else 0
    data[4:8] = struct.pack("<I", min(round(analysis.score * 1000), 0xFFFFFFFF))
    return bytes(data)


def build_proof_bytes(analysis: ThreatAnalysis, content_hash: str) -> bytes:
    proof = bytearray(PROOF_SIZE)
    proof[0] = MARKER
    proof[1] = int(analysis.event_type)
    proof[2] = int(analysis.threat_level)
    proof[3] = round(analysis.confidence * 255)
    proof[HASH_OFFSET:DETECTION_OFFSET] = bytes.fromhex(content_hash)[:32]
    proof[DETECTION_OFFSET:DETECTION_OFFSET + DETECTION_SIZE] = _encode_detection(analysis)
    for i in range(FILLER_OFFSET, PROOF_SIZE):
        proof[i] = int((i * analysis.score) % 256)
    return bytes(proof)


class ProofGenerator:
    def generate_proof(self, content: str, analysis: ThreatAnalysis, now: Optional[float] = None) -> ThreatProof:
        content_hash = hash_content(content)
        return ThreatProof(
            proof=build_proof_bytes(analysis, content_hash),
            event_type=analysis.event_type,
            timestamp=time.time() if now is None else now,
            threat_score=round(analysis.score * 100),
            content_hash=content_hash,
        )

    def verify_proof(self, proof: ThreatProof) -> bool:
        if len(proof.proof) != PROOF_SIZE:
            return False
        if proof.proof[0] != MARKER:
            return False
        return proof.proof[1] == int(proof.event_type)

    def generate_batch_proofs(self, emails: Iterable[Tuple[str, ThreatAnalysis]]) -> List[ThreatProof]:
        return [
            self.generate_proof(content, analysis)
            for content, analysis in emails
            if analysis.is_malicious
        ]
