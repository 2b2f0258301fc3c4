import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Mapping, Optional, Sequence

from models.reputation import ProofRecord, ReputationScore, TrustLevel


BASE_SCORE = 100.0
SECONDS_PER_DAY = 86400
DECAY_DAYS = 365
MIN_RECENCY = 0.5
DANGEROUS_PROOF_COUNT = 5

# matched by substring on the record's event type name, first hit wins
PENALTY_WEIGHTS = (
    ("phishing", 30.0),
    ("malware", 40.0),
    ("scam", 35.0),
)
DEFAULT_PENALTY = 15.0

REPUTATION_SUMMARIES = {
    TrustLevel.TRUSTED: "This sender has an excellent reputation with no reported incidents.",
    TrustLevel.NEUTRAL: "This sender has a neutral reputation. Exercise normal caution.",
    TrustLevel.SUSPICIOUS: "This sender has some reported incidents. Be cautious.",
    TrustLevel.DANGEROUS: "This sender has multiple malicious reports. DO NOT TRUST.",
}


def base_penalty(event_name: str) -> float:
    name = (event_name or "").lower()
    for marker, weight in PENALTY_WEIGHTS:
        if marker in name:
            return weight
    return DEFAULT_PENALTY


def recency_multiplier(timestamp: float, now: float) -> float:
    age_days = (now - timestamp) / SECONDS_PER_DAY
    return max(MIN_RECENCY, 1 - age_days / DECAY_DAYS)


def trust_level_for(score: float, total_proofs: int) -> TrustLevel:
    if total_proofs >= DANGEROUS_PROOF_COUNT:
        return TrustLevel.DANGEROUS
    if score >= 80 and total_proofs == 0:
        return TrustLevel.TRUSTED
    if score >= 60:
        return TrustLevel.NEUTRAL
    if score >= 40:
        return TrustLevel.SUSPICIOUS
    return TrustLevel.DANGEROUS


class ReputationCalculator:
    """Aggregates a sender's proof history into a decaying 0-100 trust score.

    History is supplied on every call; the calculator keeps none. ``now`` (epoch
    seconds) can be pinned for reproducible results and defaults to the wall clock.
    """

    def calculate_penalty(self, record: ProofRecord, now: float) -> float:
        penalty = base_penalty(record.event_name)
        penalty *= (record.score or 0) / 100
        return penalty * recency_multiplier(record.timestamp, now)

    def calculate_reputation(
        self,
        sender: str,
        proof_records: Optional[Sequence[ProofRecord]],
        now: Optional[float] = None,
    ) -> ReputationScore:
        if now is None:
            now = time.time()
        records = tuple(proof_records or ())

        score = BASE_SCORE - sum(self.calculate_penalty(r, now) for r in records)
        score = max(0.0, min(BASE_SCORE, score))

        return ReputationScore(
            sender=sender,
            score=score,
            trust_level=trust_level_for(score, len(records)),
            total_proofs=len(records),
            proof_records=records,
            last_updated=now,
        )

    def calculate_many(
        self,
        histories: Mapping[str, Sequence[ProofRecord]],
        now: Optional[float] = None,
        max_workers: Optional[int] = None,
    ) -> List[ReputationScore]:
        if now is None:
            now = time.time()
        senders = list(histories)

        def _one(sender: str) -> ReputationScore:
            return self.calculate_reputation(sender, histories[sender], now)

        if not max_workers or max_workers <= 1 or len(senders) <= 1:
            return [_one(s) for s in senders]

        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            return list(pool.map(_one, senders))

    @staticmethod
    def is_trustworthy(reputation: ReputationScore) -> bool:
        return reputation.trust_level == TrustLevel.TRUSTED

    @staticmethod
    def is_dangerous(reputation: ReputationScore) -> bool:
        return reputation.trust_level == TrustLevel.DANGEROUS

    @staticmethod
    def get_reputation_summary(trust_level: TrustLevel) -> str:
        return REPUTATION_SUMMARIES.get(trust_level, "Reputation unknown.")
