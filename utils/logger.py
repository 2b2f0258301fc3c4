import logging

from models.reputation import ReputationScore
from models.threat import ThreatAnalysis


def setup_logger(name: str = "mail_monitor") -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return logger


def log_threat_analysis(logger: logging.Logger, sender: str, analysis: ThreatAnalysis) -> None:
    logger.info(
        "analyzed email sender=%s score=%s threat_level=%s event_type=%s malicious=%s",
        sender,
        analysis.score,
        analysis.threat_level.name.lower(),
        analysis.event_type.name.lower(),
        analysis.is_malicious,
    )
    if analysis.reasons:
        logger.debug("reasons for sender=%s: %s", sender, "; ".join(analysis.reasons))


def log_reputation(logger: logging.Logger, reputation: ReputationScore) -> None:
    logger.info(
        "reputation sender=%s score=%.2f trust_level=%s proofs=%s",
        reputation.sender,
        reputation.score,
        reputation.trust_level.name.lower(),
        reputation.total_proofs,
    )
