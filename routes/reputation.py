from flask import Blueprint, jsonify

from models.reputation import ReputationScore
from services.proof_history import InvalidSenderAddress, ProofHistoryStore
from services.reputation import ReputationCalculator
from utils.logger import log_reputation, setup_logger


reputation_bp = Blueprint("reputation", __name__)
logger = setup_logger("mail_monitor.reputation")
calculator = ReputationCalculator()
history_store = ProofHistoryStore()


def sender_reputation(sender: str) -> ReputationScore:
    try:
        records = history_store.records_for(sender)
    except InvalidSenderAddress as exc:
        logger.warning("%s; using empty history", exc)
        records = []
    return calculator.calculate_reputation(sender.strip(), records)


@reputation_bp.route("/reputation/<path:sender>", methods=["GET"])
def get_reputation(sender: str):
    reputation = sender_reputation(sender)
    log_reputation(logger, reputation)

    response = reputation.to_dict()
    response["summary"] = calculator.get_reputation_summary(reputation.trust_level)
    response["is_trustworthy"] = calculator.is_trustworthy(reputation)
    response["is_dangerous"] = calculator.is_dangerous(reputation)
    return jsonify(response), 200
