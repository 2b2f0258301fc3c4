from flask import Blueprint, jsonify, request

from config import config
from models.schemas import validate_payload
from routes.reputation import history_store, sender_reputation
from services.keyword_rules import load_keyword_rules
from services.preprocess import parse_email
from services.proof_generator import ProofGenerator
from services.proof_history import InvalidSenderAddress
from services.risk_scoring import ThreatScorer
from services.threat_detector import ThreatDetector
from utils.logger import log_threat_analysis, setup_logger


analyze_bp = Blueprint("analyze", __name__)
logger = setup_logger("mail_monitor.analyze")
detector = ThreatDetector(load_keyword_rules(config.KEYWORD_RULES_PATH))
scorer = ThreatScorer()
if config.WEIGHT_OVERRIDES:
    scorer.update_weights(config.WEIGHT_OVERRIDES)
proof_generator = ProofGenerator()


@analyze_bp.route("/analyze-email", methods=["POST"])
def analyze_email():
    payload = request.get_json(silent=True)
    email_obj, errors = validate_payload(payload)
    if errors:
        return jsonify({"error": "Validation error", "details": errors}), 400

    reputation = sender_reputation(email_obj.from_address)
    signals = parse_email(email_obj, max_chars=config.MAX_TEXT_CHARS)
    analysis = detector.analyze(email_obj, signals)
    report = scorer.generate_report(analysis, reputation.score / 100)
    log_threat_analysis(logger, email_obj.from_address, analysis)

    proof = None
    if analysis.is_malicious:
        proof = proof_generator.generate_proof(f"{email_obj.subject}\n{email_obj.body}", analysis)
        try:
            history_store.record_proof(email_obj.from_address, proof, report.normalized_score)
        except InvalidSenderAddress as exc:
            logger.warning("proof not recorded: %s", exc)

    return jsonify({
        "analysis": analysis.to_dict(),
        "signals": signals.to_dict(),
        "report": report.to_dict(),
        "sender_reputation": reputation.to_dict(),
        "proof": proof.to_dict() if proof else None,
    }), 200


@analyze_bp.route("/analyze-batch", methods=["POST"])
def analyze_batch():
    payload = request.get_json(silent=True)
    items = payload.get("emails") if isinstance(payload, dict) else None
    if not isinstance(items, list):
        return jsonify({"error": "Validation error", "details": ["emails must be a list"]}), 400

    emails = []
    details = []
    for i, item in enumerate(items):
        email_obj, errors = validate_payload(item)
        if errors:
            details.extend(f"emails[{i}]: {e}" for e in errors)
        else:
            emails.append(email_obj)
    if details:
        return jsonify({"error": "Validation error", "details": details}), 400

    signals = [parse_email(e, max_chars=config.MAX_TEXT_CHARS) for e in emails]
    analyses = detector.analyze_batch(emails, signals, max_workers=config.BATCH_WORKERS)
    for email_obj, analysis in zip(emails, analyses):
        log_threat_analysis(logger, email_obj.from_address, analysis)

    return jsonify({"results": [a.to_dict() for a in analyses]}), 200
