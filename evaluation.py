import argparse
from pathlib import Path

import pandas as pd
from sklearn.metrics import accuracy_score, f1_score, precision_score, recall_score

from models.schemas import EmailContent
from services.keyword_rules import load_keyword_rules
from services.threat_detector import ThreatDetector


def load_emails(df: pd.DataFrame):
    df = df.fillna("")
    return [
        EmailContent(
            subject=str(row["subject"]),
            body=str(row["body"]),
            from_address=str(row["from_address"]),
        )
        for _, row in df.iterrows()
    ]


def evaluate(csv_path: Path, rules_path: str = "", workers: int = 1) -> dict:
    """
    CSV format expected:
    subject,body,from_address,label
    "URGENT: Verify...","Your account has been suspended...",alerts@bank-secure.xyz,1
    ...
    """
    df = pd.read_csv(csv_path)
    detector = ThreatDetector(load_keyword_rules(rules_path))
    analyses = detector.analyze_batch(load_emails(df), max_workers=workers)

    y_true = df["label"].astype(int)
    y_pred = [int(a.is_malicious) for a in analyses]

    return {
        "accuracy": round(accuracy_score(y_true, y_pred), 4),
        "precision": round(precision_score(y_true, y_pred, zero_division=0), 4),
        "recall": round(recall_score(y_true, y_pred, zero_division=0), 4),
        "f1": round(f1_score(y_true, y_pred, zero_division=0), 4),
    }


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Score the rule-based detector on a labeled email CSV")
    parser.add_argument("--csv", required=True, help="Path to CSV with subject,body,from_address,label")
    parser.add_argument("--rules", default="", help="Optional keyword rules JSON file")
    parser.add_argument("--workers", type=int, default=1)
    args = parser.parse_args()
    for name, value in evaluate(Path(args.csv), args.rules, args.workers).items():
        print(f"{name.capitalize()}:", value)
