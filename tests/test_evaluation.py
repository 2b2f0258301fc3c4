import pandas as pd

from evaluation import evaluate


def test_evaluate_reports_metrics(tmp_path):
    path = tmp_path / "emails.csv"
    pd.DataFrame(
        [
            {
                "subject": "URGENT: Verify Your Account Now!",
                "body": "Your account has been suspended. Click here immediately to verify your identity.",
                "from_address": "alerts@example.com",
                "label": 1,
            },
            {
                "subject": "Lunch tomorrow",
                "body": "Are we still on for noon?",
                "from_address": "friend@example.com",
                "label": 0,
            },
            {
                "subject": "",
                "body": None,
                "from_address": "x@example.org",
                "label": 0,
            },
        ]
    ).to_csv(path, index=False)

    metrics = evaluate(path, workers=2)
    assert metrics == {"accuracy": 1.0, "precision": 1.0, "recall": 1.0, "f1": 1.0}
