from typing import Dict, List, Optional, Sequence

from models.schemas import AttachmentInfo


DANGEROUS_EXTENSIONS = (
    ".exe",
    ".scr",
    ".bat",
    ".cmd",
    ".com",
    ".pif",
    ".vbs",
    ".js",
    ".jar",
    ".msi",
    ".dll",
)
DANGEROUS_ATTACHMENT_POINTS = 8


def analyze_attachments(attachments: Optional[Sequence[AttachmentInfo]]) -> Dict:
    attachments = attachments or ()
    score = 0.0
    reasons: List[str] = []

    for att in attachments:
        filename = (att.filename or "").lower()
        if filename and filename.endswith(DANGEROUS_EXTENSIONS):
            score += DANGEROUS_ATTACHMENT_POINTS
            reasons.append(f"Dangerous attachment: {att.filename}")

    return {"score": score, "reasons": reasons, "count": len(attachments)}
