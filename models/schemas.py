from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class AttachmentInfo:
    filename: str
    content_type: str = ""
    size: int = 0


@dataclass(frozen=True)
class EmailContent:
    subject: str
    body: str
    from_address: str
    attachments: Tuple[AttachmentInfo, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ParsedSignals:
    plain_text: str = ""
    urls: Tuple[str, ...] = field(default_factory=tuple)
    domains: Tuple[str, ...] = field(default_factory=tuple)
    suspicious_patterns: Tuple[str, ...] = field(default_factory=tuple)
    has_urgent_language: bool = False
    has_money_requests: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "urls": list(self.urls or ()),
            "domains": list(self.domains or ()),
            "suspicious_patterns": list(self.suspicious_patterns or ()),
            "has_urgent_language": self.has_urgent_language,
            "has_money_requests": self.has_money_requests,
        }


REQUIRED_FIELDS = ["from_address", "subject", "body"]


def validate_payload(raw: Dict[str, Any]) -> Tuple[Optional[EmailContent], List[str]]:
    errors: List[str] = []

    if not isinstance(raw, dict):
        return None, ["Payload must be a JSON object"]

    for name in REQUIRED_FIELDS:
        if name not in raw:
            errors.append(f"Missing required field: {name}")

    if errors:
        return None, errors

    from_address = raw.get("from_address", "")
    subject = raw.get("subject", "")
    body = raw.get("body", "")
    attachments = raw.get("attachments", [])

    if not isinstance(from_address, str) or not from_address.strip():
        errors.append("from_address must be a non-empty string")
    if not isinstance(subject, str):
        errors.append("subject must be a string")
    if not isinstance(body, str):
        errors.append("body must be a string")

    parsed_attachments: List[AttachmentInfo] = []
    if not isinstance(attachments, list):
        errors.append("attachments must be a list")
    else:
        for i, item in enumerate(attachments):
            if not isinstance(item, dict):
                errors.append(f"attachments[{i}] must be an object")
                continue

            filename = item.get("filename")
            content_type = item.get("content_type", "")
            size = item.get("size", 0)

            if not isinstance(filename, str):
                errors.append(f"attachments[{i}].filename must be a string")
            if not isinstance(content_type, str):
                errors.append(f"attachments[{i}].content_type must be a string")
            if not isinstance(size, (int, float)) or isinstance(size, bool):
                errors.append(f"attachments[{i}].size must be numeric")

            if (
                isinstance(filename, str)
                and isinstance(content_type, str)
                and isinstance(size, (int, float))
            ):
                parsed_attachments.append(
                    AttachmentInfo(filename=filename, content_type=content_type, size=int(size))
                )

    if errors:
        return None, errors

    return (
        EmailContent(
            subject=subject,
            body=body,
            from_address=from_address.strip(),
            attachments=tuple(parsed_attachments),
        ),
        [],
    )
