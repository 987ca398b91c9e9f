"""
Response Serializers

Render sorted organization summaries as a JSON document or a CSV table.
"""

import json
from typing import Any, Dict, List

from ..aggregation import OrgSummary

CSV_LIST_SEPARATOR = "|"
CSV_LINE_TERMINATOR = "\r\n"


def summaries_payload(summaries: List[OrgSummary]) -> Dict[str, Any]:
    """Wrap summaries in the ``{"organizations": [...]}`` envelope."""
    return {"organizations": [summary.model_dump() for summary in summaries]}


def to_json(summaries: List[OrgSummary]) -> str:
    """Pretty-printed JSON document with 2-space indentation."""
    return json.dumps(summaries_payload(summaries), indent=2, ensure_ascii=False)


def csv_header() -> List[str]:
    return list(OrgSummary.model_fields)


def csv_value(value: Any) -> str:
    """
    Encode one CSV cell.

    Lists are joined with "|" and None becomes an empty string; the result
    is then JSON-encoded, so strings come out double-quoted and escaped.
    """
    if value is None:
        value = ""
    elif isinstance(value, (list, tuple)):
        value = CSV_LIST_SEPARATOR.join(str(item) for item in value)
    return json.dumps(value, ensure_ascii=False)


def to_csv(summaries: List[OrgSummary]) -> str:
    """
    CSV table with one row per organization.

    The header row lists the OrgSummary fields in model order and is written
    even when there are no summaries. Every row ends with CRLF.
    """
    header = csv_header()
    lines = [",".join(header)]

    for summary in summaries:
        row = summary.model_dump()
        lines.append(",".join(csv_value(row[field]) for field in header))

    return CSV_LINE_TERMINATOR.join(lines) + CSV_LINE_TERMINATOR
