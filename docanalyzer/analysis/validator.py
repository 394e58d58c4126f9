"""Validates raw AI output against the analysis result shape."""

import json
import re
from typing import Any, NoReturn

from docanalyzer.analysis.exceptions import ResponseParseError, SchemaValidationError
from docanalyzer.analysis.models import Analysis, CostAndRiskAnalysis

_FENCE_RE = re.compile(r"^```[\w+-]*[ \t]*\n?(.*?)\n?[ \t]*```$", re.DOTALL)
_INVALID_SHAPE = "Invalid JSON structure received from analysis pipeline"


def validate_analysis(raw: str) -> Analysis:
    """Parse a raw model response and build an Analysis.

    The structured-output request is only advisory, so every response is
    checked here regardless of how it was produced.

    Raises:
        ResponseParseError: if the text is not valid JSON.
        SchemaValidationError: if the JSON lacks a required field or has the wrong type.
    """
    data = parse_json_response(raw)
    return build_analysis(data)


def strip_code_fence(raw: str) -> str:
    """Trim whitespace and remove a surrounding ``` block, with or without a language tag."""
    cleaned = raw.strip()
    match = _FENCE_RE.match(cleaned)
    if match:
        cleaned = match.group(1).strip()
    return cleaned


def parse_json_response(raw: str) -> Any:
    cleaned = strip_code_fence(raw)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise ResponseParseError(f"Invalid JSON response: {exc}") from exc


def build_analysis(data: Any) -> Analysis:
    if not isinstance(data, dict):
        _fail("response must be a JSON object")

    summary = data.get("summary")
    if not summary or not isinstance(summary, str):
        _fail("'summary' must be a non-empty string")

    findings = data.get("criticalFindings")
    if not isinstance(findings, list):
        _fail("'criticalFindings' must be a list")

    cost_and_risk = data.get("costAndRiskAnalysis")
    if not isinstance(cost_and_risk, dict):
        _fail("'costAndRiskAnalysis' must be an object")

    costs = cost_and_risk.get("costs")
    if not isinstance(costs, list):
        _fail("'costAndRiskAnalysis.costs' must be a list")

    risks = cost_and_risk.get("risks")
    if not isinstance(risks, list):
        _fail("'costAndRiskAnalysis.risks' must be a list")

    return Analysis(
        summary=summary,
        critical_findings=_string_items(findings, "criticalFindings"),
        cost_and_risk_analysis=CostAndRiskAnalysis(
            costs=_string_items(costs, "costAndRiskAnalysis.costs"),
            risks=_string_items(risks, "costAndRiskAnalysis.risks"),
        ),
    )


def _string_items(items: list[Any], field: str) -> list[str]:
    for i, item in enumerate(items):
        if not isinstance(item, str):
            _fail(f"'{field}' item at index {i} must be a string")
    return list(items)


def _fail(detail: str) -> NoReturn:
    raise SchemaValidationError(f"{_INVALID_SHAPE}: {detail}")
