"""Tests del exportador JSON."""

from __future__ import annotations

import json

from adapters.json_exporter import export_result_json
from core.domain.models import ErrorResult, VerifyResult


def test_export_success(tmp_path):
    result = VerifyResult.from_payload({"email": "a@b.com", "valid": True, "details": {"risk_level": "low"}})
    path = export_result_json(result=result, output_path=tmp_path / "out" / "verify.json")

    assert json.loads(path.read_text(encoding="utf-8")) == result.to_output()


def test_export_error_omits_kind(tmp_path):
    result = ErrorResult.api({"message": "nope"})
    path = export_result_json(result=result, output_path=tmp_path / "error.json")

    assert json.loads(path.read_text(encoding="utf-8")) == {"error": "nope", "raw": {"message": "nope"}}
