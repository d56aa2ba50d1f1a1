"""Tests for ExampleClientAdapter (template/reference adapter)."""

import json

from billguard.analysis.example_client_adapter import ExampleClientAdapter
from billguard.analysis.normalizer import normalize


def _complete(adapter: ExampleClientAdapter, **overrides: object) -> str:
    kwargs: dict[str, object] = {
        "model": "any",
        "temperature": 0.0,
        "top_p": 0.8,
        "max_output_tokens": 4096,
        "prompt": "prompt",
    }
    kwargs.update(overrides)
    return adapter.create_completion(**kwargs)  # type: ignore[arg-type]


class TestExampleClientAdapter:
    def test_implements_base_contract(self) -> None:
        result = _complete(ExampleClientAdapter())
        assert isinstance(result, str)
        parsed = json.loads(result)
        assert parsed["category"] == "medical_bill"
        assert "medicalBillData" in parsed

    def test_normalizes_cleanly(self) -> None:
        analysis = normalize(_complete(ExampleClientAdapter()))
        bill = analysis.medical_bill_data
        assert bill is not None
        assert len(bill.line_items) == 4
        assert [item.code for item in bill.flagged_items] == ["99285", "85025", "99051"]
        assert bill.total_savings == 4210.0
        assert analysis.action_items[0].status == "pending"

    def test_flagged_savings_add_up_to_total(self) -> None:
        bill = normalize(_complete(ExampleClientAdapter())).medical_bill_data
        assert bill is not None
        assert sum(item.savings for item in bill.flagged_items) == bill.total_savings

    def test_ignores_input_parameters(self) -> None:
        adapter = ExampleClientAdapter()
        r1 = _complete(adapter, model="a", prompt="p1")
        r2 = _complete(adapter, model="b", prompt="p2", image_base64="QUJD", mime_type="image/png")
        assert r1 == r2
