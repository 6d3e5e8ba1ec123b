import pytest
import requests

from core import analysis
from core.config import Settings
from core.payment_model import PaymentModel


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=""):
        self.status_code = status_code
        self._body = body
        self.text = text

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._body is None:
            raise ValueError("no json")
        return self._body


@pytest.fixture
def settings():
    return Settings(api_key="test-key", gateway_url="https://gateway.test/v1/chat/completions")


@pytest.fixture
def payment(terms):
    return PaymentModel(terms).get_snapshot()


def _patch_post(monkeypatch, response, calls=None):
    def fake_post(url, headers=None, json=None, timeout=None):
        if calls is not None:
            calls.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        return response

    monkeypatch.setattr(analysis.requests, "post", fake_post)


def test_verdict_bands():
    assert analysis.verdict_for_score(92) == "Strong Buy"
    assert analysis.verdict_for_score(85) == "Strong Buy"
    assert analysis.verdict_for_score(70) == "Good Opportunity"
    assert analysis.verdict_for_score(55) == "Proceed Carefully"
    assert analysis.verdict_for_score(54.9) == "Do Not Invest"


def test_prompt_includes_payment_and_ratio(property_input, payment):
    prompt = analysis.build_analysis_prompt(property_input, payment)
    assert "State: Texas" in prompt
    assert "Down Payment: $100,000.00 (20.0%)" in prompt
    assert "PMI Required: No" in prompt
    assert "Monthly Payment Breakdown" in prompt
    ratio = payment.total / (150000 / 12) * 100
    assert f"Housing Cost to Income Ratio: {ratio:.1f}%" in prompt


def test_prompt_without_payment(property_input):
    prompt = analysis.build_analysis_prompt(property_input, None)
    assert "Housing Cost to Income Ratio: N/A" in prompt
    assert "Monthly Payment Breakdown" not in prompt


def test_request_payload_forces_tool(property_input, payment):
    payload = analysis.build_request_payload(property_input, payment, "some/model")
    assert payload["model"] == "some/model"
    assert payload["tool_choice"]["function"]["name"] == "investment_analysis"
    assert [m["role"] for m in payload["messages"]] == ["system", "user"]
    assert "Deal Economics" in payload["messages"][0]["content"]


def test_successful_request(monkeypatch, property_input, payment, settings, completion_body):
    calls = []
    _patch_post(monkeypatch, FakeResponse(200, completion_body), calls)
    result = analysis.request_analysis(property_input, payment, settings)
    assert result.overall_score == 78
    assert result.verdict == "Good Opportunity"
    assert result.monthly_payment == payment
    assert len(calls) == 1
    assert calls[0]["url"] == settings.gateway_url
    assert calls[0]["headers"]["Authorization"] == "Bearer test-key"
    assert calls[0]["timeout"] == settings.timeout


def test_missing_payment_attaches_zeros(monkeypatch, property_input, settings, completion_body):
    _patch_post(monkeypatch, FakeResponse(200, completion_body))
    result = analysis.request_analysis(property_input, None, settings)
    assert result.monthly_payment.total == 0


@pytest.mark.parametrize(
    "status, error",
    [
        (429, analysis.RateLimitError),
        (402, analysis.CreditsExhaustedError),
        (500, analysis.GatewayError),
    ],
)
def test_gateway_status_errors(monkeypatch, property_input, payment, settings, status, error):
    _patch_post(monkeypatch, FakeResponse(status, text="boom"))
    with pytest.raises(error):
        analysis.request_analysis(property_input, payment, settings)


def test_gateway_error_keeps_status(monkeypatch, property_input, payment, settings):
    _patch_post(monkeypatch, FakeResponse(503, text="down"))
    with pytest.raises(analysis.GatewayError) as info:
        analysis.request_analysis(property_input, payment, settings)
    assert info.value.status_code == 503


def test_network_failure_is_gateway_error(monkeypatch, property_input, payment, settings):
    def fake_post(*args, **kwargs):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(analysis.requests, "post", fake_post)
    with pytest.raises(analysis.GatewayError):
        analysis.request_analysis(property_input, payment, settings)


def test_missing_api_key(property_input, payment):
    with pytest.raises(analysis.ConfigurationError):
        analysis.request_analysis(property_input, payment, Settings(api_key=None))


def test_wrong_tool_is_invalid(monkeypatch, property_input, payment, settings, completion_body):
    completion_body["choices"][0]["message"]["tool_calls"][0]["function"]["name"] = "other"
    _patch_post(monkeypatch, FakeResponse(200, completion_body))
    with pytest.raises(analysis.InvalidResponseError):
        analysis.request_analysis(property_input, payment, settings)


def test_no_tool_calls_is_invalid(payment):
    with pytest.raises(analysis.InvalidResponseError):
        analysis.parse_analysis_response({"choices": [{"message": {"content": "hi"}}]}, payment)


def test_bad_arguments_is_invalid(payment, completion_body):
    completion_body["choices"][0]["message"]["tool_calls"][0]["function"]["arguments"] = "{not json"
    with pytest.raises(analysis.InvalidResponseError):
        analysis.parse_analysis_response(completion_body, payment)


def test_non_json_body_is_invalid(monkeypatch, property_input, payment, settings):
    _patch_post(monkeypatch, FakeResponse(200, None))
    with pytest.raises(analysis.InvalidResponseError):
        analysis.request_analysis(property_input, payment, settings)
