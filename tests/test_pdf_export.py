from core.models import InvestmentAnalysis
from core.payment_model import PaymentModel
from export.pdf_export import build_report_pdf


def test_report_pdf_bytes(sample_report, property_input):
    payment = PaymentModel(property_input.terms).get_snapshot()
    report = dict(sample_report, monthlyPayment=payment.model_dump(by_alias=True))
    pdf = build_report_pdf(InvestmentAnalysis.model_validate(report), property_input)
    assert pdf.startswith(b"%PDF")
    assert len(pdf) > 1000


def test_report_pdf_escapes_markup(sample_report):
    sample_report["strengths"] = ["Price < comps & rising"]
    sample_report["safetyData"] = None
    pdf = build_report_pdf(InvestmentAnalysis.model_validate(sample_report))
    assert pdf.startswith(b"%PDF")
