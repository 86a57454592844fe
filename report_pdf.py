# report_pdf.py
import logging
import os

from fpdf import FPDF
from fpdf.enums import XPos, YPos

logger = logging.getLogger(__name__)

# Core PDF fonts are latin-1 only; point this at a TTF (e.g. Noto Sans JP) for Japanese text.
FONT_PATH_ENV = "LIFEPLAN_PDF_FONT"

SCENARIO_TITLES_EN = {
    ("survivor", "husband"): "Husband's death",
    ("survivor", "wife"): "Wife's death",
    ("survivor", "single"): "Own death",
    ("disability", "husband"): "Husband's disability",
    ("disability", "wife"): "Wife's disability",
    ("disability", "single"): "Own disability",
}


def _setup_font(pdf):
    font_path = os.environ.get(FONT_PATH_ENV)
    if font_path and os.path.exists(font_path):
        pdf.add_font("ReportFont", "", font_path)
        pdf.add_font("ReportFont", "B", font_path)
        return "ReportFont", True
    if font_path:
        logger.warning("PDF font %s not found, using Helvetica", font_path)
    return "Helvetica", False


def build_coverage_report(profile, results, settings=None, user_label="customer"):
    """Necessary-coverage summary as PDF bytes."""
    pdf = FPDF()
    pdf.add_page()
    font, unicode_font = _setup_font(pdf)

    pdf.set_font(font, 'B', 16)
    pdf.cell(0, 10, 'Necessary Coverage Report', new_x=XPos.LMARGIN, new_y=YPos.NEXT, align='C')
    pdf.set_font(font, '', 10)
    pdf.cell(0, 8, f"Prepared for: {user_label}", new_x=XPos.LMARGIN, new_y=YPos.NEXT, align='C')
    pdf.ln(5)

    pdf.set_font(font, 'B', 12)
    pdf.cell(0, 10, 'Household', new_x=XPos.LMARGIN, new_y=YPos.NEXT, align='L')
    pdf.set_font(font, '', 10)
    household = {
        "Monthly living expense": profile.monthly_living_expense,
        "Housing loan (monthly)": profile.housing_loan_monthly,
        "Children": len(profile.children_ages),
    }
    if settings is not None:
        household["Current savings"] = settings.current_savings
    for key, value in household.items():
        pdf.cell(0, 8, f"- {key}: {value:,.0f}", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    if profile.children_ages:
        ages = ", ".join(str(age) for age in profile.children_ages)
        pdf.cell(0, 8, f"- Children's ages: {ages}", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.ln(10)

    pdf.set_font(font, 'B', 12)
    pdf.cell(0, 10, 'Scenario Summary (JPY)', new_x=XPos.LMARGIN, new_y=YPos.NEXT, align='L')
    pdf.set_font(font, 'B', 8)
    pdf.cell(45, 8, 'Scenario', 1)
    pdf.cell(20, 8, 'Until age', 1)
    pdf.cell(40, 8, 'Total shortfall', 1)
    pdf.cell(40, 8, 'After savings', 1)
    pdf.cell(40, 8, 'Max monthly gap', 1)
    pdf.ln()

    pdf.set_font(font, '', 8)
    for result in results.values():
        title = result.title if unicode_font else SCENARIO_TITLES_EN[(result.category, result.target)]
        pdf.cell(45, 8, title, 1)
        pdf.cell(20, 8, str(result.end_age), 1)
        pdf.cell(40, 8, f"{result.total_shortfall:,.0f}", 1)
        pdf.cell(40, 8, f"{result.net_shortfall:,.0f}", 1)
        pdf.cell(40, 8, f"{result.monthly_shortfall_max:,.0f}", 1)
        pdf.ln()
    pdf.ln(10)

    for result in results.values():
        title = result.title if unicode_font else SCENARIO_TITLES_EN[(result.category, result.target)]
        pdf.set_font(font, 'B', 12)
        pdf.cell(0, 10, f"{title}: yearly balance", new_x=XPos.LMARGIN, new_y=YPos.NEXT, align='L')
        pdf.set_font(font, 'B', 8)
        pdf.cell(20, 8, 'Age', 1)
        pdf.cell(40, 8, 'Pension', 1)
        pdf.cell(40, 8, 'Target', 1)
        pdf.cell(40, 8, 'Income', 1)
        pdf.cell(40, 8, 'Shortfall', 1)
        pdf.ln()
        pdf.set_font(font, '', 8)
        for row in result.data:
            if row.months_active == 0:
                continue
            pdf.cell(20, 8, str(row.age), 1)
            pdf.cell(40, 8, f"{row.pension:,.0f}", 1)
            pdf.cell(40, 8, f"{row.total_target:,.0f}", 1)
            pdf.cell(40, 8, f"{row.total_income:,.0f}", 1)
            pdf.cell(40, 8, f"{row.shortfall:,.0f}", 1)
            pdf.ln()
        pdf.ln(5)

    pdf.set_font(font, '', 7)
    pdf.multi_cell(0, 5, "Estimates only. Actual pension and allowance amounts depend on "
                         "contribution records and eligibility at the time of the event.")
    logger.info("Built coverage report with %d scenarios", len(results))
    return bytes(pdf.output())
