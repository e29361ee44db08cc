"""
File exports: the usage CSV report and the client shortlist (JSON and PDF).
"""

import csv
import io
import logging
from typing import Dict, List, Optional
from xml.sax.saxutils import escape

from reportlab.lib.colors import HexColor, black
from reportlab.lib.enums import TA_LEFT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import PageBreak, Paragraph, SimpleDocTemplate, Spacer
from sqlalchemy.orm import Session

from connext.models.project import Project
from connext.models.project_expert import PipelineStatus, ProjectExpert
from connext.models.usage_record import UsageRecord
from connext.models.vetting_question import VettingQuestion
from connext.schemas.shortlist import (
    ClientShortlist, ShortlistAvailability, ShortlistEmployment, ShortlistExpert,
    ShortlistProfile, ShortlistVettingAnswer,
)

logger = logging.getLogger(__name__)

USAGE_CSV_HEADERS = ["Date", "Project", "Expert", "Duration (min)", "Credits Used", "Notes"]

SHORTLIST_PIPELINE_STATUSES = (
    PipelineStatus.INTERESTED.value,
    PipelineStatus.SHORTLISTED.value,
    PipelineStatus.ACCEPTED.value,
    PipelineStatus.COMPLETED.value,
)


def _format_credits(value) -> str:
    return f"{float(value or 0):g}"


def usage_csv(records: List[UsageRecord]) -> bytes:
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(USAGE_CSV_HEADERS)
    for record in records:
        writer.writerow([
            record.call_date.strftime("%Y-%m-%d") if record.call_date else "",
            record.project.name if record.project else "",
            record.expert.name if record.expert else "",
            record.duration_minutes,
            _format_credits(record.credits_used),
            record.notes or "",
        ])
    logger.info(f"Exported {len(records)} usage records")
    return output.getvalue().encode("utf-8")


def _location(expert) -> Optional[str]:
    parts = [expert.city, expert.region, expert.country]
    return ", ".join(p for p in parts if p) or None


def _employment(expert) -> List[ShortlistEmployment]:
    entries = []
    for item in expert.employment_history or []:
        company = item.get("company")
        title = item.get("jobTitle") or item.get("job_title") or item.get("title")
        if not company or not title:
            continue
        entries.append(ShortlistEmployment(
            company=company,
            job_title=title,
            from_year=item.get("fromYear") or item.get("from_year"),
            to_year=item.get("toYear") or item.get("to_year"),
        ))
    return entries


def _vetting_answers(assignment: ProjectExpert, questions: Dict[int, VettingQuestion]) -> List[ShortlistVettingAnswer]:
    answers = {}
    for item in assignment.vq_answers or []:
        qid = item.get("questionId", item.get("question_id"))
        if qid is not None:
            answers[int(qid)] = item.get("answer")
    return [
        ShortlistVettingAnswer(question_id=q.id, question_text=q.question, answer_text=answers.get(q.id))
        for q in questions.values()
    ]


def build_client_shortlist(db: Session, project: Project) -> ClientShortlist:
    questions = {
        q.id: q for q in db.query(VettingQuestion)
        .filter(VettingQuestion.project_id == project.id)
        .order_by(VettingQuestion.order_index, VettingQuestion.id)
    }
    assignments = (
        db.query(ProjectExpert)
        .filter(
            ProjectExpert.project_id == project.id,
            ProjectExpert.pipeline_status.in_(SHORTLIST_PIPELINE_STATUSES),
        )
        .order_by(ProjectExpert.responded_at, ProjectExpert.id)
        .all()
    )

    experts = []
    for assignment in assignments:
        expert = assignment.expert
        experts.append(ShortlistExpert(
            project_expert_id=assignment.id,
            expert_id=expert.id,
            pipeline_status=assignment.pipeline_status,
            angles=assignment.angles or [],
            responded_at=assignment.responded_at,
            profile=ShortlistProfile(
                name=expert.name,
                email=expert.email,
                job_title=expert.job_title,
                company=expert.company,
                location=_location(expert),
                timezone=expert.timezone,
                years_of_experience=expert.years_of_experience,
                industry=expert.industry,
                expertise=expert.expertise,
                biography=expert.bio,
            ),
            employment_history=_employment(expert),
            vetting_answers=_vetting_answers(assignment, questions),
            availability=ShortlistAvailability(note=assignment.availability_note),
        ))

    return ClientShortlist(
        project_id=project.id,
        project_title=project.name,
        total_experts=len(experts),
        experts=experts,
    )


def _p(text) -> str:
    return escape(str(text)) if text is not None else ""


def client_shortlist_pdf(shortlist: ClientShortlist) -> bytes:
    """Render the shortlist as a PDF with one section per expert."""
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4, topMargin=0.8*inch, bottomMargin=0.8*inch)

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        'ShortlistTitle',
        parent=styles['Title'],
        fontSize=20,
        spaceAfter=12,
        alignment=TA_LEFT,
        textColor=HexColor('#1e3a5f')
    )
    section_style = ParagraphStyle(
        'SectionHeading',
        parent=styles['Heading3'],
        spaceBefore=10,
        spaceAfter=4,
        textColor=black
    )

    content = []
    content.append(Paragraph(f"Expert Shortlist: {_p(shortlist.project_title)}", title_style))
    content.append(Paragraph(f"{shortlist.total_experts} expert(s)", styles['Normal']))
    content.append(Spacer(1, 20))

    if not shortlist.experts:
        content.append(Paragraph("No experts have been shortlisted for this project yet.", styles['Normal']))

    for index, item in enumerate(shortlist.experts):
        if index:
            content.append(PageBreak())
        profile = item.profile
        content.append(Paragraph(f"<b>{_p(profile.name)}</b>", styles['Heading2']))
        headline = " at ".join(_p(v) for v in (profile.job_title, profile.company) if v)
        if headline:
            content.append(Paragraph(headline, styles['Normal']))
        if profile.location:
            content.append(Paragraph(f"Location: {_p(profile.location)}", styles['Normal']))
        if profile.years_of_experience is not None:
            content.append(Paragraph(f"Experience: {profile.years_of_experience} years", styles['Normal']))
        if item.angles:
            content.append(Paragraph(f"Angles: {_p(', '.join(item.angles))}", styles['Normal']))

        if profile.biography:
            content.append(Paragraph("Biography", section_style))
            content.append(Paragraph(_p(profile.biography), styles['Normal']))

        if item.employment_history:
            content.append(Paragraph("Employment History", section_style))
            for job in item.employment_history:
                years = "-".join(str(y) for y in (job.from_year, job.to_year) if y)
                line = f"{_p(job.job_title)}, {_p(job.company)}"
                content.append(Paragraph(f"{line} ({years})" if years else line, styles['Normal']))

        if item.vetting_answers:
            content.append(Paragraph("Vetting Questions", section_style))
            for answer in item.vetting_answers:
                content.append(Paragraph(f"<b>Q: {_p(answer.question_text)}</b>", styles['Normal']))
                content.append(Paragraph(f"A: {_p(answer.answer_text) or 'No answer'}", styles['Normal']))
                content.append(Spacer(1, 4))

        content.append(Paragraph("Availability", section_style))
        content.append(Paragraph(_p(item.availability.note) or "Not provided", styles['Normal']))

    doc.build(content)
    buffer.seek(0)
    logger.info(f"Rendered shortlist PDF for project {shortlist.project_id}")
    return buffer.getvalue()
