"""
Rule-based inquiry parsing and lead scoring.

Works without any model access: keyword tables and regular expressions pull a
client name, project type, budget, timeline, location and requirements out of
an inquiry email, then a small additive score (0-10) ranks the lead.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Dict, List, Optional, Tuple

from config.settings import settings
from models.schemas import LeadScoreBreakdown, ParsedInquiry, ProjectType

# Checked in order; the first keyword present wins.
PROJECT_TYPE_KEYWORDS: Tuple[Tuple[str, ProjectType], ...] = (
    ("wedding", ProjectType.WEDDING),
    ("bride", ProjectType.WEDDING),
    ("groom", ProjectType.WEDDING),
    ("marriage", ProjectType.WEDDING),
    ("corporate", ProjectType.CORPORATE),
    ("conference", ProjectType.CORPORATE),
    ("business", ProjectType.CORPORATE),
    ("company", ProjectType.CORPORATE),
    ("event", ProjectType.EVENT),
    ("party", ProjectType.EVENT),
    ("portrait", ProjectType.PORTRAIT),
    ("headshot", ProjectType.PORTRAIT),
    ("product", ProjectType.PRODUCT),
    ("ecommerce", ProjectType.PRODUCT),
    ("e-commerce", ProjectType.PRODUCT),
    ("commercial", ProjectType.COMMERCIAL),
    ("advertising", ProjectType.COMMERCIAL),
    ("real estate", ProjectType.REAL_ESTATE),
    ("property", ProjectType.REAL_ESTATE),
    ("villa", ProjectType.REAL_ESTATE),
    ("apartment", ProjectType.REAL_ESTATE),
    ("fashion", ProjectType.FASHION),
    ("editorial", ProjectType.FASHION),
    ("model", ProjectType.FASHION),
)

UAE_LOCATIONS: Tuple[str, ...] = (
    "Dubai",
    "Abu Dhabi",
    "Sharjah",
    "Ajman",
    "Ras Al Khaimah",
    "Fujairah",
    "Umm Al Quwain",
    "Dubai Marina",
    "Downtown Dubai",
    "Palm Jumeirah",
    "JBR",
    "Business Bay",
    "DIFC",
    "Atlantis",
    "Burj Al Arab",
    "Emirates Palace",
)

NAME_PATTERN = re.compile(r"(?i:my name is|i'm|i am|this is)\s+([A-Z][a-z]+(?:\s+[A-Z][a-z]+)?)")

# Grouped thousands ("15,000") or a plain digit run ("15000").
AMOUNT = r"(\d{1,3}(?:,\d{3})+(?:\.\d{2})?|\d+(?:\.\d{2})?)"

BUDGET_PATTERNS = (
    re.compile(r"(?:budget|price|cost).*?(?:AED|aed|)\s*" + AMOUNT, re.I),
    re.compile(r"(?:AED|aed)\s*" + AMOUNT, re.I),
    re.compile(r"\$\s*" + AMOUNT, re.I),
    re.compile(AMOUNT + r"\s*(?:AED|aed|dollars?|USD)", re.I),
)
USD_MARKER = re.compile(r"USD|\$", re.I)

TIMELINE_PATTERNS = (
    re.compile(
        r"(?:next|in)\s+(january|february|march|april|may|june|july|august|september"
        r"|october|november|december)",
        re.I,
    ),
    re.compile(r"(?:in|within|next)\s+(\d+)\s+(days?|weeks?|months?)", re.I),
    re.compile(r"(?:timeline|timeframe|deadline).*?(\d+)\s+(days?|weeks?|months?)", re.I),
    re.compile(r"(urgent|asap|immediately|soon)", re.I),
)

# (phrases, label): the label is added when any phrase appears.
REQUIREMENT_KEYWORDS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("full day", "all day"), "Full day coverage"),
    (("video", "videography"), "Video coverage"),
    (("drone", "aerial"), "Drone/aerial shots"),
    (("edit", "post-production"), "Editing and post-production"),
    (("traditional",), "Traditional photography style"),
    (("modern", "contemporary"), "Modern/contemporary style"),
    (("white background",), "White background shots"),
    (("lifestyle",), "Lifestyle photography"),
)

SENTENCE_SPLIT = re.compile(r"[.!?]\s+")
NEED_PREFIX = re.compile(r"^(we|i|they)\s+(need|require|want)\s+", re.I)
MAX_REQUIREMENTS = 5

DELIVERABLES: Dict[ProjectType, List[str]] = {
    ProjectType.WEDDING: [
        "300-500 edited high-resolution photos",
        "3-5 minute highlight video",
        "Online gallery for guest access",
        "Print-ready files for albums",
    ],
    ProjectType.CORPORATE: [
        "150-200 edited photos",
        "Headshots of key personnel",
        "Event documentation",
        "Social media ready content",
    ],
    ProjectType.PRODUCT: [
        "Number of shots as specified",
        "White background variants",
        "Lifestyle/contextual shots",
        "Web-optimized and print-ready files",
    ],
    ProjectType.REAL_ESTATE: [
        "25-35 interior and exterior shots",
        "Aerial drone photography",
        "Twilight exterior photos",
        "Virtual tour (if applicable)",
    ],
    ProjectType.FASHION: [
        "100-150 edited images",
        "Behind-the-scenes content",
        "Raw files available",
        "Social media teasers",
    ],
    ProjectType.PORTRAIT: [
        "20-30 edited portraits",
        "Multiple outfit/background variations",
        "Retouched headshots",
        "Print and digital formats",
    ],
    ProjectType.EVENT: [
        "200-300 edited photos",
        "Full event coverage",
        "Candid and posed shots",
        "Online gallery delivery",
    ],
    ProjectType.COMMERCIAL: [
        "As per project scope",
        "Usage rights documentation",
        "Multiple format exports",
        "Revision rounds included",
    ],
    ProjectType.OTHER: [
        "Custom deliverables based on project scope",
        "High-resolution edited images",
        "Online gallery access",
        "Print-ready files",
    ],
}


def _extract_client_name(text: str) -> str:
    match = NAME_PATTERN.search(text)
    return match.group(1) if match else "Unknown Client"


def _extract_project_type(lower_text: str) -> ProjectType:
    for keyword, project_type in PROJECT_TYPE_KEYWORDS:
        if keyword in lower_text:
            return project_type
    return ProjectType.OTHER


def _extract_budget(text: str) -> str:
    for pattern in BUDGET_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        amount = int(float(match.group(1).replace(",", "")))
        currency = "USD" if USD_MARKER.search(text) else settings.studio.default_currency
        return f"{currency} {amount:,}"
    return "Not specified"


def _extract_timeline(text: str) -> str:
    for pattern in TIMELINE_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(0)
    return "Flexible"


def _extract_location(text: str) -> str:
    for location in UAE_LOCATIONS:
        if location in text:
            return location
    return "Not specified"


def _extract_requirements(text: str, lower_text: str) -> List[str]:
    requirements: List[str] = []
    for phrases, label in REQUIREMENT_KEYWORDS:
        if any(phrase in lower_text for phrase in phrases):
            requirements.append(label)

    for sentence in SENTENCE_SPLIT.split(text):
        sentence_lower = sentence.lower()
        if "need" not in sentence_lower and "require" not in sentence_lower:
            continue
        if not 20 < len(sentence) < 150:
            continue
        cleaned = NEED_PREFIX.sub("", sentence.strip())
        if cleaned and cleaned not in requirements:
            requirements.append(cleaned)

    if not requirements:
        requirements.append("Details to be discussed")
    return requirements[:MAX_REQUIREMENTS]


def parse_inquiry(text: str) -> ParsedInquiry:
    """Extract structured inquiry data from a free-text email."""
    lower_text = text.lower()
    return ParsedInquiry(
        client_name=_extract_client_name(text),
        project_type=_extract_project_type(lower_text),
        budget=_extract_budget(text),
        timeline=_extract_timeline(text),
        location=_extract_location(text),
        requirements=_extract_requirements(text, lower_text),
        raw_text=text,
    )


def _score_budget(budget: str) -> int:
    match = re.search(r"\d[\d,]*", budget)
    if not match:
        return 0
    amount = int(match.group(0).replace(",", ""))
    if amount >= 20000:
        return 3
    if amount >= 10000:
        return 2
    if amount >= 5000:
        return 1
    return 0


def _score_timeline(timeline: str) -> int:
    lower = timeline.lower()
    if "month" in lower or "week" in lower:
        number = re.search(r"\d+", timeline)
        if not number:
            return 0
        value = int(number.group(0))
        if "month" in lower and value >= 1:
            return 2
        if "week" in lower and value >= 2:
            return 2
        if "week" in lower and value >= 1:
            return 1
        return 0
    if "flexible" in lower:
        return 2
    if "urgent" in lower or "asap" in lower:
        return 1
    return 0


def _score_requirements(requirements: List[str]) -> int:
    if len(requirements) >= 4:
        return 2
    if len(requirements) >= 2:
        return 1
    return 0


def _score_location(location: str) -> int:
    if any(known in location for known in UAE_LOCATIONS):
        return 2
    if location != "Not specified":
        return 1
    return 0


def calculate_lead_score(parsed: ParsedInquiry) -> LeadScoreBreakdown:
    """Score a parsed inquiry on a 0-10 scale."""
    budget = _score_budget(parsed.budget)
    timeline = _score_timeline(parsed.timeline)
    requirements = _score_requirements(parsed.requirements)
    location = _score_location(parsed.location)
    return LeadScoreBreakdown(
        budget=budget,
        timeline=timeline,
        requirements=requirements,
        location=location,
        total=min(budget + timeline + requirements + location, 10),
    )


def generate_brief(parsed: ParsedInquiry, today: Optional[date] = None) -> str:
    """Markdown client brief for a parsed inquiry."""
    today = today or date.today()
    requirement_lines = "\n".join(f"- {item}" for item in parsed.requirements)
    deliverable_lines = "\n".join(
        f"- {item}" for item in DELIVERABLES.get(parsed.project_type, DELIVERABLES[ProjectType.OTHER])
    )
    return f"""# Client Brief - {parsed.client_name}

**Date:** {today.strftime("%B")} {today.day}, {today.year}

## Project Overview

- **Type:** {parsed.project_type.value}
- **Budget:** {parsed.budget}
- **Timeline:** {parsed.timeline}
- **Location:** {parsed.location}

## Requirements

{requirement_lines}

## Proposed Deliverables

{deliverable_lines}

## Next Steps

1. **Discovery Call** - Schedule 30-minute consultation to discuss vision and details
2. **Detailed Quote** - Provide itemized pricing based on requirements
3. **Portfolio Review** - Share relevant portfolio samples from similar projects
4. **Location Scout** - Visit and assess shooting location if needed
5. **Contract & Deposit** - Finalize agreement and secure booking with 50% deposit

## Notes

- All high-resolution images delivered via secure online gallery
- Turnaround time: 2-3 weeks for final edited photos
- Additional editing requests included in package
- Travel within UAE included in quoted price

---

*Generated by Studio CRM*
"""
