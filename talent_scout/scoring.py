"""
Talent Scout - score extraction
The model answers in free text; these helpers pull the numbers back out of it.
Labels are matched in English and Spanish since the interviewer persona may
answer in either language.
"""
import math
import re
from dataclasses import asdict, dataclass, field
from typing import Dict, Optional

from talent_scout.config import EXAM_PASSING_SCORE

# ============================================================================
# VOICE EXAM
# ============================================================================

_CONFIDENCE_RE = re.compile(r'(?<!de )\b(?:confidence|confianza)[:\s*]+(\d+)', re.IGNORECASE)
_CLARITY_RE = re.compile(r'\b(?:clarity|claridad)[:\s*]+(\d+)', re.IGNORECASE)
_PROFESSIONALISM_RE = re.compile(r'\b(?:professionalism|profesionalismo)[:\s*]+(\d+)', re.IGNORECASE)
_TRUST_RE = re.compile(
    r'(?:trust[\s_-]*building|construcci[óo]n\s+de\s+confianza)[:\s*]+(\d+)', re.IGNORECASE
)
_FEEDBACK_RE = re.compile(
    r'(?:detailed\s+feedback|retroalimentaci[óo]n\s+detallada)\s*\**\s*:?\s*\**(.+)',
    re.IGNORECASE | re.DOTALL,
)


@dataclass
class ExamScores:
    confidence: int
    clarity: int
    professionalism: int
    trust_building: int
    feedback: str = ""

    def as_dict(self) -> dict:
        scores = asdict(self)
        scores.pop("feedback")
        return scores


def _clamp(value: int) -> int:
    return max(0, min(100, value))


def extract_exam_scores(ai_response: str) -> Optional[ExamScores]:
    """Find the four exam metrics in the model's evaluation.

    Returns None unless all four are present. Only the first occurrence of
    each label counts.
    """
    if not ai_response:
        return None

    matches = [
        regex.search(ai_response)
        for regex in (_CONFIDENCE_RE, _CLARITY_RE, _PROFESSIONALISM_RE, _TRUST_RE)
    ]
    if not all(matches):
        return None

    confidence, clarity, professionalism, trust = (_clamp(int(m.group(1))) for m in matches)

    feedback_match = _FEEDBACK_RE.search(ai_response)
    feedback = feedback_match.group(1).strip() if feedback_match else ai_response.strip()

    return ExamScores(
        confidence=confidence,
        clarity=clarity,
        professionalism=professionalism,
        trust_building=trust,
        feedback=feedback or ai_response.strip(),
    )


def overall_score(scores: ExamScores) -> int:
    """Mean of the four metrics, rounded half up"""
    total = scores.confidence + scores.clarity + scores.professionalism + scores.trust_building
    return math.floor(total / 4 + 0.5)


def is_passing(overall: int) -> bool:
    return overall >= EXAM_PASSING_SCORE


# ============================================================================
# CV EVALUATION
# ============================================================================

_RESUME_SUMMARY_RE = re.compile(r'RESUME_SUMMARY:\s*\n(.+?)(?=\n\s*FIT_SCORE:|FIT_SCORE:)', re.IGNORECASE | re.DOTALL)
_FIT_SCORE_RE = re.compile(r'FIT_SCORE:\s*\**\s*(\d+)', re.IGNORECASE)
_BEST_MATCH_RE = re.compile(r'BEST_MATCH:[ \t]*(.+?)[ \t]*$', re.IGNORECASE | re.MULTILINE)
_MATCH_SECTION_RE = re.compile(
    r'MATCH_PERCENTAGES:\s*\n(.+?)(?=DETAILED EVALUATION|EVALUACI[ÓO]N DETALLADA|\Z)',
    re.IGNORECASE | re.DOTALL,
)
_MATCH_LINE_RE = re.compile(r'^\s*[-•*]\s*(.+?):\s*(\d+)\s*%?')
_EVALUATION_RE = re.compile(r'(?:DETAILED EVALUATION|EVALUACI[ÓO]N DETALLADA):(.+)', re.IGNORECASE | re.DOTALL)

DEFAULT_FIT_SCORE = 50
RESUME_TAG = "BEST MATCH:"


@dataclass
class CVEvaluation:
    evaluation: str
    fit_score: int = DEFAULT_FIT_SCORE
    best_match: str = "Undetermined"
    match_percentages: Dict[str, int] = field(default_factory=dict)
    resume_summary: str = ""


def parse_cv_evaluation(response: str) -> CVEvaluation:
    """Pull fit score, best match and per-posting percentages out of the model's CV review"""
    fit_match = _FIT_SCORE_RE.search(response)
    fit_score = int(fit_match.group(1)) if fit_match else DEFAULT_FIT_SCORE

    best_match_match = _BEST_MATCH_RE.search(response)
    best_match = best_match_match.group(1).strip(" *[]") if best_match_match else "Undetermined"

    percentages: Dict[str, int] = {}
    section = _MATCH_SECTION_RE.search(response)
    if section:
        for line in section.group(1).splitlines():
            line_match = _MATCH_LINE_RE.match(line)
            if line_match:
                percentages[line_match.group(1).strip(" *")] = _clamp(int(line_match.group(2)))

    summary_match = _RESUME_SUMMARY_RE.search(response)
    evaluation_match = _EVALUATION_RE.search(response)

    return CVEvaluation(
        evaluation=evaluation_match.group(1).strip() if evaluation_match else response.strip(),
        fit_score=_clamp(fit_score),
        best_match=best_match or "Undetermined",
        match_percentages=percentages,
        resume_summary=summary_match.group(1).strip() if summary_match else "",
    )


def tag_resume(best_match: str, percentages: Dict[str, int], resume_text: str) -> str:
    """Prefix the stored resume text with the best-matching posting"""
    return f"{RESUME_TAG} {best_match} ({percentages.get(best_match, 0)}%)\n\n{resume_text}"


def strip_resume_tag(resume_text: str) -> str:
    if not resume_text or not resume_text.startswith(RESUME_TAG):
        return resume_text or ""
    parts = resume_text.split("\n\n", 1)
    return parts[1].strip() if len(parts) > 1 else ""
