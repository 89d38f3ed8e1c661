import pytest

from talent_scout.scoring import (
    ExamScores,
    extract_exam_scores,
    is_passing,
    overall_score,
    parse_cv_evaluation,
    strip_resume_tag,
    tag_resume,
)

from tests.conftest import EVALUATION_TEXT


def test_extracts_english_scores_and_feedback():
    scores = extract_exam_scores(EVALUATION_TEXT)

    assert scores.as_dict() == {
        "confidence": 80,
        "clarity": 75,
        "professionalism": 90,
        "trust_building": 71,
    }
    assert scores.feedback.startswith("Solid grasp of the sales cycle")


def test_extracts_spanish_scores_without_confusing_trust_for_confidence():
    text = (
        "EVALUACIÓN:\n"
        "Construcción de Confianza: 60\n"
        "Confianza: 85\n"
        "Claridad: 70\n"
        "Profesionalismo: 88\n\n"
        "Retroalimentación Detallada:\nBuen manejo de la presión."
    )
    scores = extract_exam_scores(text)

    assert scores.confidence == 85
    assert scores.trust_building == 60
    assert scores.clarity == 70
    assert scores.professionalism == 88
    assert scores.feedback == "Buen manejo de la presión."


@pytest.mark.parametrize("label", ["Trust Building", "trust-building", "TRUST_BUILDING"])
def test_trust_building_label_variants(label):
    text = f"Confidence: 50\nClarity: 50\nProfessionalism: 50\n{label}: 64"
    assert extract_exam_scores(text).trust_building == 64


def test_inline_confidence_value_is_found():
    text = "overall confidence: 42, clarity 50, professionalism: 50, trust building: 50"
    assert extract_exam_scores(text).confidence == 42


def test_markdown_bold_labels():
    text = "**Confidence:** 81\n**Clarity:** 82\n**Professionalism:** 83\n**Trust Building:** 84"
    scores = extract_exam_scores(text)
    assert (scores.confidence, scores.clarity, scores.professionalism, scores.trust_building) == (81, 82, 83, 84)


def test_missing_metric_returns_none():
    assert extract_exam_scores("Confidence: 80\nClarity: 75\nProfessionalism: 90") is None
    assert extract_exam_scores("") is None


def test_first_occurrence_wins_and_scores_are_clamped():
    text = "Confidence: 150\nConfidence: 10\nClarity: 70\nProfessionalism: 70\nTrust Building: 70"
    assert extract_exam_scores(text).confidence == 100


def test_feedback_falls_back_to_whole_response():
    text = "Confidence: 70 Clarity: 70 Professionalism: 70 Trust Building: 70"
    assert extract_exam_scores(text).feedback == text


@pytest.mark.parametrize("values, expected", [
    ((70, 70, 70, 71), 70),
    ((70, 70, 71, 71), 71),
    ((69, 70, 70, 71), 70),
    ((0, 0, 0, 1), 0),
    ((100, 100, 100, 100), 100),
    ((68, 69, 70, 71), 70),
])
def test_overall_score_rounds_half_up(values, expected):
    assert overall_score(ExamScores(*values)) == expected


def test_passing_threshold():
    assert is_passing(70)
    assert is_passing(95)
    assert not is_passing(69)


CV_RESPONSE = """RESUME_SUMMARY:
Jane Doe, 6 years in B2B sales.
Strong negotiator.

FIT_SCORE: 82

BEST_MATCH: Sales Agent

MATCH_PERCENTAGES:
- Sales Agent: 82%
- Support Lead: 40%

DETAILED EVALUATION:
🎯 SUMMARY: Good fit for sales."""


def test_parse_cv_evaluation():
    result = parse_cv_evaluation(CV_RESPONSE)

    assert result.fit_score == 82
    assert result.best_match == "Sales Agent"
    assert result.match_percentages == {"Sales Agent": 82, "Support Lead": 40}
    assert result.resume_summary == "Jane Doe, 6 years in B2B sales.\nStrong negotiator."
    assert result.evaluation == "🎯 SUMMARY: Good fit for sales."


def test_parse_cv_evaluation_defaults():
    result = parse_cv_evaluation("The model ignored the format.")

    assert result.fit_score == 50
    assert result.best_match == "Undetermined"
    assert result.match_percentages == {}
    assert result.evaluation == "The model ignored the format."


def test_parse_cv_evaluation_clamps_fit_score():
    assert parse_cv_evaluation("FIT_SCORE: 140").fit_score == 100


def test_parse_cv_evaluation_accepts_spanish_heading():
    text = "FIT_SCORE: 60\nMATCH_PERCENTAGES:\n• Sales Agent: 60\n\nEVALUACIÓN DETALLADA:\nBien."
    result = parse_cv_evaluation(text)
    assert result.match_percentages == {"Sales Agent": 60}
    assert result.evaluation == "Bien."


def test_resume_tag_roundtrip():
    tagged = tag_resume("Sales Agent", {"Sales Agent": 82}, "Jane Doe\n\nMore details")

    assert tagged.startswith("BEST MATCH: Sales Agent (82%)\n\n")
    assert strip_resume_tag(tagged) == "Jane Doe\n\nMore details"


def test_strip_resume_tag_leaves_untagged_text():
    assert strip_resume_tag("Plain resume") == "Plain resume"
    assert strip_resume_tag(None) == ""
    assert tag_resume("Unknown", {}, "x").startswith("BEST MATCH: Unknown (0%)")
