"""
Resume Analyzer - Keyword-Based Resume Scoring

Turns extracted resume text into a ResumeAnalysis: recognized skills,
experience and education snippets, four ratings on a 100-3000 scale,
and rule-based feedback (suggestions, strengths, weaknesses, industry fit).

Scoring Pipeline:
    1. Skills       - substring match against SKILL_CATALOG (catalog order)
    2. Experience   - three regex families, first 5 matches kept
    3. Education    - three regex families, first 3 matches kept
    4. Keywords     - count of KEYWORD_REFERENCE entries present
    5. Depth        - weighted skill buckets, capped at 1000
    6. Level        - seniority, tenure, degree, employer, leadership (<= 1000)
    7-9. Ratings    - skill / experience / education, each 100 + bonuses
    10. Overall     - rounded mean of the three component ratings

The analyzer is pure: same text in, same analysis out, no storage access.

Usage:
    from gigcampus.services.resume_analyzer import ResumeAnalyzer

    analysis = ResumeAnalyzer().analyze(extracted_text)
    analysis.skill_rating
"""

import hashlib
import logging
import time
from typing import List

from gigcampus.exceptions import InvalidInputError
from gigcampus.middleware.metrics import record_analysis
from gigcampus.schemas.resume import ResumeAnalysis
from gigcampus.services.rounding import clamp, round_half_up
from gigcampus.services.skill_catalog import (
    ACADEMIC_ACHIEVEMENTS,
    EDUCATION_COUNT_TIERS,
    EDUCATION_PATTERNS,
    EXPERIENCE_COUNT_TIERS,
    EXPERIENCE_PATTERNS,
    FREELANCE_TERMS,
    GPA_PATTERNS,
    HIGH_VALUE_SKILLS,
    INTERNSHIP_TERMS,
    KEYWORD_REFERENCE,
    LEADERSHIP_TITLES,
    LEADERSHIP_VERBS,
    MASTER_TERMS,
    MAX_EDUCATION_ENTRIES,
    MAX_EXPERIENCE_ENTRIES,
    PHD_TERMS,
    PRESTIGIOUS_COMPANIES,
    PRESTIGIOUS_EMPLOYERS,
    PRESTIGIOUS_UNIVERSITIES,
    SENIORITY_TERMS,
    SKILL_CATALOG,
    SKILL_COUNT_TIERS,
    SKILL_DIVERSITY_CATEGORIES,
    TECHNICAL_DEPTH_BUCKETS,
    TECHNICAL_FIELDS,
    YEARS_OF_EXPERIENCE_PATTERNS,
)

logger = logging.getLogger(__name__)

MIN_RATING = 100
MAX_RATING = 3000
MAX_SCORE = 1000
MAX_SUGGESTIONS = 5


# ==============================================================================
# Matching helpers
# ==============================================================================

def _contains_any(text: str, terms: List[str]) -> bool:
    """Case-insensitive substring test for any of the terms."""
    text_lower = text.lower()
    return any(term.lower() in text_lower for term in terms)


def _count_containing(items: List[str], terms: List[str]) -> int:
    """Number of items that contain at least one of the terms."""
    return sum(1 for item in items if _contains_any(item, terms))


def _tier_bonus(count: int, tiers: List[tuple]) -> int:
    for minimum, bonus in tiers:
        if count >= minimum:
            return bonus
    return 0


def _clamp_rating(value: float) -> int:
    return int(clamp(round_half_up(value), MIN_RATING, MAX_RATING))


# ==============================================================================
# Extraction
# ==============================================================================

def extract_skills(text: str) -> List[str]:
    """
    Find catalog skills mentioned anywhere in the text.

    Results follow SKILL_CATALOG order rather than text order, so two
    resumes listing the same skills differently produce the same list.
    """
    text_lower = text.lower()
    found: List[str] = []
    for skill in SKILL_CATALOG:
        if skill.lower() in text_lower and skill not in found:
            found.append(skill)
    return found


def extract_experience(text: str) -> List[str]:
    """Collect role/year, domain role and employer/year snippets (max 5)."""
    experience: List[str] = []
    for pattern in EXPERIENCE_PATTERNS:
        experience.extend(match.group(0) for match in pattern.finditer(text))
    return experience[:MAX_EXPERIENCE_ENTRIES]


def extract_education(text: str) -> List[str]:
    """Collect institution/year, degree/field and elite university snippets (max 3)."""
    education: List[str] = []
    for pattern in EDUCATION_PATTERNS:
        education.extend(match.group(0) for match in pattern.finditer(text))
    return education[:MAX_EDUCATION_ENTRIES]


def count_keyword_matches(text: str) -> int:
    text_lower = text.lower()
    return sum(1 for keyword in KEYWORD_REFERENCE if keyword.lower() in text_lower)


# ==============================================================================
# Intermediate scores (0-1000)
# ==============================================================================

def calculate_technical_depth(skills: List[str]) -> int:
    depth = 0
    for weight, tokens in TECHNICAL_DEPTH_BUCKETS.values():
        depth += _count_containing(skills, tokens) * weight
    return min(MAX_SCORE, depth)


def calculate_professional_level(experience: List[str], education: List[str], text: str) -> int:
    level = 0

    if any(_contains_any(entry, SENIORITY_TERMS) for entry in experience):
        level += 300

    tenure_mentions = sum(
        sum(1 for _ in pattern.finditer(text)) for pattern in YEARS_OF_EXPERIENCE_PATTERNS
    )
    level += min(500, tenure_mentions * 100)

    # Highest degree tier only
    if any(_contains_any(entry, ["phd", "doctorate"]) for entry in education):
        level += 400
    elif any(_contains_any(entry, ["master"]) for entry in education):
        level += 300
    elif any(_contains_any(entry, ["bachelor"]) for entry in education):
        level += 200

    if any(_contains_any(entry, PRESTIGIOUS_COMPANIES) for entry in experience):
        level += 200

    if _contains_any(text, LEADERSHIP_VERBS):
        level += 150

    return min(MAX_SCORE, level)


# ==============================================================================
# Ratings (100-3000)
# ==============================================================================

def calculate_skill_rating(skills: List[str], keyword_matches: int, technical_depth: int) -> int:
    rating = MIN_RATING
    rating += _tier_bonus(len(skills), SKILL_COUNT_TIERS)
    rating += min(500, technical_depth / 2)
    rating += min(300, keyword_matches * 10)
    rating += min(400, _count_containing(skills, HIGH_VALUE_SKILLS) * 50)

    categories_present = sum(
        1 for tokens in SKILL_DIVERSITY_CATEGORIES.values()
        if any(_contains_any(skill, tokens) for skill in skills)
    )
    rating += min(200, categories_present * 40)

    return _clamp_rating(rating)


def calculate_experience_rating(experience: List[str], professional_level: int) -> int:
    rating = MIN_RATING
    rating += _tier_bonus(len(experience), EXPERIENCE_COUNT_TIERS)
    rating += min(800, professional_level * 0.8)
    rating += min(400, _count_containing(experience, PRESTIGIOUS_EMPLOYERS) * 200)
    rating += min(300, _count_containing(experience, LEADERSHIP_TITLES) * 150)

    if any(_contains_any(entry, INTERNSHIP_TERMS) for entry in experience):
        rating += 200
    if any(_contains_any(entry, FREELANCE_TERMS) for entry in experience):
        rating += 150

    return _clamp_rating(rating)


def calculate_education_rating(education: List[str], text: str) -> int:
    rating = MIN_RATING
    rating += _tier_bonus(len(education), EDUCATION_COUNT_TIERS)
    rating += min(800, _count_containing(education, PRESTIGIOUS_UNIVERSITIES) * 400)

    if any(_contains_any(entry, PHD_TERMS) for entry in education):
        rating += 600
    elif any(_contains_any(entry, MASTER_TERMS) for entry in education):
        rating += 400

    rating += min(400, _count_containing(education, TECHNICAL_FIELDS) * 200)

    if any(pattern.search(text) for pattern in GPA_PATTERNS):
        rating += 200

    text_lower = text.lower()
    achievements = sum(1 for term in ACADEMIC_ACHIEVEMENTS if term.lower() in text_lower)
    rating += min(300, achievements * 50)

    return _clamp_rating(rating)


# ==============================================================================
# Feedback rules (evaluated in declaration order)
# ==============================================================================

def generate_suggestions(skills: List[str], experience: List[str], text: str) -> List[str]:
    text_lower = text.lower()
    suggestions = []

    if len(skills) < 5:
        suggestions.append("Add more technical skills to showcase your capabilities")
    if len(experience) < 2:
        suggestions.append("Include more work experience or internships")
    if "project" not in text_lower:
        suggestions.append("Add a projects section to highlight your work")
    if "achievement" not in text_lower and "accomplish" not in text_lower:
        suggestions.append("Include quantifiable achievements and metrics")
    if skills and not any(skill in ("React", "Angular", "Vue") for skill in skills):
        suggestions.append("Consider learning modern frontend frameworks like React, Angular, or Vue.js")
    if "github" not in text_lower and "portfolio" not in text_lower:
        suggestions.append("Add links to your GitHub profile and portfolio")

    return suggestions[:MAX_SUGGESTIONS]


def generate_strengths(skills: List[str], experience: List[str], education: List[str]) -> List[str]:
    strengths = []

    if len(skills) >= 8:
        strengths.append("Strong technical skill set")
    if len(experience) >= 3:
        strengths.append("Solid work experience")
    if any(_contains_any(entry, ["MIT", "Stanford", "Harvard", "Berkeley"]) for entry in education):
        strengths.append("Prestigious educational background")
    if any(skill in ("React", "Node.js", "Python", "AWS") for skill in skills):
        strengths.append("In-demand technology expertise")
    if any(_contains_any(entry, ["Lead", "Senior", "Manager"]) for entry in experience):
        strengths.append("Leadership experience")

    return strengths


def generate_weaknesses(skills: List[str], experience: List[str], text: str) -> List[str]:
    weaknesses = []

    if len(skills) < 5:
        weaknesses.append("Limited technical skills")
    if len(experience) < 2:
        weaknesses.append("Minimal work experience")
    if "project" not in text.lower():
        weaknesses.append("No projects showcased")
    if not any(skill in ("Git", "Docker", "AWS") for skill in skills):
        weaknesses.append("Missing DevOps/Cloud skills")

    return weaknesses


INDUSTRY_SKILLS = [
    ("Software Development", {"React", "Node.js", "Python", "JavaScript", "AWS", "Docker"}),
    ("Data Science", {"Python", "SQL", "Machine Learning", "TensorFlow", "Pandas"}),
    ("Design", {"Figma", "Adobe XD", "Sketch"}),
    ("Mobile Development", {"Swift", "Kotlin"}),
]


def determine_industry_fit(skills: List[str]) -> List[str]:
    owned = set(skills)
    fit = [industry for industry, markers in INDUSTRY_SKILLS if owned & markers]
    return fit or ["General Technology"]


def generate_summary(
    skills: List[str],
    experience: List[str],
    education: List[str],
    overall_rating: int,
) -> str:
    # Bands are on the 100-3000 rating scale; 4.0/3.0 cut-offs would rate every resume strong
    if overall_rating >= 2000:
        outlook = "strong potential"
    elif overall_rating >= 1200:
        outlook = "good potential"
    else:
        outlook = "developing skills"

    summary = (
        f"This candidate shows {outlook} with {len(skills)} technical skills, "
        f"{len(experience)} work experiences, and {len(education)} education entries. "
    )
    if len(skills) >= 8:
        summary += "The technical skill set is comprehensive and includes modern technologies. "
    if len(experience) >= 3:
        summary += "Work experience demonstrates practical application of skills. "
    summary += "Overall, this candidate would be a good fit for technology roles."
    return summary


def estimate_confidence(text: str) -> float:
    """Stable pseudo-confidence in [0.85, 0.95) derived from the text digest."""
    digest = hashlib.sha256(text.encode()).hexdigest()[:8]
    return 0.85 + (int(digest, 16) % 1000) / 10000


# ==============================================================================
# Analyzer
# ==============================================================================

class ResumeAnalyzer:
    """
    Stateless resume scorer.

    Attributes:
        min_text_length: Minimum number of non-whitespace characters
            accepted by analyze()
    """

    def __init__(self, min_text_length: int = 10):
        self.min_text_length = min_text_length

    def analyze(self, text: str) -> ResumeAnalysis:
        """
        Analyze resume text.

        Args:
            text: Plain text extracted from a resume

        Returns:
            Complete ResumeAnalysis

        Raises:
            InvalidInputError: If the text has fewer than min_text_length
                non-whitespace characters
        """
        start_time = time.perf_counter()

        if len("".join((text or "").split())) < self.min_text_length:
            record_analysis("invalid_input", time.perf_counter() - start_time)
            raise InvalidInputError(
                f"Resume text must contain at least {self.min_text_length} readable characters"
            )

        skills = extract_skills(text)
        experience = extract_experience(text)
        education = extract_education(text)

        keyword_matches = count_keyword_matches(text)
        technical_depth = calculate_technical_depth(skills)
        professional_level = calculate_professional_level(experience, education, text)

        skill_rating = calculate_skill_rating(skills, keyword_matches, technical_depth)
        experience_rating = calculate_experience_rating(experience, professional_level)
        education_rating = calculate_education_rating(education, text)
        overall_rating = _clamp_rating((skill_rating + experience_rating + education_rating) / 3)

        analysis = ResumeAnalysis(
            extracted_text=text,
            skills=skills,
            experience=experience,
            education=education,
            overall_rating=overall_rating,
            skill_rating=skill_rating,
            experience_rating=experience_rating,
            education_rating=education_rating,
            suggestions=generate_suggestions(skills, experience, text),
            confidence=estimate_confidence(text),
            summary=generate_summary(skills, experience, education, overall_rating),
            strengths=generate_strengths(skills, experience, education),
            weaknesses=generate_weaknesses(skills, experience, text),
            industry_fit=determine_industry_fit(skills),
            keyword_matches=keyword_matches,
            technical_depth=technical_depth,
            professional_level=professional_level,
        )

        duration = time.perf_counter() - start_time
        record_analysis("success", duration)
        logger.info(
            f"Analyzed resume: {len(skills)} skills, overall rating {overall_rating} "
            f"({duration * 1000:.1f}ms)"
        )
        return analysis
