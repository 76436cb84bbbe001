"""
Mock AI Service - deterministic stand-ins for AI features.

Everything here is keyword matching and thresholds, no model inference:
- Career chat assistant (canned answers by topic)
- Content moderation (toxicity + suggested revision)
- Job authenticity scoring (scam heuristics)
- Achievement toxicity gate and wording improvement
- Resume keyword scoring against a job's skills
- Mentorship / tech-news feed items
"""

import random
import re
from datetime import datetime
from typing import Dict, List, Optional


# ============================================================
# CHAT ASSISTANT
# ============================================================

CHAT_FALLBACK = (
    "That's an interesting topic! Could you elaborate more so I can provide "
    "a specific answer related to your career?"
)


def generate_chat_response(user_text: str) -> str:
    """
    Return a canned answer for the first topic found in the message.

    Topics are checked in order: REST vs GraphQL, salary, greeting,
    interviews. Matching is plain substring matching on lowercase text.
    """
    text = user_text.lower()

    if "rest" in text and "graphql" in text:
        return (
            "REST uses multiple endpoints (one per resource), whereas GraphQL uses a single "
            "endpoint. GraphQL allows clients to request exactly the data they need, "
            "preventing over-fetching."
        )
    if "salary" in text or "pay" in text:
        return (
            "Salaries vary by role and location. In our specific mock data, Senior Devs range "
            "from ₹10L - ₹15L, while entry-level roles start around ₹5L - ₹8L."
        )
    if "hello" in text or "hi" in text:
        return (
            "Hello! I am your AI Career Assistant. Ask me about job trends, tech stacks, "
            "or interview prep!"
        )
    if "interview" in text:
        return (
            "For interviews, focus on DSA (Data Structures & Algorithms) for big tech, and "
            "practical framework knowledge (React/Node) for startups."
        )

    return CHAT_FALLBACK


# ============================================================
# CONTENT MODERATION
# ============================================================

MODERATION_KEYWORDS = ["stupid", "idiot", "useless", "dumb", "hate", "trash"]

# Applied in this order when suggesting a revision
MODERATION_REPLACEMENTS = [
    ("stupid", "unclear"),
    ("idiot", "uninformed"),
    ("useless", "ineffective"),
    ("trash", "subpar"),
    ("dumb", "overlooked"),
    ("hate", "disagree with"),
]

REVISION_PREFIX = "[Suggested Revision]: "


def analyze_content(text: str) -> Dict:
    """
    Flag toxic keywords and suggest a softened revision.

    Returns:
        {
            "toxicity_score": 0.1 when clean, 0.5 + 0.15 per flagged word otherwise,
            "flagged_words": keywords found (in keyword-list order),
            "improved_text": prefixed revision, or None when clean,
            "is_safe": True when nothing was flagged
        }
    """
    lower_text = text.lower()
    flagged_words = [word for word in MODERATION_KEYWORDS if word in lower_text]
    is_toxic = len(flagged_words) > 0

    improved_text = None
    if is_toxic:
        improved_text = text
        for word, replacement in MODERATION_REPLACEMENTS:
            improved_text = re.sub(word, replacement, improved_text, flags=re.IGNORECASE)
        improved_text = REVISION_PREFIX + improved_text

    return {
        "toxicity_score": 0.5 + len(flagged_words) * 0.15 if is_toxic else 0.1,
        "flagged_words": flagged_words,
        "improved_text": improved_text,
        "is_safe": not is_toxic
    }


def enhance_text(text: Optional[str]) -> Optional[str]:
    """
    "Improve with AI" suggestion for free-text fields.

    Returns None for blank / too short input (under 5 characters),
    the revision without its prefix for flagged text, else the text as-is.
    """
    if not text or len(text.strip()) < 5:
        return None

    result = analyze_content(text)
    if result["improved_text"]:
        return result["improved_text"].replace(REVISION_PREFIX, "", 1)
    return text


# ============================================================
# JOB AUTHENTICITY
# ============================================================

SCAM_KEYWORDS = [
    "pay registration fee",
    "whatsapp only",
    "urgent hiring today",
    "no interview",
    "easy money",
]


def check_job_authenticity(job: Dict) -> Dict:
    """
    Score a job posting from 0 (scam) to 100 (looks genuine).

    Penalties:
        -20  salary missing or shorter than 2 characters
        -30  per scam keyword in the title or description
        -15  description shorter than 50 characters
        -10  company missing or containing "generic"

    Risk level: High below 50, Medium below 80, Low otherwise.
    """
    score = 100
    flags = []

    salary = job.get("salary")
    if not salary or len(str(salary)) < 2:
        score -= 20
        flags.append("Missing salary range")

    description = (job.get("description") or "").lower()
    title = (job.get("title") or "").lower()
    found_scams = [k for k in SCAM_KEYWORDS if k in description or k in title]
    if found_scams:
        score -= 30 * len(found_scams)
        flags.append(f'Uses high risk keywords: "{", ".join(found_scams)}"')

    if len(job.get("description") or "") < 50:
        score -= 15
        flags.append("Description is suspiciously short")

    company = job.get("company")
    if not company or "generic" in company.lower():
        score -= 10
        flags.append("Company name appears generic")

    score = max(0, min(100, score))

    risk_level = "Low"
    if score < 50:
        risk_level = "High"
    elif score < 80:
        risk_level = "Medium"

    return {"score": score, "risk_level": risk_level, "flags": flags}


# ============================================================
# ACHIEVEMENTS (campus)
# ============================================================

TOXIC_KEYWORDS = [
    "hate", "stupid", "idiot", "dumb", "worst", "terrible",
    "awful", "horrible", "disgusting", "pathetic", "useless",
    "trash", "garbage", "crap", "sucks", "loser",
]

# Achievements scoring above this are sent back for revision
ACHIEVEMENT_TOXICITY_THRESHOLD = 0.3

ACHIEVEMENT_IMPROVEMENTS = {
    "won": "achieved",
    "got": "secured",
    "made": "developed",
    "did": "accomplished",
    "good": "excellent",
    "nice": "outstanding",
}


def calculate_toxicity_score(text: str) -> float:
    """0.15 per toxic keyword present, capped at 1.0."""
    lower_text = text.lower()
    score = 0.0
    for keyword in TOXIC_KEYWORDS:
        if keyword in lower_text:
            score += 0.15
    return min(score, 1.0)


def improve_achievement_text(text: str) -> str:
    """Swap plain verbs/adjectives for stronger ones (whole words only)."""
    improved = text
    for word, replacement in ACHIEVEMENT_IMPROVEMENTS.items():
        improved = re.sub(rf"\b{word}\b", replacement, improved, flags=re.IGNORECASE)
    return improved


def is_achievement_acceptable(text: str) -> bool:
    return calculate_toxicity_score(text) <= ACHIEVEMENT_TOXICITY_THRESHOLD


# ============================================================
# RESUME SCORING
# ============================================================

SKILL_VOCABULARY = [
    "Python", "Java", "JavaScript", "TypeScript", "C++", "Go", "Rust", "SQL",
    "PostgreSQL", "MongoDB", "React", "Node.js", "Django", "FastAPI", "Flask",
    "Spring Boot", "Docker", "Kubernetes", "AWS", "Azure", "GCP", "CI/CD", "Git",
    "Machine Learning", "Deep Learning", "Data Analysis", "REST", "GraphQL",
    "HTML", "CSS", "Figma", "Linux",
]

ACTION_VERBS = [
    "led", "built", "developed", "designed", "implemented", "managed", "improved",
    "launched", "delivered", "created", "optimized", "achieved", "reduced", "increased",
]

METRIC_PATTERN = re.compile(r"\d+\s*%|[$₹]\s?\d|\b\d+\+?\s*(users|customers|clients|projects|members)\b", re.IGNORECASE)


def _contains_term(lower_text: str, term: str) -> bool:
    """Whole-term match that tolerates punctuation inside terms (C++, CI/CD)."""
    pattern = r"(?<![\w])" + re.escape(term.lower()) + r"(?![\w])"
    return re.search(pattern, lower_text) is not None


def extract_skills(text: str) -> List[str]:
    """Known skills mentioned in free text, in vocabulary order."""
    lower_text = text.lower()
    return [skill for skill in SKILL_VOCABULARY if _contains_term(lower_text, skill)]


def score_resume(resume_text: str, job_skills: List[str]) -> Dict:
    """
    Keyword-match a resume against a job's skills plus a few writing checks.

    keyword_match is the percentage of job skills found in the resume
    (100 when the job lists none). The score weights keyword match at 60%
    and the three writing checks (action verbs, metrics, length) at 40%.
    """
    lower_text = resume_text.lower()
    skills = [s for s in dict.fromkeys(s.strip() for s in job_skills) if s]

    matched = [s for s in skills if _contains_term(lower_text, s)]
    missing = [s for s in skills if s not in matched]
    keyword_match = round(len(matched) / len(skills) * 100) if skills else 100

    feedback = []
    passed = 0

    verbs_used = [v for v in ACTION_VERBS if _contains_term(lower_text, v)]
    if len(verbs_used) >= 3:
        passed += 1
        feedback.append({"type": "success", "text": "Strong action verbs used in experience section."})
    else:
        feedback.append({"type": "warning", "text": "Start bullet points with action verbs such as built, led or improved."})

    if METRIC_PATTERN.search(resume_text):
        passed += 1
        feedback.append({"type": "success", "text": "Includes quantifiable results."})
    else:
        feedback.append({"type": "warning", "text": "Consider adding more quantifiable metrics to your projects."})

    word_count = len(resume_text.split())
    if word_count < 150:
        feedback.append({"type": "warning", "text": "Resume looks short; describe your projects and experience in more detail."})
    elif word_count > 1200:
        feedback.append({"type": "warning", "text": "Resume is long; keep it to the most relevant two pages."})
    else:
        passed += 1
        feedback.append({"type": "success", "text": "Resume length is appropriate."})

    if missing:
        feedback.append({"type": "warning", "text": f"Skills section is missing: {', '.join(missing)}."})

    score = round(keyword_match * 0.6 + (passed / 3) * 40)

    return {
        "score": max(0, min(100, score)),
        "keyword_match": keyword_match,
        "matched_keywords": matched,
        "missing_keywords": missing,
        "feedback": feedback
    }


# ============================================================
# FEED
# ============================================================

FEED_INDUSTRIES = ["AI", "Web3", "Cloud", "SaaS", "Mobile"]
FEED_MENTORS = ["Anita Sharma", "John Doe", "Priya Singh"]
FEED_TOPICS = ["React", "System Design", "Leadership", "Negotiation"]


def generate_feed_item(item_id, rng: Optional[random.Random] = None) -> Dict:
    """Random tech-news or mentorship card for the mentorship feed."""
    rng = rng or random.Random()
    item_type = rng.choice(["tech_news", "mentorship"])
    timestamp = datetime.utcnow().isoformat()

    if item_type == "tech_news":
        return {
            "id": item_id,
            "type": item_type,
            "title": f"Breaking: {rng.choice(FEED_INDUSTRIES)} adoption rises by 20% in Q1",
            "industry": "Tech",
            "author": "TechCrunch Bot",
            "timestamp": timestamp,
            "likes": 0,
            "comments": 0
        }

    return {
        "id": item_id,
        "type": item_type,
        "mentor_name": rng.choice(FEED_MENTORS),
        "role": "Senior Tech Lead",
        "company": "MNC Corp",
        "topic": f"Tips for Mastering {rng.choice(FEED_TOPICS)}",
        "timestamp": timestamp,
        "likes": 0,
        "comments": 0
    }
