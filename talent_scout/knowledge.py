"""
Talent Scout - recruiting knowledge base
Static Q/A used to ground the training assistant's answers.
"""
from typing import List, Optional

KNOWLEDGE = [
    # Phase 1: recruiting fundamentals
    {
        "id": "intro-1",
        "category": "company",
        "question": "What is Talent Scout AI?",
        "answer": "Talent Scout AI is a recruiting platform that uses artificial intelligence to connect "
                  "candidates with job opportunities. It helps companies find the best talent efficiently "
                  "and helps job seekers find roles that fit their skills. Communication skills, technical "
                  "knowledge and culture fit are assessed through interactive voice interviews.",
        "keywords": ["company", "talent scout", "who we are", "mission", "platform"],
        "phase": 1,
    },
    {
        "id": "intro-2",
        "category": "company",
        "question": "What are the values of Talent Scout AI?",
        "answer": "Fairness: we remove bias through AI-driven evaluations. Efficiency: we save time for "
                  "candidates and employers. Transparency: we give clear feedback and scores. Innovation: "
                  "we keep improving our matching. Inclusion: equal opportunity for every candidate.",
        "keywords": ["values", "mission", "fairness", "transparency", "inclusion"],
        "phase": 1,
    },
    {
        "id": "basics-1",
        "category": "recruiting_basics",
        "question": "What are the main types of job interviews?",
        "answer": "1) Technical interviews assess specific skills and knowledge; 2) Behavioral interviews "
                  "look at past experience and problem solving; 3) Culture-fit interviews check alignment "
                  "with company values; 4) Phone or video screens are the first filter; 5) Panel "
                  "interviews have several interviewers assess the candidate.",
        "keywords": ["interview types", "technical", "behavioral", "screen", "panel"],
        "phase": 1,
    },
    {
        "id": "basics-2",
        "category": "recruiting_basics",
        "question": "What is an ATS and how does it work?",
        "answer": "An Applicant Tracking System manages the hiring process. It parses resumes and extracts "
                  "key information, ranks candidates on keywords and criteria, tracks application status, "
                  "automates candidate communication and reports on recruiting metrics.",
        "keywords": ["ats", "applicant tracking", "resume parsing", "keywords"],
        "phase": 1,
    },
    # Phase 2: candidate evaluation
    {
        "id": "eval-1",
        "category": "candidate_evaluation",
        "question": "How do you assess soft skills in an interview?",
        "answer": "Look at communication (clarity, listening), problem solving, adaptability to change and "
                  "feedback, teamwork and leadership. Behavioral questions such as \"Tell me about a time "
                  "when...\" are the best way to assess them.",
        "keywords": ["soft skills", "communication", "evaluation", "behavioral"],
        "phase": 2,
    },
    {
        "id": "eval-2",
        "category": "candidate_evaluation",
        "question": "What are red flags in candidate answers?",
        "answer": "Common red flags: no specific examples, blaming others, speaking badly of former "
                  "employers, inconsistent information between answers, no preparation or knowledge of "
                  "the company, over-rehearsed answers, and unprofessional behaviour.",
        "keywords": ["red flags", "warning signs", "candidate", "evaluation", "problems"],
        "phase": 2,
    },
    {
        "id": "best-2",
        "category": "best_practices",
        "question": "What makes a good job description?",
        "answer": "A clear title and role summary, specific responsibilities, required vs preferred "
                  "qualifications, company culture, growth opportunities, salary range when possible, "
                  "benefits, and the application process and timeline. Avoid jargon and be honest about "
                  "the challenges.",
        "keywords": ["job description", "opening", "posting", "requirements"],
        "phase": 2,
    },
    {
        "id": "questions-1",
        "category": "common_questions",
        "question": "What are the best questions to assess leadership?",
        "answer": "\"Describe a time you had to motivate a team\"; \"How do you handle conflict within your "
                  "team?\"; \"Tell me about a hard decision you made as a leader\"; \"How do you develop "
                  "your team members?\". Look for specific examples, not theory.",
        "keywords": ["leadership questions", "evaluation", "management", "team"],
        "phase": 2,
    },
    # Phase 3: interview techniques
    {
        "id": "tech-1",
        "category": "interview_techniques",
        "question": "What is the STAR method?",
        "answer": "STAR structures answers to behavioral questions: Situation (the context), Task (the "
                  "challenge or responsibility), Action (the steps taken) and Result (the outcome and what "
                  "was learned). It helps interviewers assess problem solving systematically.",
        "keywords": ["star method", "behavioral", "interview technique", "structure"],
        "phase": 3,
    },
    {
        "id": "tech-2",
        "category": "interview_techniques",
        "question": "How do you run a technical assessment?",
        "answer": "Define the required skills, prepare relevant questions, include practical exercises, "
                  "assess both correctness and thought process, let the candidate explain their reasoning "
                  "and give constructive feedback.",
        "keywords": ["technical assessment", "skills test", "coding", "evaluation"],
        "phase": 3,
    },
    {
        "id": "best-1",
        "category": "best_practices",
        "question": "How should recruiters communicate with candidates?",
        "answer": "Be respectful and timely, set clear expectations about the process, give transparent "
                  "feedback, keep candidates informed of their status, be honest about the role, and stay "
                  "professional even with rejected candidates.",
        "keywords": ["communication", "candidate experience", "professionalism", "feedback"],
        "phase": 3,
    },
]


def phase_knowledge(phase: int) -> List[dict]:
    return [item for item in KNOWLEDGE if item.get("phase") == phase]


def search_knowledge(query: str, limit: int = 3, phase: Optional[int] = None) -> List[dict]:
    """Rank items by keyword and text overlap with the query.

    With ``phase`` set, only that training phase's items are considered.
    """
    lower_query = query.lower()
    items = phase_knowledge(phase) if phase is not None else KNOWLEDGE

    scored = []
    for item in items:
        score = 0
        for keyword in item["keywords"]:
            if keyword.lower() in lower_query:
                score += 3
        if lower_query in item["question"].lower():
            score += 2
        if lower_query in item["answer"].lower():
            score += 1
        if score > 0:
            scored.append((score, item))

    # sorted() is stable, so ties keep knowledge-base order
    scored = sorted(scored, key=lambda pair: pair[0], reverse=True)
    return [item for _, item in scored[:limit]]


def build_prompt_with_context(message: str, phase: Optional[int] = None) -> str:
    relevant = search_knowledge(message, 3, phase=phase)
    if not relevant:
        return message

    context = "\n\n".join(f"Q: {item['question']}\nA: {item['answer']}" for item in relevant)
    return f"""Here is relevant information from our training materials:

{context}

---

Now, based on this information and your experience, please answer the following question:

{message}"""
