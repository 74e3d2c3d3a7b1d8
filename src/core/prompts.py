"""
MockView - Feedback Prompts.

Defines the interviewer persona used to score answers and the canned
feedback returned when no language model is available.
"""

# -----------------------------------------------------------------------------
# Feedback Persona
# -----------------------------------------------------------------------------

FEEDBACK_SYSTEM = (
    "You are an expert technical interviewer providing constructive "
    "feedback to help candidates improve."
)

FEEDBACK_PROMPT = """You are an experienced {role} interviewer. Evaluate this interview response and provide constructive feedback.

Question: {question}

Candidate's Answer: {answer}

Please provide:
1. Specific feedback on what they did well
2. Areas for improvement with actionable suggestions
3. A score from 1-10 based on the quality and completeness of their response, written as "Score: N/10"

Keep the feedback encouraging but honest, and focus on helping them improve for real interviews."""


# -----------------------------------------------------------------------------
# Mock Feedback (no API key or model failure)
# -----------------------------------------------------------------------------

MOCK_FEEDBACK = [
    (
        "Good response! You demonstrated solid understanding of the topic. "
        "Consider providing more specific examples to strengthen your answer "
        "and discuss potential challenges you might face in implementation.",
        7,
    ),
    (
        "Excellent answer! You showed deep knowledge and provided concrete "
        "examples. Your explanation was clear and well-structured. To reach "
        "the next level, consider discussing scalability concerns or "
        "alternative approaches.",
        9,
    ),
    (
        "Your answer covers the basics well. To improve, try to elaborate on "
        "the practical applications and share more personal experience. Adding "
        "specific metrics or outcomes would make your response more compelling.",
        6,
    ),
    (
        "Strong response with good technical depth. You could enhance it by "
        "discussing potential edge cases, performance considerations, or how "
        "you'd handle errors in this scenario.",
        8,
    ),
]
