"""
MockView - Question Template Store.

Static catalog of interview question templates per role, tagged with
category and difficulty, plus the lookup tables used to personalize and
annotate generated questions. Read-only after import.
"""

from __future__ import annotations

import logging
from typing import Mapping

from src.core.domain.models import Difficulty, QuestionTemplate
from src.core.exceptions import UnknownRoleError


logger = logging.getLogger(__name__)

_BEG = Difficulty.BEGINNER
_MID = Difficulty.INTERMEDIATE
_ADV = Difficulty.ADVANCED


# -----------------------------------------------------------------------------
# Template Catalog
# -----------------------------------------------------------------------------

QUESTION_TEMPLATES: dict[str, tuple[QuestionTemplate, ...]] = {
    "Frontend Developer": (
        QuestionTemplate(
            "React Basics", _BEG,
            "Explain the difference between functional and class components in React. When would you use each?",
            ("How do you handle state in functional components?", "What are the benefits of hooks?"),
        ),
        QuestionTemplate(
            "CSS Fundamentals", _BEG,
            "How do you center a div both horizontally and vertically? Explain different approaches.",
            ("What are the pros and cons of flexbox vs grid?", "How do you handle responsive design?"),
        ),
        QuestionTemplate(
            "JavaScript Basics", _BEG,
            "Explain the difference between let, const, and var in JavaScript.",
            ("What is hoisting?", "How does scope work in JavaScript?"),
        ),
        QuestionTemplate(
            "State Management", _MID,
            "How would you implement global state management in a React application? Compare different approaches.",
            ("When would you use Context vs Redux?", "How do you handle async actions?"),
        ),
        QuestionTemplate(
            "Performance Optimization", _MID,
            "What techniques do you use to optimize the performance of a React application?",
            ("How do you identify performance bottlenecks?", "Explain React.memo and useMemo"),
        ),
        QuestionTemplate(
            "Modern JavaScript", _MID,
            "Explain how async/await works and how it differs from Promises and callbacks.",
            ("How do you handle error handling with async/await?", "What is the event loop?"),
        ),
        QuestionTemplate(
            "Architecture", _ADV,
            "How would you architect a large-scale React application with multiple teams working on it?",
            ("How do you handle code splitting?", "What is micro-frontend architecture?"),
        ),
        QuestionTemplate(
            "Advanced React", _ADV,
            "Explain React's reconciliation algorithm and how virtual DOM works under the hood.",
            ("How does React Fiber improve performance?", "What are React portals?"),
        ),
        QuestionTemplate(
            "Testing", _ADV,
            "How do you implement comprehensive testing for a React application? Discuss different testing strategies.",
            ("What is the testing pyramid?", "How do you test custom hooks?"),
        ),
    ),
    "Backend Developer": (
        QuestionTemplate(
            "API Design", _BEG,
            "Explain the principles of RESTful API design. What makes an API RESTful?",
            ("What are HTTP status codes?", "How do you handle API versioning?"),
        ),
        QuestionTemplate(
            "Database Basics", _BEG,
            "What is the difference between SQL and NoSQL databases? When would you use each?",
            ("What is database normalization?", "How do you handle database relationships?"),
        ),
        QuestionTemplate(
            "Node.js Fundamentals", _BEG,
            "Explain how Node.js event loop works and why Node.js is good for I/O intensive applications.",
            ("What is the difference between blocking and non-blocking operations?", "How do you handle callbacks?"),
        ),
        QuestionTemplate(
            "Authentication & Security", _MID,
            "How do you implement secure authentication in a web application? Discuss JWT vs sessions.",
            ("How do you handle password security?", "What is OAuth and when do you use it?"),
        ),
        QuestionTemplate(
            "Database Optimization", _MID,
            "How do you optimize database queries and improve database performance?",
            ("What are database indexes?", "How do you handle database scaling?"),
        ),
        QuestionTemplate(
            "Error Handling", _MID,
            "How do you implement comprehensive error handling and logging in a backend application?",
            ("What is structured logging?", "How do you handle different types of errors?"),
        ),
        QuestionTemplate(
            "Microservices", _ADV,
            "How would you design a microservices architecture? What are the trade-offs compared to monoliths?",
            ("How do you handle inter-service communication?", "What is service discovery?"),
        ),
        QuestionTemplate(
            "Scalability", _ADV,
            "How do you design a system to handle millions of concurrent users? Discuss scaling strategies.",
            ("What is horizontal vs vertical scaling?", "How do you handle database sharding?"),
        ),
        QuestionTemplate(
            "System Design", _ADV,
            "Design a real-time chat application that can handle millions of users. What technologies would you use?",
            ("How do you handle message delivery guarantees?", "What is eventual consistency?"),
        ),
    ),
    "Data Scientist": (
        QuestionTemplate(
            "Statistics Basics", _BEG,
            "Explain the difference between correlation and causation. How do you identify each in data?",
            ("What is statistical significance?", "How do you handle missing data?"),
        ),
        QuestionTemplate(
            "Python for Data Science", _BEG,
            "What are the key Python libraries for data science and what is each used for?",
            ("How do you handle large datasets in pandas?", "What is vectorization in NumPy?"),
        ),
        QuestionTemplate(
            "Data Visualization", _BEG,
            "How do you choose the right type of visualization for different types of data?",
            ("What makes a good data visualization?", "How do you avoid misleading visualizations?"),
        ),
        QuestionTemplate(
            "Machine Learning", _MID,
            "Explain the bias-variance tradeoff in machine learning. How do you balance it?",
            ("What is overfitting and how do you prevent it?", "How do you choose between different algorithms?"),
        ),
        QuestionTemplate(
            "Feature Engineering", _MID,
            "How do you approach feature engineering for a machine learning project?",
            ("What is feature selection?", "How do you handle categorical variables?"),
        ),
        QuestionTemplate(
            "Model Evaluation", _MID,
            "How do you evaluate the performance of a machine learning model? Discuss different metrics.",
            ("What is cross-validation?", "How do you handle imbalanced datasets?"),
        ),
        QuestionTemplate(
            "Deep Learning", _ADV,
            "Explain how neural networks learn through backpropagation. What are the challenges?",
            ("What is the vanishing gradient problem?", "How do you choose network architecture?"),
        ),
        QuestionTemplate(
            "MLOps", _ADV,
            "How do you deploy and monitor machine learning models in production?",
            ("What is model drift?", "How do you handle model versioning?"),
        ),
        QuestionTemplate(
            "Advanced Analytics", _ADV,
            "How would you design an A/B testing framework for a large-scale application?",
            ("What is statistical power?", "How do you handle multiple testing problems?"),
        ),
    ),
    "DevOps Engineer": (
        QuestionTemplate(
            "Containerization", _BEG,
            "Explain what Docker is and how it differs from virtual machines. What are the benefits?",
            ("What is a Dockerfile?", "How do you optimize Docker images?"),
        ),
        QuestionTemplate(
            "Version Control", _BEG,
            "Explain Git workflow strategies. How do you handle branching and merging?",
            ("What is Git rebase vs merge?", "How do you resolve merge conflicts?"),
        ),
        QuestionTemplate(
            "Linux Basics", _BEG,
            "What are the essential Linux commands every DevOps engineer should know?",
            ("How do you troubleshoot system performance?", "What is process management in Linux?"),
        ),
        QuestionTemplate(
            "CI/CD", _MID,
            "How do you design and implement a CI/CD pipeline? What are the key stages?",
            ("How do you handle deployment rollbacks?", "What is blue-green deployment?"),
        ),
        QuestionTemplate(
            "Infrastructure as Code", _MID,
            "Explain Infrastructure as Code. How do you manage infrastructure using tools like Terraform?",
            ("What is state management in Terraform?", "How do you handle secrets in IaC?"),
        ),
        QuestionTemplate(
            "Monitoring", _MID,
            "How do you implement comprehensive monitoring and alerting for a distributed system?",
            ("What is the difference between metrics, logs, and traces?", "How do you set up effective alerts?"),
        ),
        QuestionTemplate(
            "Kubernetes", _ADV,
            "How would you design a Kubernetes cluster for a production environment? Discuss architecture and best practices.",
            ("How do you handle cluster security?", "What is service mesh and when do you need it?"),
        ),
        QuestionTemplate(
            "Cloud Architecture", _ADV,
            "How do you design a multi-region, highly available cloud architecture?",
            ("How do you handle disaster recovery?", "What is chaos engineering?"),
        ),
        QuestionTemplate(
            "Security", _ADV,
            "How do you implement security best practices in a DevOps pipeline?",
            ("What is shift-left security?", "How do you handle compliance in automated deployments?"),
        ),
    ),
}


# -----------------------------------------------------------------------------
# Personalization & Context Tables
# -----------------------------------------------------------------------------

# Generic phrase -> role-specific phrase, applied case-insensitively
ROLE_PHRASINGS: dict[str, dict[str, str]] = {
    "Frontend Developer": {
        "your experience": "your frontend development experience",
        "a project": "a frontend project",
        "an application": "a web application",
    },
    "Backend Developer": {
        "your experience": "your backend development experience",
        "a project": "a backend system",
        "an application": "a server-side application",
    },
    "Data Scientist": {
        "your experience": "your data science experience",
        "a project": "a data science project",
        "an application": "a machine learning model",
    },
    "DevOps Engineer": {
        "your experience": "your DevOps experience",
        "a project": "an infrastructure project",
        "an application": "a deployment pipeline",
    },
}

CATEGORY_CONTEXTS: dict[str, str] = {
    "React Basics": "This question assesses your fundamental understanding of React concepts.",
    "State Management": "This evaluates your knowledge of managing application state effectively.",
    "Performance Optimization": "This tests your ability to identify and resolve performance issues.",
    "API Design": "This question evaluates your understanding of designing scalable APIs.",
    "Database Optimization": "This assesses your knowledge of database performance tuning.",
    "Machine Learning": "This tests your understanding of core ML concepts and algorithms.",
    "Containerization": "This evaluates your knowledge of containerization technologies.",
    "CI/CD": "This assesses your understanding of continuous integration and deployment.",
}

DEFAULT_CONTEXT = "This question tests your {role} expertise."


# -----------------------------------------------------------------------------
# Store
# -----------------------------------------------------------------------------

class QuestionBank:
    """
    Read-only view over a role -> templates catalog.

    Usage:
        bank = QuestionBank()
        bank.roles()                       # ["Frontend Developer", ...]
        bank.templates_for("Data Scientist")
        bank.categories_for("Data Scientist")
    """

    def __init__(
        self,
        templates: Mapping[str, tuple[QuestionTemplate, ...]] | None = None,
        phrasings: Mapping[str, Mapping[str, str]] | None = None,
        contexts: Mapping[str, str] | None = None,
    ):
        self._templates = dict(templates if templates is not None else QUESTION_TEMPLATES)
        self._phrasings = dict(phrasings if phrasings is not None else ROLE_PHRASINGS)
        self._contexts = dict(contexts if contexts is not None else CATEGORY_CONTEXTS)

    def roles(self) -> list[str]:
        return list(self._templates)

    def has_role(self, role: str) -> bool:
        return role in self._templates

    def templates_for(self, role: str) -> tuple[QuestionTemplate, ...]:
        """Get all templates for a role, raising UnknownRoleError if absent."""
        try:
            return tuple(self._templates[role])
        except KeyError:
            logger.warning(f"Unknown role requested: {role!r}")
            raise UnknownRoleError(role) from None

    def categories_for(self, role: str) -> list[str]:
        """Unique categories for a role in catalog order; empty if unknown."""
        templates = self._templates.get(role, ())
        return list(dict.fromkeys(t.category for t in templates))

    @staticmethod
    def difficulty_levels() -> list[Difficulty]:
        return list(Difficulty)

    def phrasings_for(self, role: str) -> Mapping[str, str]:
        return self._phrasings.get(role, {})

    def context_for(self, category: str, role: str) -> str:
        return self._contexts.get(category) or DEFAULT_CONTEXT.format(role=role.lower())


# Shared read-only catalog
default_bank = QuestionBank()
