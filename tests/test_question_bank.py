"""
Unit tests for the question template store.
"""

import pytest

from src.core.domain.models import Difficulty
from src.core.exceptions import UnknownRoleError
from src.core.question_bank import (
    CATEGORY_CONTEXTS,
    QUESTION_TEMPLATES,
    ROLE_PHRASINGS,
    QuestionBank,
    default_bank,
)


class TestCatalog:
    """Shape of the built-in catalog."""

    def test_four_roles(self):
        assert default_bank.roles() == [
            "Frontend Developer",
            "Backend Developer",
            "Data Scientist",
            "DevOps Engineer",
        ]

    @pytest.mark.parametrize("role", list(QUESTION_TEMPLATES))
    def test_each_role_covers_all_levels(self, role):
        levels = [t.difficulty for t in QUESTION_TEMPLATES[role]]

        for level in Difficulty:
            assert levels.count(level) == 3

    @pytest.mark.parametrize("role", list(QUESTION_TEMPLATES))
    def test_template_texts_unique_per_role(self, role):
        texts = [t.template for t in QUESTION_TEMPLATES[role]]

        assert len(set(texts)) == len(texts)

    def test_every_role_has_phrasings(self):
        assert set(ROLE_PHRASINGS) == set(QUESTION_TEMPLATES)

    def test_context_categories_exist_in_catalog(self):
        categories = {t.category for ts in QUESTION_TEMPLATES.values() for t in ts}

        assert set(CATEGORY_CONTEXTS) <= categories


class TestQuestionBank:
    """Lookup behaviour of QuestionBank."""

    def test_templates_for_unknown_role_raises(self):
        with pytest.raises(UnknownRoleError) as exc_info:
            default_bank.templates_for("Astronaut")

        assert exc_info.value.role == "Astronaut"

    def test_categories_in_catalog_order(self):
        assert default_bank.categories_for("DevOps Engineer")[:3] == [
            "Containerization",
            "Version Control",
            "Linux Basics",
        ]

    def test_categories_for_unknown_role_empty(self):
        assert default_bank.categories_for("Astronaut") == []

    def test_has_role(self):
        assert default_bank.has_role("Data Scientist")
        assert not default_bank.has_role("data scientist")

    def test_context_fallback_uses_lowercase_role(self):
        assert default_bank.context_for("Unlisted", "DevOps Engineer") == (
            "This question tests your devops engineer expertise."
        )

    def test_custom_catalog(self):
        bank = QuestionBank(templates={}, phrasings={}, contexts={})

        assert bank.roles() == []
        assert bank.phrasings_for("Anything") == {}
