"""Category Classifier - Classificacao de questoes por palavras-chave."""

import logging

from ..models.enums import QuestionCategory
from ..models.schemas import Question

logger = logging.getLogger(__name__)

# Ordem importa: a primeira regra que casar define a categoria.
CATEGORY_KEYWORDS: tuple[tuple[QuestionCategory, tuple[str, ...]], ...] = (
    (QuestionCategory.RISK_MANAGEMENT, ("risk", "threat", "vulnerability")),
    (QuestionCategory.SECURITY_CONTROLS, ("control", "security control")),
    (QuestionCategory.ISMS_FRAMEWORK, ("isms", "management system")),
    (QuestionCategory.AUDIT_COMPLIANCE, ("audit", "review", "compliance")),
    (QuestionCategory.DOCUMENTATION, ("policy", "procedure", "document")),
    (QuestionCategory.IMPLEMENTATION, ("implementation", "project")),
)


class CategoryClassifier:
    """Classifica questoes na taxonomia fixa de categorias.

    Regra deterministica sobre o texto em minusculas: as categorias sao
    testadas em ordem de prioridade e a primeira com alguma palavra-chave
    presente vence. Sem casamento, retorna General.

    Example:
        >>> classifier = CategoryClassifier()
        >>> classifier.classify_text("Who owns the risk treatment plan?")
        <QuestionCategory.RISK_MANAGEMENT: 'Risk Management'>
    """

    RULES = CATEGORY_KEYWORDS

    def classify_text(self, text: str) -> QuestionCategory:
        """Classifica um enunciado."""
        lowered = text.lower()
        for category, keywords in self.RULES:
            if any(keyword in lowered for keyword in keywords):
                return category
        return QuestionCategory.GENERAL

    def classify(self, question: Question) -> QuestionCategory:
        """Classifica uma questao pelo seu enunciado."""
        category = self.classify_text(question.text)
        logger.debug(f"Questao classificada como '{category.value}'")
        return category

    @property
    def categories(self) -> list[QuestionCategory]:
        """Taxonomia completa em ordem de prioridade."""
        return [category for category, _ in self.RULES] + [QuestionCategory.GENERAL]
