"""Exam Scoring Engine - Motor de pontuacao e revisao."""

from collections.abc import Mapping, Sequence

from ..config import PECB_PASS_PERCENT
from ..models.schemas import Question, QuestionReview, Score
from .utils import round_half_up


class ExamScoringEngine:
    """Motor de pontuacao para exames de multipla escolha.

    Todas as questoes valem o mesmo peso. Posicoes sem resposta contam
    como erradas.

    Example:
        >>> engine = ExamScoringEngine()
        >>> score = engine.score(questions, {0: 1, 1: 0})
        >>> engine.is_passed(score.percent)
    """

    def __init__(self, pass_threshold: int = PECB_PASS_PERCENT):
        self.pass_threshold = pass_threshold

    @staticmethod
    def percent(correct: int, total: int) -> int:
        """Percentual arredondado (0 quando total = 0)."""
        if total <= 0:
            return 0
        return round_half_up(100 * correct / total)

    def score(self, questions: Sequence[Question], answers: Mapping[int, int]) -> Score:
        """Calcula acertos, total e percentual.

        Args:
            questions: Questoes da sessao, na ordem exibida
            answers: Posicao -> indice escolhido (posicoes ausentes = erradas)

        Returns:
            Score com correct, total e percent
        """
        correct = sum(
            1
            for position, question in enumerate(questions)
            if answers.get(position) == question.correct_index
        )
        total = len(questions)
        return Score(correct=correct, total=total, percent=self.percent(correct, total))

    def is_passed(self, percent: int) -> bool:
        """Aprovado quando percent >= pass_threshold."""
        return percent >= self.pass_threshold

    def review(
        self, questions: Sequence[Question], answers: Mapping[int, int]
    ) -> list[QuestionReview]:
        """Monta a revisao questao a questao (resposta dada, gabarito, explicacao).

        Args:
            questions: Questoes da sessao
            answers: Respostas registradas

        Returns:
            Lista de QuestionReview na ordem da sessao
        """
        reviews = []
        for position, question in enumerate(questions):
            selected = answers.get(position)
            reviews.append(
                QuestionReview(
                    position=position,
                    text=question.text,
                    selected_index=selected,
                    selected_option=question.options[selected] if selected is not None else None,
                    correct_index=question.correct_index,
                    correct_option=question.options[question.correct_index],
                    is_correct=selected == question.correct_index,
                    explanation=question.explanation,
                )
            )
        return reviews
