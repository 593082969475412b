"""Analytics Engine - Estatisticas de desempenho sobre o historico."""

import logging
from collections.abc import Sequence

from ..config import PECB_PASS_PERCENT
from ..models.enums import QuestionCategory, TrendSignal
from ..models.schemas import (
    AnalyticsSummary,
    ExamResult,
    OverallStats,
    PerformancePoint,
    RecentPerformance,
    WeakArea,
)
from .classifier import CategoryClassifier
from .utils import round_half_up

logger = logging.getLogger(__name__)


class AnalyticsEngine:
    """Agrega o historico de resultados em estatisticas derivadas.

    Nada e armazenado: cada chamada recalcula a partir do historico
    recebido, que nunca e modificado.

    Janela de tendencia: media dos ultimos TREND_WINDOW resultados menos a
    media dos primeiros TREND_WINDOW (janela reduzida se houver menos).

    Example:
        >>> engine = AnalyticsEngine()
        >>> stats = engine.overall_stats(history.snapshot())
        >>> stats.improvement_trend
        20
    """

    TREND_WINDOW = 3
    TREND_THRESHOLD = 5

    def __init__(
        self,
        classifier: CategoryClassifier | None = None,
        pass_threshold: int = PECB_PASS_PERCENT,
    ):
        self.classifier = classifier or CategoryClassifier()
        self.pass_threshold = pass_threshold

    def overall_stats(self, history: Sequence[ExamResult]) -> OverallStats:
        """Calcula totais, medias, taxa de aprovacao e tendencia.

        Args:
            history: Resultados em ordem de submissao

        Returns:
            OverallStats (todos os campos 0 para historico vazio)
        """
        total_exams = len(history)
        if total_exams == 0:
            return OverallStats()

        percents = [result.score.percent for result in history]
        passed = sum(1 for percent in percents if percent >= self.pass_threshold)
        total_minutes = sum(result.time_taken_seconds for result in history) / 60

        window = min(self.TREND_WINDOW, total_exams)
        trend = (sum(percents[-window:]) - sum(percents[:window])) / window

        return OverallStats(
            total_exams=total_exams,
            average_score=round_half_up(sum(percents) / total_exams),
            pass_rate=round_half_up(100 * passed / total_exams),
            total_time_spent_minutes=round_half_up(total_minutes),
            average_time_per_exam_minutes=round_half_up(total_minutes / total_exams),
            improvement_trend=round_half_up(trend),
        )

    def weak_areas(self, history: Sequence[ExamResult]) -> list[WeakArea]:
        """Desempenho por categoria em todo o historico, mais fraca primeiro.

        Cada ocorrencia de questao em cada sessao conta separadamente.
        """
        performance: dict[QuestionCategory, dict[str, int]] = {}

        for result in history:
            for position, question in enumerate(result.questions):
                category = self.classifier.classify(question)
                stats = performance.setdefault(category, {"correct": 0, "total": 0})
                stats["total"] += 1
                if result.answers.get(position) == question.correct_index:
                    stats["correct"] += 1

        areas = []
        for category, stats in performance.items():
            percentage = round_half_up(100 * stats["correct"] / stats["total"])
            areas.append(
                WeakArea(
                    category=category,
                    correct=stats["correct"],
                    total=stats["total"],
                    percentage=percentage,
                    needs_focus=percentage < self.pass_threshold,
                )
            )

        areas.sort(key=lambda area: area.percentage)
        return areas

    def performance_over_time(self, history: Sequence[ExamResult]) -> list[PerformancePoint]:
        """Serie bruta de desempenho, um ponto por exame."""
        return [
            PerformancePoint(
                index=index,
                percent=result.score.percent,
                timestamp=result.timestamp,
                time_taken_seconds=result.time_taken_seconds,
            )
            for index, result in enumerate(history, start=1)
        ]

    def recent_performance(self, history: Sequence[ExamResult]) -> RecentPerformance:
        """Ultima nota, media e melhor nota."""
        if not history:
            return RecentPerformance()

        percents = [result.score.percent for result in history]
        return RecentPerformance(
            last_score=percents[-1],
            average_score=round_half_up(sum(percents) / len(percents)),
            best_score=max(percents),
        )

    def trend_signal(self, improvement_trend: int) -> TrendSignal:
        """Classifica a tendencia (+/- TREND_THRESHOLD pontos)."""
        if improvement_trend > self.TREND_THRESHOLD:
            return TrendSignal.IMPROVING
        if improvement_trend < -self.TREND_THRESHOLD:
            return TrendSignal.DECLINING
        return TrendSignal.STEADY

    def summarize(self, history: Sequence[ExamResult]) -> AnalyticsSummary:
        """Calcula o resumo completo a partir de um snapshot do historico."""
        overall = self.overall_stats(history)
        summary = AnalyticsSummary(
            overall=overall,
            weak_areas=self.weak_areas(history),
            performance=self.performance_over_time(history),
            recent=self.recent_performance(history),
            trend=self.trend_signal(overall.improvement_trend),
        )
        logger.debug(
            f"Analytics: {overall.total_exams} exames, media {overall.average_score}%, "
            f"tendencia {overall.improvement_trend:+d}"
        )
        return summary
