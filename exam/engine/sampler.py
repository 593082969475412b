"""Question Sampler - Sorteio de questoes sem reposicao."""

import logging
import random
from collections.abc import Sequence

from ..errors import EmptyPoolError
from ..models.schemas import Question

logger = logging.getLogger(__name__)


class QuestionSampler:
    """Sorteia um subconjunto aleatorio e sem duplicatas do banco.

    Embaralha uma copia do banco (Fisher-Yates via random.Random.shuffle)
    e pega os primeiros k elementos: selecao uniforme sem reposicao em
    tempo linear.

    Example:
        >>> sampler = QuestionSampler(random.Random(42))
        >>> selected = sampler.sample(pool, 20)
        >>> len(selected) == min(20, len(pool))
        True
    """

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()

    def seed(self, seed: int | None) -> None:
        """Define seed para sorteios reproduziveis."""
        self._rng.seed(seed)

    @staticmethod
    def clamp(k: int, pool_size: int) -> int:
        """Limita k ao intervalo [1, pool_size]."""
        return max(1, min(k, pool_size))

    def sample(self, pool: Sequence[Question], k: int) -> tuple[Question, ...]:
        """Sorteia min(k, len(pool)) questoes distintas em ordem aleatoria.

        Args:
            pool: Banco de questoes (nao e modificado)
            k: Numero de questoes desejado

        Returns:
            Tupla com as questoes sorteadas

        Raises:
            EmptyPoolError: Se o banco estiver vazio
        """
        if not pool:
            logger.warning("Sorteio solicitado com banco vazio")
            raise EmptyPoolError()

        count = self.clamp(k, len(pool))
        shuffled = list(pool)
        self._rng.shuffle(shuffled)

        logger.debug(f"Sorteadas {count} de {len(pool)} questoes (solicitado: {k})")
        return tuple(shuffled[:count])
