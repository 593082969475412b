"""Question Bank - Carga e validacao do banco de questoes."""

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..errors import QuestionBankError
from ..models.schemas import Question

logger = logging.getLogger(__name__)


def parse_question_bank(records: Iterable[Any], strict: bool = False) -> tuple[Question, ...]:
    """Valida registros {question, options, correct, explanation?}.

    Registros invalidos (correct ausente/fora do intervalo, menos de 2
    alternativas) sao descartados com warning, ou levantam erro em modo strict.

    Args:
        records: Registros brutos do banco
        strict: Se True, o primeiro registro invalido levanta QuestionBankError

    Returns:
        Tupla de Question validas, na ordem original
    """
    questions = []
    for index, record in enumerate(records):
        try:
            questions.append(Question.model_validate(record))
        except ValidationError as e:
            if strict:
                raise QuestionBankError(f"Registro {index} invalido: {e}") from e
            logger.warning(f"Registro {index} do banco descartado: {e.error_count()} erro(s)")

    logger.info(f"Banco carregado: {len(questions)} questoes validas")
    return tuple(questions)


def load_question_bank(path: str | Path, strict: bool = False) -> tuple[Question, ...]:
    """Le o banco de questoes de um arquivo JSON (lista de registros).

    Raises:
        QuestionBankError: Arquivo inexistente, JSON invalido ou raiz nao-lista
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise QuestionBankError(f"Banco de questoes nao encontrado: {path}") from e
    except json.JSONDecodeError as e:
        raise QuestionBankError(f"JSON invalido em {path}: {e}") from e

    if not isinstance(data, list):
        raise QuestionBankError(f"Banco de questoes deve ser uma lista: {path}")

    return parse_question_bank(data, strict=strict)
