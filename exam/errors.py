"""Exam Errors - Taxonomia de erros do motor de exames.

Nenhum destes erros e fatal: o motor nunca muda de estado quando levanta
um deles, e o historico persistido ilegivel e recuperado como vazio.
"""


class ExamError(Exception):
    """Erro base do modulo de exames."""


class EmptyPoolError(ExamError):
    """Banco de questoes vazio ao iniciar um exame."""

    def __init__(self, message: str = "Nenhuma questao disponivel no banco"):
        super().__init__(message)


class InvalidStateError(ExamError):
    """Operacao nao permitida no estado atual da sessao."""

    def __init__(self, operation: str, state: str):
        self.operation = operation
        self.state = state
        super().__init__(f"Operacao '{operation}' invalida no estado '{state}'")


class InvalidPositionError(ExamError):
    """Posicao de questao fora do intervalo da sessao."""

    def __init__(self, position: int, total: int):
        self.position = position
        self.total = total
        super().__init__(f"Posicao {position} fora do intervalo [0, {total - 1}]")


class InvalidOptionError(ExamError):
    """Indice de alternativa fora do intervalo da questao."""

    def __init__(self, position: int, option_index: int, num_options: int):
        self.position = position
        self.option_index = option_index
        self.num_options = num_options
        super().__init__(
            f"Alternativa {option_index} invalida para a questao {position} "
            f"({num_options} alternativas)"
        )


class MalformedHistoryRecordError(ExamError):
    """Historico persistido nao pode ser interpretado."""


class QuestionBankError(ExamError):
    """Registro invalido no banco de questoes."""
