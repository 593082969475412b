"""Helpers numericos e de formatacao compartilhados pelos engines."""

import math


def round_half_up(value: float) -> int:
    """Arredonda .5 para cima (inclusive negativos: -2.5 -> -2).

    round() do Python usa bankers rounding (12.5 -> 12), o que muda
    percentuais exibidos; todos os percentuais do modulo passam por aqui.
    """
    return math.floor(value + 0.5)


def format_time(seconds: int) -> str:
    """Formata segundos como HH:MM:SS."""
    seconds = max(0, int(seconds))
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
