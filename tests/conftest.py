# =============================================================================
# CONFTEST - Fixtures compartilhadas para todos os testes
# =============================================================================
# Centraliza ambiente, estado global e cliente FastAPI
# =============================================================================

import json
import os
from unittest.mock import patch

import pytest


# =============================================================================
# FIXTURES DE AMBIENTE
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Configura ambiente de testes globalmente."""
    env_vars = {
        "ENVIRONMENT": "test",
        "LOG_LEVEL": "ERROR",  # Reduzir logs em testes
        "EXAM_STORAGE": "memory",
    }
    with patch.dict(os.environ, env_vars):
        yield


@pytest.fixture
def clean_env():
    """Limpa variáveis de ambiente para testes isolados."""
    with patch.dict(os.environ, {}, clear=True):
        yield


@pytest.fixture
def question_bank_file(tmp_path, sample_question_records):
    """Banco de questoes gravado em arquivo temporario."""
    path = tmp_path / "questions.json"
    path.write_text(json.dumps(sample_question_records), encoding="utf-8")
    return path


@pytest.fixture
def clean_app_state():
    """Zera o estado global do app antes e depois do teste."""
    import app_state

    app_state.reset_state()
    yield app_state
    app_state.reset_state()


# =============================================================================
# FIXTURES DO FASTAPI
# =============================================================================


@pytest.fixture
def client(question_bank_file, clean_app_state):
    """Cliente de teste FastAPI com banco de 5 questoes e duracao curta."""
    from fastapi.testclient import TestClient

    env_vars = {
        "QUESTION_BANK_PATH": str(question_bank_file),
        "EXAM_NUM_QUESTIONS": "3",
        "EXAM_MIN_DURATION_SECONDS": "1",
        "EXAM_TICK_INTERVAL": "60",  # Sem ticks durante o teste
    }
    with patch.dict(os.environ, env_vars):
        from server import app

        with TestClient(app) as test_client:
            yield test_client
