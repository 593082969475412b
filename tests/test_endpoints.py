# =============================================================================
# TESTES DE INTEGRAÇÃO - Endpoints
# =============================================================================
# Testes de integração usando FastAPI TestClient (sem servidor externo)
# =============================================================================

import pytest


@pytest.fixture
def answer_key(sample_question_records):
    """Gabarito do banco de teste indexado pelo enunciado."""
    return {r["question"]: r["correct"] for r in sample_question_records}


def _start(client, user_id="alice", **body):
    response = client.post(f"/exam/{user_id}/start", json=body or None)
    assert response.status_code == 200, response.text
    return response.json()


class TestHealthEndpoints:
    """Testes do endpoint de health check."""

    def test_health_returns_ok(self, client):
        """GET /health - Deve retornar status ok e tamanho do banco."""
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["exam_type"] == "iso27001"
        assert data["questions"] == 5

    def test_exam_types(self, client):
        """GET /exam/types - Deve listar perfis com disponibilidade."""
        response = client.get("/exam/types")

        assert response.status_code == 200
        profiles = {p["id"]: p for p in response.json()}
        assert profiles["iso27001"]["available"] is True
        assert profiles["iso22301"]["available"] is False
        assert profiles["iso27001"]["total_questions"] == 80


class TestStartEndpoint:
    """Testes do inicio da prova."""

    def test_start_defaults(self, client):
        """POST /exam/{user}/start - Usa numero de questoes do ambiente."""
        data = _start(client)

        assert data["state"] == "in_progress"
        assert data["total_questions"] == 3
        assert data["answered"] == 0
        assert len(data["questions"]) == 3
        assert "correct" not in data["questions"][0]
        assert "correct_index" not in data["questions"][0]

    def test_start_custom(self, client):
        """POST /exam/{user}/start - Respeita parametros do request."""
        data = _start(client, num_questions=2, duration_seconds=120)

        assert data["total_questions"] == 2
        assert data["duration_seconds"] == 120
        assert data["remaining_display"] == "00:02:00"

    def test_start_clamps_to_pool(self, client):
        """POST /exam/{user}/start - Limita ao tamanho do banco."""
        data = _start(client, num_questions=99)

        assert data["total_questions"] == 5

    def test_start_twice_conflict(self, client):
        """POST /exam/{user}/start - 409 com prova em andamento."""
        _start(client)

        response = client.post("/exam/alice/start")

        assert response.status_code == 409

    def test_start_with_empty_pool(self, client, clean_app_state):
        """POST /exam/{user}/start - 400 sem questoes no banco."""
        clean_app_state.pool = ()

        response = client.post("/exam/bob/start")

        assert response.status_code == 400
        assert client.get("/exam/bob/status").json()["state"] == "setup"


class TestAnswerEndpoint:
    """Testes de registro de respostas."""

    def test_answer_upsert(self, client):
        """POST /exam/{user}/answer - Registra e substitui resposta."""
        _start(client)

        client.post("/exam/alice/answer", json={"position": 0, "option_index": 0})
        response = client.post("/exam/alice/answer", json={"position": 0, "option_index": 1})

        assert response.status_code == 200
        data = response.json()
        assert data["answered"] == 1
        assert data["questions"][0]["selected_index"] == 1

    def test_answer_invalid_position(self, client):
        """POST /exam/{user}/answer - 422 para posicao fora da sessao."""
        _start(client)

        response = client.post("/exam/alice/answer", json={"position": 3, "option_index": 0})

        assert response.status_code == 422

    def test_answer_invalid_option(self, client):
        """POST /exam/{user}/answer - 422 para alternativa inexistente."""
        _start(client)

        response = client.post("/exam/alice/answer", json={"position": 0, "option_index": 9})

        assert response.status_code == 422

    def test_answer_without_exam(self, client):
        """POST /exam/{user}/answer - 409 sem prova em andamento."""
        response = client.post("/exam/alice/answer", json={"position": 0, "option_index": 0})

        assert response.status_code == 409


class TestSubmitEndpoint:
    """Testes de submissao e resultado."""

    def test_submit_all_correct(self, client, answer_key):
        """POST /exam/{user}/submit - Pontua e retorna revisao."""
        status = _start(client)
        for question in status["questions"]:
            client.post(
                "/exam/alice/answer",
                json={"position": question["position"], "option_index": answer_key[question["text"]]},
            )

        response = client.post("/exam/alice/submit")

        assert response.status_code == 200
        data = response.json()
        assert data["score"] == {"correct": 3, "total": 3, "percent": 100}
        assert data["passed"] is True
        assert data["timed_out"] is False
        assert all(item["is_correct"] for item in data["review"])

    def test_submit_blank(self, client):
        """POST /exam/{user}/submit - Questoes em branco contam como erradas."""
        _start(client)

        data = client.post("/exam/alice/submit").json()

        assert data["score"]["percent"] == 0
        assert data["passed"] is False
        assert all(item["selected_index"] is None for item in data["review"])
        assert all(item["answered"] is False for item in data["review"])

    def test_submit_is_idempotent(self, client, clean_app_state):
        """POST /exam/{user}/submit - Segunda chamada nao duplica historico."""
        _start(client)

        first = client.post("/exam/alice/submit").json()
        second = client.post("/exam/alice/submit").json()

        assert first["result_id"] == second["result_id"]
        assert len(clean_app_state.engines["alice"].history) == 1

    def test_submit_without_exam(self, client):
        """POST /exam/{user}/submit - 409 em Setup."""
        response = client.post("/exam/alice/submit")

        assert response.status_code == 409

    def test_submit_persists_history(self, client, clean_app_state):
        """POST /exam/{user}/submit - Historico gravado no KV."""
        import asyncio

        _start(client)
        client.post("/exam/alice/submit")

        stored = asyncio.run(clean_app_state.kv.get("exam:alice:iso27001:history"))

        assert isinstance(stored, list)
        assert len(stored) == 1

    def test_result_endpoint(self, client):
        """GET /exam/{user}/result - 404 antes, resultado depois."""
        assert client.get("/exam/alice/result").status_code == 404

        _start(client)
        submitted = client.post("/exam/alice/submit").json()
        response = client.get("/exam/alice/result")

        assert response.status_code == 200
        assert response.json()["result_id"] == submitted["result_id"]


class TestAbortResetEndpoints:
    """Testes de abort e reset."""

    def test_abort(self, client):
        """POST /exam/{user}/abort - Volta para setup sem resultado."""
        _start(client)
        client.post("/exam/alice/answer", json={"position": 0, "option_index": 0})

        response = client.post("/exam/alice/abort")

        assert response.status_code == 200
        data = response.json()
        assert data["state"] == "setup"
        assert data["questions"] == []
        assert client.get("/exam/alice/result").status_code == 404

    def test_abort_without_exam(self, client):
        """POST /exam/{user}/abort - 409 em Setup."""
        assert client.post("/exam/alice/abort").status_code == 409

    def test_reset_after_submit(self, client):
        """POST /exam/{user}/reset - Permite nova tentativa."""
        _start(client)
        client.post("/exam/alice/submit")

        response = client.post("/exam/alice/reset")

        assert response.status_code == 200
        assert response.json()["state"] == "setup"
        assert _start(client)["state"] == "in_progress"

    def test_reset_in_progress_conflict(self, client):
        """POST /exam/{user}/reset - 409 com prova em andamento."""
        _start(client)

        assert client.post("/exam/alice/reset").status_code == 409


class TestAnalyticsEndpoint:
    """Testes de analytics."""

    def test_analytics_empty(self, client):
        """GET /exam/{user}/analytics - Zerado sem historico."""
        response = client.get("/exam/alice/analytics")

        assert response.status_code == 200
        data = response.json()
        assert data["overall"]["total_exams"] == 0
        assert data["weak_areas"] == []
        assert data["trend"] == "steady"

    def test_analytics_after_attempts(self, client):
        """GET /exam/{user}/analytics - Agrega tentativas submetidas."""
        for _ in range(2):
            _start(client)
            client.post("/exam/alice/submit")
            client.post("/exam/alice/reset")

        data = client.get("/exam/alice/analytics").json()

        assert data["overall"]["total_exams"] == 2
        assert data["overall"]["pass_rate"] == 0
        assert len(data["performance"]) == 2
        assert sum(area["total"] for area in data["weak_areas"]) == 6

    def test_users_are_isolated(self, client):
        """Historico e sessao independentes por usuario."""
        _start(client, user_id="alice")
        client.post("/exam/alice/submit")

        assert client.get("/exam/bob/status").json()["state"] == "setup"
        assert client.get("/exam/bob/analytics").json()["overall"]["total_exams"] == 0
