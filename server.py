"""
Exam Practice Server - Simulado de certificacao ISO

FastAPI server with:
- Sessao de prova cronometrada por usuario (auto-submit ao fim do tempo)
- Historico persistido em KV (AgentFS ou memoria)
- Analytics de desempenho (areas fracas, tendencia)
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import app_state
import config
from exam.router import router as exam_router

logging.basicConfig(
    level=config.get_log_level(),
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger("exam_practice")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage app lifecycle."""
    exam_settings = app_state.get_settings()
    pool = app_state.get_pool()
    logger.info(
        f"Starting Exam Practice: {exam_settings.exam_type}, {len(pool)} questoes no banco"
    )
    yield
    await app_state.cleanup()
    logger.info("Exam Practice encerrado")


app = FastAPI(
    title="Exam Practice",
    description="Simulado de certificacao com analytics de desempenho",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "*").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(exam_router)


@app.get("/health")
async def health():
    """Health check."""
    exam_settings = app_state.get_settings()
    return {
        "status": "ok",
        "exam_type": exam_settings.exam_type,
        "questions": len(app_state.get_pool()),
        "active_sessions": len(app_state.engines),
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8001)
