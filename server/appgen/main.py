import logging

from fastapi import FastAPI

from .api.generate import router as generate_router
from .core.llm_client import GeminiInvoker
from .utils.config import LOG_LEVEL

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def create_app(invoker=None) -> FastAPI:
    app = FastAPI(title="Mobile App Builder AI Backend")
    app.state.invoker = invoker or GeminiInvoker()
    app.include_router(generate_router, prefix="/generate")

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
