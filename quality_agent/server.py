"""Quality Agent: FastAPI web server.

Runs on port 3000 by default:
    python -m quality_agent.server
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .config import AgentConfig, get_config
from .engine import QualityAgent
from .llm.advisor import Advisor, LLMAdvisor
from .store import ResultStore
from .web.routes import router

logger = logging.getLogger(__name__)


def create_app(
    cfg: Optional[AgentConfig] = None,
    store: Optional[ResultStore] = None,
    advisor: Optional[Advisor] = None,
) -> FastAPI:
    """Build the app; store and advisor are injected, defaults come from config."""
    cfg = cfg or get_config()
    if advisor is None:
        advisor = LLMAdvisor(cfg.llm)
    if store is None:
        store = ResultStore(ttl=cfg.server.result_ttl_sec)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Quality Agent ready (llm=%s/%s)", cfg.llm.provider, cfg.llm.model)
        yield
        close = getattr(advisor, "close", None)
        if close is not None:
            await close()

    app = FastAPI(title="Code Quality Intelligence Agent", version="1.0.0", lifespan=lifespan)
    app.state.config = cfg
    app.state.store = store
    app.state.agent = QualityAgent(advisor=advisor, cfg=cfg.analysis)
    app.include_router(router)
    return app


def main():
    import uvicorn

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    cfg = get_config()
    uvicorn.run(create_app(cfg), host=cfg.server.host, port=cfg.server.port)


if __name__ == "__main__":
    main()
