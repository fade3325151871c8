import logging
from contextlib import asynccontextmanager
from dotenv import load_dotenv
load_dotenv()  # Load .env file for local development

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.config import AnalyzerConfig
from src.exceptions import ConfigurationError, register_exception_handlers
from src.routers import analysis_router, health_router
from src.services import ConsensusAnalyzer

logger = logging.getLogger(__name__)


# ============================================================================
# Application Lifecycle
# ============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle - create the analyzer on startup."""
    try:
        config = AnalyzerConfig.from_env()
    except ConfigurationError as e:
        # Keep serving /health; analysis endpoints report the configuration error
        logger.error(f"Analyzer not configured: {e.message}")
        app.state.analyzer = None
    else:
        app.state.analyzer = ConsensusAnalyzer(config)
        logger.info(f"Analyzer ready — model: {config.model}, runs: {config.consensus_runs}")
    yield
    app.state.analyzer = None


app = FastAPI(title="RateMySpeak", lifespan=lifespan)

# CORS middleware for cross-origin requests from the web frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict in production
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    allow_credentials=True,
)

register_exception_handlers(app)

app.include_router(health_router)
app.include_router(analysis_router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8080)
