"""
FastAPI Main Application

Backend for the YouTube article monitor: channels, videos, generated
articles and WordPress publishing, with scheduled monitoring.
"""

import os
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

# Load environment variables from .env.local
load_dotenv('.env.local')

# Setup logging with rotation
logs_dir = Path(__file__).parent.parent / 'logs'
logs_dir.mkdir(parents=True, exist_ok=True)
log_file = logs_dir / 'backend.log'

file_handler = RotatingFileHandler(
    log_file,
    maxBytes=10_000_000,  # 10MB per file
    backupCount=5,
    encoding='utf-8'
)
console_handler = logging.StreamHandler()

log_format = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
file_handler.setFormatter(log_format)
console_handler.setFormatter(log_format)

log_level = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    handlers=[file_handler, console_handler]
)

logger = logging.getLogger(__name__)
logger.info(f"Logging to file: {log_file}")

from app.routes import articles, auth, llm, monitoring, projects, videos, wordpress, youtube
from app.services.monitoring_service import MonitoringService
from app.services.scheduler import MonitoringScheduler
from core.config import Config
from core.database import create_supabase_client


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for startup and shutdown"""
    # Startup
    logger.info("🚀 Starting YouTube Article Monitor Backend")
    logger.info(f"   Environment: {os.getenv('ENVIRONMENT', 'development')}")

    env_status = Config.validate_environment()
    if not env_status['all_required_present']:
        missing = [name for name, present in env_status['required'].items() if not present]
        logger.error(f"❌ Missing required environment variables: {', '.join(missing)}")
    else:
        logger.info("✅ All required environment variables present")

    if not env_status['any_llm_key_present']:
        logger.warning("⚠️ No LLM API key in environment, projects must provide their own")

    if Config.is_auth_bypassed():
        logger.warning("⚠️ Authentication bypass is enabled (development only)")

    if getattr(app.state, 'supabase', None) is None:
        app.state.supabase = create_supabase_client()

    app.state.scheduler = None
    if Config.is_scheduler_enabled():
        scheduler = MonitoringScheduler(MonitoringService(app.state.supabase))
        scheduler.start()
        app.state.scheduler = scheduler
    else:
        logger.info("Scheduler disabled (ENABLE_SCHEDULER=false)")

    yield

    # Shutdown
    if app.state.scheduler:
        app.state.scheduler.shutdown()
    logger.info("👋 Shutting down YouTube Article Monitor Backend")


app = FastAPI(
    title="YouTube Article Monitor API",
    description="Turns new YouTube videos into WordPress draft articles",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "*").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router, prefix="/api/auth", tags=["authentication"])
app.include_router(projects.router, prefix="/api/projects", tags=["projects"])
app.include_router(wordpress.router, prefix="/api/wordpress", tags=["wordpress"])
app.include_router(youtube.router, prefix="/api/youtube", tags=["youtube"])
app.include_router(videos.router, prefix="/api/videos", tags=["videos"])
app.include_router(articles.router, prefix="/api/articles", tags=["articles"])
app.include_router(llm.router, prefix="/api/llm", tags=["llm"])
app.include_router(monitoring.router, prefix="/api/monitoring", tags=["monitoring"])


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": "YouTube Article Monitor API",
        "version": "1.0.0",
        "status": "online"
    }


@app.get("/health")
async def health_check(request: Request):
    """Health check endpoint"""
    scheduler = getattr(request.app.state, 'scheduler', None)

    return {
        "status": "healthy",
        "database": getattr(request.app.state, 'supabase', None) is not None,
        "scheduler": scheduler is not None,
        "next_runs": scheduler.get_next_run_times() if scheduler else {},
        "environment": os.getenv('ENVIRONMENT', 'development')
    }


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "message": str(exc),
            "path": str(request.url)
        }
    )
