from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from routers.rooms import rooms_router
from routers.signaling import signaling_router
from signaling import SignalingService
from constants import CORS_ORIGINS, LOG_FILE, LOG_LEVEL, STATIC_DIR
from logging_config import get_logger, setup_logging

# Setup logging
setup_logging(log_level=LOG_LEVEL, log_file=LOG_FILE)
logger = get_logger(__name__)


def create_app(static_dir: str = STATIC_DIR) -> FastAPI:
    app = FastAPI(title="Pair signaling relay")

    # Browser clients may be served from another origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # One room map per application instance; rooms live only as long as the process
    app.state.signaling = SignalingService()

    app.include_router(rooms_router)
    app.include_router(signaling_router)

    # Mounted last so it does not shadow the API routes
    if static_dir:
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
        logger.info(f"Serving static client from {static_dir}")

    logger.info("FastAPI application initialized")
    return app


app = create_app()
