from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
from .routers import channels, sounds
from .middleware import api_key_middleware, logging_middleware
from .config import settings
from .services.host import build_host_from_settings
from .services.channel_service import initialize_notification_channels


# Setup basic logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s %(levelname)s %(name)s %(message)s',
)

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.PROJECT_NAME)

# Allow requests from the mobile shell and other origins. For production,
# set a stricter allow_origins list via env if desired.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add custom middleware (order matters - they run in reverse order)
# 1. Logging (outermost - logs everything)
app.middleware("http")(logging_middleware)

# 2. API key authentication (innermost - checks auth)
app.middleware("http")(api_key_middleware)

app.include_router(channels.router, prefix="/channels", tags=["Channels"])
app.include_router(sounds.router, prefix="/sounds", tags=["Sounds"])

@app.get("/")
def root():
    return {"message": "Ride notification channels API running"}


@app.on_event("startup")
def provision_notification_channels():
    # Runs once per process start; failures are logged, never raised.
    specs = initialize_notification_channels(build_host_from_settings(), settings.CHANNEL_SCHEME)
    logger.info(f"Startup provisioning done: {len(specs)} channel(s) ({settings.CHANNEL_SCHEME})")
