import logging
import os

from fastapi import FastAPI

from fastapi.middleware.cors import CORSMiddleware
from app.api import auth, footprints, reports
from contextlib import asynccontextmanager
from app.db.session import init_db

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    init_db()
    logger.info("Carbon reports API started")
    yield

app = FastAPI(title="Carbon Reports API", lifespan=lifespan)

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(footprints.router, prefix="/footprints", tags=["footprints"])
app.include_router(reports.router, prefix="/reports", tags=["reports"])



@app.get("/health")
def health():
    return {"status": "ok", "service": "carbon-reports"}
