from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import os
import logging
from dotenv import load_dotenv

from db import Base, engine
import matching.models  # noqa: F401  registers tables on Base.metadata
from matching.routes import router as matching_router

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

logging.basicConfig(level=LOG_LEVEL)
logging.info("App starting")

app = FastAPI(title="UniMatch", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

Base.metadata.create_all(bind=engine)

app.include_router(matching_router)


@app.get("/health", tags=["meta"])
def health():
    return {"status": "ok"}
