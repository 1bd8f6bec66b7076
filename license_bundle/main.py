from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from license_bundle import __version__
from license_bundle.api.audit import router as audit_router
from license_bundle.core.config import API_ALLOWED_ORIGINS

app = FastAPI(
    title="License Bundle",
    version=__version__,
)

# Main API
app.include_router(audit_router, prefix="/api", tags=["Licenses"])

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=API_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def root():
    return {"message": "License Bundle backend is running"}
