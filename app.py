from fastapi import Depends, FastAPI, File, Form, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware

import logging
from functools import lru_cache
from typing import Optional

from verifier.models import VerificationOutcome, VerifierConfig
from verifier.run_verification import Verifier, run_verification
from config import settings


logging.basicConfig(level=settings.LOG_LEVEL)

app = FastAPI(
    title="Campus Card Verification Service",
    description="Verifies institute and student id claims against a photographed campus card",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache(maxsize=1)
def get_verifier() -> Verifier:
    return Verifier(VerifierConfig.from_settings(settings))


# ------------------------
# Card Verification API
# ------------------------
@app.post("/verify", response_model=VerificationOutcome)
async def verify_card(
    request: Request,
    card: UploadFile = File(...),
    institute: str = Form(...),
    student_id: Optional[str] = Form(None),
    verifier: Verifier = Depends(get_verifier),
):
    """
    Verify that the card photo shows the claimed institute and, if given,
    the claimed student id.
    Supports JPG / PNG / HEIC uploads.
    """
    # Form() turns an empty value into None; an empty id is still a claim
    form = await request.form()
    if isinstance(form.get("student_id"), str):
        student_id = form["student_id"]

    image_data = await card.read()
    return await run_verification(verifier, image_data, institute, student_id)


# ------------------------
# Health Check
# ------------------------
@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "service": "card-verification"
    }


# ------------------------
# Local Dev Entry
# ------------------------
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
