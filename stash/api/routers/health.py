from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["health"])


@router.get("/", response_class=PlainTextResponse)
def root():
    return "Hello there! Welcome to the Streamer Stash World!"


@router.get("/health")
def health():
    return {"status": "ok"}
