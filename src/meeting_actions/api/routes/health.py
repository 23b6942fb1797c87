"""Health check endpoint."""

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/api/health")
async def health(request: Request):
    """Report liveness and which optional providers are configured."""
    state = request.app.state
    transcriber = getattr(state, "transcriber", None)
    email = getattr(state, "email", None)
    return {
        "status": "ok",
        "message": "Server is running",
        "services": {
            "transcription": transcriber is not None,
            "email": bool(email is not None and email.is_available),
        },
    }
