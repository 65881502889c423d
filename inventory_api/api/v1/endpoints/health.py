from fastapi import APIRouter

router = APIRouter()

@router.get("/ping", summary="Liveness probe")
async def ping():
    return {"message": "pong"}
