from fastapi import APIRouter

from app.services.resume_llm import resume_llm_enabled

router = APIRouter()

@router.get("/health", summary="Health Check", description="Check the health status of the application.")
async def health_check():
    return {"status": "healthy", "llm_enabled": resume_llm_enabled()}
