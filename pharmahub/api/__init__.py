"""API routes, mounted under settings.API_PREFIX."""

from fastapi import APIRouter

from pharmahub.api import auth, diagnostics, industrias

router = APIRouter()
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(industrias.router, prefix="/industrias", tags=["industrias"])
router.include_router(diagnostics.router, prefix="/test", tags=["diagnostics"])
