from fastapi import APIRouter
from app.api import careers, contact, diagnostics, news, partners, team

api_router = APIRouter(prefix="/api")
api_router.include_router(news.router, prefix="/news", tags=["news"])
api_router.include_router(careers.router, prefix="/careers", tags=["careers"])
api_router.include_router(team.router, prefix="/team", tags=["team"])
api_router.include_router(partners.router, prefix="/partners", tags=["partners"])
api_router.include_router(contact.router, prefix="/contact-messages", tags=["contact"])
api_router.include_router(diagnostics.router, tags=["diagnostics"])
