"""API router for the blueprint agent endpoints."""

from fastapi import APIRouter

from blueprint_agent.api import agent

router = APIRouter()

router.include_router(agent.router)
