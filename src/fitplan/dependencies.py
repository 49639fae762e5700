"""Shared FastAPI dependencies."""

from fastapi import Depends

from fitplan.catalog.service import PlanCatalog
from fitplan.config import Settings, get_settings
from fitplan.generation.client import GenerationClient, get_generation_client
from fitplan.plans.service import PlanLibrary
from fitplan.progress.engine import ProgressEngine
from fitplan.store import DocumentStore, get_store
from fitplan.users.service import ProfileService


def get_progress_engine(
    store: DocumentStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> ProgressEngine:
    return ProgressEngine(store, history_limit=settings.progress_history_limit)


def get_plan_catalog(store: DocumentStore = Depends(get_store)) -> PlanCatalog:
    return PlanCatalog(store)


def get_profile_service(store: DocumentStore = Depends(get_store)) -> ProfileService:
    return ProfileService(store)


def get_plan_library(
    store: DocumentStore = Depends(get_store),
    generator: GenerationClient = Depends(get_generation_client),
) -> PlanLibrary:
    return PlanLibrary(store, generator)
