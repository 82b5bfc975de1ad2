"""Injected collaborators for request handlers."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from fitcheck.config import Settings
from fitcheck.services.vision import SafetyAnalyzer
from fitcheck.storage.memory import AssessmentStore


def get_store(request: Request) -> AssessmentStore:
    """The store built at application start."""
    return request.app.state.store


def get_analyzer(request: Request) -> SafetyAnalyzer:
    """The analyzer is only available while the app is started."""
    analyzer = request.app.state.analyzer
    if analyzer is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Vision analyzer is not running",
        )
    return analyzer


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


# Type aliases for dependency injection
StoreDep = Annotated[AssessmentStore, Depends(get_store)]
AnalyzerDep = Annotated[SafetyAnalyzer, Depends(get_analyzer)]
SettingsDep = Annotated[Settings, Depends(get_settings)]
