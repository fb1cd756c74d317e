"""Shared route dependencies."""

from fastapi import HTTPException, Request

from prospector.workspace import Workspace


def get_workspace(request: Request) -> Workspace:
    return request.app.state.workspace


def require_generator(workspace: Workspace):
    if workspace.generator is None:
        raise HTTPException(status_code=503, detail="No generation backend configured")
    return workspace.generator
