# backend/sitefactory/api/projects.py
from typing import Annotated, Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Path, Response, status

from ..errors import InternalError, SiteFactoryError
from ..schemas.project import Project, ProjectCreate
from ..stores import ProjectStore
from ..utils.logging import api_logger
from .dependencies import get_store

router = APIRouter(prefix="/projects", tags=["projects"])

# Largest value a SQLite INTEGER column holds
MAX_PROJECT_ID = 2 ** 63 - 1

ProjectId = Annotated[int, Path(gt=0, le=MAX_PROJECT_ID, description="Positive integer project id")]


@router.get("", response_model=List[Project])
def list_projects(store: ProjectStore = Depends(get_store)):
    """List all projects"""
    api_logger.info("Starting projects list operation", extra={
        "endpoint": "/projects",
        "method": "GET"
    })

    try:
        projects = store.list()
        api_logger.info(f"Found {len(projects)} projects")
        return projects
    except SiteFactoryError:
        raise
    except Exception as e:
        api_logger.error("Failed to list projects", extra={"error": str(e)}, exc_info=True)
        raise InternalError("Failed to list projects") from e


@router.post("", response_model=Project, status_code=status.HTTP_201_CREATED)
def create_project(project: ProjectCreate, store: ProjectStore = Depends(get_store)):
    api_logger.info("Creating new project", extra={"project_name": project.name})

    try:
        created = store.create(project.name)
        api_logger.info("Project created successfully", extra={
            "project_id": created.id,
            "project_name": created.name
        })
        return created
    except SiteFactoryError:
        raise
    except Exception as e:
        api_logger.error("Failed to create project", extra={
            "project_name": project.name,
            "error": str(e)
        }, exc_info=True)
        raise InternalError("Failed to create project") from e


@router.patch("/{project_id}", response_model=Project)
def update_project(project_id: ProjectId,
                   changes: Optional[Dict[str, Any]] = Body(default=None),
                   store: ProjectStore = Depends(get_store)):
    api_logger.info("Updating project", extra={"project_id": project_id})

    # Field checks run in the store after the existence check, so an unknown id is 404 whatever the body
    try:
        updated = store.update(project_id, changes or {})
        api_logger.info("Project updated successfully", extra={"project_id": project_id})
        return updated
    except SiteFactoryError as e:
        api_logger.warning("Project update rejected", extra={
            "project_id": project_id,
            "reason": e.message
        })
        raise
    except Exception as e:
        api_logger.error("Failed to update project", extra={
            "project_id": project_id,
            "error": str(e)
        }, exc_info=True)
        raise InternalError("Failed to update project") from e


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(project_id: ProjectId, store: ProjectStore = Depends(get_store)):
    api_logger.info("Deleting project", extra={"project_id": project_id})

    try:
        store.delete(project_id)
        api_logger.info(f"Successfully deleted project {project_id}")
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except SiteFactoryError as e:
        api_logger.warning("Project deletion rejected", extra={
            "project_id": project_id,
            "reason": e.message
        })
        raise
    except Exception as e:
        api_logger.error(f"Failed to delete project: {str(e)}", exc_info=True)
        raise InternalError("Failed to delete project") from e
