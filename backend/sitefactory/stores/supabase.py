# backend/sitefactory/stores/supabase.py
from typing import List, Optional

import httpx

from ..errors import ConfigurationError, NotFoundError, StoreError
from ..schemas.project import Project
from ..utils.logging import db_logger
from .base import ProjectStore, utc_now


class SupabaseProjectStore(ProjectStore):
    """Projects stored in a hosted Supabase database, reached via its REST API.

    The hosted database owns id generation and defaults ``created_at`` and
    ``updated_at``; ``updated_at`` is refreshed explicitly on every update.
    """

    backend_name = "supabase"
    table = "projects"

    def __init__(self, url: Optional[str], service_role_key: Optional[str],
                 client: Optional[httpx.Client] = None, timeout: float = 30.0):
        url = (url or "").strip()
        service_role_key = (service_role_key or "").strip()
        if not url:
            raise ConfigurationError("SUPABASE_URL is not configured")
        if not service_role_key:
            raise ConfigurationError("SUPABASE_SERVICE_ROLE_KEY is not configured")

        self.client = client or httpx.Client(timeout=timeout)
        self.base_url = f"{url.rstrip('/')}/rest/v1/{self.table}"
        self.headers = {
            "apikey": service_role_key,
            "Authorization": f"Bearer {service_role_key}",
            "Content-Type": "application/json",
            "Prefer": "return=representation",
        }

    def _request(self, action: str, method: str, **kwargs) -> list:
        try:
            response = self.client.request(method, self.base_url, headers=self.headers, **kwargs)
            response.raise_for_status()
            return response.json() if response.content else []
        except httpx.HTTPStatusError as e:
            db_logger.error(f"Supabase rejected request to {action}", extra={
                "status_code": e.response.status_code,
                "error": e.response.text
            })
            raise StoreError(f"Failed to {action}") from e
        except (httpx.HTTPError, ValueError) as e:
            db_logger.error(f"Supabase request to {action} failed", extra={
                "error": str(e)
            })
            raise StoreError(f"Failed to {action}") from e

    def list(self) -> List[Project]:
        rows = self._request("list projects", "GET", params={"select": "*", "order": "id.asc"})
        return [Project.model_validate(row) for row in rows]

    def _ensure_exists(self, project_id: int) -> None:
        rows = self._request("load project", "GET", params={"select": "id", "id": f"eq.{project_id}"})
        if not rows:
            raise NotFoundError("Project not found")

    def _insert(self, name: str) -> Project:
        rows = self._request("create project", "POST", json=[{"name": name}])
        if not rows:
            raise StoreError("Failed to create project")
        return Project.model_validate(rows[0])

    def _update(self, project_id: int, updates: dict) -> Project:
        payload = dict(updates, updated_at=utc_now().isoformat())
        rows = self._request("update project", "PATCH", params={"id": f"eq.{project_id}"}, json=payload)
        if not rows:
            raise NotFoundError("Project not found")
        return Project.model_validate(rows[0])

    def _remove(self, project_id: int) -> None:
        rows = self._request("delete project", "DELETE", params={"id": f"eq.{project_id}"})
        if not rows:
            raise NotFoundError("Project not found")

    def close(self) -> None:
        self.client.close()
