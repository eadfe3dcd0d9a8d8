"""
Studio CRM - Database Tools (Supabase)
"""

import json
import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, cast

from postgrest.exceptions import APIError
from supabase import Client, create_client

from config.settings import settings
from models.schemas import (
    FileRecord,
    Lead,
    LeadActivity,
    Project,
    RenderTask,
    SocialPost,
    UserProfile,
)

logger = logging.getLogger(__name__)
_MISSING_TABLE_WARNED: set[str] = set()

PROJECT_SUMMARY_COLUMNS = ("id", "client_name")
RENDER_PROJECT_COLUMNS = ("id", "client_name", "project_type")


def _warn_missing_table_once(table: str, operation: str) -> None:
    if table in _MISSING_TABLE_WARNED:
        return
    _MISSING_TABLE_WARNED.add(table)
    logger.warning(
        "Supabase table '%s' is missing (PGRST205). Returning empty result for %s until "
        "migrations are applied.",
        table,
        operation,
    )


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class JSONEncoder(json.JSONEncoder):
    """Custom JSON encoder for datetime and Decimal types"""

    def default(self, o):
        if isinstance(o, datetime):
            return o.isoformat()
        if isinstance(o, date):
            return o.isoformat()
        if isinstance(o, Decimal):
            return float(o)
        return super().default(o)


class DatabaseManager:
    """Supabase database manager for the studio CRM.

    The client uses the service key, so every query filters by the owning
    user explicitly. Post-production rows have no `user_id`; they are owned
    through the project they belong to.
    """

    def __init__(self):
        self.client: Client = create_client(settings.supabase.url, settings.supabase.service_key)

    def _serialize_payload(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return cast(Dict[str, Any], json.loads(json.dumps(payload, cls=JSONEncoder)))

    def _is_missing_table_error(self, exc: Exception) -> bool:
        if not isinstance(exc, APIError):
            return False
        if getattr(exc, "code", None) == "PGRST205":
            return True
        raw_error = getattr(exc, "_raw_error", None)
        if isinstance(raw_error, dict):
            return raw_error.get("code") == "PGRST205"
        return False

    def _rows(self, query: Any, table: str, operation: str) -> List[Dict[str, Any]]:
        try:
            response = query.execute()
        except APIError as exc:
            if self._is_missing_table_error(exc):
                _warn_missing_table_once(table, operation)
                return []
            raise
        return cast(List[Dict[str, Any]], response.data or [])

    def _first(self, query: Any, table: str, operation: str) -> Optional[Dict[str, Any]]:
        data = self._rows(query, table, operation)
        return data[0] if data else None

    def _insert(self, table: str, record: Dict[str, Any]) -> Dict[str, Any]:
        payload = self._serialize_payload(record)
        response = self.client.table(table).insert(payload).execute()
        data = cast(List[Dict[str, Any]], response.data or [])
        return data[0] if data else {}

    # ============================================
    # Project Operations
    # ============================================

    async def list_projects(
        self,
        user_id: str,
        stage: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """List a user's projects, newest first"""
        query = (
            self.client.table("projects")
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
        )
        if stage:
            query = query.eq("stage", stage)
        if limit:
            query = query.limit(limit)
        if offset:
            page_size = limit or 10
            query = query.range(offset, offset + page_size - 1)
        return self._rows(query, "projects", "list_projects")

    async def get_project(self, user_id: str, project_id: str) -> Optional[Dict[str, Any]]:
        """Get a project owned by the user"""
        query = (
            self.client.table("projects")
            .select("*")
            .eq("id", project_id)
            .eq("user_id", user_id)
        )
        return self._first(query, "projects", "get_project")

    async def list_owned_projects(
        self, user_id: str, columns: Sequence[str] = PROJECT_SUMMARY_COLUMNS
    ) -> List[Dict[str, Any]]:
        """Project summaries used to scope post-production queries"""
        query = self.client.table("projects").select(",".join(columns)).eq("user_id", user_id)
        return self._rows(query, "projects", "list_owned_projects")

    async def create_project(self, user_id: str, project_data: Dict[str, Any]) -> Dict[str, Any]:
        """Create a new project"""
        project = Project(user_id=user_id, **project_data)
        return self._insert("projects", project.model_dump(mode="json", exclude_none=True))

    async def update_project(
        self, user_id: str, project_id: str, updates: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """Update a project; None when it does not exist or is not owned"""
        payload = self._serialize_payload({**updates, "updated_at": utc_now()})
        query = (
            self.client.table("projects")
            .update(payload)
            .eq("id", project_id)
            .eq("user_id", user_id)
        )
        return self._first(query, "projects", "update_project")

    async def delete_project(self, user_id: str, project_id: str) -> None:
        """Delete a project"""
        self.client.table("projects").delete().eq("id", project_id).eq(
            "user_id", user_id
        ).execute()

    # ============================================
    # Lead Operations
    # ============================================

    async def list_leads(
        self,
        user_id: str,
        stage: Optional[str] = None,
        source: Optional[str] = None,
        min_score: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """List a user's leads, newest first"""
        query = (
            self.client.table("leads")
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
        )
        if stage:
            query = query.eq("stage", stage)
        if source:
            query = query.eq("source", source)
        if min_score is not None:
            query = query.gte("score", min_score)
        return self._rows(query, "leads", "list_leads")

    async def get_lead(
        self, user_id: str, lead_id: str, include_activities: bool = True
    ) -> Optional[Dict[str, Any]]:
        """Get a lead, by default with its activity log"""
        query = self.client.table("leads").select("*").eq("id", lead_id).eq("user_id", user_id)
        lead = self._first(query, "leads", "get_lead")
        if not lead:
            return None
        if include_activities:
            lead["activities"] = await self.list_lead_activities(lead_id)
        return lead

    async def create_lead(self, user_id: str, lead_data: Dict[str, Any]) -> Dict[str, Any]:
        """Create a new lead"""
        lead = Lead(user_id=user_id, **lead_data)
        return self._insert("leads", lead.model_dump(mode="json", exclude_none=True))

    async def update_lead(
        self, user_id: str, lead_id: str, updates: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """Update a lead; None when it does not exist or is not owned"""
        payload = self._serialize_payload({**updates, "updated_at": utc_now()})
        query = self.client.table("leads").update(payload).eq("id", lead_id).eq("user_id", user_id)
        return self._first(query, "leads", "update_lead")

    async def delete_lead(self, user_id: str, lead_id: str) -> None:
        """Delete a lead"""
        self.client.table("leads").delete().eq("id", lead_id).eq("user_id", user_id).execute()

    async def list_lead_activities(self, lead_id: str) -> List[Dict[str, Any]]:
        """Activity log for a lead, newest first"""
        query = (
            self.client.table("lead_activities")
            .select("*")
            .eq("lead_id", lead_id)
            .order("created_at", desc=True)
        )
        return self._rows(query, "lead_activities", "list_lead_activities")

    async def create_lead_activity(
        self, lead_id: str, activity_data: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Append an entry to a lead's activity log"""
        activity = LeadActivity(lead_id=lead_id, **activity_data)
        return self._insert(
            "lead_activities", activity.model_dump(mode="json", exclude_none=True)
        )

    # ============================================
    # Social Post Operations
    # ============================================

    async def list_social_posts(
        self, user_id: str, platform: Optional[str] = None, status: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """List a user's social posts, newest first"""
        query = (
            self.client.table("social_posts")
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
        )
        if platform:
            query = query.eq("platform", platform)
        if status:
            query = query.eq("status", status)
        return self._rows(query, "social_posts", "list_social_posts")

    async def create_social_post(self, user_id: str, post_data: Dict[str, Any]) -> Dict[str, Any]:
        """Create a social post; engagement counters start at zero"""
        post = SocialPost(user_id=user_id, **post_data)
        return self._insert("social_posts", post.model_dump(mode="json", exclude_none=True))

    async def update_social_post(
        self, user_id: str, post_id: str, updates: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """Update a social post"""
        payload = self._serialize_payload(updates)
        query = (
            self.client.table("social_posts")
            .update(payload)
            .eq("id", post_id)
            .eq("user_id", user_id)
        )
        return self._first(query, "social_posts", "update_social_post")

    # ============================================
    # Post-Production Operations
    # ============================================

    @staticmethod
    def _attach_projects(
        rows: List[Dict[str, Any]], projects: List[Dict[str, Any]]
    ) -> List[Dict[str, Any]]:
        by_id = {project["id"]: project for project in projects}
        attached = []
        for row in rows:
            project = by_id.get(row.get("project_id"))
            if project is None:
                continue
            attached.append({**row, "project": project})
        return attached

    async def list_files(
        self, user_id: str, project_id: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """Files in the user's projects, most recent upload first"""
        projects = await self.list_owned_projects(user_id, PROJECT_SUMMARY_COLUMNS)
        project_ids = [project["id"] for project in projects]
        if project_id:
            project_ids = [pid for pid in project_ids if pid == project_id]
        if not project_ids:
            return []

        query = (
            self.client.table("file_organization")
            .select("*")
            .in_("project_id", project_ids)
            .order("upload_date", desc=True)
        )
        rows = self._rows(query, "file_organization", "list_files")
        return self._attach_projects(rows, projects)

    async def create_file(self, project_id: str, file_data: Dict[str, Any]) -> Dict[str, Any]:
        """Register a file against a project"""
        record = FileRecord(project_id=project_id, upload_date=utc_now(), **file_data)
        return self._insert(
            "file_organization", record.model_dump(mode="json", exclude_none=True)
        )

    async def list_render_tasks(
        self,
        user_id: str,
        project_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Render queue for the user's projects: highest priority, then oldest"""
        projects = await self.list_owned_projects(user_id, RENDER_PROJECT_COLUMNS)
        project_ids = [project["id"] for project in projects]
        if project_id:
            project_ids = [pid for pid in project_ids if pid == project_id]
        if not project_ids:
            return []

        query = (
            self.client.table("render_tasks")
            .select("*")
            .in_("project_id", project_ids)
            .order("priority", desc=True)
            .order("created_at")
        )
        if status:
            query = query.eq("status", status)
        rows = self._rows(query, "render_tasks", "list_render_tasks")
        return self._attach_projects(rows, projects)

    async def create_render_task(
        self, project_id: str, task_data: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Queue a render task"""
        task = RenderTask(project_id=project_id, **task_data)
        return self._insert("render_tasks", task.model_dump(mode="json", exclude_none=True))

    async def get_render_task(self, user_id: str, task_id: str) -> Optional[Dict[str, Any]]:
        """Get a render task if it belongs to one of the user's projects"""
        query = self.client.table("render_tasks").select("*").eq("id", task_id)
        task = self._first(query, "render_tasks", "get_render_task")
        if not task:
            return None
        if not await self.get_project(user_id, task["project_id"]):
            return None
        return task

    async def update_render_task(self, task_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        """Update a render task (ownership is checked by the caller)"""
        payload = self._serialize_payload(updates)
        query = self.client.table("render_tasks").update(payload).eq("id", task_id)
        return self._first(query, "render_tasks", "update_render_task") or {}

    # ============================================
    # User Profile Operations
    # ============================================

    async def get_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Get the user's profile, None when onboarding has not created one"""
        query = self.client.table("user_profiles").select("*").eq("user_id", user_id)
        return self._first(query, "user_profiles", "get_profile")

    async def upsert_profile(self, user_id: str, profile_data: Dict[str, Any]) -> Dict[str, Any]:
        """Update the user's profile, creating it on first save"""
        existing = await self.get_profile(user_id)
        if existing:
            payload = self._serialize_payload({**profile_data, "updated_at": utc_now()})
            response = (
                self.client.table("user_profiles").update(payload).eq("user_id", user_id).execute()
            )
            data = cast(List[Dict[str, Any]], response.data or [])
            return data[0] if data else {}

        profile = UserProfile(user_id=user_id, **profile_data)
        return self._insert("user_profiles", profile.model_dump(mode="json", exclude_none=True))


# Global database manager instance
db = DatabaseManager()
