"""
Studio CRM - Studio Management API
FastAPI Application
"""

import json
import logging
import re
import sys
import time
from contextlib import asynccontextmanager
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from postgrest.exceptions import APIError
from pydantic import Field, ValidationInfo, field_validator
from starlette.exceptions import HTTPException as StarletteHTTPException

from config.settings import settings
from models.schemas import (
    ActivityType,
    CamelModel,
    LeadSource,
    LeadStage,
    PostStatus,
    ProjectStage,
    ProjectType,
    RenderStatus,
    SocialPlatform,
)
from studio_agents import configure_runtime, generate_caption, parse_email, score_parsed_inquiry
from tools.auth import SessionUser, get_current_user
from tools.dashboard import compute_dashboard_stats
from tools.database import db, utc_now
from tools.parser import calculate_lead_score, generate_brief, parse_inquiry

API_VERSION = "1.0.0"

# ============================================
# JSON Logging
# ============================================


class JsonFormatter(logging.Formatter):
    """One JSON object per log line, with request fields when present"""

    REQUEST_FIELDS = ("endpoint", "method", "status", "latency_ms")

    def format(self, record):
        log_obj = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in self.REQUEST_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_obj[name] = value
        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_obj)


def configure_logging() -> None:
    root = logging.getLogger()
    if any(isinstance(h.formatter, JsonFormatter) for h in root.handlers):
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)
    root.setLevel(settings.app_log_level.upper())


logger = logging.getLogger("studio_api")

# ============================================
# Pydantic Models for API
# ============================================


class CreateRequest(CamelModel):
    """Create body where an explicit null falls back to the column default"""

    @field_validator("*", mode="before")
    @classmethod
    def _null_to_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None and info.field_name:
            field = cls.model_fields[info.field_name]
            if not field.is_required():
                return field.get_default(call_default_factory=True)
        return value


class CreateProjectRequest(CreateRequest):
    """Request to create a project"""

    client_name: str = Field(min_length=1)
    project_type: ProjectType
    deadline: datetime
    stage: ProjectStage = ProjectStage.LEADS
    budget: float = 0
    location: str = ""
    requirements: List[str] = Field(default_factory=list)
    urgent: bool = False


class UpdateProjectRequest(CamelModel):
    """Request to update a project"""

    client_name: Optional[str] = None
    project_type: Optional[ProjectType] = None
    stage: Optional[ProjectStage] = None
    deadline: Optional[datetime] = None
    budget: Optional[float] = None
    location: Optional[str] = None
    requirements: Optional[List[str]] = None
    urgent: Optional[bool] = None


class CreateLeadRequest(CreateRequest):
    """Request to create a lead"""

    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    phone: str = ""
    project_type: str = ""
    budget: str = ""
    timeline: str = ""
    source: LeadSource = LeadSource.WEBSITE
    stage: LeadStage = LeadStage.NEW
    score: int = 0
    budget_score: int = 0
    timeline_score: int = 0
    engagement_score: int = 0
    location: str = ""
    requirements: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    referred_by: str = ""
    notes: str = ""


class UpdateLeadRequest(CamelModel):
    """Request to update a lead"""

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    project_type: Optional[str] = None
    budget: Optional[str] = None
    timeline: Optional[str] = None
    source: Optional[LeadSource] = None
    stage: Optional[LeadStage] = None
    score: Optional[int] = None
    location: Optional[str] = None
    requirements: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    notes: Optional[str] = None
    follow_up_date: Optional[datetime] = None
    lost_reason: Optional[str] = None


class CreateLeadActivityRequest(CreateRequest):
    """Request to log a lead activity"""

    activity_type: ActivityType
    description: str
    metadata: Dict[str, Any] = Field(default_factory=dict)


class ConvertLeadRequest(CamelModel):
    """Request to turn a lead into a booked project"""

    deadline: datetime
    project_type: Optional[ProjectType] = None
    budget: Optional[float] = None
    urgent: bool = False


class CreateSocialPostRequest(CreateRequest):
    """Request to create a social post"""

    platform: SocialPlatform
    caption: str = ""
    hashtags: List[str] = Field(default_factory=list)
    media_urls: List[str] = Field(default_factory=list)
    scheduled_date: Optional[datetime] = None
    status: PostStatus = PostStatus.DRAFT
    project_id: Optional[str] = None
    post_type: str = "image"


class UpdateSocialPostRequest(CamelModel):
    """Request to update a social post"""

    caption: Optional[str] = None
    hashtags: Optional[List[str]] = None
    media_urls: Optional[List[str]] = None
    scheduled_date: Optional[datetime] = None
    published_date: Optional[datetime] = None
    status: Optional[PostStatus] = None
    post_type: Optional[str] = None
    views: Optional[int] = Field(default=None, ge=0)
    likes: Optional[int] = Field(default=None, ge=0)
    comments: Optional[int] = Field(default=None, ge=0)
    shares: Optional[int] = Field(default=None, ge=0)


class CreateFileRequest(CreateRequest):
    """Request to register a file in a project's folder structure"""

    project_id: str
    file_name: str
    file_type: str
    file_size: Optional[str] = None
    folder_path: str = "/"
    storage_location: str = "local"
    shoot_date: Optional[date] = None
    camera_used: Optional[str] = None
    priority: str = "normal"
    tags: List[str] = Field(default_factory=list)
    notes: str = ""


class CreateRenderTaskRequest(CreateRequest):
    """Request to queue a render task"""

    project_id: str
    task_name: str
    format: str = "MP4"
    resolution: str = "1920x1080"
    codec: str = "H.264"
    estimated_size: str = ""
    estimated_time: str = ""
    priority: int = 5
    preset_name: Optional[str] = None


class UpdateRenderTaskRequest(CamelModel):
    """Request to report render progress"""

    status: Optional[RenderStatus] = None
    progress: Optional[int] = Field(default=None, ge=0, le=100)
    priority: Optional[int] = None
    error_message: Optional[str] = None


class UpdateProfileRequest(CamelModel):
    """Request to save the user's profile"""

    full_name: Optional[str] = None
    studio_name: Optional[str] = None
    business_type: Optional[str] = None
    phone: Optional[str] = None
    avatar_url: Optional[str] = None
    onboarding_completed: Optional[bool] = None


class ParseEmailRequest(CamelModel):
    """Request to parse an inquiry email"""

    email_text: Optional[str] = None


class GenerateCaptionRequest(CamelModel):
    """Request to generate a social caption"""

    platform: Optional[str] = None
    project_type: Optional[str] = None
    tone: Optional[str] = None
    keywords: Optional[List[str]] = None


class ScoreLeadRequest(CamelModel):
    """Request to score already-parsed inquiry data"""

    parsed_data: Dict[str, Any]


# ============================================
# FastAPI Application
# ============================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    configure_logging()
    configure_runtime()
    logger.info(
        "Studio CRM API starting (environment=%s, ai_configured=%s)",
        settings.app_env,
        settings.openai.is_configured,
    )
    yield
    logger.info("Studio CRM API shutting down")


app = FastAPI(
    title="Studio CRM API",
    description="""
    Studio management backend for photography and videography businesses.

    * **Projects**: kanban pipeline from lead to delivery
    * **Leads**: intake, scoring, activity log, conversion to projects
    * **Post-production**: render queue and file organization
    * **Marketing**: social post scheduling and AI captions
    * **Inbox**: inquiry email parsing and lead scoring
    """,
    version=API_VERSION,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.is_development else settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log one line per request with latency"""
    started = time.perf_counter()
    response = await call_next(request)
    logger.info(
        "%s %s",
        request.method,
        request.url.path,
        extra={
            "endpoint": request.url.path,
            "method": request.method,
            "status": response.status_code,
            "latency_ms": round((time.perf_counter() - started) * 1000, 2),
        },
    )
    return response


# ============================================
# Error Handlers
# ============================================


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


# Absent fields, and empty strings in required text fields
MISSING_ERROR_TYPES = {"missing", "string_too_short"}


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    missing = [
        str(err["loc"][-1])
        for err in errors
        if err.get("type") in MISSING_ERROR_TYPES and len(err.get("loc", ())) > 1
    ]
    if missing and len(missing) == len(errors):
        return JSONResponse(
            status_code=400,
            content={"error": f"Missing required fields: {', '.join(missing)}"},
        )
    details = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())[1:]),
            "message": err.get("msg", ""),
        }
        for err in errors
    ]
    return JSONResponse(
        status_code=400, content={"error": "Invalid request body", "details": details}
    )


@app.exception_handler(APIError)
async def database_exception_handler(request: Request, exc: APIError):
    logger.error("Database error on %s: %s", request.url.path, exc.message)
    return JSONResponse(status_code=500, content={"error": exc.message or "Database error"})


# ============================================
# Health Check
# ============================================


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "version": API_VERSION,
        "environment": settings.app_env,
        "ai_configured": settings.openai.is_configured,
    }


# ============================================
# Project Endpoints
# ============================================


@app.get("/api/projects")
async def list_projects(
    stage: Optional[ProjectStage] = None,
    limit: Optional[int] = Query(default=None, ge=1),
    offset: Optional[int] = Query(default=None, ge=0),
    user: SessionUser = Depends(get_current_user),
):
    """List the user's projects, optionally filtered by stage and paginated"""
    projects = await db.list_projects(
        user.id, stage.value if stage else None, limit=limit, offset=offset
    )
    return {"data": projects}


@app.post("/api/projects", status_code=201)
async def create_project(
    request: CreateProjectRequest, user: SessionUser = Depends(get_current_user)
):
    """Create a project"""
    project = await db.create_project(user.id, request.model_dump())
    if not project:
        raise HTTPException(status_code=500, detail="Failed to create project")
    return {"data": project}


@app.get("/api/projects/{project_id}")
async def get_project(project_id: str, user: SessionUser = Depends(get_current_user)):
    """Get project by ID"""
    project = await db.get_project(user.id, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return {"data": project}


@app.put("/api/projects/{project_id}")
async def update_project(
    project_id: str,
    request: UpdateProjectRequest,
    user: SessionUser = Depends(get_current_user),
):
    """Update the fields present in the request"""
    updates = request.model_dump(mode="json", exclude_unset=True)
    project = await db.update_project(user.id, project_id, updates)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return {"data": project}


@app.delete("/api/projects/{project_id}")
async def delete_project(project_id: str, user: SessionUser = Depends(get_current_user)):
    """Delete a project"""
    await db.delete_project(user.id, project_id)
    return {"message": "Project deleted successfully"}


# ============================================
# Lead Endpoints
# ============================================

CONTACT_ACTIVITIES = {ActivityType.EMAIL, ActivityType.CALL, ActivityType.MEETING}


@app.get("/api/leads")
async def list_leads(
    stage: Optional[LeadStage] = None,
    source: Optional[LeadSource] = None,
    min_score: Optional[int] = Query(default=None, alias="minScore"),
    user: SessionUser = Depends(get_current_user),
):
    """List the user's leads"""
    leads = await db.list_leads(
        user.id,
        stage=stage.value if stage else None,
        source=source.value if source else None,
        min_score=min_score,
    )
    return {"data": leads}


@app.post("/api/leads", status_code=201)
async def create_lead(request: CreateLeadRequest, user: SessionUser = Depends(get_current_user)):
    """Create a lead"""
    lead = await db.create_lead(user.id, request.model_dump())
    if not lead:
        raise HTTPException(status_code=500, detail="Failed to create lead")
    return {"data": lead}


@app.get("/api/leads/{lead_id}")
async def get_lead(lead_id: str, user: SessionUser = Depends(get_current_user)):
    """Get a lead with its activity log"""
    lead = await db.get_lead(user.id, lead_id)
    if not lead:
        raise HTTPException(status_code=404, detail="Lead not found")
    return {"data": lead}


@app.put("/api/leads/{lead_id}")
async def update_lead(
    lead_id: str,
    request: UpdateLeadRequest,
    user: SessionUser = Depends(get_current_user),
):
    """Update a lead; stage changes are recorded in the activity log"""
    updates = request.model_dump(mode="json", exclude_unset=True)

    previous_stage = None
    if "stage" in updates:
        existing = await db.get_lead(user.id, lead_id, include_activities=False)
        if not existing:
            raise HTTPException(status_code=404, detail="Lead not found")
        previous_stage = existing.get("stage")

    lead = await db.update_lead(user.id, lead_id, updates)
    if not lead:
        raise HTTPException(status_code=404, detail="Lead not found")

    if "stage" in updates and updates["stage"] != previous_stage:
        await db.create_lead_activity(
            lead_id,
            {
                "activity_type": ActivityType.STATUS_CHANGE,
                "description": f"Stage changed from {previous_stage} to {updates['stage']}",
                "metadata": {"from": previous_stage, "to": updates["stage"]},
                "created_by": user.email or user.id,
            },
        )
    return {"data": lead}


@app.delete("/api/leads/{lead_id}")
async def delete_lead(lead_id: str, user: SessionUser = Depends(get_current_user)):
    """Delete a lead"""
    await db.delete_lead(user.id, lead_id)
    return {"message": "Lead deleted successfully"}


@app.post("/api/leads/{lead_id}/activities", status_code=201)
async def create_lead_activity(
    lead_id: str,
    request: CreateLeadActivityRequest,
    user: SessionUser = Depends(get_current_user),
):
    """Log an interaction with a lead"""
    lead = await db.get_lead(user.id, lead_id, include_activities=False)
    if not lead:
        raise HTTPException(status_code=404, detail="Lead not found")

    activity = await db.create_lead_activity(
        lead_id, {**request.model_dump(), "created_by": user.email or user.id}
    )
    if request.activity_type in CONTACT_ACTIVITIES:
        await db.update_lead(user.id, lead_id, {"last_contact_date": utc_now()})
    return {"data": activity}


def _budget_amount(budget_text: str) -> float:
    match = re.search(r"\d[\d,]*(?:\.\d+)?", budget_text or "")
    return float(match.group(0).replace(",", "")) if match else 0.0


def _project_type_for(lead_project_type: str) -> ProjectType:
    for project_type in ProjectType:
        if project_type.value.lower() == (lead_project_type or "").strip().lower():
            return project_type
    return ProjectType.OTHER


@app.post("/api/leads/{lead_id}/convert", status_code=201)
async def convert_lead(
    lead_id: str,
    request: ConvertLeadRequest,
    user: SessionUser = Depends(get_current_user),
):
    """Book a lead: create its project and mark the lead as booked"""
    lead = await db.get_lead(user.id, lead_id, include_activities=False)
    if not lead:
        raise HTTPException(status_code=404, detail="Lead not found")
    if lead.get("converted_to_project_id"):
        raise HTTPException(status_code=409, detail="Lead already converted")

    project = await db.create_project(
        user.id,
        {
            "client_name": lead["name"],
            "project_type": request.project_type or _project_type_for(lead.get("project_type", "")),
            "stage": ProjectStage.PRE_PRODUCTION,
            "deadline": request.deadline,
            "budget": (
                request.budget
                if request.budget is not None
                else _budget_amount(lead.get("budget", ""))
            ),
            "location": lead.get("location") or "",
            "requirements": lead.get("requirements") or [],
            "urgent": request.urgent,
        },
    )
    if not project:
        raise HTTPException(status_code=500, detail="Failed to create project")

    updated = await db.update_lead(
        user.id,
        lead_id,
        {"stage": LeadStage.BOOKED.value, "converted_to_project_id": project["id"]},
    )
    if not updated:
        await db.delete_project(user.id, project["id"])
        raise HTTPException(status_code=500, detail="Failed to convert lead")
    await db.create_lead_activity(
        lead_id,
        {
            "activity_type": ActivityType.STATUS_CHANGE,
            "description": f"Lead booked as project {project['id']}",
            "metadata": {"from": lead.get("stage"), "to": LeadStage.BOOKED.value},
            "created_by": user.email or user.id,
        },
    )
    return {"data": {"lead": updated, "project": project}}


# ============================================
# Marketing Endpoints
# ============================================


@app.get("/api/marketing/social-posts")
async def list_social_posts(
    platform: Optional[SocialPlatform] = None,
    status: Optional[PostStatus] = None,
    user: SessionUser = Depends(get_current_user),
):
    """List the user's social posts"""
    posts = await db.list_social_posts(
        user.id,
        platform=platform.value if platform else None,
        status=status.value if status else None,
    )
    return {"data": posts}


@app.post("/api/marketing/social-posts", status_code=201)
async def create_social_post(
    request: CreateSocialPostRequest, user: SessionUser = Depends(get_current_user)
):
    """Create a draft or scheduled social post"""
    post = await db.create_social_post(user.id, request.model_dump())
    if not post:
        raise HTTPException(status_code=500, detail="Failed to create social post")
    return {"data": post}


@app.patch("/api/marketing/social-posts/{post_id}")
async def update_social_post(
    post_id: str,
    request: UpdateSocialPostRequest,
    user: SessionUser = Depends(get_current_user),
):
    """Update a social post; publishing stamps the publish date"""
    updates = request.model_dump(mode="json", exclude_unset=True)
    if updates.get("status") == PostStatus.PUBLISHED.value and not updates.get("published_date"):
        updates["published_date"] = utc_now()

    post = await db.update_social_post(user.id, post_id, updates)
    if not post:
        raise HTTPException(status_code=404, detail="Social post not found")
    return {"data": post}


# ============================================
# Post-Production Endpoints
# ============================================


async def _require_project(user: SessionUser, project_id: str) -> Dict[str, Any]:
    project = await db.get_project(user.id, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


@app.get("/api/post-production/file-organization")
async def list_files(
    project_id: Optional[str] = Query(default=None, alias="projectId"),
    user: SessionUser = Depends(get_current_user),
):
    """List files across the user's projects"""
    files = await db.list_files(user.id, project_id)
    return {"data": files}


@app.post("/api/post-production/file-organization", status_code=201)
async def create_file(request: CreateFileRequest, user: SessionUser = Depends(get_current_user)):
    """Register a file against one of the user's projects"""
    await _require_project(user, request.project_id)
    record = await db.create_file(request.project_id, request.model_dump(exclude={"project_id"}))
    if not record:
        raise HTTPException(status_code=500, detail="Failed to register file")
    return {"data": record}


@app.get("/api/post-production/render-tasks")
async def list_render_tasks(
    project_id: Optional[str] = Query(default=None, alias="projectId"),
    status: Optional[RenderStatus] = None,
    user: SessionUser = Depends(get_current_user),
):
    """Render queue across the user's projects"""
    tasks = await db.list_render_tasks(user.id, project_id, status.value if status else None)
    return {"data": tasks}


@app.post("/api/post-production/render-tasks", status_code=201)
async def create_render_task(
    request: CreateRenderTaskRequest, user: SessionUser = Depends(get_current_user)
):
    """Queue a render task for one of the user's projects"""
    await _require_project(user, request.project_id)
    task = await db.create_render_task(
        request.project_id, request.model_dump(exclude={"project_id"})
    )
    if not task:
        raise HTTPException(status_code=500, detail="Failed to queue render task")
    return {"data": task}


@app.patch("/api/post-production/render-tasks/{task_id}")
async def update_render_task(
    task_id: str,
    request: UpdateRenderTaskRequest,
    user: SessionUser = Depends(get_current_user),
):
    """Report render progress; completion pins progress to 100"""
    task = await db.get_render_task(user.id, task_id)
    if not task:
        raise HTTPException(status_code=404, detail="Render task not found")

    updates = request.model_dump(mode="json", exclude_unset=True)
    status = updates.get("status")
    if status == RenderStatus.COMPLETE.value:
        updates["progress"] = 100
        updates["completed_at"] = utc_now()
    elif status == RenderStatus.QUEUED.value:
        updates.setdefault("progress", 0)
    elif status == RenderStatus.FAILED.value and not updates.get("error_message"):
        updates["error_message"] = task.get("error_message") or "Render failed"

    updated = await db.update_render_task(task_id, updates)
    return {"data": updated}


# ============================================
# User Profile Endpoints
# ============================================


@app.get("/api/user/profile")
async def get_profile(user: SessionUser = Depends(get_current_user)):
    """Get the user's profile (null before onboarding)"""
    profile = await db.get_profile(user.id)
    return {"data": profile}


@app.put("/api/user/profile")
async def update_profile(
    request: UpdateProfileRequest, user: SessionUser = Depends(get_current_user)
):
    """Create or update the user's profile"""
    try:
        profile = await db.upsert_profile(user.id, request.model_dump(exclude_unset=True))
    except APIError as exc:
        logger.error("Profile update error: %s", exc.message)
        raise HTTPException(status_code=500, detail="Failed to update profile") from exc
    return {"data": profile}


# ============================================
# AI Endpoints
# ============================================


@app.post("/api/ai/parse-email")
async def ai_parse_email(request: ParseEmailRequest, user: SessionUser = Depends(get_current_user)):
    """Parse an inquiry email with the model and score the lead (0-100)"""
    if not request.email_text:
        raise HTTPException(status_code=400, detail="Email text is required")
    try:
        return await parse_email(request.email_text)
    except Exception as e:
        logger.exception("AI parse error")
        raise HTTPException(status_code=500, detail="Failed to parse email") from e


@app.post("/api/ai/generate-caption")
async def ai_generate_caption(
    request: GenerateCaptionRequest, user: SessionUser = Depends(get_current_user)
):
    """Generate a social caption and hashtags"""
    if not request.platform or not request.project_type:
        raise HTTPException(status_code=400, detail="Platform and project type are required")
    try:
        result = await generate_caption(
            request.platform, request.project_type, request.tone, request.keywords
        )
    except Exception as e:
        logger.exception("AI caption error")
        raise HTTPException(status_code=500, detail="Failed to generate caption") from e
    return result.model_dump(exclude_none=True)


@app.post("/api/ai/score-lead")
async def ai_score_lead(request: ScoreLeadRequest, user: SessionUser = Depends(get_current_user)):
    """Score already-parsed inquiry fields (0-100)"""
    return {"score": score_parsed_inquiry(request.parsed_data)}


# ============================================
# Inbox Endpoints
# ============================================


@app.post("/api/inbox/parse")
async def inbox_parse(request: ParseEmailRequest, user: SessionUser = Depends(get_current_user)):
    """Rule-based parse of an inquiry with a 0-10 lead score and a client brief"""
    if not request.email_text:
        raise HTTPException(status_code=400, detail="Email text is required")
    parsed = parse_inquiry(request.email_text)
    score = calculate_lead_score(parsed)
    return {
        "parsed": parsed.model_dump(mode="json", by_alias=True),
        "score": score.model_dump(),
        "brief": generate_brief(parsed),
    }


# ============================================
# Dashboard Endpoints
# ============================================


@app.get("/api/dashboard/stats")
async def dashboard_stats(user: SessionUser = Depends(get_current_user)):
    """Headline pipeline numbers for the dashboard"""
    projects = await db.list_projects(user.id)
    leads = await db.list_leads(user.id)
    stats = compute_dashboard_stats(
        projects, leads, upcoming_days=settings.studio.upcoming_shoot_days
    )
    return {"data": stats.model_dump(mode="json", by_alias=True)}


# ============================================
# Main Entry Point
# ============================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
        log_level=settings.app_log_level.lower(),
    )
