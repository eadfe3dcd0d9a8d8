"""
Studio CRM - Data Models and Schemas
"""

from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ProjectStage(str, Enum):
    """Kanban pipeline stages"""

    LEADS = "leads"
    PRE_PRODUCTION = "pre-production"
    SHOOTING = "shooting"
    POST_PRODUCTION = "post-production"
    DELIVERED = "delivered"


class ProjectType(str, Enum):
    """Kinds of shoots the studio takes on"""

    WEDDING = "Wedding"
    CORPORATE = "Corporate"
    EVENT = "Event"
    PORTRAIT = "Portrait"
    PRODUCT = "Product"
    COMMERCIAL = "Commercial"
    REAL_ESTATE = "Real Estate"
    FASHION = "Fashion"
    OTHER = "Other"


class LeadStage(str, Enum):
    """Sales pipeline stages for a lead"""

    NEW = "new"
    CONTACTED = "contacted"
    PROPOSAL_SENT = "proposal-sent"
    NEGOTIATING = "negotiating"
    BOOKED = "booked"
    LOST = "lost"


class LeadSource(str, Enum):
    """Where a lead came from"""

    INSTAGRAM = "instagram"
    GOOGLE = "google"
    REFERRAL = "referral"
    VENDOR = "vendor"
    WEBSITE = "website"
    OTHER = "other"


class ActivityType(str, Enum):
    """Lead activity log entry types"""

    EMAIL = "email"
    CALL = "call"
    PROPOSAL = "proposal"
    MEETING = "meeting"
    NOTE = "note"
    STATUS_CHANGE = "status-change"


class SocialPlatform(str, Enum):
    """Supported social networks"""

    INSTAGRAM = "instagram"
    TIKTOK = "tiktok"
    YOUTUBE = "youtube"
    LINKEDIN = "linkedin"


class PostStatus(str, Enum):
    """Social post publishing states"""

    DRAFT = "draft"
    SCHEDULED = "scheduled"
    PUBLISHED = "published"


class RenderStatus(str, Enum):
    """Render queue task states"""

    QUEUED = "queued"
    RENDERING = "rendering"
    COMPLETE = "complete"
    FAILED = "failed"


PENDING_LEAD_STAGES = (
    LeadStage.NEW,
    LeadStage.CONTACTED,
    LeadStage.PROPOSAL_SENT,
    LeadStage.NEGOTIATING,
)


class CamelModel(BaseModel):
    """Base for payloads exchanged with the front end in camelCase"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================
# Inquiry Parsing Models
# ============================================


class ParsedInquiry(CamelModel):
    """Structured data extracted from a client inquiry email"""

    client_name: str = "Unknown Client"
    project_type: ProjectType = ProjectType.OTHER
    budget: str = "Not specified"
    timeline: str = "Flexible"
    location: str = "Not specified"
    requirements: List[str] = Field(default_factory=list)
    raw_text: str = ""


class LeadScoreBreakdown(BaseModel):
    """Per-signal lead score plus the total"""

    budget: int = 0
    timeline: int = 0
    requirements: int = 0
    location: int = 0
    total: int = 0


class CaptionResult(BaseModel):
    """Generated social caption"""

    caption: str
    hashtags: List[str] = Field(default_factory=list)
    warning: Optional[str] = None


# ============================================
# Dashboard Models
# ============================================


class DashboardStats(CamelModel):
    """Headline numbers for the dashboard"""

    active_projects: int = 0
    pending_leads: int = 0
    monthly_revenue: float = 0.0
    upcoming_shoots_count: int = 0
    booked_leads: int = 0
    conversion_rate: float = 0.0
    projects_by_stage: Dict[str, int] = Field(default_factory=dict)
    generated_at: Optional[datetime] = None


# ============================================
# Table Row Models
# ============================================


class Project(BaseModel):
    """Row in `projects`"""

    id: Optional[str] = None
    user_id: str
    client_name: str
    project_type: ProjectType
    stage: ProjectStage = ProjectStage.LEADS
    deadline: datetime
    budget: float = 0
    location: str = ""
    requirements: List[str] = Field(default_factory=list)
    urgent: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Lead(BaseModel):
    """Row in `leads`"""

    id: Optional[str] = None
    user_id: str
    name: str
    email: str
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
    last_contact_date: Optional[datetime] = None
    follow_up_date: Optional[datetime] = None
    converted_to_project_id: Optional[str] = None
    lost_reason: str = ""
    notes: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LeadActivity(BaseModel):
    """Row in `lead_activities`"""

    id: Optional[str] = None
    lead_id: str
    activity_type: ActivityType
    description: str
    metadata: Dict[str, Any] = Field(default_factory=dict)
    created_by: str = ""
    created_at: Optional[datetime] = None


class SocialPost(BaseModel):
    """Row in `social_posts`"""

    id: Optional[str] = None
    user_id: str
    platform: SocialPlatform
    caption: str = ""
    hashtags: List[str] = Field(default_factory=list)
    media_urls: List[str] = Field(default_factory=list)
    scheduled_date: Optional[datetime] = None
    published_date: Optional[datetime] = None
    status: PostStatus = PostStatus.DRAFT
    project_id: Optional[str] = None
    post_type: str = "image"
    views: int = 0
    likes: int = 0
    comments: int = 0
    shares: int = 0


class FileRecord(BaseModel):
    """Row in `file_organization`"""

    id: Optional[str] = None
    project_id: str
    file_name: str
    file_type: str
    file_size: Optional[str] = None
    folder_path: str = "/"
    storage_location: str = "local"
    upload_date: Optional[datetime] = None
    shoot_date: Optional[date] = None
    camera_used: Optional[str] = None
    priority: str = "normal"
    tags: List[str] = Field(default_factory=list)
    notes: str = ""


class RenderTask(BaseModel):
    """Row in `render_tasks`"""

    id: Optional[str] = None
    project_id: str
    task_name: str
    format: str = "MP4"
    resolution: str = "1920x1080"
    codec: str = "H.264"
    estimated_size: str = ""
    estimated_time: str = ""
    status: RenderStatus = RenderStatus.QUEUED
    progress: int = Field(default=0, ge=0, le=100)
    priority: int = 5
    preset_name: Optional[str] = None
    error_message: Optional[str] = None
    completed_at: Optional[datetime] = None


class UserProfile(BaseModel):
    """Row in `user_profiles`"""

    id: Optional[str] = None
    user_id: str
    full_name: Optional[str] = None
    studio_name: Optional[str] = None
    business_type: Optional[str] = None
    phone: Optional[str] = None
    avatar_url: Optional[str] = None
    onboarding_completed: Optional[bool] = None
