"""
Data models for the evaluation tracker
"""
import secrets
import uuid
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# Scored criteria of the evaluation form, in form order
CRITERIA = (
    "introduction_team",
    "project_inspiration",
    "technology_architecture",
    "algorithms_code",
    "process_collaboration",
    "challenges_faced",
    "technical_learnings",
    "audibles",
    "clarity",
    "few_filler_words",
    "stage_position",
    "confident_posture",
    "professional_attire",
    "time_management",
    "energy",
    "audience_interaction",
    "project_functionality",
    "questions_answers",
)


class WireModel(BaseModel):
    """Base model: snake_case attributes, camelCase on the wire"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


class EvaluationSession(WireModel):
    """An evaluation event owned by one campus"""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    campus: str
    juries: List[str] = []     # duplicates allowed
    students: List[str] = []   # duplicates allowed


class Submission(WireModel):
    """One jury member's scored evaluation of one student"""
    session_id: str
    jury_name: str
    student_name: str
    introduction_team: float
    project_inspiration: float
    technology_architecture: float
    algorithms_code: float
    process_collaboration: float
    challenges_faced: float
    technical_learnings: float
    audibles: float
    clarity: float
    few_filler_words: float
    stage_position: float
    confident_posture: float
    professional_attire: float
    time_management: float
    energy: float
    audience_interaction: float
    project_functionality: float
    questions_answers: float
    student_comments: str = ""


class Document(BaseModel):
    """The whole persisted state: one JSON document"""
    sessions: List[EvaluationSession] = []
    submissions: List[Submission] = []

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


class CampusIdentity(BaseModel):
    """Authenticated caller; campus always equals username"""
    username: str
    campus: str


class AppConfig(BaseModel):
    """Application configuration (see config/evaltrack.yaml)"""
    campuses: List[str] = [
        "Bordeaux", "Dijon", "Fréjus", "Laval", "Lille",
        "Paris", "Rennes", "Thonon", "Toulouse",
    ]
    shared_password: str = "demo"
    data_path: str = "data/db.json"
    secret_key: Optional[str] = None   # random per process when unset
    static_dir: str = "public"
    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000

    def session_secret(self) -> str:
        return self.secret_key or secrets.token_hex(32)
