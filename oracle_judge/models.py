from pydantic import BaseModel, Field
from typing import Optional, Dict, Any
from enum import Enum
import time
import uuid

class ComponentType(str, Enum):
    JUDGE_SERVICE = "JudgeService"
    ORACLE_ADAPTER = "OracleAdapter"
    SUBMISSION = "SubmissionWorkflow"

class EventType(str, Enum):
    JUDGE_REQUESTED = "Judge_Requested"
    SNAPSHOT_EMITTED = "Snapshot_Emitted"
    JUDGEMENT_COMPLETE = "Judgement_Complete"
    ORACLE_FAILURE = "Oracle_Failure"
    PREDICTION_SUBMITTED = "Prediction_Submitted"
    SUBMISSION_BLOCKED = "Submission_Blocked"
    SYSTEM_INIT = "System_Init"

class AIProvider(str, Enum):
    ANTHROPIC = "anthropic"
    GOOGLE = "google"
    OPENAI = "openai"

class LogEntry(BaseModel):
    trace_id: str
    timestamp: float = Field(default_factory=time.time)
    component: ComponentType
    event_type: EventType
    payload_hash: Optional[str] = None
    metrics: Dict[str, Any] = Field(default_factory=dict)
    message: Optional[str] = None

class JudgeRequest(BaseModel):
    prediction: str = Field(min_length=10, max_length=1000)
    provider: Optional[AIProvider] = None
    generation: int = 0  # caller's edit generation, echoed on every snapshot
    trace_id: str = Field(default_factory=lambda: str(uuid.uuid4()))

class JudgeVerdict(BaseModel):
    concreteness_score: int
    boldness_score: int
    payout_odds: float
    ai_comment: str
    is_valid: bool
    validation_message: Optional[str] = None

class CreatePredictionRequest(BaseModel):
    content: str = Field(min_length=10, max_length=1000)
    group_id: Optional[str] = None
    concreteness_score: int = Field(ge=0, le=10)
    boldness_score: int = Field(ge=0, le=10)
    ai_comment: str = Field(default="", max_length=280)
    stake_amount: Optional[float] = Field(default=None, gt=0, allow_inf_nan=False)
    trace_id: str = Field(default_factory=lambda: str(uuid.uuid4()))

class PredictionResponse(BaseModel):
    id: str
    group_id: Optional[str] = None
    content: str
    concreteness_score: int
    boldness_score: int
    payout_odds: float
    ai_comment: str
    stake_amount: float
    potential_payout: float
    status: str
    created_at: float
