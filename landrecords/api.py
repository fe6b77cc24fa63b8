from dataclasses import dataclass
import logging
from typing import Any

from fastapi import APIRouter, Depends, FastAPI, Header, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session, sessionmaker

from landrecords.config import Settings, get_settings
from landrecords.database import build_session_factory
from landrecords.errors import ForbiddenError, UnauthorizedError, setup_error_handlers
from landrecords.orchestrator import UploadOrchestrator


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bulk-upload", tags=["bulk-upload"])


class ValidateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    entity_type: str = Field(..., alias="entityType", min_length=1)
    data: list[dict[str, Any]]


class CommitRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    entity_type: str = Field(..., alias="entityType", min_length=1)
    valid_data: list[dict[str, Any]] = Field(..., alias="validData")


@dataclass(frozen=True)
class Caller:
    user_id: str
    role: str


def get_orchestrator(request: Request) -> UploadOrchestrator:
    return request.app.state.orchestrator


def require_uploader(
    request: Request,
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Caller:
    """Caller identity is asserted upstream; only the role is checked here."""
    if not x_user_id:
        raise UnauthorizedError("Authentication required")
    settings: Settings = request.app.state.settings
    role = (x_user_role or "").strip().upper()
    if role not in {allowed.upper() for allowed in settings.upload_roles}:
        raise ForbiddenError("Insufficient permissions")
    return Caller(user_id=x_user_id, role=role)


def ok(message: str, data: Any) -> dict[str, Any]:
    return {"success": True, "message": message, "data": data}


@router.post("/validate", dependencies=[Depends(require_uploader)])
def validate_upload(
    body: ValidateRequest,
    orchestrator: UploadOrchestrator = Depends(get_orchestrator),
) -> dict[str, Any]:
    result = orchestrator.validate(body.entity_type, body.data)
    return ok("Validation completed", result.to_dict())


@router.post("/commit")
def commit_upload(
    body: CommitRequest,
    caller: Caller = Depends(require_uploader),
    orchestrator: UploadOrchestrator = Depends(get_orchestrator),
) -> dict[str, Any]:
    result = orchestrator.commit(body.entity_type, body.valid_data, caller.user_id)
    return ok(f"Successfully uploaded {result.successful} records, {result.failed} failed", result.to_dict())


@router.get("/template/{entity_type}", dependencies=[Depends(require_uploader)])
def get_template(
    entity_type: str,
    customer_type: str | None = Query(default=None, alias="customerType"),
    orchestrator: UploadOrchestrator = Depends(get_orchestrator),
) -> dict[str, Any]:
    template = orchestrator.template(entity_type, customer_type)
    return ok("Template generated", template.to_dict())


@router.get("/customer-types", dependencies=[Depends(require_uploader)])
def list_customer_types(orchestrator: UploadOrchestrator = Depends(get_orchestrator)) -> dict[str, Any]:
    return ok("Customer types retrieved", orchestrator.customer_types())


@router.get("/health")
def health(request: Request) -> dict[str, Any]:
    return ok("ok", {"app": request.app.state.settings.app_name})


def create_app(
    settings: Settings | None = None,
    session_factory: sessionmaker[Session] | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    session_factory = session_factory or build_session_factory(settings.database_url)

    app = FastAPI(title=settings.app_name, description="Bulk import of customers, properties and property tax.")
    app.state.settings = settings
    app.state.orchestrator = UploadOrchestrator.from_settings(settings, session_factory)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    setup_error_handlers(app)
    app.include_router(router, prefix=settings.api_prefix)
    logger.info("api configured", extra={"api_prefix": settings.api_prefix})
    return app
