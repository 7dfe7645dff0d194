"""SQLAlchemy implementation of the service request repository."""

from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.service_request import (
    ServiceRequest,
    ServiceRequestStatus,
    ServiceResponse,
)
from infrastructure.database.models import ServiceRequestModel, ServiceRequestResponseModel


class SQLAlchemyServiceRequestRepository:
    """SQLAlchemy implementation of IServiceRequestRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID, for_update: bool = False) -> ServiceRequest | None:
        """Get a request with its responses."""
        model = await self._get_model(id, for_update=for_update)
        return self._to_entity(model) if model else None

    async def get_all(
        self, status: str | None = None, skill: str | None = None
    ) -> list[ServiceRequest]:
        """Get all requests newest first, optionally filtered."""
        stmt = select(ServiceRequestModel).order_by(ServiceRequestModel.created_at.desc())

        if status:
            stmt = stmt.where(ServiceRequestModel.status == status)
        if skill:
            pattern = f"%{skill.lower()}%"
            stmt = stmt.where(
                or_(
                    func.lower(ServiceRequestModel.skill_needed).like(pattern),
                    func.lower(ServiceRequestModel.skill_offered).like(pattern),
                )
            )

        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def get_for_requester(self, user_id: UUID) -> list[ServiceRequest]:
        """Get requests created by a user, newest first."""
        stmt = (
            select(ServiceRequestModel)
            .where(ServiceRequestModel.requester_id == user_id)
            .order_by(ServiceRequestModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def get_responded_by(self, user_id: UUID) -> list[ServiceRequest]:
        """Get requests a user has responded to, newest first."""
        responded = (
            select(ServiceRequestResponseModel.request_id)
            .where(ServiceRequestResponseModel.responder_id == user_id)
            .distinct()
        )
        stmt = (
            select(ServiceRequestModel)
            .where(ServiceRequestModel.id.in_(responded))
            .order_by(ServiceRequestModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, request: ServiceRequest) -> ServiceRequest:
        """Create a new request."""
        model = self._to_model(request)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, request: ServiceRequest) -> ServiceRequest:
        """Update status, view counter and timestamps."""
        model = await self._get_model(request.id)

        if not model:
            raise ValueError(f"ServiceRequest {request.id} not found")

        model.title = request.title
        model.description = request.description
        model.status = request.status.value
        model.views = request.views
        model.updated_at = request.updated_at

        await self._session.flush()
        return self._to_entity(model)

    async def add_response(self, request_id: UUID, response: ServiceResponse) -> ServiceResponse:
        """Append a response row to a request."""
        model = await self._get_model(request_id)

        if not model:
            raise ValueError(f"ServiceRequest {request_id} not found")

        response_model = ServiceRequestResponseModel(
            id=response.id,
            request_id=request_id,
            responder_id=response.responder_id,
            message=response.message,
            created_at=response.created_at,
        )
        model.responses.append(response_model)
        await self._session.flush()
        return self._response_to_entity(response_model)

    async def _get_model(
        self, id: UUID, for_update: bool = False
    ) -> ServiceRequestModel | None:
        stmt = select(ServiceRequestModel).where(ServiceRequestModel.id == id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _response_to_entity(self, model: ServiceRequestResponseModel) -> ServiceResponse:
        return ServiceResponse(
            id=model.id,
            responder_id=model.responder_id,
            message=model.message,
            created_at=model.created_at,
        )

    def _to_entity(self, model: ServiceRequestModel) -> ServiceRequest:
        """Convert ORM model to domain entity."""
        return ServiceRequest(
            id=model.id,
            requester_id=model.requester_id,
            requester_name=model.requester_name,
            title=model.title,
            description=model.description,
            skill_needed=model.skill_needed,
            skill_offered=model.skill_offered,
            status=ServiceRequestStatus(model.status),
            responses=[self._response_to_entity(r) for r in model.responses],
            views=model.views,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: ServiceRequest) -> ServiceRequestModel:
        """Convert domain entity to ORM model (responses are added separately)."""
        return ServiceRequestModel(
            id=entity.id,
            requester_id=entity.requester_id,
            requester_name=entity.requester_name,
            title=entity.title,
            description=entity.description,
            skill_needed=entity.skill_needed,
            skill_offered=entity.skill_offered,
            status=entity.status.value,
            views=entity.views,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
            responses=[],
        )
