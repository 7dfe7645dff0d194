"""Service request (request board) business logic."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    ForbiddenError,
    ServiceRequestNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from domain.entities.service_request import (
    ServiceRequest,
    ServiceRequestStatus,
    ServiceResponse,
)
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class ServiceRequestService:
    """Service layer for the request board."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def list_requests(
        self,
        status: str | None = None,
        skill: str | None = None,
    ) -> list[ServiceRequest]:
        """List requests newest first.

        Args:
            status: Optional exact status filter.
            skill: Optional case-insensitive substring matched against both
                skill_needed and skill_offered.
        """
        if status is not None:
            status = self._parse_status(status).value
        skill = skill.strip() if skill else None
        async with self._uow_factory() as uow:
            return await uow.service_requests.get_all(  # type: ignore[no-any-return]
                status=status, skill=skill or None
            )

    async def create_request(
        self,
        requester_id: UUID,
        title: str | None,
        description: str | None,
        skill_needed: str | None,
        skill_offered: str | None,
    ) -> ServiceRequest:
        """Create a new open request.

        The requester's display name is copied from their user record.

        Raises:
            ValidationError: If any field is missing or blank.
            UserNotFoundError: If the requester has no user record.
        """
        fields = {
            "title": title,
            "description": description,
            "skill_needed": skill_needed,
            "skill_offered": skill_offered,
        }
        missing = [
            name for name, value in fields.items() if not isinstance(value, str) or not value.strip()
        ]
        if missing:
            raise ValidationError(
                "Please provide all required fields",
                details={"missing_fields": missing},
            )

        async with self._uow_factory() as uow:
            user = await uow.users.get(requester_id)
            if not user:
                raise UserNotFoundError(str(requester_id))

            request = ServiceRequest(
                requester_id=requester_id,
                requester_name=user.name,
                title=str(title).strip(),
                description=str(description).strip(),
                skill_needed=str(skill_needed).strip(),
                skill_offered=str(skill_offered).strip(),
            )
            created = await uow.service_requests.create(request)
            await uow.commit()
            return created  # type: ignore[no-any-return]

    async def get_request(self, request_id: UUID) -> ServiceRequest:
        """Fetch a request and count the view."""
        async with self._uow_factory() as uow:
            request = await uow.service_requests.get(request_id, for_update=True)
            if not request:
                raise ServiceRequestNotFoundError(str(request_id))

            request.record_view()
            updated = await uow.service_requests.update(request)
            await uow.commit()
            return updated  # type: ignore[no-any-return]

    async def add_response(
        self,
        request_id: UUID,
        responder_id: UUID,
        message: str | None,
    ) -> ServiceRequest:
        """Append a response to a request and return the updated request."""
        if not isinstance(message, str) or not message.strip():
            raise ValidationError("Message is required")

        async with self._uow_factory() as uow:
            request = await uow.service_requests.get(request_id, for_update=True)
            if not request:
                raise ServiceRequestNotFoundError(str(request_id))

            response = ServiceResponse(responder_id=responder_id, message=message.strip())
            await uow.service_requests.add_response(request.id, response)
            request.add_response(response)
            updated = await uow.service_requests.update(request)
            await uow.commit()

            logger.info(
                "service_request_response_added",
                request_id=str(request.id),
                responder_id=str(responder_id),
            )
            return updated  # type: ignore[no-any-return]

    async def update_status(
        self,
        request_id: UUID,
        requester_id: UUID,
        status: str,
    ) -> ServiceRequest:
        """Change a request's status. Only the request's owner may do so."""
        new_status = self._parse_status(status)

        async with self._uow_factory() as uow:
            request = await uow.service_requests.get(request_id, for_update=True)
            if not request:
                raise ServiceRequestNotFoundError(str(request_id))

            if request.requester_id != requester_id:
                raise ForbiddenError("Not authorized to update this request")

            request.change_status(new_status)
            updated = await uow.service_requests.update(request)
            await uow.commit()
            return updated  # type: ignore[no-any-return]

    @staticmethod
    def _parse_status(status: str) -> ServiceRequestStatus:
        try:
            return ServiceRequestStatus(status)
        except ValueError:
            raise ValidationError(
                "Invalid status",
                details={"status": status, "valid_statuses": [s.value for s in ServiceRequestStatus]},
            ) from None
