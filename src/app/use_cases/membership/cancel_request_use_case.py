"""
Cancel Request Use Case

Lets a user withdraw their own pending request.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import RequestStatus

from .dtos import StatusResponse


class CancelRequestUseCase:
    """
    Business Rules:
    - Only the requester can cancel (FORBIDDEN)
    - Only pending requests can be cancelled (REQUEST_ALREADY_PROCESSED)
    - The request row is deleted
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, request_id: UUID) -> Result[StatusResponse]:
        async with self.uow:
            request = await self.uow.member_requests.get_by_id(request_id)
            if request is None:
                return Return.err(Error("REQUEST_NOT_FOUND", "Request not found"))

            if request.user_id != user_id:
                return Return.err(
                    Error("FORBIDDEN", "You can only cancel your own requests")
                )

            if request.status != RequestStatus.pending:
                return Return.err(
                    Error(
                        "REQUEST_ALREADY_PROCESSED",
                        f"Request has already been {request.status.value}",
                    )
                )

            await self.uow.member_requests.delete(request)
            await self.uow.commit()
            return Return.ok(StatusResponse(status="cancelled"))
