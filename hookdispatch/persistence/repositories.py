"""Data access for recorded build requests.

Repositories wrap SQLAlchemy operations and return domain models.
"""

import logging
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from hookdispatch.domain.models import BuildRequest

from .exceptions import DataIntegrityError, PersistenceError
from .schema import BuildRequestModel

logger = logging.getLogger(__name__)


class BuildRequestRepository:
    """Repository for build and poll requests."""

    def __init__(self, session: Session):
        self.session = session

    def add(self, request: BuildRequest) -> BuildRequest:
        """Insert a new request.

        Raises:
            DataIntegrityError: If the request id already exists
            PersistenceError: On other database errors
        """
        try:
            model = BuildRequestModel.from_domain(request)
            self.session.add(model)
            self.session.flush()
            return model.to_domain()
        except IntegrityError as e:
            logger.error(f"Integrity error recording request {request.request_id}: {e}")
            raise DataIntegrityError(
                f"Failed to record request due to constraint violation: {e}"
            ) from e
        except SQLAlchemyError as e:
            logger.error(f"Error recording request {request.request_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to record request: {e}") from e

    def get(self, request_id: str) -> Optional[BuildRequest]:
        """Return the request with this id, or None."""
        try:
            model = self.session.get(BuildRequestModel, request_id)
            return model.to_domain() if model else None
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving request {request_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to retrieve request: {e}") from e

    def list_for_job(self, job_id: str) -> List[BuildRequest]:
        """All requests for a job, oldest first."""
        try:
            stmt = (
                select(BuildRequestModel)
                .where(BuildRequestModel.job_id == job_id)
                .order_by(BuildRequestModel.requested_at.asc())
            )
            return [m.to_domain() for m in self.session.execute(stmt).scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Error listing requests for job {job_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to list requests: {e}") from e

    def list_recent(self, limit: int = 50) -> List[BuildRequest]:
        """Most recent requests across all jobs, newest first."""
        try:
            stmt = (
                select(BuildRequestModel)
                .order_by(BuildRequestModel.requested_at.desc())
                .limit(limit)
            )
            return [m.to_domain() for m in self.session.execute(stmt).scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Error listing recent requests: {e}", exc_info=True)
            raise PersistenceError(f"Failed to list requests: {e}") from e

    def count(self) -> int:
        """Total number of recorded requests."""
        try:
            stmt = select(func.count()).select_from(BuildRequestModel)
            return self.session.execute(stmt).scalar_one()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to count requests: {e}") from e
