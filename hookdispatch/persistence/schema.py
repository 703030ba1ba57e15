"""Database schema definition and ORM models.

Defines the ``build_requests`` table and conversions between the ORM model
and the BuildRequest domain model.
"""

import logging

from sqlalchemy import Boolean, Column, Index, Integer, String, Text, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

from hookdispatch.domain.models import BuildCause, BuildRequest
from hookdispatch.utils.redaction import redact_credentials
from hookdispatch.utils.timestamps import format_timestamp, parse_iso_datetime

logger = logging.getLogger(__name__)

Base = declarative_base()


class BuildRequestModel(Base):
    """ORM model for build_requests table.

    One row per build or poll request handed to the database-backed queue.
    """

    __tablename__ = "build_requests"

    request_id = Column(String(64), primary_key=True, nullable=False)
    job_id = Column(String(255), nullable=False)
    request_type = Column(String(16), nullable=False)
    quiet_period_seconds = Column(Integer, nullable=False, default=0)

    # Cause
    cause_kind = Column(String(32), nullable=False)
    commit_id = Column(String(64), nullable=False)
    repository_uri = Column(Text, nullable=False)
    pusher = Column(String(255), nullable=True)
    report_status = Column(Boolean, nullable=False, default=False)

    # Stored as ISO 8601 strings
    requested_at = Column(String(50), nullable=False)

    __table_args__ = (
        Index("idx_build_requests_job", "job_id"),
        Index("idx_build_requests_commit", "commit_id"),
        Index("idx_build_requests_requested_at", "requested_at"),
    )

    def to_domain(self) -> BuildRequest:
        return BuildRequest(
            request_id=self.request_id,
            job_id=self.job_id,
            request_type=self.request_type,
            quiet_period_seconds=self.quiet_period_seconds,
            cause=BuildCause(
                kind=self.cause_kind,
                commit_id=self.commit_id,
                repository_uri=self.repository_uri,
                pusher=self.pusher,
                report_status=bool(self.report_status),
            ),
            requested_at=parse_iso_datetime(self.requested_at),
        )

    @classmethod
    def from_domain(cls, request: BuildRequest) -> "BuildRequestModel":
        """Create a row from a domain request. Credentials in the URI are not stored."""
        return cls(
            request_id=request.request_id,
            job_id=request.job_id,
            request_type=request.request_type.value,
            quiet_period_seconds=request.quiet_period_seconds,
            cause_kind=request.cause.kind,
            commit_id=request.cause.commit_id,
            repository_uri=redact_credentials(request.cause.repository_uri),
            pusher=request.cause.pusher,
            report_status=request.cause.report_status,
            requested_at=format_timestamp(request.requested_at),
        )


def create_schema(engine: Engine) -> None:
    """Create all tables and indexes if they don't exist (idempotent)."""
    logger.info("Creating database schema if not exists")

    try:
        Base.metadata.create_all(engine, checkfirst=True)
        tables = inspect(engine).get_table_names()
        logger.info(f"Database schema ready. Tables: {', '.join(tables)}")
    except Exception as e:
        logger.error(f"Failed to create database schema: {e}", exc_info=True)
        raise
