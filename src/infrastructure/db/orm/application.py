from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, Enum, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from src.domain.value_objects.application_status import ApplicationStatus
from src.domain.value_objects.application_type import ApplicationType
from src.domain.value_objects.member_roles import ClassRole, ProjectRole
from src.infrastructure.db.base import Base, enum_values


class ApplicationORM(Base):
    __tablename__ = "applications"

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    user_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    application_type: Mapped[ApplicationType] = mapped_column(
        Enum(ApplicationType, native_enum=False, values_callable=enum_values), nullable=False
    )
    status: Mapped[ApplicationStatus] = mapped_column(
        Enum(ApplicationStatus, native_enum=False, values_callable=enum_values),
        nullable=False,
        default=ApplicationStatus.PENDING,
    )
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    class_year: Mapped[str] = mapped_column(String(32), nullable=False)

    project_id: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    class_id: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    board_position: Mapped[str | None] = mapped_column(String(120), nullable=True)
    project_role: Mapped[ProjectRole | None] = mapped_column(
        Enum(ProjectRole, native_enum=False, values_callable=enum_values), nullable=True
    )
    class_role: Mapped[ClassRole | None] = mapped_column(
        Enum(ClassRole, native_enum=False, values_callable=enum_values), nullable=True
    )

    why_join: Mapped[str | None] = mapped_column(Text, nullable=True)
    why_position: Mapped[str | None] = mapped_column(Text, nullable=True)
    relevant_experience: Mapped[str | None] = mapped_column(Text, nullable=True)
    other_commitments: Mapped[str | None] = mapped_column(Text, nullable=True)
    project_detail: Mapped[str | None] = mapped_column(Text, nullable=True)
    problem_solved: Mapped[str | None] = mapped_column(Text, nullable=True)
    previous_experience: Mapped[str | None] = mapped_column(Text, nullable=True)
    resume_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    transcript_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    reviewed_by: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
