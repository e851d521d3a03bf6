from __future__ import annotations

from enum import Enum


class ProjectRole(str, Enum):
    LEAD = "lead"
    MEMBER = "member"


class ClassRole(str, Enum):
    TEACHER = "teacher"
    STUDENT = "student"
