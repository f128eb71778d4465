"""Checks shared by income, expense and payment services."""

from decimal import Decimal
from typing import Optional

from apps.projects.models import Project
from .exceptions import InvalidProjectReferenceError, InvalidAmountError


def validate_amount(amount) -> None:
    if amount is None or Decimal(str(amount)) <= 0:
        raise InvalidAmountError()


def validate_project_reference(project_id: Optional[int]) -> None:
    """A null reference is valid; a non-null one must point at a project."""
    if project_id is None:
        return
    if not Project.objects.filter(id=project_id).exists():
        raise InvalidProjectReferenceError(f"Project {project_id} not found.")
