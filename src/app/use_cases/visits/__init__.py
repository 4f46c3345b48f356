"""Visit domain use cases"""
from .create_visit import CreateVisit
from .update_visit import UpdateVisit
from .discharge_visit import DischargeVisit
from .delete_visit import DeleteVisit
from .get_visit import GetVisit
from .list_visits import ListVisits, GetVisitSummary
from .dtos import (
    CreateVisitCommandDTO,
    UpdateVisitCommandDTO,
    DischargeVisitCommandDTO,
    VisitResponseDTO,
    ListVisitsResponseDTO,
    DeleteVisitResponseDTO,
)

__all__ = [
    "CreateVisit",
    "UpdateVisit",
    "DischargeVisit",
    "DeleteVisit",
    "GetVisit",
    "ListVisits",
    "GetVisitSummary",
    "CreateVisitCommandDTO",
    "UpdateVisitCommandDTO",
    "DischargeVisitCommandDTO",
    "VisitResponseDTO",
    "ListVisitsResponseDTO",
    "DeleteVisitResponseDTO",
]
