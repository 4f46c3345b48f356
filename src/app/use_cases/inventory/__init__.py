"""Inventory domain use cases"""
from .add_medicine import AddMedicine
from .update_medicine import UpdateMedicine
from .delete_medicine import DeleteMedicine
from .get_medicine import GetMedicine, ListStockMovements
from .list_medicines import ListMedicines, GetInventorySummary
from .restock_medicine import RestockMedicine
from .dispense_medicine import DispenseMedicine
from .scan_stock_alerts import ScanStockAlerts
from .dtos import (
    AddMedicineCommandDTO,
    UpdateMedicineCommandDTO,
    RestockCommandDTO,
    DispenseCommandDTO,
    MedicineResponseDTO,
    ListMedicinesResponseDTO,
    DispenseResponseDTO,
    RestockResponseDTO,
    DispenseMedicineResponseDTO,
    RestockMedicineResponseDTO,
    StockMovementsResponseDTO,
    DeleteMedicineResponseDTO,
    StockAlertScanResultDTO,
)

__all__ = [
    "AddMedicine",
    "UpdateMedicine",
    "DeleteMedicine",
    "GetMedicine",
    "ListStockMovements",
    "ListMedicines",
    "GetInventorySummary",
    "RestockMedicine",
    "DispenseMedicine",
    "ScanStockAlerts",
    "AddMedicineCommandDTO",
    "UpdateMedicineCommandDTO",
    "RestockCommandDTO",
    "DispenseCommandDTO",
    "MedicineResponseDTO",
    "ListMedicinesResponseDTO",
    "DispenseResponseDTO",
    "RestockResponseDTO",
    "DispenseMedicineResponseDTO",
    "RestockMedicineResponseDTO",
    "StockMovementsResponseDTO",
    "DeleteMedicineResponseDTO",
    "StockAlertScanResultDTO",
]
