# =========================================================
# REPORTS ROUTER
#
# Dashboard figures and alert lists. Thresholds default to
# the configured values and can be overridden per request.
# =========================================================

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from stockroom.database import get_db
from stockroom.schemas.report import (
    AlertItem,
    DashboardSummary,
    ExpiringItem,
    InventoryStats,
    LowStockItem,
    PerishableProduct,
    RecentlyUpdatedItem,
)
from stockroom.services import reports as report_service

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/dashboard", response_model=DashboardSummary)
def dashboard(db: Session = Depends(get_db)):
    return report_service.get_dashboard_summary(db)


@router.get("/stats", response_model=InventoryStats)
def inventory_stats(db: Session = Depends(get_db)):
    return report_service.get_inventory_stats(db)


@router.get("/low-stock", response_model=list[LowStockItem])
def low_stock(
    db: Session = Depends(get_db),
    threshold: int | None = Query(None, ge=0),
):
    return report_service.get_low_stock_products(db, threshold)


@router.get("/expiring", response_model=list[ExpiringItem])
def expiring(
    db: Session = Depends(get_db),
    days: int | None = Query(None, ge=0),
):
    return report_service.get_expiring_products(db, days)


@router.get("/perishable", response_model=list[PerishableProduct])
def perishable(db: Session = Depends(get_db)):
    return report_service.get_perishable_products(db)


@router.get("/recently-updated", response_model=list[RecentlyUpdatedItem])
def recently_updated(
    db: Session = Depends(get_db),
    hours: int | None = Query(None, ge=1),
):
    return report_service.get_recently_updated_products(db, hours)


@router.get("/alerts", response_model=list[AlertItem])
def alerts(
    db: Session = Depends(get_db),
    low_stock_threshold: int | None = Query(None, ge=0),
    expiry_days: int | None = Query(None, ge=0),
    include_low_stock: bool | None = Query(None),
    include_expiring: bool | None = Query(None),
):
    return report_service.get_alerts(
        db,
        low_stock_threshold=low_stock_threshold,
        expiry_days=expiry_days,
        include_low_stock=include_low_stock,
        include_expiring=include_expiring,
    )
