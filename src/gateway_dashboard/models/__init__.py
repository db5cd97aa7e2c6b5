"""
Module: models
Description: Package initialization for Pydantic data models.

This package contains all data models used by the gateway dashboard:
- DeliveryRecord: Webhook delivery outcome pushed by the gateway
- Page settings: Fixed page sizes and the ALL sentinel
- View models: Rows, pager, detail and surface views

All models are exported here for convenient importing.
"""

from .delivery import DeliveryRecord, SENTINEL
from .page import ALL, PageSetting, capacity_for, parse_page_setting, serialize_page_setting
from .response import DeliveryDetail, DeliveryRow, PagerState, PageView

__all__ = [
    "ALL",
    "DeliveryDetail",
    "DeliveryRecord",
    "DeliveryRow",
    "PageSetting",
    "PageView",
    "PagerState",
    "SENTINEL",
    "capacity_for",
    "parse_page_setting",
    "serialize_page_setting",
]
