"""Delivery report service exports."""

from .deliveries import delivery_report_to_csv, delivery_report_to_json, export_delivery_report

__all__ = ["delivery_report_to_json", "delivery_report_to_csv", "export_delivery_report"]
