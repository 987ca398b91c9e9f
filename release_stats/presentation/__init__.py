"""
Presentation Module

JSON/CSV rendering of organization summaries and the FastAPI application
that serves them.
"""

from .serializers import csv_header, csv_value, summaries_payload, to_csv, to_json

__all__ = ["csv_header", "csv_value", "summaries_payload", "to_csv", "to_json"]
