"""
Services package: account/session handling and reports.
"""

from eventdesk.services.account_service import AccountStore
from eventdesk.services.report_service import ReportService

__all__ = ["AccountStore", "ReportService"]
