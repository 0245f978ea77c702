"""
Financial Analysis Package

Dashboard metrics and reports derived from the transaction log.

Key Components:
- dashboard: balances, monthly and weekly totals, most active wallet and
  category, month-over-month comparison, bill windows, goal progress, alerts
- reports: filtered totals, category distribution, monthly trend, CSV export
"""

from .dashboard import (
    Alert,
    BillStatusInfo,
    DashboardSummary,
    GoalProgress,
    achieved_goals,
    bill_status,
    build_alerts,
    build_dashboard,
    category_spending,
    goal_progress,
    goal_spent,
    monthly_expenses,
    monthly_income,
    most_active_wallet,
    most_used_category,
    overdue_bills,
    previous_month_comparison,
    total_balance,
    upcoming_bills,
    weekly_expenses,
)
from .reports import (
    CategoryShare,
    MonthTrend,
    Report,
    ReportFilter,
    ReportTotals,
    build_report,
    category_distribution,
    export_csv,
    filter_transactions,
    monthly_trend,
    report_totals,
)

__all__ = [
    "Alert",
    "BillStatusInfo",
    "CategoryShare",
    "DashboardSummary",
    "GoalProgress",
    "MonthTrend",
    "Report",
    "ReportFilter",
    "ReportTotals",
    "achieved_goals",
    "bill_status",
    "build_alerts",
    "build_dashboard",
    "build_report",
    "category_distribution",
    "category_spending",
    "export_csv",
    "filter_transactions",
    "goal_progress",
    "goal_spent",
    "monthly_expenses",
    "monthly_income",
    "monthly_trend",
    "most_active_wallet",
    "most_used_category",
    "overdue_bills",
    "previous_month_comparison",
    "report_totals",
    "total_balance",
    "upcoming_bills",
    "weekly_expenses",
]
