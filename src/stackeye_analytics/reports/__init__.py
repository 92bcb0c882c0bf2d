"""Text reports for probe statistics and dependency trees"""

from stackeye_analytics.reports.text import render_dependency_report, render_stats_report

__all__ = ["render_dependency_report", "render_stats_report"]
