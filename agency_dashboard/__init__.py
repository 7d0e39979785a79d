"""
Agency Analytics Dashboard

Per-shop revenue, order, profit and ROI metrics with agency profit-share
reporting.
"""

__version__ = "1.0.0"
