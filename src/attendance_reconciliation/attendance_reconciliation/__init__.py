"""Attendance reconciliation package.

Feature modules (schedules, attendance, requests, leave, overtime, reports)
keep the core computations pure; repositories and a thin Flask JSON layer
sit around them.
"""
