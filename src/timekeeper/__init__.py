"""Timekeeper package.

Attendance clock-in/out tracking and payroll derivation, organized by feature
modules (users, timelogs, payroll) with a thin Flask controller layer over
service and repository layers.
"""
