"""Attendance kiosk package.

Feature modules (subjects, attendance, payroll, gate, ...) sit behind a thin
Flask controller layer; business rules live in services and repositories.
"""
