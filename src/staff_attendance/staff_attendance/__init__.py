"""Staff Attendance package.

This package is organized by feature modules (holidays, leaves, attendance,
payroll, ...) around a pure status classification engine, with a thin Flask
controller layer and service/repository layers for report generation.
"""
