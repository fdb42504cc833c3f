"""Field Attendance package.

Organized by feature modules (attendance, assignments, reports, ...) with a
thin Flask controller layer over service/repository layers.
"""
