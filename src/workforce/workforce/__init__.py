"""Factory workforce package.

Organized by feature modules (attendance, shifts, workers, payroll, advances)
with a thin Flask controller layer over pure calculation code and
service/repository layers.
"""
