"""Gaji Kita Selaras: HR and payroll for Indonesian small/medium businesses.

Organized by feature modules (employees, attendance, payroll, calendar, ...)
with a thin Flask controller layer over service/repository layers.
"""
