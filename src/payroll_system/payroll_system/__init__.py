"""Payroll System package.

Feature modules (employees, attendance, deductions, payroll) each expose a
domain model, a repository protocol and a MySQL adapter. The payslip
generator lives in ``payroll.service`` and only talks to the protocols.
"""
