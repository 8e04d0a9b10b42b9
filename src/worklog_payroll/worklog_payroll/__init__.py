"""Work-log & payroll service.

Feature modules (users, auth, worklogs, payroll) each carry their own model,
repository protocol, MySQL repository, service and a thin Flask JSON
controller. ``main.create_app`` wires them through ``container``.
"""
