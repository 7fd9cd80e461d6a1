"""Work Hours package.

Feature modules (records, reports, users) each carry a model, a repository
protocol with a MySQL implementation, a service and a thin Flask controller.
"""
