"""Domain layer for cuentatrack application.

Services are imported from their modules directly; the data-access layer
imports ``cuentatrack.domain.entities`` and must not pull the services in.
"""
