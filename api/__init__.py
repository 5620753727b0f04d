"""
CertTrack API Routes Package
Auth, companies, certificates, employees, roles, analytics
"""

from . import health, auth, company, certificates, employees, roles, analytics

__all__ = ["health", "auth", "company", "certificates", "employees", "roles", "analytics"]
