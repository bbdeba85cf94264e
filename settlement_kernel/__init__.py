"""
Settlement Kernel

Domain values, typed exceptions, structured logging, the injectable clock,
and the persistence layer (ORM models, selectors, settings service) for the
payroll settlement engine:
- Settlement periods derived from a closing-day / pay-day convention
- Per-worker, per-project wage aggregation over work sessions
- Explicit data-quality warnings at the ingestion boundary
"""

__version__ = "0.1.0"
