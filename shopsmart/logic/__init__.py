"""Core business logic layer.

Subpackages:
- shopping: plan aggregation, reconciliation against the stored list, recompute service, list view
- pricing: store selection and cost estimation

Everything here is pure except shopping.service, which talks to the repositories.
"""
__all__ = ["shopping", "pricing"]
