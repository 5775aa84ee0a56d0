"""GridOps maintenance-tracking API: assets, maintenance records and checklist tasks."""
