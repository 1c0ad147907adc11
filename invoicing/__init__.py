"""Invoice lifecycle and task/charge reconciliation engine."""
