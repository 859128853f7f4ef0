"""Roam trip tracker: trip lifecycle, budget aggregation and calendar schedule engine."""
