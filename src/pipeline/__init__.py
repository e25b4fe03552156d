"""
Pipeline Package
================
Presentation side of the insight pipeline.

Modules:
  insight_templates - payload -> title, summary and recommendations; goal sentences
"""
