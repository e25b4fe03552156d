"""
Analytics Package
=================
Pure computations over in-memory wellness series.

Modules:
  stats_toolkit    - mean, deviation, Pearson, trend, volatility, consistency
  energy_scorer    - composite 0-100 energy score with per-factor breakdown
  burnout          - burnout risk tiers and goal-adjustment directives
  pattern_analyzer - weekday, sleep, mood-task, HRV and balance patterns
"""
