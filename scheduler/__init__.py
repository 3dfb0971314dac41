"""
Scheduling engine: hours resolution, booking validation, utilization and
timeline layout.
"""
