"""Territory — proportional territory layouts for weighted participants.

Packages:

  engine  — turns weighted participants into non-overlapping tiles
  web     — HTTP API around the engine
"""
