"""
Scheduling Services Module

This module provides the availability & scheduling engine:
- Value types and boundary parsing (entities.py)
- Holiday calendar (holidays.py)
- Business hours policy (business_hours.py)
- Open intervals per day (availability.py)
- Slot generation (slots.py)
- Conflict detection (conflicts.py)
- Alternative slot suggestions (alternatives.py)
- Add-on duration adjustment (durations.py)
- Snapshot of stored documents for the engine (snapshot.py)
"""
