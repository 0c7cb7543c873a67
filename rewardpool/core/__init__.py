"""
Core Accrual Model (FINAL / FROZEN)

Defines HOW reward accrues, independent of transfers, configuration or IO.

Invariants:
- Time is represented as integer epoch seconds.
- The accumulator is reward-per-unit-contributed scaled by SCALE and never decreases.
- Emission stops at schedule.end_time; effective time never passes it.
- A participant is settled against an accumulator that has already been
  advanced to the current effective time.

Core explicitly does NOT:
- Move assets
- Validate callers or guard re-entry
- Decide when time advances

Time advancement is always external.
"""
