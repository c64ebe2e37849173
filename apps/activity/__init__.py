"""
Activity App - Best-effort audit trail

Records who did what to which resource (vehicle sales, fund adjustments,
setting changes). Writing an activity entry is a side effect of financial
operations and is never allowed to fail them.
"""
