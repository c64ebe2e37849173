"""Vehicle sale settlement: profit, franchise fee and immutable snapshots."""
