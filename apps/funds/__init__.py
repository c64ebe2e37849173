"""Member fund ledger: deposits, withdrawals and derived balances."""
