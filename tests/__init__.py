"""
Test Suite for fintrack

Test Structure:
- unit/: Unit tests mirroring src/ package structure
- integration/: Configuration and end-to-end CLI workflow tests

Test Categories:
- Core utilities (currency, money, dates, models, config)
- Ledger balance maintenance, transfers, bills and debts
- Dashboard metrics and reports
- State file and backups

All test data is synthetic.
"""
