"""Application layer - Use cases and orchestration.

Structure:
- commands/: Authentication commands and their handlers
- services/: Security event ledger and second-factor verifier
- risk/: Risk scoring engine and its signals
- dtos/: Results returned by handlers

The application layer orchestrates domain logic through protocols only; it
never imports infrastructure.
"""
