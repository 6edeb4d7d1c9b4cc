"""
CLI Commands — setup, sync, sync-all, status.
"""
